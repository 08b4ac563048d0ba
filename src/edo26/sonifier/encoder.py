# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

from pathlib import Path
from typing import BinaryIO
import numpy as np

from edo26.app_utils import Logger

from .errors import OutputUnavailableError, OutputWriteError
from .scaler import scale

logger = Logger("PCMEncoder")

PCM_FULL_SCALE = 32767
PCM_DTYPE = np.dtype("<i2")
_INT16_SPAN = 65536.0


class PCMEncoder:
    """Serialize float sample buffers as headerless mono 16-bit signed little-endian PCM.

    Samples are converted as ``(int16)(sample * 32767)``: the product is truncated
    toward zero and wrapped into 16 bits. Nothing is clipped, so buffers whose
    scaled amplitude exceeds 1.0 wrap around; the encoder reports how many
    samples overflowed.
    """

    def __init__(self, gain_db: float = 85.0, chunk_size: int = 4096):
        """Create a new PCMEncoder.

        Args:
            gain_db (float): Gain applied to the whole buffer before quantization.
            chunk_size (int): Number of samples written per write call.
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.gain_db = float(gain_db)
        self.chunk_size = int(chunk_size)

    @staticmethod
    def quantize(data: np.ndarray) -> np.ndarray:
        """Convert float samples to int16 with C-style truncation and 16-bit wrap-around.

        Args:
            data (np.ndarray): Float samples, nominally in [-1, 1].

        Returns:
            np.ndarray: Little-endian int16 samples.
        """
        values = np.trunc(np.asarray(data, dtype=np.float64) * PCM_FULL_SCALE)
        # fmod keeps the value exact and inside int64 before the wrapping cast
        values = np.fmod(values, _INT16_SPAN)
        return values.astype(np.int64).astype(PCM_DTYPE)

    @staticmethod
    def overflow_count(data: np.ndarray) -> int:
        """Count samples that fall outside the int16 range once multiplied by 32767."""
        values = np.trunc(np.asarray(data, dtype=np.float64) * PCM_FULL_SCALE)
        return int(np.count_nonzero((values > 32767) | (values < -32768)))

    def _prepare(self, data: np.ndarray) -> np.ndarray:
        scaled = scale(np.array(data, dtype=np.float64), self.gain_db)
        overflows = self.overflow_count(scaled)
        if overflows:
            logger.warning(f"{overflows} of {len(scaled)} samples exceed the 16-bit range and will wrap around")
        return self.quantize(scaled)

    def encode(self, data: np.ndarray) -> bytes:
        """Scale and quantize a buffer, returning the raw PCM bytes.

        Args:
            data (np.ndarray): Master sample buffer. Left untouched.

        Returns:
            bytes: Two bytes per sample, little-endian.
        """
        return self._prepare(data).tobytes()

    def write(self, data: np.ndarray, sink: str | Path | BinaryIO) -> int:
        """Scale, quantize and write a buffer to a file path or a binary file object.

        Args:
            data (np.ndarray): Master sample buffer. Left untouched.
            sink (str | Path | BinaryIO): Output path, or an object with a ``write`` method.

        Returns:
            int: Number of samples written.

        Raises:
            OutputUnavailableError: If the output path cannot be opened.
            OutputWriteError: If a write fails. Data already written stays in the sink.
        """
        pcm = self._prepare(data)

        if hasattr(sink, "write"):
            return self._write_chunks(pcm, sink, getattr(sink, "name", "<stream>"))

        try:
            f = open(sink, "wb")
        except OSError as e:
            raise OutputUnavailableError(f"Failed to open PCM file {sink} for writing: {e}") from e

        with f:
            written = self._write_chunks(pcm, f, str(sink))
        logger.info(f"Wrote {written} samples ({written * PCM_DTYPE.itemsize} bytes) to {sink}")
        return written

    def _write_chunks(self, pcm: np.ndarray, f: BinaryIO, name: str) -> int:
        written = 0
        for start in range(0, len(pcm), self.chunk_size):
            chunk = pcm[start : start + self.chunk_size]
            try:
                f.write(chunk.tobytes())
            except (OSError, ValueError) as e:
                raise OutputWriteError(f"Failed to write to PCM file {name}: {e}", samples_written=written) from e
            written += len(chunk)
        return written

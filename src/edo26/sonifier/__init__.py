# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import BinaryIO, Iterable
import numpy as np

from edo26.app_utils import Logger, LRUDict

from .config import SynthConfig, WAVE_FORMS
from .effects import SoundEffect
from .encoder import PCMEncoder
from .errors import *
from .generator import HarmonicWaveBuilder, ToneDescriptor, sample_count
from .loaders import TextLoader, print_quote
from .scaler import db_to_gain, scale

logger = Logger("TextSonifier")


class TextSonifier:
    """Turn text into a 26-EDO melody.

    Letters A-Z become tones of a 26 tone equal division of the octave starting at
    110Hz; anything else becomes silence. Tones are band-limited harmonic waves
    shaped by a triangular envelope and appended in input order.
    """

    BASE_FREQUENCY = 110.0
    DIVISIONS = 26
    FIRST_LETTER = ord("A")
    LAST_LETTER = ord("Z")

    def __init__(self, config: SynthConfig = None, wave_form: str = None):
        """Initialize the TextSonifier.
        Args:
            config (SynthConfig, optional): Pipeline settings. Defaults to ``SynthConfig()``.
            wave_form (str, optional): Overrides ``config.wave_form`` ("sawtooth" or "square").
        """
        self.config = config if config is not None else SynthConfig()
        if wave_form is not None:
            self.config = self.config.replace(wave_form=wave_form)

        self._wave_gen = HarmonicWaveBuilder(wave_form=self.config.wave_form, sample_rate=self.config.sample_rate)
        self._envelope = SoundEffect.triangle_envelope()
        self._tone_cache = LRUDict(maxsize=self.config.cache_size)

    @classmethod
    def frequency(cls, code: int) -> float | None:
        """
        Pitch of a character code: 110 * 2^((code - 65) / 26) for 'A'..'Z'.
        Args:
            code (int): Upper case character code.
        Returns:
            float | None: Frequency in Hz, or None for codes that are not letters.
        """
        if not cls.FIRST_LETTER <= code <= cls.LAST_LETTER:
            return None
        return cls.BASE_FREQUENCY * (2.0 ** ((code - cls.FIRST_LETTER) / cls.DIVISIONS))

    def tone_for(self, code: int) -> ToneDescriptor | None:
        frequency = self.frequency(code)
        if frequency is None:
            return None
        return ToneDescriptor(
            frequency=frequency,
            duration=self.config.tone_duration,
            overtones=self.config.overtones,
            gain_db=self.config.tone_gain_db,
            sample_rate=self.config.sample_rate,
        )

    def _synthesize(self, code: int) -> np.ndarray:
        tone = self.tone_for(code)
        data = self._wave_gen.generate(tone)
        return self._envelope.apply(data)

    def _tone(self, code: int) -> np.ndarray:
        # Cached tones are never handed out directly
        return self._tone_cache.get_or_create(code, lambda: self._synthesize(code)).copy()

    def _silence(self) -> np.ndarray:
        return np.zeros(sample_count(self.config.silence_duration, self.config.sample_rate), dtype=np.float64)

    def _prefetch(self, codes: list[int]):
        """Synthesize distinct, not yet cached letters on a thread pool."""
        letters = []
        for code in codes:
            if self.frequency(code) is not None and code not in self._tone_cache and code not in letters:
                letters.append(code)
        if len(letters) < 2:
            return

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            rendered = dict(zip(letters, pool.map(self._synthesize, letters)))
        for code in letters:
            self._tone_cache[code] = rendered[code]

    def render(self, codes: Iterable[int]) -> np.ndarray:
        """
        Render character codes into one concatenated sample buffer.
        Args:
            codes (Iterable[int]): Upper case character codes in [0, 255].
        Returns:
            np.ndarray: float64 master buffer; one tone per letter, one silence per other code.
        """
        codes = list(codes)
        if self.config.max_workers > 1 and self.config.cache_size > 0:
            self._prefetch(codes)

        segments = []
        for code in codes:
            if self.frequency(code) is not None:
                segments.append(self._tone(code))
            else:
                segments.append(self._silence())

        if not segments:
            return np.zeros(0, dtype=np.float64)

        data = np.concatenate(segments)
        logger.info(f"Rendered {len(codes)} characters into {len(data)} samples")
        logger.debug(f"Tone cache: {self._tone_cache.hits} hits, {self._tone_cache.misses} misses")
        return data

    def render_text(self, text: str) -> np.ndarray:
        """Render a Python string, normalized the same way as text files."""
        return self.render(TextLoader.from_string(text))

    def encoder(self) -> PCMEncoder:
        return PCMEncoder(gain_db=self.config.output_gain_db)

    def sonify_file(self, input_path: str | Path, output: str | Path | BinaryIO) -> int:
        """
        Read a text file, render it and write the PCM output.
        Args:
            input_path (str | Path): Text file to read.
            output (str | Path | BinaryIO): PCM file path or binary file object.
        Returns:
            int: Number of PCM samples written.
        Raises:
            TextSourceError: If the input cannot be read.
            PCMEncoderError: If the output cannot be written.
        """
        codes = TextLoader.load(input_path)
        data = self.render(codes)
        return self.encoder().write(data, output)


__all__ = [
    "TextSonifier",
    "SynthConfig",
    "WAVE_FORMS",
    "SoundEffect",
    "PCMEncoder",
    "HarmonicWaveBuilder",
    "ToneDescriptor",
    "TextLoader",
    "print_quote",
    "scale",
    "db_to_gain",
    "sample_count",
    "SonifierError",
    "TextSourceError",
    "InputUnavailableError",
    "InputReadError",
    "PCMEncoderError",
    "OutputUnavailableError",
    "OutputWriteError",
]

# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

from dataclasses import dataclass
import math
import numpy as np

from edo26.app_utils import Logger

from .config import WAVE_FORMS
from .scaler import scale

logger = Logger("HarmonicWaveBuilder")

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class ToneDescriptor:
    """Everything needed to synthesize one tone.

    Attributes:
        frequency (float): Fundamental frequency in Hz.
        duration (float): Tone length in seconds.
        overtones (int): Requested number of harmonics.
        gain_db (float): Gain applied to the summed harmonics.
        sample_rate (int): Sample rate in Hz.
    """

    frequency: float
    duration: float
    overtones: int
    gain_db: float
    sample_rate: int


def sample_count(duration: float, sample_rate: int) -> int:
    """Number of samples covering ``duration`` seconds, never negative."""
    return max(0, int(round(duration * sample_rate)))


class HarmonicWaveBuilder:
    """Generate band-limited waves by summing sine harmonics.

    Only harmonics strictly below the Nyquist frequency are synthesized, so the
    produced blocks contain no aliased partials.

    Attributes:
        wave_form (str): "sawtooth" (all harmonics, amplitude 1/n) or "square"
            (odd harmonics only, amplitude 1/n).
        sample_rate (int): Audio sample rate in Hz.
    """

    def __init__(self, wave_form: str = "sawtooth", sample_rate: int = 44100):
        """Create a new HarmonicWaveBuilder.

        Args:
            wave_form (str): The type of wave form to generate, "sawtooth" or "square".
            sample_rate (int): The sample rate (Hz) used to compute phase increments and buffer sizes.

        Raises:
            ValueError: If the wave form is unknown or the sample rate is not positive.
        """
        self.wave_form = wave_form.lower()
        if self.wave_form not in WAVE_FORMS:
            raise ValueError(f"Unsupported wave form: {wave_form}. Use one of {', '.join(WAVE_FORMS)}.")
        self.sample_rate = int(sample_rate)
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}")

    @property
    def nyquist(self) -> float:
        return self.sample_rate / 2.0

    def _highest_partial(self, fundamental: float, overtones: int) -> float:
        match self.wave_form:
            case "square":
                return (2 * overtones - 1) * fundamental
            case _:
                return overtones * fundamental

    def safe_overtones(self, fundamental: float, overtones: int) -> int:
        """Clamp the requested harmonic count so every partial stays below Nyquist.

        Args:
            fundamental (float): Fundamental frequency in Hz.
            overtones (int): Requested number of harmonics.

        Returns:
            int: The number of harmonics that can be synthesized (0 means silence).
        """
        overtones = max(0, int(overtones))
        if fundamental <= 0 or overtones == 0:
            return 0

        nyquist = self.nyquist
        if self._highest_partial(fundamental, overtones) >= nyquist:
            match self.wave_form:
                case "square":
                    clamped = int((nyquist / fundamental + 1) / 2)
                case _:
                    clamped = int(nyquist / fundamental)
            # floor() can still land exactly on Nyquist
            while clamped > 0 and self._highest_partial(fundamental, clamped) >= nyquist:
                clamped -= 1
            logger.debug(f"{fundamental:.2f}Hz: overtones clamped from {overtones} to {clamped}")
            overtones = clamped

        return overtones

    def harmonics(self, fundamental: float, overtones: int) -> list[tuple[float, float]]:
        """List the (frequency, amplitude) partials that make up a tone.

        Args:
            fundamental (float): Fundamental frequency in Hz.
            overtones (int): Requested number of harmonics, clamped with ``safe_overtones``.

        Returns:
            list[tuple[float, float]]: Partial frequencies in Hz with their amplitudes.
        """
        partials = []
        for n in range(1, self.safe_overtones(fundamental, overtones) + 1):
            match self.wave_form:
                case "square":
                    order = 2 * n - 1
                case _:
                    order = n
            partials.append((order * fundamental, 1.0 / order))
        return partials

    def generate_block(self, fundamental: float, duration: float, overtones: int = 10, gain_db: float = 0.0) -> np.ndarray:
        """Generate a block of float64 samples.

        Each partial advances its own phase by ``2*pi*freq/sample_rate`` per sample; the
        phase is wrapped into [0, 2*pi) before taking the sine. The sum is then scaled
        by ``gain_db``.

        Args:
            fundamental (float): Fundamental frequency in Hz.
            duration (float): Duration of the requested block in seconds.
            overtones (int, optional): Requested number of harmonics. Defaults to 10.
            gain_db (float, optional): Gain in decibels. Defaults to 0.0.

        Returns:
            numpy.ndarray: A 1-D float64 array of ``round(duration * sample_rate)`` samples.
                Silent when no harmonic fits below Nyquist.
        """
        n_samples = sample_count(duration, self.sample_rate)
        data = np.zeros(n_samples, dtype=np.float64)
        if n_samples == 0:
            return data

        t = np.arange(n_samples, dtype=np.float64)
        for freq, amplitude in self.harmonics(fundamental, overtones):
            phase_inc = TWO_PI * freq / self.sample_rate
            phase = np.mod(t * phase_inc, TWO_PI)
            data += amplitude * np.sin(phase)

        return scale(data, gain_db)

    def generate(self, tone: ToneDescriptor) -> np.ndarray:
        """Generate the samples described by ``tone``.

        Raises:
            ValueError: If the descriptor's sample rate differs from this builder's.
        """
        if int(tone.sample_rate) != self.sample_rate:
            raise ValueError(f"Tone sample rate {tone.sample_rate} does not match builder sample rate {self.sample_rate}")
        return self.generate_block(tone.frequency, tone.duration, tone.overtones, tone.gain_db)

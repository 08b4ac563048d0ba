# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

from dataclasses import dataclass, fields, replace as dc_replace
from pathlib import Path
import yaml

from edo26.app_utils import Logger

logger = Logger("SynthConfig")

WAVE_FORMS = ("sawtooth", "square")


@dataclass(frozen=True)
class SynthConfig:
    """Settings shared by every stage of the text sonification pipeline.

    Attributes:
        sample_rate (int): Output sample rate in Hz.
        output_gain_db (float): Gain applied to the full buffer right before quantization.
        tone_gain_db (float): Gain applied to every synthesized tone.
        overtones (int): Requested number of harmonics per tone (clamped below Nyquist).
        tone_duration (float): Duration of a letter tone in seconds.
        silence_duration (float): Duration of the silence emitted for a non-letter, in seconds.
        wave_form (str): "sawtooth" or "square".
        max_workers (int): Threads used to synthesize distinct tones. 1 keeps everything sequential.
        cache_size (int): Number of rendered tones kept in memory. 0 disables the cache.
    """

    sample_rate: int = 44100
    output_gain_db: float = 85.0
    tone_gain_db: float = 83.0
    overtones: int = 10
    tone_duration: float = 0.1
    silence_duration: float = 0.2
    wave_form: str = "sawtooth"
    max_workers: int = 1
    cache_size: int = 64

    def __post_init__(self):
        if int(self.sample_rate) <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if int(self.overtones) < 0:
            raise ValueError(f"overtones must be >= 0, got {self.overtones}")
        if self.tone_duration < 0 or self.silence_duration < 0:
            raise ValueError("tone_duration and silence_duration must be >= 0")
        if self.wave_form.lower() not in WAVE_FORMS:
            raise ValueError(f"Unsupported wave form: {self.wave_form}. Use one of {', '.join(WAVE_FORMS)}.")
        if int(self.max_workers) < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if int(self.cache_size) < 0:
            raise ValueError(f"cache_size must be >= 0, got {self.cache_size}")
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "sample_rate", int(self.sample_rate))
        object.__setattr__(self, "overtones", int(self.overtones))
        object.__setattr__(self, "max_workers", int(self.max_workers))
        object.__setattr__(self, "cache_size", int(self.cache_size))
        object.__setattr__(self, "wave_form", self.wave_form.lower())

    def replace(self, **overrides) -> "SynthConfig":
        """Return a copy with the given fields changed. ``None`` values are ignored.

        Args:
            **overrides: Field names and their new values.

        Returns:
            SynthConfig: A new, validated configuration.
        """
        changes = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return dc_replace(self, **changes)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SynthConfig":
        """Load a configuration from a YAML mapping. Missing keys keep their defaults.

        Args:
            path (str | Path): Path of the YAML file.

        Returns:
            SynthConfig: The loaded configuration.

        Raises:
            ValueError: If the document is not a mapping or contains unknown keys.
        """
        with open(path) as f:
            content = yaml.safe_load(f)
        logger.debug(f"Loaded configuration file {path}: {content}")

        if content is None:
            return cls()
        if not isinstance(content, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping, got {type(content).__name__}")
        return cls().replace(**content)

# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

import numpy as np


class SoundEffect:
    @staticmethod
    def triangle_envelope():
        """
        Triangular (attack/decay) amplitude envelope.
        The tone rises linearly from 0 to full level at its midpoint, then falls
        back towards 0, so consecutive tones join without clicks.
        """

        class SoundEffectTriangleEnvelope:
            def apply(self, signal: np.ndarray) -> np.ndarray:
                """
                Apply the envelope on signal, in place.
                Args:
                    signal: np.ndarray float64 (audio)
                Returns:
                    np.ndarray: The same buffer, shaped.
                """
                n = len(signal)
                if n == 0:
                    return signal

                t = np.arange(n, dtype=np.float64) / n  # normalized time in [0, 1)
                env = np.where(t < 0.5, 2.0 * t, 2.0 * (1.0 - t))
                np.multiply(signal, env, out=signal)
                return signal

        return SoundEffectTriangleEnvelope()

# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

import numpy as np


def db_to_gain(db: float) -> float:
    """Convert a level in decibels to a linear amplitude factor (10^(dB/20))."""
    return 10.0 ** (float(db) / 20.0)


def scale(data: np.ndarray, db: float) -> np.ndarray:
    """Scale a buffer of samples by a gain expressed in decibels.

    The buffer minimum is mapped to ``min * g`` and every other sample keeps its
    distance from the minimum multiplied by ``g``. Algebraically this is exactly
    ``x * g``. It is not a min-max normalization: the zero level of asymmetric
    waves stays where it is.

    The buffer is modified in place and returned.

    Args:
        data (np.ndarray): Float sample buffer.
        db (float): Gain in decibels. Positive values amplify.

    Returns:
        np.ndarray: The scaled buffer (same object as ``data`` when it is a float64 array).
    """
    data = np.asarray(data, dtype=np.float64)
    if data.size == 0:
        return data

    gain = db_to_gain(db)
    xmin = float(np.min(data))
    ymin = xmin * gain

    # output spans [min * g, max * g]
    np.subtract(data, xmin, out=data)
    np.multiply(data, gain, out=data)
    np.add(data, ymin, out=data)
    return data

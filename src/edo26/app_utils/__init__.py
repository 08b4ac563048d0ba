# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

from .caches import LRUDict
from .logger import Logger

__all__ = ["Logger", "LRUDict"]

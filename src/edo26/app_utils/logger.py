# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

import logging
import sys
import threading

ROOT_LOGGER_NAME = "edo26"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configure_lock = threading.Lock()
_configured = False


def _configure_root():
    """Attach the shared stdout handler to the package root logger, once."""
    global _configured
    with _configure_lock:
        if _configured:
            return
        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(logging.INFO)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        _configured = True


class Logger(logging.LoggerAdapter):
    """Named logger for edo26 components.

    Every component logs through ``Logger("<Component>")``. Loggers live under the
    ``edo26`` namespace so a single handler and level apply to the whole package.
    """

    def __init__(self, name: str):
        _configure_root()
        if not name.startswith(ROOT_LOGGER_NAME):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        super().__init__(logging.getLogger(name), {})

    def process(self, msg, kwargs):
        return msg, kwargs

    @staticmethod
    def set_level(level: int | str):
        """Set the level of every edo26 logger.

        Args:
            level (int | str): A logging level such as ``logging.DEBUG`` or ``"DEBUG"``.
        """
        _configure_root()
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)

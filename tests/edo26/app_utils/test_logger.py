# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

import logging

from edo26.app_utils import Logger


def test_logger_namespace():
    assert Logger("PCMEncoder").logger.name == "edo26.PCMEncoder"
    assert Logger("edo26.sonifier").logger.name == "edo26.sonifier"


def test_set_level():
    previous = logging.getLogger("edo26").level
    try:
        Logger.set_level(logging.DEBUG)
        assert Logger("TextSonifier").isEnabledFor(logging.DEBUG)
        Logger.set_level("WARNING")
        assert not Logger("TextSonifier").isEnabledFor(logging.INFO)
    finally:
        logging.getLogger("edo26").setLevel(previous)


def test_messages_reach_handlers(caplog):
    with caplog.at_level(logging.INFO, logger="edo26"):
        Logger("TextLoader").info("Loaded 2 characters")
    assert "Loaded 2 characters" in caplog.text

# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

from pathlib import Path
from typing import Callable, TextIO
import sys
import time

from edo26.app_utils import Logger

from .errors import InputReadError, InputUnavailableError

logger = Logger("TextLoader")

PARMEGIANI_QUOTE = [
    "",
    "I set myself many more constraints:",
    "I placed the sounds as you do letters,",
    "one after the other, so as to create",
    "forms and sequences",
    "",
    "- Bernard Parmegiani: Sound Thinking",
    "",
]


class TextLoader:
    LOWER_A = ord("a")
    LOWER_Z = ord("z")
    CASE_OFFSET = 32
    READ_BLOCK_SIZE = 65536

    @staticmethod
    def normalize(data: bytes) -> list[int]:
        """
        Turn raw bytes into character codes, folding ASCII lower case letters to upper case.
        Args:
            data (bytes): Raw 8-bit text.
        Returns:
            list[int]: One code in [0, 255] per byte.
        """
        codes = []
        for code in data:
            if TextLoader.LOWER_A <= code <= TextLoader.LOWER_Z:
                code -= TextLoader.CASE_OFFSET
            codes.append(code)
        return codes

    @staticmethod
    def from_string(text: str) -> list[int]:
        """
        Character codes for an in-memory string. Characters outside latin-1 become '?'.
        Args:
            text (str): Text to convert.
        Returns:
            list[int]: Normalized character codes.
        """
        return TextLoader.normalize(text.encode("latin-1", errors="replace"))

    @staticmethod
    def load(path: str | Path) -> list[int]:
        """
        Read a text file byte by byte and return its normalized character codes.
        Args:
            path (str | Path): Input file.
        Returns:
            list[int]: Normalized character codes, in file order.
        Raises:
            InputUnavailableError: If the file cannot be opened.
            InputReadError: If reading fails; codes read so far are kept in ``partial``.
        """
        try:
            f = open(path, "rb")
        except OSError as e:
            raise InputUnavailableError(f"Error opening text file {path}: {e}") from e

        codes = []
        with f:
            while True:
                try:
                    block = f.read(TextLoader.READ_BLOCK_SIZE)
                except OSError as e:
                    raise InputReadError(f"Error reading from text file {path}: {e}", partial=codes) from e
                if not block:
                    break
                codes.extend(TextLoader.normalize(block))

        logger.info(f"Loaded {len(codes)} characters from {path}")
        return codes


def print_quote(lines: list[str] | None = None, pause: float = 0.6, out: TextIO | None = None, sleep: Callable[[float], None] = time.sleep):
    """Print lines one at a time with a pause after each (defaults to the Parmegiani quote)."""
    out = out if out is not None else sys.stdout
    for line in PARMEGIANI_QUOTE if lines is None else lines:
        print(line, file=out)
        out.flush()
        sleep(pause)

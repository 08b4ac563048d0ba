# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

import io
import pytest
from unittest.mock import MagicMock, patch

from edo26.sonifier.errors import InputReadError, InputUnavailableError, TextSourceError
from edo26.sonifier.loaders import PARMEGIANI_QUOTE, TextLoader, print_quote


def test_normalize_folds_lower_case():
    codes = TextLoader.normalize(b"Hello, World!\n")
    assert codes == list(b"HELLO, WORLD!\n")


def test_normalize_keeps_other_bytes():
    data = bytes(range(256))
    codes = TextLoader.normalize(data)
    assert len(codes) == 256
    assert codes[ord("a")] == ord("A")
    assert codes[ord("z")] == ord("Z")
    assert codes[ord("{")] == ord("{")
    assert codes[ord("`")] == ord("`")
    assert codes[233] == 233


def test_from_string():
    assert TextLoader.from_string("ab é") == [65, 66, 32, 233]
    assert TextLoader.from_string("€") == [ord("?")]


def test_load_file(tmp_path):
    path = tmp_path / "README.txt"
    path.write_bytes(b"Sound thinking.\n")
    assert TextLoader.load(path) == list(b"SOUND THINKING.\n")


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert TextLoader.load(path) == []


def test_load_missing_file(tmp_path):
    with pytest.raises(InputUnavailableError) as excinfo:
        TextLoader.load(tmp_path / "missing.txt")
    assert isinstance(excinfo.value, TextSourceError)


def test_load_read_failure_keeps_partial_codes():
    mock_file = MagicMock()
    mock_file.read.side_effect = [b"ab", OSError("I/O error")]
    mock_file.__exit__.return_value = False

    with patch("edo26.sonifier.loaders.open", return_value=mock_file, create=True):
        with pytest.raises(InputReadError) as excinfo:
            TextLoader.load("README.txt")

    assert excinfo.value.partial == [65, 66]


def test_print_quote():
    out = io.StringIO()
    pauses = []
    print_quote(out=out, sleep=pauses.append)

    assert out.getvalue().splitlines() == PARMEGIANI_QUOTE
    assert pauses == [0.6] * len(PARMEGIANI_QUOTE)

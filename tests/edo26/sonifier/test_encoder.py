# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

import io
import logging
import numpy as np
import pytest
from unittest.mock import MagicMock

from edo26.sonifier import SynthConfig, TextSonifier
from edo26.sonifier.encoder import PCMEncoder
from edo26.sonifier.errors import OutputUnavailableError, OutputWriteError, PCMEncoderError
from edo26.sonifier.scaler import scale


def test_quantize_truncates_toward_zero():
    pcm = PCMEncoder.quantize(np.array([0.0, 0.5, -0.5, 1.0, -1.0, 1e-6]))
    assert pcm.dtype == np.dtype("<i2")
    assert pcm.tolist() == [0, 16383, -16383, 32767, -32767, 0]


def test_quantize_wraps_instead_of_clipping():
    pcm = PCMEncoder.quantize(np.array([2.0, 1.5, -1.5]))
    # 65534 -> -2, 49150 -> -16386, -49150 -> 16386
    assert pcm.tolist() == [-2, -16386, 16386]


def test_overflow_count():
    assert PCMEncoder.overflow_count(np.array([0.5, -1.0, 1.0])) == 0
    assert PCMEncoder.overflow_count(np.array([0.5, 1.5, -2.0])) == 2


def test_encode_layout():
    encoder = PCMEncoder(gain_db=0.0)
    raw = encoder.encode(np.array([0.0, 1.0, -1.0]))
    assert raw == b"\x00\x00\xff\x7f\x01\x80"


def test_encode_applies_gain_once():
    data = np.array([0.1, -0.2, 0.3])
    raw = PCMEncoder(gain_db=6.0).encode(data)
    expected = PCMEncoder.quantize(scale(data.copy(), 6.0))
    assert np.array_equal(np.frombuffer(raw, dtype="<i2"), expected)
    # caller's buffer is untouched
    assert data.tolist() == [0.1, -0.2, 0.3]


def test_write_to_path(tmp_path):
    out = tmp_path / "out.pcm"
    written = PCMEncoder(gain_db=0.0, chunk_size=3).write(np.linspace(-0.5, 0.5, 10), out)
    assert written == 10
    assert out.stat().st_size == 20


def test_write_to_stream():
    sink = io.BytesIO()
    written = PCMEncoder(gain_db=0.0).write(np.zeros(5), sink)
    assert written == 5
    assert sink.getvalue() == b"\x00" * 10


def test_write_output_unavailable(tmp_path):
    with pytest.raises(OutputUnavailableError):
        PCMEncoder().write(np.zeros(4), tmp_path / "missing" / "out.pcm")


def test_write_failure_keeps_partial_output():
    sink = MagicMock()
    sink.write.side_effect = [None, OSError("disk full")]

    with pytest.raises(OutputWriteError) as excinfo:
        PCMEncoder(gain_db=0.0, chunk_size=2).write(np.zeros(6), sink)

    assert excinfo.value.samples_written == 2
    assert isinstance(excinfo.value, PCMEncoderError)
    assert sink.write.call_count == 2


def test_overflow_is_reported(caplog):
    with caplog.at_level(logging.WARNING, logger="edo26"):
        PCMEncoder(gain_db=0.0).encode(np.array([0.5, 1.5]))
    assert "exceed the 16-bit range" in caplog.text


def test_default_gain_staging_overflows_int16():
    # Known limitation: 83 dB per tone plus 85 dB on output drives any letter far
    # past full scale; samples wrap around instead of clipping.
    config = SynthConfig()
    data = TextSonifier(config).render_text("A")
    scaled = scale(data.copy(), config.output_gain_db)
    assert PCMEncoder.overflow_count(scaled) > 0

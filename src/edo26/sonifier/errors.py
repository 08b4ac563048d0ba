# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0


class SonifierError(Exception):
    """Base class for errors raised by the text sonification pipeline."""

    pass


class TextSourceError(SonifierError):
    """Raised when the input text cannot be loaded."""

    pass


class InputUnavailableError(TextSourceError):
    """Raised when the input text file cannot be opened."""

    pass


class InputReadError(TextSourceError):
    """Raised when reading the input fails part way through.

    Attributes:
        partial (list[int]): Character codes successfully read before the failure.
    """

    def __init__(self, message: str, partial: list[int] | None = None):
        super().__init__(message)
        self.partial = partial if partial is not None else []


class PCMEncoderError(SonifierError):
    """Raised when PCM output cannot be produced."""

    pass


class OutputUnavailableError(PCMEncoderError):
    """Raised when the PCM sink cannot be opened for writing."""

    pass


class OutputWriteError(PCMEncoderError):
    """Raised when writing to the PCM sink fails.

    The sink is left as-is: samples already written are not rolled back.

    Attributes:
        samples_written (int): Number of samples written before the failure.
    """

    def __init__(self, message: str, samples_written: int = 0):
        super().__init__(message)
        self.samples_written = samples_written

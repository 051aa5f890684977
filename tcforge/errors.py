"""Exceptions raised while reading and writing timecode files."""


class TimecodeFormatError(ValueError):
    """Raised when timecode text cannot be decoded."""

    def __init__(self, message: str, line_number: int | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class UnsupportedVersionError(ValueError):
    """Raised for a version tag other than v1 or v2."""
    pass


class OutputExistsError(FileExistsError):
    """Raised instead of overwriting an existing output file."""
    pass

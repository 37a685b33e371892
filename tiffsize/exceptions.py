"""Exception classes for tiffsize.

I/O failures are not wrapped: OSError from stat/open/read propagates as is.
"""


class TiffSizeError(Exception):
    """Base class for all tiffsize errors."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class UnsupportedInputError(TiffSizeError, TypeError):
    """Raised when no file path is available for positioned reads.

    An in-memory header alone is not enough: the IFD lives somewhere
    else in the file.
    """
    pass


class InvalidFormatError(TiffSizeError, ValueError):
    """Raised when the file is not a usable classic TIFF.

    Covers an unsupported signature, an undetermined byte order, a header
    or directory too short to read, and missing or zero dimension tags.
    """
    pass

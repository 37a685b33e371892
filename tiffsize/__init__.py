"""tiffsize -- TIFF image dimensions from the first IFD, without decoding pixels."""

__version__ = "1.0.0"

from tiffsize.config import ReaderConfig
from tiffsize.exceptions import (
    InvalidFormatError,
    TiffSizeError,
    UnsupportedInputError,
)
from tiffsize.models import BatchResult, ByteOrder, ImageSize, SizeResult
from tiffsize.tiff import calculate, detect_byte_order, validate
from tiffsize.measure import (
    collect_tiff_files,
    get_format_info,
    get_size,
    measure_batch,
    measure_file,
)

__all__ = [
    "__version__",
    "ReaderConfig",
    "TiffSizeError",
    "UnsupportedInputError",
    "InvalidFormatError",
    "ByteOrder",
    "ImageSize",
    "SizeResult",
    "BatchResult",
    "calculate",
    "detect_byte_order",
    "validate",
    "get_size",
    "measure_file",
    "measure_batch",
    "collect_tiff_files",
    "get_format_info",
]

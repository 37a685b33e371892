"""File-level entry points -- single file, directory batch, and format info."""

import logging
import os
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

from tiffsize.config import ReaderConfig
from tiffsize.exceptions import InvalidFormatError, TiffSizeError
from tiffsize.models import BatchResult, ImageSize, SizeResult
from tiffsize.tiff import (
    HEADER_SIZE,
    calculate,
    extract_tags,
    iter_entries,
    read_ifd_offset,
    read_ifd_window,
    read_tag_value,
    resolve_byte_order,
    resolve_dimensions,
    validate,
)

logger = logging.getLogger(__name__)

TIFF_EXTENSIONS = {'.tif', '.tiff'}


def read_header(filepath) -> bytes:
    """Read the first HEADER_SIZE bytes of a file."""
    with open(filepath, 'rb') as f:
        return f.read(HEADER_SIZE)


def get_size(filepath, config: Optional[ReaderConfig] = None) -> ImageSize:
    """Return the pixel size of a classic TIFF file.

    Raises InvalidFormatError if the file does not start with a supported
    TIFF signature.
    """
    header = read_header(filepath)
    if not validate(header):
        raise InvalidFormatError(f'Not a supported TIFF file: {filepath}')
    return calculate(header, filepath, config)


def measure_file(filepath, config: Optional[ReaderConfig] = None) -> SizeResult:
    """Measure one file, recording any failure on the result instead of raising."""
    filepath = Path(filepath)
    t0 = time.monotonic()
    result = SizeResult(filepath=filepath)

    try:
        result.file_size = os.path.getsize(filepath)
        size = get_size(filepath, config)
        result.width = size.width
        result.height = size.height
    except (TiffSizeError, OSError) as e:
        logger.debug('Failed to measure %s: %s', filepath, e)
        result.error = str(e)

    result.elapsed_ms = (time.monotonic() - t0) * 1000
    return result


def collect_tiff_files(path: Path) -> List[Path]:
    """Collect TIFF files from a path (file or directory, recursive)."""
    path = Path(path)
    if path.is_file():
        return [path]

    files = []
    for root, _, filenames in os.walk(path):
        for fname in sorted(filenames):
            if Path(fname).suffix.lower() in TIFF_EXTENSIONS:
                files.append(Path(root) / fname)
    files.sort()
    return files


def measure_batch(
    path: Path,
    config: Optional[ReaderConfig] = None,
    progress_callback: Optional[Callable] = None,
) -> BatchResult:
    """Measure every TIFF file under a path.

    Args:
        path: File or directory to measure.
        config: Optional reader settings shared by all files.
        progress_callback: Called with (index, total, filepath, result) after each file.

    Returns:
        BatchResult with one SizeResult per file.
    """
    files = collect_tiff_files(Path(path))
    batch = BatchResult(total_files=len(files))
    t0 = time.monotonic()

    for i, filepath in enumerate(files, 1):
        result = measure_file(filepath, config)
        batch.results.append(result)
        if result.ok:
            batch.files_measured += 1
        else:
            batch.files_errored += 1

        if progress_callback:
            progress_callback(i, len(files), filepath, result)

    batch.total_time_seconds = time.monotonic() - t0
    return batch


def get_format_info(filepath, config: Optional[ReaderConfig] = None) -> Dict:
    """Describe the header and first IFD of a TIFF file.

    Returns a dict with byte order, IFD offset, window length, the walked
    entries and either the size or the error that prevented it.
    """
    filepath = Path(filepath)
    if config is None:
        config = ReaderConfig.default()

    header = read_header(filepath)
    info = {
        'filename': filepath.name,
        'file_size': os.path.getsize(filepath),
        'signature': header[:4].hex(),
        'supported': validate(header),
    }
    if not info['supported']:
        info['error'] = 'Not a supported TIFF signature'
        return info

    try:
        byte_order = resolve_byte_order(header, config)
        info['byte_order'] = byte_order.name.lower()
        info['ifd_offset'] = read_ifd_offset(header, byte_order)
        window = read_ifd_window(header, filepath, byte_order, config)
        info['window_length'] = len(window)

        entries = []
        for entry in iter_entries(window, byte_order):
            row = {
                'code': entry.code,
                'name': entry.tag_name,
                'type': entry.dtype,
                'count': entry.count,
            }
            if entry.is_single_integer:
                row['value'] = read_tag_value(window, entry.offset, byte_order)
            entries.append(row)
        info['entries'] = entries

        size = resolve_dimensions(extract_tags(window, byte_order))
        info['width'] = size.width
        info['height'] = size.height
    except (TiffSizeError, OSError) as e:
        info['error'] = str(e)

    return info

"""Classic TIFF dimension reader -- first IFD only, no pixel decoding.

Reads the byte order and IFD offset from the 8-byte header, pulls a bounded
window of the file starting at the IFD, and walks its 12-byte entries for
ImageWidth (256) and ImageLength (257).

Handles standard TIFF (magic 42) in little-endian (II) and big-endian (MM)
byte order. BigTIFF and the 'I I' (492049) variant are not supported.
"""

import logging
import os
from typing import Dict, Iterator, Optional

from tiffsize.config import ReaderConfig
from tiffsize.exceptions import InvalidFormatError, UnsupportedInputError
from tiffsize.models import ByteOrder, ImageSize
from tiffsize.utils import read_uint, to_hex_string, to_utf8_string

logger = logging.getLogger(__name__)

# Accepted header signatures (first 4 bytes, hex)
SIGNATURES = (
    '49492a00',  # II*\0 little-endian
    '4d4d002a',  # MM\0* big-endian
)

HEADER_SIZE = 8
IFD_COUNT_SIZE = 2
ENTRY_SIZE = 12

# The walk only advances while more than this many bytes remain from the
# current entry, so a truncated tail entry is never decoded.
WALK_MARGIN = 2 * ENTRY_SIZE

# TIFF field types decoded here
TYPE_SHORT = 3
TYPE_LONG = 4

TAG_IMAGE_WIDTH = 256
TAG_IMAGE_LENGTH = 257

TAG_NAMES: Dict[int, str] = {
    254: 'NewSubfileType', 255: 'SubfileType',
    256: 'ImageWidth', 257: 'ImageLength',
    258: 'BitsPerSample', 259: 'Compression', 262: 'PhotometricInterpretation',
    270: 'ImageDescription', 271: 'Make', 272: 'Model',
    273: 'StripOffsets', 274: 'Orientation', 277: 'SamplesPerPixel',
    278: 'RowsPerStrip', 279: 'StripByteCounts',
    282: 'XResolution', 283: 'YResolution', 284: 'PlanarConfiguration',
    296: 'ResolutionUnit', 305: 'Software', 306: 'DateTime',
    322: 'TileWidth', 323: 'TileLength', 324: 'TileOffsets', 325: 'TileByteCounts',
}


class DirectoryEntry:
    """One 12-byte IFD entry, located by its offset inside the window."""
    __slots__ = ('code', 'dtype', 'count', 'offset')

    def __init__(self, code: int, dtype: int, count: int, offset: int):
        self.code = code
        self.dtype = dtype
        self.count = count
        self.offset = offset

    @property
    def tag_name(self) -> str:
        return TAG_NAMES.get(self.code, f'Tag_{self.code}')

    @property
    def is_single_integer(self) -> bool:
        """True for a count-1 SHORT or LONG, the only values decoded."""
        return self.count == 1 and self.dtype in (TYPE_SHORT, TYPE_LONG)

    def __repr__(self) -> str:
        return (f'DirectoryEntry(code={self.code}, dtype={self.dtype}, '
                f'count={self.count}, offset={self.offset})')


def validate(header: bytes) -> bool:
    """Check the first 4 bytes against the classic TIFF signatures."""
    return to_hex_string(header, 0, 4) in SIGNATURES


def detect_byte_order(header: bytes) -> ByteOrder:
    """Byte order from the 2-character magic: 'II', 'MM' or UNKNOWN."""
    signature = to_utf8_string(header, 0, 2)
    if signature == 'II':
        return ByteOrder.LITTLE
    if signature == 'MM':
        return ByteOrder.BIG
    return ByteOrder.UNKNOWN


def read_ifd_offset(header: bytes, byte_order: ByteOrder) -> int:
    """Offset of the first IFD, stored as a u32 at header byte 4."""
    if len(header) < HEADER_SIZE:
        raise InvalidFormatError(
            f'TIFF header too short: {len(header)} bytes, need {HEADER_SIZE}')
    return read_uint(header, 32, 4, byte_order.is_big_endian)


def read_ifd_window(header: bytes, filepath, byte_order: ByteOrder,
                    config: Optional[ReaderConfig] = None) -> bytes:
    """Read a bounded slice of the file starting at the first IFD.

    The 2-byte entry count is dropped; the walk relies on the terminator
    and the window length instead. The window is shrunk to stay clear of
    EOF when the file is smaller than IFD offset + window size.
    """
    if not filepath:
        raise UnsupportedInputError("TIFF size needs a file path, buffers are not supported")
    if config is None:
        config = ReaderConfig.default()

    ifd_offset = read_ifd_offset(header, byte_order)

    window_size = config.window_size
    file_size = os.path.getsize(filepath)
    if ifd_offset + window_size > file_size:
        window_size = file_size - ifd_offset - config.eof_margin

    if window_size <= IFD_COUNT_SIZE:
        raise InvalidFormatError(
            f'IFD at offset {ifd_offset} leaves no readable directory '
            f'in a {file_size}-byte file')

    logger.debug('Reading %d-byte IFD window at offset %d (%s)',
                 window_size, ifd_offset, byte_order.name)

    with open(filepath, 'rb') as f:
        f.seek(ifd_offset)
        data = f.read(window_size)

    if len(data) < window_size:
        raise OSError(
            f'Short read at offset {ifd_offset}: got {len(data)} of {window_size} bytes')

    return data[IFD_COUNT_SIZE:]


def read_tag_value(window: bytes, offset: int, byte_order: ByteOrder) -> int:
    """Decode the value field of the entry at ``offset``.

    Built from two 16-bit half-words at +8 (low) and +10 (high), not a
    single 32-bit read: a single SHORT sits in the first two bytes of the
    field in either byte order.
    """
    big = byte_order.is_big_endian
    low = read_uint(window, 16, offset + 8, big)
    high = read_uint(window, 16, offset + 10, big)
    return (high << 16) | low


def iter_entries(window: bytes, byte_order: ByteOrder) -> Iterator[DirectoryEntry]:
    """Walk the directory entries in ``window``.

    Stops at a code-0 entry (not yielded), or once the current entry has
    no more than WALK_MARGIN bytes from its start to the end of the window.
    """
    big = byte_order.is_big_endian
    length = len(window)
    cursor = 0

    while length - cursor >= ENTRY_SIZE:
        code = read_uint(window, 16, cursor, big)
        if code == 0:
            return
        dtype = read_uint(window, 16, cursor + 2, big)
        count = read_uint(window, 32, cursor + 4, big)
        yield DirectoryEntry(code, dtype, count, cursor)

        if length - cursor <= WALK_MARGIN:
            return
        cursor += ENTRY_SIZE


def extract_tags(window: bytes, byte_order: ByteOrder) -> Dict[int, int]:
    """Map tag code -> value for every single SHORT/LONG entry.

    Other entries are skipped. A repeated code keeps the last value.
    """
    tags = {}
    for entry in iter_entries(window, byte_order):
        if entry.is_single_integer:
            tags[entry.code] = read_tag_value(window, entry.offset, byte_order)
    logger.debug('Decoded %d integer tag(s) from IFD window', len(tags))
    return tags


def resolve_dimensions(tags: Dict[int, int]) -> ImageSize:
    """Width and height from the tag table; both must be non-zero."""
    width = tags.get(TAG_IMAGE_WIDTH)
    height = tags.get(TAG_IMAGE_LENGTH)
    if not width or not height:
        raise InvalidFormatError('Invalid TIFF: missing required dimension tags')
    return ImageSize(width=width, height=height)


def resolve_byte_order(header: bytes, config: ReaderConfig) -> ByteOrder:
    """Detect the byte order and apply the configured UNKNOWN policy."""
    byte_order = detect_byte_order(header)
    if byte_order is ByteOrder.UNKNOWN:
        if config.unknown_byte_order == 'little':
            logger.debug('Unrecognized byte order %r, reading as little-endian',
                         bytes(header[:2]))
            return ByteOrder.LITTLE
        raise InvalidFormatError(
            f'Unrecognized TIFF byte order: {bytes(header[:2])!r}')
    return byte_order


def calculate(header: bytes, filepath=None,
              config: Optional[ReaderConfig] = None) -> ImageSize:
    """Return the pixel size of the TIFF at ``filepath``.

    Args:
        header: At least the first 8 bytes of the file.
        filepath: Path to the file. Required: the directory is read with a
            positioned read, not from ``header``.
        config: Optional reader settings. None uses the defaults.

    Raises:
        UnsupportedInputError: ``filepath`` is missing.
        InvalidFormatError: byte order, header or directory unusable, or
            width/height tags missing or zero.
        OSError: the file cannot be stat'ed, opened or read.
    """
    if not filepath:
        raise UnsupportedInputError("TIFF size needs a file path, buffers are not supported")
    if config is None:
        config = ReaderConfig.default()

    byte_order = resolve_byte_order(header, config)
    window = read_ifd_window(header, filepath, byte_order, config)
    tags = extract_tags(window, byte_order)
    return resolve_dimensions(tags)

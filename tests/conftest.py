"""Shared test fixtures -- synthetic classic TIFF file generators."""

import struct
import pytest


SHORT = 3
LONG = 4


def pack_entry(tag_id, type_id, count, value, endian='<'):
    """Pack one 12-byte IFD entry.

    A single SHORT is stored in the first two bytes of the value field,
    followed by two zero bytes, as TIFF writers do in either byte order.
    """
    entry = struct.pack(endian + 'HHI', tag_id, type_id, count)
    if type_id == SHORT and count == 1:
        entry += struct.pack(endian + 'HH', value, 0)
    else:
        entry += struct.pack(endian + 'I', value)
    return entry


def build_tiff(entries, endian='<', terminator=True, ifd_offset=8,
               extra_data=None, magic=None):
    """Build a minimal classic TIFF file in memory.

    Args:
        entries: List of (tag_id, type_id, count, value) tuples, value an int.
        endian: '<' for little-endian, '>' for big-endian.
        terminator: Append a code-0 entry after the real entries.
        ifd_offset: Where the IFD starts; the gap after the header is
            zero-filled.
        extra_data: Optional bytes appended after the next-IFD pointer
            (stands in for pixel data).
        magic: Override the 2-byte byte-order mark.

    Returns:
        bytes: Complete TIFF file content.
    """
    bo = magic if magic is not None else (b'II' if endian == '<' else b'MM')
    header = bo + struct.pack(endian + 'HI', 42, ifd_offset)
    header += b'\x00' * (ifd_offset - len(header))

    ifd = struct.pack(endian + 'H', len(entries))
    for tag_id, type_id, count, value in entries:
        ifd += pack_entry(tag_id, type_id, count, value, endian)
    if terminator:
        ifd += b'\x00' * 12
    ifd += struct.pack(endian + 'I', 0)  # No next IFD

    result = header + ifd
    if extra_data:
        result += extra_data
    return result


def build_window(entries, endian='<', tail=b''):
    """Build a directory window (entries only, no count prefix)."""
    data = b''.join(pack_entry(t, ty, c, v, endian) for t, ty, c, v in entries)
    return data + tail


# Baseline 800x600 image
DIMENSION_ENTRIES = [
    (256, SHORT, 1, 800),
    (257, SHORT, 1, 600),
]


@pytest.fixture
def tmp_tiff_le(tmp_path):
    """Little-endian TIFF, 800x600 as SHORT values, no trailing data."""
    f = tmp_path / 'le.tif'
    f.write_bytes(build_tiff(DIMENSION_ENTRIES, endian='<'))
    return f


@pytest.fixture
def tmp_tiff_be(tmp_path):
    """Big-endian TIFF, 800x600 as SHORT values, no trailing data."""
    f = tmp_path / 'be.tif'
    f.write_bytes(build_tiff(DIMENSION_ENTRIES, endian='>'))
    return f


@pytest.fixture
def tmp_tiff_with_pixels(tmp_path):
    """Little-endian TIFF with a typical tag set and 4 KB of pixel data."""
    entries = [
        (254, LONG, 1, 0),
        (256, LONG, 1, 70000),
        (257, LONG, 1, 50000),
        (258, SHORT, 3, 1234),      # BitsPerSample, count 3 -> skipped
        (259, SHORT, 1, 1),
        (262, SHORT, 1, 2),
        (270, 2, 20, 4096),         # ImageDescription (ASCII) -> skipped
        (277, SHORT, 1, 3),
    ]
    f = tmp_path / 'pixels.tif'
    f.write_bytes(build_tiff(entries, extra_data=b'\xAB' * 4096))
    return f


@pytest.fixture
def tmp_not_tiff(tmp_path):
    f = tmp_path / 'fake.tif'
    f.write_bytes(b'\x89PNG\r\n\x1a\n' + b'\x00' * 64)
    return f

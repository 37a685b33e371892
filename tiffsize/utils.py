"""Buffer helpers -- fixed-width integer reads and signature inspection.

stdlib only (struct module), same as the rest of the binary readers.
"""

import struct

# bit width -> struct format char
_UINT_FORMATS = {16: 'H', 32: 'I'}


def read_uint(buffer, bits: int, offset: int, big_endian: bool) -> int:
    """Read an unsigned 16- or 32-bit integer at ``offset``.

    Raises ValueError for an unsupported width and struct.error if the
    buffer is too short.
    """
    try:
        fmt_char = _UINT_FORMATS[bits]
    except KeyError:
        raise ValueError(f'Unsupported integer width: {bits}') from None
    fmt = ('>' if big_endian else '<') + fmt_char
    return struct.unpack_from(fmt, buffer, offset)[0]


def to_hex_string(buffer, start: int = 0, end: int = None) -> str:
    """Lowercase hex of ``buffer[start:end]``."""
    return bytes(buffer[start:end]).hex()


def to_utf8_string(buffer, start: int = 0, end: int = None) -> str:
    return bytes(buffer[start:end]).decode('utf-8', errors='replace')

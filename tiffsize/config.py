"""Reader configuration -- tunable window constants and byte-order policy."""

import json
from dataclasses import dataclass, fields

# Bytes read starting at the IFD offset. Large enough for the first IFD of
# typical files, where ImageWidth/ImageLength sit among the first entries.
IFD_WINDOW_SIZE = 1024

# Slack kept between the end of the window and EOF when the file is smaller
# than IFD offset + window.
EOF_SAFETY_MARGIN = 10

UNKNOWN_BYTE_ORDER_POLICIES = ('error', 'little')


@dataclass
class ReaderConfig:
    """Settings for the bounded IFD read.

    ``unknown_byte_order`` decides what happens when the file starts with
    neither ``II`` nor ``MM``: ``"error"`` rejects the file, ``"little"``
    reads it as little-endian.
    """

    window_size: int = IFD_WINDOW_SIZE
    eof_margin: int = EOF_SAFETY_MARGIN
    unknown_byte_order: str = 'error'

    def __post_init__(self):
        if not isinstance(self.window_size, int) or self.window_size <= 2:
            raise ValueError(f'window_size must be an integer > 2, got {self.window_size!r}')
        if not isinstance(self.eof_margin, int) or self.eof_margin < 0:
            raise ValueError(f'eof_margin must be a non-negative integer, got {self.eof_margin!r}')
        if self.unknown_byte_order not in UNKNOWN_BYTE_ORDER_POLICIES:
            raise ValueError(
                f'unknown_byte_order must be one of {UNKNOWN_BYTE_ORDER_POLICIES}, '
                f'got {self.unknown_byte_order!r}'
            )

    @classmethod
    def default(cls) -> 'ReaderConfig':
        """Return the built-in defaults."""
        return cls()

    @classmethod
    def from_json(cls, path) -> 'ReaderConfig':
        """Load settings from a JSON file.

        JSON format::

            {
              "window_size": 4096,
              "eof_margin": 10,
              "unknown_byte_order": "error"
            }

        All keys are optional; omitted keys keep the defaults.
        """
        with open(str(path), 'r') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f'Config must be a JSON object: {path}')

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f'Unknown config key(s): {", ".join(sorted(unknown))}')

        return cls(**data)

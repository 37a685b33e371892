"""Data models for tiffsize results."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class ByteOrder(Enum):
    """TIFF byte order, taken from the first two bytes of the file.

    Values are the matching struct prefix; UNKNOWN has none.
    """
    LITTLE = '<'
    BIG = '>'
    UNKNOWN = ''

    @property
    def is_big_endian(self) -> bool:
        return self is ByteOrder.BIG


@dataclass(frozen=True)
class ImageSize:
    """Pixel dimensions of an image."""
    width: int
    height: int

    def __str__(self) -> str:
        return f'{self.width}x{self.height}'


@dataclass
class SizeResult:
    """Result of measuring a single file."""
    filepath: Path
    width: Optional[int] = None
    height: Optional[int] = None
    elapsed_ms: float = 0.0
    file_size: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Result of measuring a batch of files."""
    results: List[SizeResult] = field(default_factory=list)
    total_files: int = 0
    files_measured: int = 0
    files_errored: int = 0
    total_time_seconds: float = 0.0

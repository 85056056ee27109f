"""
Image Models
Value objects passed between pipeline stages and returned to the CLI
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

# Hard limit on either axis, for decoded sources and computed targets alike
MAX_DIMENSION = 65535


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def as_dict(self) -> Dict[str, int]:
        return {'width': self.width, 'height': self.height}

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class Bounds:
    """Requested maximum size; zero on an axis means unconstrained"""
    max_width: int = 0
    max_height: int = 0

    @property
    def is_unconstrained(self) -> bool:
        return self.max_width == 0 and self.max_height == 0


@dataclass(frozen=True)
class ClipRegion:
    """Rectangle in source pixel space, origin top-left, x2/y2 exclusive"""
    x1: int
    y1: int
    x2: int
    y2: int

    @property
    def size(self) -> Dimensions:
        return Dimensions(self.x2 - self.x1, self.y2 - self.y1)

    @property
    def box(self) -> Tuple[int, int, int, int]:
        return (self.x1, self.y1, self.x2, self.y2)

    def __str__(self) -> str:
        return f"({self.x1},{self.y1})-({self.x2},{self.y2})"


@dataclass(frozen=True)
class TransformOutcome:
    """Result record of a single transform or clip invocation"""
    input_file: str
    output_file: str
    format: str
    original_size: Dimensions
    final_size: Dimensions
    resized: bool
    message: str

    def as_dict(self) -> Dict:
        return {
            'input_file': self.input_file,
            'output_file': self.output_file,
            'format': self.format,
            'original_size': self.original_size.as_dict(),
            'final_size': self.final_size.as_dict(),
            'resized': self.resized,
            'message': self.message,
        }


@dataclass(frozen=True)
class ImageInfo:
    file: str
    path: str
    format: str
    width: int
    height: int
    aspect_ratio: float
    has_alpha: bool
    color_model: str
    file_size_bytes: int
    file_size_kb: float

    def as_dict(self) -> Dict:
        return {
            'file': self.file,
            'path': self.path,
            'format': self.format,
            'width': self.width,
            'height': self.height,
            'aspect_ratio': self.aspect_ratio,
            'has_alpha': self.has_alpha,
            'color_model': self.color_model,
            'file_size_bytes': self.file_size_bytes,
            'file_size_kb': self.file_size_kb,
        }

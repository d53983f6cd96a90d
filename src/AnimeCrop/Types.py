from enum import Enum
from dataclasses import dataclass, field


class Colors(Enum):
    BOX_COLOR = (255, 0, 0, 255)  # Red, opaque
    TEXT_COLOR = (255, 255, 255, 255)  # White


class CropMode(str, Enum):
    FACE = "face"
    PORTRAIT = "portrait"


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ImageDimensions:
    width: int
    height: int


@dataclass(frozen=True)
class ExpansionParams:
    top: float = 0.25    # y origin multiplier
    left: float = 0.90   # x origin multiplier
    right: float = 1.25  # width multiplier


@dataclass(frozen=True)
class CropRectangle:
    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0


@dataclass(frozen=True)
class SquarePlacement:
    side: int
    offset_x: int
    offset_y: int


@dataclass(frozen=True)
class CropSettings:
    mode: CropMode = CropMode.PORTRAIT
    expansion: ExpansionParams = field(default_factory=ExpansionParams)
    pad_square: bool = True
    target_size: int = 512

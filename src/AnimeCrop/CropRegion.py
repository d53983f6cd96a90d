from math import floor

# Locals
from .Types import (BoundingBox, CropMode, CropRectangle, ExpansionParams,
                    ImageDimensions, SquarePlacement)

# ---------------------- Helper functions ----------------------------------------------------

def _expand_portrait(box: BoundingBox, expansion: ExpansionParams) -> tuple[int, int, int, int]:
    # left/top scale the absolute origin, they are not pads around the box
    x0 = floor(box.x * expansion.left)
    y0 = floor(box.y * expansion.top)
    x1 = floor(box.x + box.width * expansion.right)
    y1 = floor(box.y + box.height)  # bottom edge stays at the chin
    return x0, y0, x1, y1

def _clamp(x0: int, y0: int, x1: int, y1: int, dims: ImageDimensions) -> tuple[int, int, int, int]:
    x0 = max(0, x0); y0 = max(0, y0)
    x1 = min(dims.width, x1); y1 = min(dims.height, y1)
    # never empty, may overhang by 1px on tiny images
    if x1 - x0 < 1:
        x1 = x0 + 1
    if y1 - y0 < 1:
        y1 = y0 + 1
    return x0, y0, x1, y1

# ---------------------- Public functions ----------------------------------------------------

def derive_crop_rectangle(
    box: BoundingBox,
    image_dims: ImageDimensions,
    mode: CropMode = CropMode.PORTRAIT,
    expansion: ExpansionParams | None = None,
) -> CropRectangle:
    """
    Turns a detection box into the region that will be cut from the source image.

    In face mode the box is used as is. In portrait mode the box grows upwards and
    sideways (x and y origins are scaled by the left/top multipliers, the width by the
    right multiplier) while the bottom edge is kept. Coordinates are floored, clamped
    to the image and forced to span at least one pixel on each axis.

    Args:
        box: Detected face in source image pixels.
        image_dims: Size of the image the box was detected in.
        mode: CropMode.FACE or CropMode.PORTRAIT.
        expansion: Portrait multipliers, defaults to ExpansionParams().

    Returns:
        CropRectangle (x0, y0, x1, y1), exclusive on x1/y1.
    """
    if CropMode(mode) is CropMode.PORTRAIT:
        coords = _expand_portrait(box, expansion or ExpansionParams())
    else:
        coords = (floor(box.x), floor(box.y),
                  floor(box.x + box.width), floor(box.y + box.height))

    return CropRectangle(*_clamp(*coords, image_dims))


def derive_square_placement(width: int, height: int) -> SquarePlacement:
    """
    Centers a width x height rectangle in a square canvas of side max(width, height).
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Placement needs positive dimensions, got {width}x{height}.")

    side = max(width, height)
    return SquarePlacement(side, (side - width) // 2, (side - height) // 2)

# tests/test_crop_region.py
import pytest

from AnimeCrop.CropRegion import derive_crop_rectangle, derive_square_placement
from AnimeCrop.Types import BoundingBox, CropMode, CropRectangle, ExpansionParams, ImageDimensions

DIMS = ImageDimensions(800, 600)
EXPANSION = ExpansionParams(top=0.25, left=0.90, right=1.25)


def test_default_expansion():
    assert ExpansionParams() == EXPANSION

def test_face_mode_is_the_box():
    box = BoundingBox(100, 50, 200, 200)
    assert derive_crop_rectangle(box, DIMS, CropMode.FACE) == CropRectangle(100, 50, 300, 250)

def test_face_mode_accepts_string_mode():
    box = BoundingBox(100, 50, 200, 200)
    assert derive_crop_rectangle(box, DIMS, "face") == CropRectangle(100, 50, 300, 250)

def test_face_mode_clamps_to_image():
    box = BoundingBox(700, 500, 200, 200)
    assert derive_crop_rectangle(box, DIMS, CropMode.FACE) == CropRectangle(700, 500, 800, 600)

def test_portrait_mode():
    box = BoundingBox(100, 50, 200, 200)
    rect = derive_crop_rectangle(box, DIMS, CropMode.PORTRAIT, EXPANSION)
    assert rect == CropRectangle(90, 12, 350, 250)

def test_portrait_is_the_default_mode():
    box = BoundingBox(100, 50, 200, 200)
    assert derive_crop_rectangle(box, DIMS) == CropRectangle(90, 12, 350, 250)

def test_portrait_box_at_origin():
    box = BoundingBox(0, 0, 50, 50)
    rect = derive_crop_rectangle(box, DIMS, CropMode.PORTRAIT, EXPANSION)
    assert rect == CropRectangle(0, 0, 62, 50)

def test_portrait_keeps_bottom_edge():
    box = BoundingBox(300, 200, 100, 120)
    rect = derive_crop_rectangle(box, DIMS, CropMode.PORTRAIT, EXPANSION)
    assert rect.y1 == 320

def test_portrait_right_edge_clamped():
    box = BoundingBox(600, 100, 200, 200)
    rect = derive_crop_rectangle(box, DIMS, CropMode.PORTRAIT, EXPANSION)
    assert rect.x1 == DIMS.width
    assert rect == CropRectangle(540, 25, 800, 300)

def test_portrait_floors_instead_of_rounding():
    # 33 * 0.9 = 29.7, 7 * 0.25 = 1.75, 33 + 10 * 1.25 = 45.5
    box = BoundingBox(33, 7, 10, 10)
    rect = derive_crop_rectangle(box, DIMS, CropMode.PORTRAIT, EXPANSION)
    assert rect == CropRectangle(29, 1, 45, 17)

def test_left_multiplier_above_one_crops_in():
    box = BoundingBox(100, 100, 100, 100)
    rect = derive_crop_rectangle(box, DIMS, CropMode.PORTRAIT, ExpansionParams(top=1.0, left=1.5, right=1.0))
    assert rect == CropRectangle(150, 100, 200, 200)

def test_degenerate_rectangle_gets_one_pixel():
    # left multiplier pushes x0 past x1
    box = BoundingBox(100, 100, 10, 10)
    rect = derive_crop_rectangle(box, DIMS, CropMode.PORTRAIT, ExpansionParams(top=1.0, left=3.0, right=1.0))
    assert rect.x0 == 300
    assert rect.width == 1

def test_degenerate_on_tiny_image():
    rect = derive_crop_rectangle(BoundingBox(5, 5, 3, 3), ImageDimensions(4, 4), CropMode.FACE)
    assert rect == CropRectangle(5, 5, 6, 6)

@pytest.mark.parametrize("box", [
    BoundingBox(0, 0, 800, 600),
    BoundingBox(799, 599, 1, 1),
    BoundingBox(10, 590, 50, 50),
    BoundingBox(700, 0, 300, 300),
    BoundingBox(250.5, 100.25, 80.5, 80.5),
])
@pytest.mark.parametrize("mode", [CropMode.FACE, CropMode.PORTRAIT])
def test_rectangle_in_bounds_and_non_empty(box, mode):
    rect = derive_crop_rectangle(box, DIMS, mode, EXPANSION)
    assert isinstance(rect.x0, int) and isinstance(rect.y1, int)
    assert 0 <= rect.x0 < rect.x1 <= DIMS.width
    assert 0 <= rect.y0 < rect.y1 <= DIMS.height


def test_square_placement_landscape():
    p = derive_square_placement(200, 140)
    assert (p.side, p.offset_x, p.offset_y) == (200, 0, 30)

def test_square_placement_odd_difference_floors():
    p = derive_square_placement(10, 7)
    assert (p.side, p.offset_x, p.offset_y) == (10, 0, 1)

def test_square_placement_already_square():
    p = derive_square_placement(64, 64)
    assert (p.side, p.offset_x, p.offset_y) == (64, 0, 0)

@pytest.mark.parametrize("w,h", [(200, 140), (1, 9), (33, 34)])
def test_square_placement_symmetry(w, h):
    a = derive_square_placement(w, h)
    b = derive_square_placement(h, w)
    assert a.side == b.side
    assert (a.offset_x, a.offset_y) == (b.offset_y, b.offset_x)
    assert a.offset_x + w <= a.side and a.offset_y + h <= a.side

@pytest.mark.parametrize("w,h", [(0, 10), (10, 0), (-1, 5)])
def test_square_placement_rejects_empty(w, h):
    with pytest.raises(ValueError):
        derive_square_placement(w, h)

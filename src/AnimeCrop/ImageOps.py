# -*- coding: utf-8 -*-
import numpy as np
import cv2
from PIL import Image

# Local imports
from .CropRegion import derive_square_placement
from .Types import CropRectangle, ImageDimensions


def image_dimensions(image: np.ndarray) -> ImageDimensions:
    H, W = image.shape[:2]
    return ImageDimensions(int(W), int(H))

def crop_image(image: np.ndarray, rect: CropRectangle) -> np.ndarray:
    """Copies exactly the rect region out of image."""
    return image[rect.y0:rect.y1, rect.x0:rect.x1].copy()

def pad_to_square(image: np.ndarray) -> np.ndarray:
    """
    Centers the image in a zero filled square canvas. With RGBA input the padding
    is fully transparent.

    @param image: NDARRAY, HxW or HxWxC
    @return: NDARRAY of side x side, same dtype and channels
    """
    H, W = image.shape[:2]
    placement = derive_square_placement(W, H)
    side = placement.side

    out = np.zeros((side, side) + image.shape[2:], dtype=image.dtype)
    x, y = placement.offset_x, placement.offset_y
    out[y:y + H, x:x + W] = image
    return out

def resize_square(image: np.ndarray, size: int, inter: int = cv2.INTER_AREA) -> np.ndarray:
    """
    Resize to size x size. Aspect ratio is not kept, pad_to_square first if it matters.
    """
    if size <= 0:
        raise ValueError(f"Export size must be positive, got {size}.")
    return cv2.resize(image, (size, size), interpolation=inter)

def to_gray(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return image
    channels = image.shape[2]
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2GRAY)
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
    if channels == 1:
        return image[:, :, 0]
    raise ValueError(f"Unsupported channel count: {channels}")

def write_image(img, path: str):
    if isinstance(img, np.ndarray):
        Image.fromarray(img).save(path, format="PNG")
    elif isinstance(img, Image.Image):
        img.save(path, format="PNG")

def read_image(path: str, rnumpy=True):
    """
    Read an image from path, always as RGBA so crops can be padded with transparency
    @param path: Path to image
    @param rnumpy: Boolean, return NDARRAY
    """

    with Image.open(path) as im:
        im = im.convert("RGBA")
    if rnumpy:
        return np.array(im)
    else:
        return im

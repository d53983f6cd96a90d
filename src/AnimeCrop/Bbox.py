import cv2
import numpy as np
from typing import List, Optional

# Locals
from .Types import BoundingBox, Colors, CropRectangle

def boxes_from_rects(rects) -> List[BoundingBox]:
    """
    Converts detectMultiScale output (Nx4 XYWH array, or an empty tuple when nothing
    was found) into BoundingBox objects.
    """
    if rects is None or len(rects) == 0:
        return []
    rects = np.asarray(rects).reshape(-1, 4)
    return [BoundingBox(int(x), int(y), int(w), int(h)) for x, y, w, h in rects]


def draw_bbox(img, bbox: BoundingBox | CropRectangle, label: str, box_color=None, thickness: int = -1,
              draw_text=True):
    """
    Visualizes a single box on the image, in place.
    Parameters:
        img (np.array): RGB or RGBA image to draw on.
        bbox: BoundingBox (XYWH) or CropRectangle (XYXY)
        label: string to display above the box
        box_color: color of the box, same channel order as img
        thickness: number of pixels to draw box, <= 0 picks one from the image size
        draw_text: whether to draw text on image
    Returns:
        ndarray: Image visualization.
    """
    channels = img.shape[2] if img.ndim == 3 else 1
    if box_color is None:
        box_color = Colors.BOX_COLOR.value
    text_color = Colors.TEXT_COLOR.value[:channels]
    box_color = tuple(box_color)[:channels]

    if isinstance(bbox, CropRectangle):
        x_min, y_min, x_max, y_max = bbox.x0, bbox.y0, bbox.x1, bbox.y1
    else:
        x_min, y_min = int(bbox.x), int(bbox.y)
        x_max, y_max = int(bbox.x + bbox.width), int(bbox.y + bbox.height)

    if thickness <= 0:
        H, W = img.shape[:2]
        thickness = max(1, int(round(min(H, W) * 0.0025)))

    cv2.rectangle(img, (x_min, y_min), (x_max, y_max), color=box_color, thickness=thickness)

    if draw_text:
        font_scale = max(0.4, min(1.6, thickness * 0.6))
        ((text_width, text_height), _) = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, font_scale, max(1, thickness-1))
        cv2.rectangle(img, (x_min, y_min - int(1.3 * text_height)), (x_min + text_width, y_min), box_color, -1)
        cv2.putText(
            img,
            text=label,
            org=(x_min, y_min - int(0.3 * text_height)),
            fontFace=cv2.FONT_HERSHEY_SIMPLEX,
            fontScale=font_scale,
            color=text_color,
            lineType=cv2.LINE_AA)
    return img


def draw_detections(image: np.ndarray, boxes: List[BoundingBox],
                    rects: Optional[List[CropRectangle]] = None) -> np.ndarray:
    """
    Returns a copy of image with every detection box drawn, and the crop region
    around it when given.
    """
    img = image.copy()
    for i, box in enumerate(boxes):
        draw_bbox(img, box, f"face {i + 1}")
        if rects is not None:
            draw_bbox(img, rects[i], "", box_color=(0, 255, 0, 255), draw_text=False)
    return img

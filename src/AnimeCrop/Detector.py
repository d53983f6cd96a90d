# -*- coding: utf-8 -*-
import os
import cv2
import numpy as np
from pathlib import Path
from typing import List, Optional

# Locals
from .Assets import ensure_cascade
from .Bbox import boxes_from_rects
from .ImageOps import to_gray
from .Types import BoundingBox


def load_cascade(path) -> cv2.CascadeClassifier:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Cascade file not found: {path}")
    classifier = cv2.CascadeClassifier()
    if not classifier.load(str(path)):
        raise RuntimeError(f"Cascade load returned false: {path.name}")
    return classifier


class AnimeFaceDetector:
    """
    LBP cascade face detector. Images are converted to gray and histogram equalized
    before detectMultiScale.

    @param cascade_path: XML cascade; None uses the cached lbpcascade_animeface.xml
    @param min_size: Smallest face side in pixels. 250-300 keeps false positives low
    @param scale_factor: Pyramid step between scales
    @param min_neighbors: Neighbour detections needed to keep a candidate
    @param classifier: Already loaded classifier, takes precedence over cascade_path
    """

    def __init__(self,
                 cascade_path: Optional[str | os.PathLike] = None,
                 *,
                 min_size: int = 250,
                 scale_factor: float = 1.1,
                 min_neighbors: int = 5,
                 classifier=None):
        if classifier is None:
            if cascade_path is None:
                cascade_path = ensure_cascade()
            classifier = load_cascade(cascade_path)
            self.cascade_name = Path(cascade_path).name
        else:
            self.cascade_name = "<preloaded>"
        self.classifier = classifier
        self.min_size = int(min_size)
        self.scale_factor = float(scale_factor)
        self.min_neighbors = int(min_neighbors)

    def detect(self, image: np.ndarray) -> List[BoundingBox]:
        gray = cv2.equalizeHist(to_gray(image))
        rects = self.classifier.detectMultiScale(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            flags=0,
            minSize=(self.min_size, self.min_size))
        return boxes_from_rects(rects)

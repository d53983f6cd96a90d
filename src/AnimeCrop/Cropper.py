#!/usr/bin/env python3
# -*- coding: utf-8
import concurrent.futures
import os
import sys
import argparse
import threading
import numpy as np
from dataclasses import dataclass, field
from PIL import UnidentifiedImageError
from tqdm import tqdm
from typing import List, Optional

# Locals
from .Bbox import draw_detections
from .CropRegion import derive_crop_rectangle
from .Detector import AnimeFaceDetector
from .ImageOps import crop_image, image_dimensions, pad_to_square, read_image, resize_square, write_image
from .Types import BoundingBox, CropMode, CropRectangle, CropSettings, ExpansionParams

# Searches for known image files in source directory
extensions = ['png', 'jpg', 'jpeg', 'webp', 'bmp', 'gif']


@dataclass
class FaceCrop:
    bbox: BoundingBox
    rect: CropRectangle
    image: np.ndarray


@dataclass
class ImageResult:
    name: str
    original_w: int
    original_h: int
    settings: CropSettings
    crops: List[FaceCrop] = field(default_factory=list)


def settings_from_config(config: argparse.Namespace) -> CropSettings:
    return CropSettings(
        mode=CropMode(config.mode),
        expansion=ExpansionParams(top=config.expand_top, left=config.expand_left, right=config.expand_right),
        pad_square=config.pad_square,
        target_size=config.size)


def output_name(source_name: str, mode: CropMode, index: int, target_size: int) -> str:
    """
    File name for the index-th (1 based) crop of source_name, e.g. 'img__portrait__1_512.png'
    """
    base = os.path.splitext(os.path.basename(source_name))[0]
    return f"{base}__{CropMode(mode).value}__{index}_{target_size}.png"


def crop_faces(image: np.ndarray, boxes: List[BoundingBox], settings: CropSettings) -> List[FaceCrop]:
    """
    Cuts every box out of image following settings.

    Steps, per box:
      1) Derive the crop rectangle (face or portrait region), clamped to the image.
      2) Optional: pad the crop to a centered square.
      3) Resize to target_size x target_size.

    Regions pushed off the image by the portrait multipliers come out empty and are
    left out of the result.
    """
    dims = image_dimensions(image)
    crops = []
    for box in boxes:
        rect = derive_crop_rectangle(box, dims, settings.mode, settings.expansion)
        roi = crop_image(image, rect)
        if roi.size == 0:
            continue
        if settings.pad_square:
            roi = pad_to_square(roi)
        crops.append(FaceCrop(box, rect, resize_square(roi, settings.target_size)))
    return crops


def process_image(path: str, detector: AnimeFaceDetector, settings: CropSettings,
                  preview_dir: Optional[str] = None) -> ImageResult:
    """
    Detects faces in the image at path and crops them.
    @param preview_dir: if set, saves a copy of the image with detections drawn
    """
    image = read_image(path)
    dims = image_dimensions(image)
    boxes = detector.detect(image)
    result = ImageResult(os.path.basename(path), dims.width, dims.height, settings,
                         crop_faces(image, boxes, settings))

    if preview_dir:
        preview = draw_detections(image, [c.bbox for c in result.crops], [c.rect for c in result.crops])
        base = os.path.splitext(result.name)[0]
        write_image(preview, os.path.join(preview_dir, f"{base}__detections.png"))
    return result


def save_results(result: ImageResult, out_dir: str) -> List[str]:
    """Writes every crop of result as PNG into out_dir."""
    written = []
    for j, crop in enumerate(result.crops):
        dst = os.path.join(out_dir, output_name(result.name, result.settings.mode, j + 1,
                                                result.settings.target_size))
        write_image(crop.image, dst)
        written.append(dst)
    return written


def list_images(config: argparse.Namespace) -> List[str]:
    if config.file and os.path.isfile(config.file):
        return [config.file]
    if config.data and os.path.isdir(config.data):
        return sorted(os.path.join(config.data, f) for f in os.listdir(config.data)
                      if f.split('.')[-1].lower() in extensions)
    return []


def _build_detector(config: argparse.Namespace) -> AnimeFaceDetector:
    return AnimeFaceDetector(config.cascade,
                             min_size=config.min_size,
                             scale_factor=config.scale_factor,
                             min_neighbors=config.min_neighbors)


def _run_cropper(path: str, detector: AnimeFaceDetector, settings: CropSettings, out_dir: str,
                 preview_dir: Optional[str] = None, verbosity: int = 0) -> Optional[ImageResult]:
    """
    Runs detection + crop for a single file and saves the results.
    Returns None when the file can't be decoded.
    """
    try:
        result = process_image(path, detector, settings, preview_dir)
    except (UnidentifiedImageError, OSError) as e:
        print(f"Skipping {os.path.basename(path)}, could not process image: {e}")
        return None

    written = save_results(result, out_dir)
    if verbosity >= 1:
        print(f"\n{result.name} ({result.original_w}x{result.original_h}): {len(written)} face(s)")
    return result


# noinspection PyTypeChecker
def run_cropping(config: argparse.Namespace) -> List[ImageResult]:
    """
    Searches for image files in data directory (or the single given file), crops
    every detected face and writes the PNGs into config.out.
    @type config: argparse namespace object
    @return: one ImageResult per image that could be read
    """
    input_files = list_images(config)
    if not input_files:
        print(f"Image data not found in {config.data}{config.file}.")
        sys.exit(1)

    settings = settings_from_config(config)
    if config.preview_dir:
        os.makedirs(config.preview_dir, exist_ok=True)

    # Fail early on a bad cascade, before spinning workers
    detector = _build_detector(config)
    results = []

    if config.cpu > 1 and len(input_files) > 1:
        from concurrent.futures import ThreadPoolExecutor

        # CascadeClassifier is not shared between threads
        local = threading.local()

        def _worker(path):
            if not hasattr(local, "detector"):
                local.detector = _build_detector(config)
            return _run_cropper(path, local.detector, settings, config.out,
                                config.preview_dir, config.verbose)

        images = {}
        with tqdm(desc="Processing image files...\n", total=len(input_files), position=0) as bar, \
                ThreadPoolExecutor(max_workers=config.cpu) as executor:
            for f in input_files:
                ex = executor.submit(_worker, f)
                ex.add_done_callback(lambda x: bar.update(1))
                images[ex] = f

            for task in concurrent.futures.as_completed(images):
                res = task.result()
                if res is not None:
                    results.append(res)
        results.sort(key=lambda r: r.name)
    else:
        for f in tqdm(input_files, desc="Processing image files...", disable=config.verbose > 0):
            if config.verbose:
                print(f"Cropping {f}...")
            res = _run_cropper(f, detector, settings, config.out, config.preview_dir, config.verbose)
            if res is not None:
                results.append(res)

    faces = sum(len(r.crops) for r in results)
    print("Processed {} file(s). Found {} face(s).".format(len(results), faces))
    return results

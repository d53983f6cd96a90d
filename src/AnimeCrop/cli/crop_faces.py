"""
CLI shim for the face cropping pipeline.

    animecrop-faces --data <images_dir> --out <crops_dir> --mode portrait --size 512 --cpu 4
"""
import os
import sys
import argparse

from AnimeCrop.Cropper import run_cropping
from AnimeCrop.Types import CropMode, ExpansionParams

def _build_arg_parser() -> argparse.ArgumentParser:
    """Builds the input/output argument parser."""
    p = argparse.ArgumentParser(description="Detect anime faces and export cropped PNGs.")
    p.add_argument('--data', dest='data', type=str, default='',
                   help='Path to folder containing images.', required=False)
    p.add_argument('--file', dest='file', type=str, default='',
                   help='Path to a specific image file.', required=False)
    p.add_argument('--out', dest='out', type=str, default='',
                   help='Save crops here.', required=True)
    p.add_argument('--preview-dir', dest='preview_dir', type=str, default=None,
                   help='If set, saves each image with detections and crop regions drawn.')
    p.add_argument('--cpu', dest='cpu', type=int, default=1,
                   help='Number of worker threads for parallel cropping.')
    p.add_argument('--v', action='count', default=0, dest='verbose',
                   help="Increase verbosity; use -v, -vv, etc.")
    return p

def _add_detection_cli_args(parser: argparse.ArgumentParser) -> None:
    """Add cascade detection arguments."""
    g = parser.add_argument_group("Detection")
    g.add_argument("--cascade", default=None,
                   help="Cascade XML. Defaults to the cached lbpcascade_animeface.xml (fetched if missing).")
    g.add_argument("--min-size", type=int, default=250,
                   help="Minimum face size (px). Try 250-300 to reduce false positives.")
    g.add_argument("--scale-factor", type=float, default=1.1,
                   help="detectMultiScale scaleFactor.")
    g.add_argument("--min-neighbors", type=int, default=5,
                   help="detectMultiScale minNeighbors.")

def _add_crop_cli_args(parser: argparse.ArgumentParser) -> None:
    """Add crop and export arguments."""
    defaults = ExpansionParams()
    g = parser.add_argument_group("Crop")
    g.add_argument("--mode", choices=[m.value for m in CropMode], default=CropMode.PORTRAIT.value,
                   help="Crop the detected face only, or expand it into a portrait.")
    g.add_argument("--expand-top", type=float, default=defaults.top,
                   help="Portrait top multiplier (y*...).")
    g.add_argument("--expand-left", type=float, default=defaults.left,
                   help="Portrait left multiplier (x*...).")
    g.add_argument("--expand-right", type=float, default=defaults.right,
                   help="Portrait right width multiplier (x + w*...).")
    g.add_argument("--pad-square", action="store_true",
                   help="Pad crops to a centered square before resizing.")
    g.add_argument("--no-pad-square", dest="pad_square", action="store_false")
    g.set_defaults(pad_square=True)
    g.add_argument("--size", type=int, default=512,
                   help="Export size (px) of the square output.")

def main() -> None:
    """Entry point called by the `animecrop-faces` console script."""
    parser = _build_arg_parser()
    _add_detection_cli_args(parser)
    _add_crop_cli_args(parser)

    config, _ = parser.parse_known_args()

    if not config.data and not config.file:
        print("You should define a path to a dir (data) or file (file)")
        sys.exit(1)

    if config.size <= 0:
        print(f"Export size must be positive, got {config.size}")
        sys.exit(1)

    if config.out and not os.path.isdir(config.out):
        os.makedirs(config.out, exist_ok=True)

    try:
        run_cropping(config)
    except (OSError, RuntimeError) as e:
        # bad or missing cascade, failed cascade download
        print(f"Error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()

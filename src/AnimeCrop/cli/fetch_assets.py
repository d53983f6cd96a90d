"""
CLI shim for the asset fetch helper.

    animecrop-assets [--out <dir>] [--force]
"""
import sys
import argparse

from AnimeCrop.Assets import ASSETS, default_asset_dir, fetch_assets

def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Download the anime face cascade.")
    p.add_argument('--out', dest='out', type=str, default=None,
                   help=f'Save assets here (default {default_asset_dir()}).')
    p.add_argument('--force', action='store_true', default=False,
                   help='Download again even when the file is present.')
    p.add_argument('--v', action='count', default=0, dest='verbose',
                   help="Increase verbosity; use -v, -vv, etc.")
    return p

def main() -> None:
    """Entry point called by the `animecrop-assets` console script."""
    config, _ = _build_arg_parser().parse_known_args()
    present = fetch_assets(config.out, force=config.force, verbose=config.verbose)
    if len(present) < len(ASSETS):
        sys.exit(1)

if __name__ == "__main__":
    main()

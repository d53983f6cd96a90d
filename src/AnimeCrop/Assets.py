# -*- coding: utf-8 -*-
import os
import urllib.request
from pathlib import Path
from typing import List, Optional

CASCADE_NAME = "lbpcascade_animeface.xml"
CASCADE_URL = "https://raw.githubusercontent.com/nagadomi/lbpcascade_animeface/master/lbpcascade_animeface.xml"

# (url, file name, size hint)
ASSETS = [
    (CASCADE_URL, CASCADE_NAME, "~100 KB"),
]

# Anything smaller is an interrupted download or an error page
MIN_ASSET_BYTES = 1024


def default_asset_dir() -> Path:
    """Per user cache folder for the cascade file."""
    if os.name == "nt":
        base = Path(os.environ.get("LOCALAPPDATA", str(Path.home() / "AppData" / "Local")))
    else:
        base = Path(os.environ.get("XDG_CACHE_HOME", str(Path.home() / ".cache")))
    return base / "animecrop" / "models"


def download_file(url: str, dst: Path, *, timeout_s: float = 60.0) -> Path:
    """
    Downloads url into dst through a temporary file, so dst is either complete or
    absent. Redirects are followed by urllib.
    """
    dst = Path(dst)
    dst.parent.mkdir(parents=True, exist_ok=True)
    tmp = dst.with_suffix(dst.suffix + ".tmp")

    req = urllib.request.Request(url, headers={"User-Agent": "animecrop/0.1"})
    try:
        with urllib.request.urlopen(req, timeout=float(timeout_s)) as r, tmp.open("wb") as f:
            while True:
                chunk = r.read(1024 * 256)
                if not chunk:
                    break
                f.write(chunk)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise

    os.replace(tmp, dst)
    return dst


def _present(path: Path) -> bool:
    return path.is_file() and path.stat().st_size > MIN_ASSET_BYTES


def fetch_assets(out_dir: Optional[Path] = None, force: bool = False, verbose: int = 0) -> List[Path]:
    """
    Fetches every known asset into out_dir, skipping the ones already there.
    A failed download is reported and the next asset is tried.

    @param out_dir: Destination folder, default_asset_dir() when None
    @param force: Download even if the file is present
    @param verbose: Verbosity level
    @return: Paths of the assets present after the run
    """
    out_dir = Path(out_dir) if out_dir is not None else default_asset_dir()
    out_dir.mkdir(parents=True, exist_ok=True)

    present = []
    for url, name, size_hint in ASSETS:
        target = out_dir / name
        if _present(target) and not force:
            if verbose > 0:
                print(f"[ok] {name} already present ({target.stat().st_size / 1024:.1f} KB)")
            present.append(target)
            continue
        print(f"[fetch] {name} from {url} ({size_hint})")
        try:
            download_file(url, target)
        except OSError as e:
            print(f"[warn] Failed to fetch {name}: {e}")
            print(f"You can manually place it in {out_dir} and re-run.")
            continue
        print(f"[done] {name}")
        present.append(target)

    return present


def ensure_cascade(asset_dir: Optional[Path] = None) -> Path:
    """Returns the cached cascade path, downloading it first when needed."""
    asset_dir = Path(asset_dir) if asset_dir is not None else default_asset_dir()
    path = asset_dir / CASCADE_NAME
    if _present(path):
        return path
    return download_file(CASCADE_URL, path)

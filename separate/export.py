from __future__ import annotations

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import cv2 as cv
import numpy as np

from .errors import OutputError
from .labeler import Region
from .renderer import Artifact


def to_bgr(img: np.ndarray) -> np.ndarray:
    """RGB(A) -> BGR(A) for the OpenCV encoders; grey passes through."""
    if img.ndim == 2:
        return img
    if img.shape[2] == 4:
        return cv.cvtColor(img, cv.COLOR_RGBA2BGRA)
    return cv.cvtColor(img, cv.COLOR_RGB2BGR)


def labelled_path(output: Union[str, Path], label: int) -> Path:
    """out.png -> out-3.png"""
    p = Path(output)
    return p.with_name(f"{p.stem}-{label}{p.suffix}")


def artifact_paths(output: Union[str, Path], artifacts: Sequence[Artifact]) -> List[Path]:
    return [Path(output) if a.label is None else labelled_path(output, a.label) for a in artifacts]


def _check_dir(dest: Path) -> None:
    parent = Path(dest).resolve().parent
    if not parent.is_dir():
        raise OutputError(f"Output directory does not exist: {parent}")


def publish(
    artifacts: Sequence[Artifact],
    paths: Sequence[Path],
    documents: Sequence[Tuple[Path, Dict[str, Any]]] = (),
) -> List[Path]:
    """
    Encode every artifact (and dump every json document) into a staging
    directory next to the first image, then move them into place. Every target
    directory is checked before anything is encoded; the staging directory is
    removed on every exit path. Returns the paths written, images first.
    """
    if len(artifacts) != len(paths):
        raise ValueError("artifacts and paths must have same length")
    if not paths:
        return []
    for dest in list(paths) + [d for d, _ in documents]:
        _check_dir(dest)

    staging = Path(tempfile.mkdtemp(prefix=".separate-", dir=Path(paths[0]).resolve().parent))
    try:
        staged: List[Tuple[Path, Path]] = []
        for k, (art, dest) in enumerate(zip(artifacts, paths)):
            tmp = staging / f"{k:03d}{Path(dest).suffix}"
            try:
                ok = cv.imwrite(str(tmp), to_bgr(art.image))
            except cv.error as e:
                raise OutputError(f"Could not encode {dest}: {e}") from e
            if not ok:
                raise OutputError(f"Could not write image: {dest}")
            staged.append((tmp, Path(dest)))
        for k, (dest, data) in enumerate(documents):
            tmp = staging / f"doc{k:03d}.json"
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            staged.append((tmp, Path(dest)))
        for tmp, dest in staged:
            # shutil.move falls back to copy when a json target sits on another filesystem
            shutil.move(str(tmp), str(dest))
    except OSError as e:
        if isinstance(e, OutputError):
            raise
        raise OutputError(f"Could not publish outputs: {e}") from e
    finally:
        shutil.rmtree(staging, ignore_errors=True)
    return [dest for _, dest in staged]


# ---------- Canvas listing / sidecar ----------

def canvas_listing(artifacts: Sequence[Artifact]) -> List[str]:
    """WIDTHxHEIGHT+XOFF+YOFF for each artifact, in output order."""
    return [a.canvas.geometry for a in artifacts]


def canvas_sidecar_path(output: Union[str, Path]) -> Path:
    p = Path(output)
    return p.with_name(f"{p.stem}.canvas.json")


def canvas_document(
    artifacts: Sequence[Artifact],
    paths: Sequence[Path],
    shape_hw: Tuple[int, int],
) -> Dict[str, Any]:
    """
    PNG and friends cannot carry page offsets through OpenCV, so the virtual
    canvas of each trimmed image is kept in a sidecar instead:

    {
      "canvas": {"width": W, "height": H},
      "artifacts": [
        {"label": 1, "file": "out-1.png", "width": .., "height": .., "x": .., "y": ..},
        ...
      ]
    }
    """
    h, w = shape_hw
    entries = []
    for art, p in zip(artifacts, paths):
        c = art.canvas
        entries.append(
            {
                "label": art.label,
                "file": Path(p).name,
                "width": c.width,
                "height": c.height,
                "x": c.x,
                "y": c.y,
            }
        )
    return {"canvas": {"width": w, "height": h}, "artifacts": entries}


# ---------- Region metadata ----------

def metadata_document(
    regions: Sequence[Region],
    shape_hw: Tuple[int, int],
    files: Optional[Sequence[Path]] = None,
) -> Dict[str, Any]:
    """
    Describe each shape:

    {
      "version": "1.0",
      "dimensions": {"width": W, "height": H},
      "total_regions": N,
      "background_id": 0,
      "regions": [
        {"id": 1, "bbox": {...}, "area": .., "centroid": {"x": .., "y": ..}, "file": "out-1.png"},
        ...
      ]
    }

    `files` is indexed by label (files[0] is the background image) when the
    shapes were written one per file.
    """
    h, w = shape_hw
    out = []
    for r in regions:
        entry = {"id": r.id, "bbox": r.bbox, "area": r.area, "centroid": r.centroid}
        if files is not None and r.id < len(files):
            entry["file"] = Path(files[r.id]).name
        out.append(entry)
    return {
        "version": "1.0",
        "dimensions": {"width": w, "height": h},
        "total_regions": len(out),
        "background_id": 0,
        "regions": out,
    }

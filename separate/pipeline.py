from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union

from .config import RenderConfig
from .export import (artifact_paths, canvas_document, canvas_listing, canvas_sidecar_path,
                     metadata_document, publish)
from .labeler import describe_regions, label_shapes
from .raster import load_binary
from .renderer import Artifact, render


class RunResult(NamedTuple):
    count: int
    artifacts: List[Artifact]
    paths: List[Path]
    listing: List[str]
    extras: List[Path]          # json sidecars written alongside the images


def process_image(
    img_path: Union[str, Path],
    out_path: Union[str, Path],
    config: RenderConfig,
    *,
    negate: bool = False,
    metadata_path: Optional[Union[str, Path]] = None,
) -> RunResult:
    """Run: load -> binarize -> label -> render -> publish images and json sidecars together."""
    raster = load_binary(img_path, negate=negate)
    labels, count, _seeds = label_shapes(raster, grid=config.grid, connectivity=config.connectivity)

    artifacts = render(labels, count, config)
    paths = artifact_paths(out_path, artifacts)

    documents: List[Tuple[Path, Dict[str, Any]]] = []
    trimmed = config.per_label and config.trim
    if trimmed and config.keep_canvas:
        documents.append((canvas_sidecar_path(out_path),
                          canvas_document(artifacts, paths, labels.shape)))
    if metadata_path is not None:
        files = paths if config.per_label else None
        documents.append((Path(metadata_path),
                          metadata_document(describe_regions(labels, count), labels.shape, files)))

    publish(artifacts, paths, documents)

    listing: List[str] = []
    if trimmed and config.keep_canvas and config.list_canvas:
        listing = canvas_listing(artifacts)
    return RunResult(count, artifacts, paths, listing, [p for p, _ in documents])

"""Save dithered results next to each other in an output directory.

Output names keep the source stem and extension with the kernel label in
between: ``photo.png`` becomes ``photo.atkinson.png`` and ``photo.floyd.png``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from PIL import Image

from bw_dither.core.dither import DitherResult
from bw_dither.core.errors import EncodeFailed, OutputDirUnavailable
from bw_dither.core.reader import SourceImage

logger = logging.getLogger(__name__)

# Extensions for sources whose file name has none
FORMAT_EXTENSIONS = {
    "JPEG": ".jpg",
    "TIFF": ".tif",
}


def ensure_output_dir(path: str | Path) -> Path:
    """Create the output directory (and parents) if it doesn't exist."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirUnavailable(path, e) from e
    return path


def _extension_for(source_path: Path, fmt: str | None) -> str:
    if source_path.suffix:
        return source_path.suffix
    if fmt:
        return FORMAT_EXTENSIONS.get(fmt, f".{fmt.lower()}")
    return ".png"


def output_path_for(
    source_path: str | Path,
    label: str,
    output_dir: str | Path,
    fmt: str | None = None,
) -> Path:
    """Build ``<output_dir>/<stem>.<label><ext>`` for one result.

    ``fmt`` (a Pillow format name) picks the extension when the source file
    name has none.
    """
    source_path = Path(source_path)
    ext = _extension_for(source_path, fmt)
    return Path(output_dir) / f"{source_path.stem}.{label}{ext}"


def save_result(
    result: DitherResult,
    path: Path,
    fallback_format: str | None = None,
) -> None:
    """Encode one result to ``path``.

    The format comes from the file extension, or ``fallback_format`` when
    Pillow doesn't know the extension.
    """
    img = result.to_image()
    fmt = None
    if path.suffix.lower() not in Image.registered_extensions():
        fmt = fallback_format
    try:
        img.save(path, format=fmt)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeFailed(path, e) from e


def save_results(
    results: Iterable[DitherResult],
    source: SourceImage,
    output_dir: str | Path,
) -> list[Path]:
    """Save every result, continuing past individual encode failures.

    Returns:
        Paths written, in the order of ``results``.

    Raises:
        OutputDirUnavailable: before anything is encoded.
        EncodeFailed: after all results were attempted, if any failed.
    """
    out_dir = ensure_output_dir(output_dir)
    written: list[Path] = []
    failures: list[tuple[Path, BaseException]] = []

    for result in results:
        path = output_path_for(source.path, result.label, out_dir, source.format)
        try:
            save_result(result, path, source.format)
        except EncodeFailed as e:
            logger.error("%s", e)
            failures.append((path, e.cause))
            continue
        logger.info("Saved %s output to %s", result.label, path)
        written.append(path)

    if failures:
        first_path, first_cause = failures[0]
        raise EncodeFailed(first_path, first_cause, written=written, failures=failures)
    return written

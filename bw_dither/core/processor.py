"""Image processing pipeline.

Decode → dither with each kernel → save one file per kernel.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from bw_dither.core.dither import DitherResult, dither_all
from bw_dither.core.kernels import KERNELS
from bw_dither.core.reader import SourceImage, load_image
from bw_dither.core.writer import save_results

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Settings for one run."""

    output_dir: Path = Path("out")  # relative to the working directory


@dataclass
class ProcessReport:
    """What a run read and wrote."""

    input: Path
    format: str | None
    width: int
    height: int
    outputs: list[tuple[str, Path]] = field(default_factory=list)


def dither_source(source: SourceImage) -> list[DitherResult]:
    """Run every kernel over a decoded source, logging the total time."""
    start = time.perf_counter()
    results = dither_all(source.pixels, KERNELS)
    logger.debug(
        "%d passes on %dx%d took %.3fs",
        len(results),
        source.width,
        source.height,
        time.perf_counter() - start,
    )
    return results


def process_image(path: str | Path, settings: Settings | None = None) -> ProcessReport:
    """Dither the image at ``path`` and write both outputs.

    Raises:
        DitherError: any of its subclasses, from the reader or the writer.
    """
    settings = settings or Settings()
    source = load_image(path)
    results = dither_source(source)
    written = save_results(results, source, settings.output_dir)

    return ProcessReport(
        input=source.path,
        format=source.format,
        width=source.width,
        height=source.height,
        outputs=[(r.label, p) for r, p in zip(results, written)],
    )

"""Command-line interface for bw_dither.

Writes an Atkinson and a Floyd-Steinberg rendition of the input image.
Supports a JSON mode for scripting.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path

from bw_dither.core.errors import DitherError, EncodeFailed
from bw_dither.core.processor import Settings, process_image

USAGE = "Usage: bw-dither /path/to/image"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bw-dither",
        description="Dither an image to pure black and white with the "
        "Atkinson and Floyd-Steinberg kernels.",
    )
    parser.add_argument("input", nargs="?", help="Input image file path.")
    parser.add_argument(
        "-o", "--output-dir",
        default="out",
        help="Directory for the dithered images (default: out).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (pipe-friendly).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress to stderr.",
    )
    return parser


def _json_error(err: DitherError) -> None:
    """Print a JSON error to stderr."""
    payload = {
        "status": "error",
        "error": str(err),
        "code": err.code,
        "path": str(err.path),
    }
    if isinstance(err, EncodeFailed):
        payload["written"] = [str(p) for p in err.written]
    print(json.dumps(payload), file=sys.stderr)


def _report_error(err: DitherError, args: argparse.Namespace) -> None:
    if args.debug:
        traceback.print_exc(file=sys.stderr)
    if args.json:
        _json_error(err)
        return
    print(f"Error: {err}", file=sys.stderr)
    if isinstance(err, EncodeFailed):
        # each failed save was already logged by the writer
        for path in err.written:
            print(f"Saved to {path}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.input is None:
        print(USAGE)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    settings = Settings(output_dir=Path(args.output_dir))
    try:
        report = process_image(args.input, settings)
    except DitherError as e:
        _report_error(e, args)
        return 1

    if args.json:
        result = {
            "status": "success",
            "input": str(report.input),
            "outputs": {label: str(path) for label, path in report.outputs},
            "metadata": {
                "format": report.format,
                "width": report.width,
                "height": report.height,
            },
        }
        print(json.dumps(result, indent=2))
    else:
        for _, path in report.outputs:
            print(f"Saved to {path}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())

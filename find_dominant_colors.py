#!/usr/bin/env python3
"""
find_dominant_colors.py
Find the N dominant colours of an image by recursive principal-axis splits.

Usage:
  python find_dominant_colors.py INPUT COUNT [--outdir DIR] [--width W|auto]
      [--resample nearest|bilinear|bicubic|lanczos] [--background #rrggbb]
      [--no-images] [--jobs J] [--debug]

Input:
  Any Pillow-readable image, or a folder of them. Alpha is dropped, or
  composited over --background when given. COUNT must be in 1..255.

Output:
  Prints one line per dominant colour (hex, rgb, pixel share). Unless
  --no-images, writes classification.png, quantized.png and palette.png next
  to INPUT (or into --outdir). In folder mode each file name is prefixed with
  the image stem.

Exit codes:
  0 ok, 1 unreadable image, 2 bad colour count or missing path.
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from dominant_colors.constants import (
    CLASSIFICATION_FILENAME,
    DEFAULT_PREVIEW_WIDTH,
    IMAGE_EXTENSIONS,
    PALETTE_FILENAME,
    QUANTIZED_FILENAME,
)
from dominant_colors.core_types import RGBTuple, hex_to_rgb
from dominant_colors.errors import EmptyOrUnreadableImage, InvalidColorCount
from dominant_colors.image_io import (
    load_image_rgb,
    pillow_resample_from_name,
    resize_rgb_width,
    save_png_rgb,
)
from dominant_colors.quantize import find_dominant_colors, validate_color_count
from dominant_colors.render import (
    class_visualization,
    colour_usage_report,
    palette_swatch,
)
from dominant_colors.utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_percentage,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
)

EXIT_OK = 0
EXIT_UNREADABLE = 1
EXIT_BAD_ARGS = 2

OUTPUT_NAMES = (CLASSIFICATION_FILENAME, QUANTIZED_FILENAME, PALETTE_FILENAME)

# CLI args & small helpers


def _parse_width(text: str) -> Optional[int]:
    if text == "auto":
        return DEFAULT_PREVIEW_WIDTH
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer or 'auto', got {text!r}")
    return value if value > 0 else None


def _parse_background(text: str) -> RGBTuple:
    try:
        return hex_to_rgb(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc))


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        count: requested number of colours (validated later)
        outdir: optional Path for outputs
        width: optional int max working width
        resample: resize filter name
        background: optional RGB tuple to composite alpha over
        no_images: bool, skip writing PNG artefacts
        jobs: files processed in parallel
        debug: bool for per-split details
    """
    parser = argparse.ArgumentParser(
        prog="find_dominant_colors",
        description="Find the dominant colours of image(s) by recursive principal-axis splits.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument("count", type=int, help="Number of colours (1-255)")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--width",
        type=_parse_width,
        default=None,
        help=f'Resize so width<=W before quantizing. "auto" => {DEFAULT_PREVIEW_WIDTH}.',
    )
    parser.add_argument(
        "--resample",
        choices=["nearest", "bilinear", "bicubic", "lanczos"],
        default="lanczos",
        help="Scaling filter used with --width.",
    )
    parser.add_argument(
        "--background",
        type=_parse_background,
        default=None,
        help="Composite transparent pixels over this colour (#rrggbb).",
    )
    parser.add_argument(
        "--no-images",
        dest="no_images",
        action="store_true",
        help="Only print colours; do not write PNG outputs",
    )
    parser.add_argument(
        "--jobs", type=int, default=1, help="Files processed in parallel"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose split details")
    return parser.parse_args(argv)


@dataclass
class ImageReport:
    """Lines to print for one image, plus its exit status."""

    name: str
    lines: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    status: int = EXIT_OK
    written: List[Path] = field(default_factory=list)


def _output_paths(
    src_path: Path, outdir: Optional[Path], prefixed: bool
) -> Tuple[Path, Path, Path]:
    target_dir = outdir if outdir is not None else src_path.parent
    prefix = f"{src_path.stem}_" if prefixed else ""
    return tuple(target_dir / f"{prefix}{name}" for name in OUTPUT_NAMES)  # type: ignore[return-value]


def _is_output_artifact(path: Path) -> bool:
    name = path.name.lower()
    return any(name == out or name.endswith(f"_{out}") for out in OUTPUT_NAMES)


# Per-file processing


def _process_single_image(
    src_path: Path,
    count: int,
    outdir: Optional[Path],
    width_cap: Optional[int],
    resample_name: str,
    background: Optional[RGBTuple],
    write_images: bool,
    prefixed: bool,
    debug: bool,
) -> ImageReport:
    """
    Process a single image path end-to-end:
      load -> optional resize -> quantize -> save -> report.
    """
    report = ImageReport(name=src_path.name)
    t_start = time.perf_counter()

    try:
        rgb = load_image_rgb(src_path, background=background)
    except EmptyOrUnreadableImage as exc:
        report.errors.append(str(exc))
        report.status = EXIT_UNREADABLE
        return report
    height0, width0 = rgb.shape[0], rgb.shape[1]

    rgb = resize_rgb_width(rgb, width_cap, pillow_resample_from_name(resample_name))
    height, width = rgb.shape[0], rgb.shape[1]
    t_loaded = time.perf_counter()

    if debug:
        pairs = [("Loaded", f"{width0}x{height0}")]
        if (width, height) != (width0, height0):
            pairs.append(("Resized", f"{width}x{height}"))
        debug_log(f"{src_path.name}: {key_value_pairs_to_string(pairs)}")

    result = find_dominant_colors(rgb, count, debug=debug)
    t_quantized = time.perf_counter()

    if write_images:
        classification_path, quantized_path, palette_path = _output_paths(
            src_path, outdir, prefixed
        )
        report.written.append(
            save_png_rgb(classification_path, class_visualization(result.classes))
        )
        report.written.append(save_png_rgb(quantized_path, result.quantized))
        report.written.append(save_png_rgb(palette_path, palette_swatch(result.colors)))
    t_saved = time.perf_counter()

    report.lines.append(f"Size: {width}x{height} | colours={len(result.colors)}")
    report.lines.append("Dominant colours:")
    for rgb_t, (hex_code, pixels, share) in zip(
        result.colors, colour_usage_report(result.colors, result.pixel_counts)
    ):
        report.lines.append(
            f"  {hex_code}  rgb{rgb_t}: pixels={pixels:,}  share={format_percentage(share)}"
        )
    for path in report.written:
        report.lines.append(f"Wrote {path.name}")

    if debug:
        report.lines.append(
            "[debug] "
            f"Total {format_total_duration_compact(t_saved - t_start)}  "
            f"(load={format_seconds_compact(t_loaded - t_start)}, "
            f"quantize={format_seconds_compact(t_quantized - t_loaded)}, "
            f"save={format_seconds_compact(t_saved - t_quantized)})"
        )
    else:
        report.lines.append(
            f"Total time {format_total_duration_compact(t_saved - t_start)}"
        )
    return report


def _print_report(report: ImageReport) -> None:
    print_banner(report.name)
    for line in report.lines:
        log(line)
    for message in report.errors:
        error(message)


def _collect_images(folder: Path) -> List[Path]:
    files = [
        p
        for p in folder.iterdir()
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTENSIONS
        and not _is_output_artifact(p)
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Handles single file or folder. In folder mode supports --jobs parallelism
    while preserving readable output ordering.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    try:
        count = validate_color_count(args.count)
    except InvalidColorCount as exc:
        error(str(exc))
        return EXIT_BAD_ARGS

    src: Path = args.src
    if not src.exists():
        error(f"not found: {src}")
        return EXIT_BAD_ARGS

    if args.outdir is not None:
        args.outdir.mkdir(parents=True, exist_ok=True)

    jobs = max(1, int(args.jobs))
    print_config_line(
        "run",
        [
            ("Colours", count),
            ("Width cap", args.width or "-"),
            ("Images", not args.no_images),
            ("Jobs", jobs),
        ],
        debug=False,
    )
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [("Resample", args.resample), ("CPU cores", os.cpu_count() or 1)]
            )
        )

    def run(path: Path, prefixed: bool) -> ImageReport:
        return _process_single_image(
            path,
            count,
            args.outdir,
            args.width,
            args.resample,
            args.background,
            not args.no_images,
            prefixed,
            args.debug,
        )

    if src.is_dir():
        files = _collect_images(src)
        if args.debug:
            debug_log(key_value_pairs_to_string([("Images", len(files))]))
        if jobs == 1:
            reports = []
            for p in files:
                report = run(p, True)
                _print_report(report)
                reports.append(report)
        else:
            with ThreadPoolExecutor(max_workers=jobs) as ex:
                futures = [ex.submit(run, p, True) for p in files]
                reports = [f.result() for f in futures]
            for report in reports:
                _print_report(report)
        return max((r.status for r in reports), default=EXIT_OK)

    report = run(src, False)
    _print_report(report)
    return report.status


if __name__ == "__main__":
    sys.exit(main())

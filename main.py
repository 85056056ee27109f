#!/usr/bin/env python3
"""
imgr
A minimal image manipulator: resize, rotate, clip and convert images

Usage:
    imgr transform [-w W] [-h H] [-q Q] [--no-enlarge] [-r DEG] <input> <output>
    imgr clip --x1 X1 --y1 Y1 --x2 X2 --y2 Y2 [-q Q] <input> <output>
    imgr info <input>
    imgr --json ...                    # machine-readable output on stdout
"""
import argparse
import json
import sys
from typing import List, Optional

from core.errors import ImgrError
from core.models import ClipRegion, ImageInfo, TransformOutcome
from pipeline import ImagePipeline
from utils.cli import load_config, resolve_config_path
from utils.logger import logDebug, setup_logging

__version__ = "1.5.0"

DESCRIPTION = (
    "A lightweight tool for resizing, rotating, clipping and converting images.\n"
    "Supports reading: JPEG, PNG, GIF, TIFF, BMP, WebP, HEIF/HEIC.\n"
    "Supports writing: JPEG, PNG, GIF, TIFF, BMP."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imgr",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output to stderr")
    parser.add_argument("--config", default=None, help="Config file (default: $IMGR_CONFIG or ~/.config/imgr/config.json)")
    parser.add_argument("--log-file", default=None, help="Also write log records to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    # -h is taken by --height, so only --help prints usage here
    transform = subparsers.add_parser(
        "transform",
        help="Resize, rotate or convert an image",
        usage="imgr transform [options] <input> <output>",
        add_help=False,
    )
    transform.add_argument("--help", action="help", help="Show help")
    transform.add_argument("-w", "--width", type=int, default=0, help="Output width in pixels (or maximum width)")
    transform.add_argument("-h", "--height", type=int, default=0, help="Output height in pixels (or maximum height)")
    transform.add_argument("-q", "--quality", type=int, default=None, help="JPEG quality 0-100 (default: 90)")
    transform.add_argument("--no-enlarge", action="store_true", default=None, help="Never make the image larger than the source")
    transform.add_argument("-r", "--rotate", type=int, default=0, help="Rotate clockwise by 0, 90, 180 or 270 degrees")
    transform.add_argument("input", help="Input image")
    transform.add_argument("output", help="Output image; the extension selects the format")

    clip = subparsers.add_parser(
        "clip",
        help="Extract a rectangular region of an image",
        usage="imgr clip --x1 X1 --y1 Y1 --x2 X2 --y2 Y2 [options] <input> <output>",
    )
    clip.add_argument("--x1", type=int, required=True, help="Left edge (inclusive)")
    clip.add_argument("--y1", type=int, required=True, help="Top edge (inclusive)")
    clip.add_argument("--x2", type=int, required=True, help="Right edge (exclusive)")
    clip.add_argument("--y2", type=int, required=True, help="Bottom edge (exclusive)")
    clip.add_argument("-q", "--quality", type=int, default=None, help="JPEG quality 0-100 (default: 90)")
    clip.add_argument("input", help="Input image")
    clip.add_argument("output", help="Output image; the extension selects the format")

    info = subparsers.add_parser("info", help="Display information about an image", usage="imgr info <input>")
    info.add_argument("input", help="Input image")

    return parser


def output_error(message: str, use_json: bool) -> None:
    if use_json:
        result = {"success": False, "error": {"message": message}}
        sys.stdout.write(json.dumps(result, ensure_ascii=False) + "\n")
    else:
        sys.stderr.write(f"Error: {message}\n")


def output_success(data: dict) -> None:
    result = {"success": True, "data": data}
    sys.stdout.write(json.dumps(result, ensure_ascii=False) + "\n")


def render_outcome(outcome: TransformOutcome) -> str:
    return f"{outcome.message}\n✓ Saved to {outcome.output_file}\n"


def render_info(info: ImageInfo) -> str:
    lines = [
        f"File:         {info.file}",
        f"Path:         {info.path}",
        f"Format:       {info.format.upper()}",
        f"Dimensions:   {info.width} × {info.height} pixels",
        f"Aspect Ratio: {info.aspect_ratio:.2f}:1",
        f"Transparency: {str(info.has_alpha).lower()}",
        f"Color Model:  {info.color_model}",
        f"File Size:    {info.file_size_bytes} bytes ({info.file_size_kb:.2f} KB)",
    ]
    return "\n".join(lines) + "\n"


def run_command(args: argparse.Namespace, pipeline: ImagePipeline):
    if args.command == "transform":
        return pipeline.transform(
            args.input,
            args.output,
            width=args.width,
            height=args.height,
            quality=args.quality,
            no_enlarge=args.no_enlarge,
            rotate_angle=args.rotate,
        )
    if args.command == "clip":
        region = ClipRegion(args.x1, args.y1, args.x2, args.y2)
        return pipeline.clip(args.input, args.output, region, quality=args.quality)
    return pipeline.info(args.input)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Config loading logs too, so logging is set up before and after it
    setup_logging(verbose=args.verbose, log_file=args.log_file)
    config = load_config(resolve_config_path(args.config))
    logging_config = config.get("logging", {})
    setup_logging(
        verbose=args.verbose or bool(logging_config.get("verbose")),
        log_file=args.log_file or logging_config.get("log_file"),
    )

    pipeline = ImagePipeline(config)
    try:
        result = run_command(args, pipeline)
    except ImgrError as e:
        logDebug(f"{args.command} failed with {e.kind}: {e.message}")
        output_error(e.message, args.json)
        return 1

    if args.json:
        output_success(result.as_dict())
    elif isinstance(result, ImageInfo):
        sys.stdout.write(render_info(result))
    else:
        sys.stdout.write(render_outcome(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Command-line interface for graydither.

Reads an image, dithers it to a few gray levels and writes the result.
Supports a JSON mode for scripting.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from graydither.core.quantize import DEFAULT_BITS, MAX_BITS, MIN_BITS


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graydither",
        description="Floyd-Steinberg dither an image to 1-8 bit grayscale.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser(
        "convert",
        help="Dither an image file.",
    )
    convert.add_argument("input", help="Input image path or HTTP(S) URL.")
    convert.add_argument(
        "-o", "--output",
        help="Output file path. Defaults to <input>_dithered<N>bit.png.",
    )
    convert.add_argument(
        "--bits",
        type=int,
        default=DEFAULT_BITS,
        help=f"Output bit depth, {MIN_BITS} to {MAX_BITS} (default: {DEFAULT_BITS}).",
    )
    convert.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (pipe-friendly).",
    )
    convert.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error.",
    )

    return parser


def _auto_output_path(input_path: Path, bits: int) -> Path:
    """Generate default output path from input."""
    return input_path.parent / f"{input_path.stem}_dithered{bits}bit.png"


def _fail(message: str, code: str, is_json: bool) -> None:
    """Report an error on stderr and exit with code 1."""
    if is_json:
        err = {"status": "error", "error": message, "code": code}
        print(json.dumps(err), file=sys.stderr)
    else:
        print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _run_convert(args: argparse.Namespace) -> None:
    """Run the load -> dither -> save pipeline."""
    from graydither.core.dither import dither
    from graydither.core.errors import InvalidBitDepth
    from graydither.core.quantize import validate_bits
    from graydither.core.reader import is_url, open_image
    from graydither.core.writer import save_image

    raw_input = args.input
    is_json = args.json
    is_remote = is_url(raw_input)

    try:
        validate_bits(args.bits)
    except InvalidBitDepth as e:
        _fail(str(e), "INVALID_BITS", is_json)

    if is_remote:
        if not is_json:
            print(f"Downloading {raw_input}...", file=sys.stderr)
        input_display = raw_input
        input_path = Path(Path(raw_input.split("?")[0]).name or "download")
    else:
        input_path = Path(raw_input).resolve()
        input_display = str(input_path)
        if not input_path.exists():
            _fail(f"File not found: {input_path}", "FILE_NOT_FOUND", is_json)

    try:
        image = open_image(raw_input)
    except (ValueError, OSError) as e:
        code = "DOWNLOAD_FAILED" if is_remote else "INVALID_INPUT"
        _fail(str(e), code, is_json)

    if args.output:
        output_path = Path(args.output).resolve()
    else:
        output_path = _auto_output_path(input_path, args.bits)

    if not is_json:
        print(
            f"Dithering {image.width}x{image.height} image to {args.bits} bit...",
            file=sys.stderr,
        )

    try:
        result = dither(image, bits=args.bits)
        save_image(result, output_path)
    except Exception as e:
        if args.debug:
            import traceback
            traceback.print_exc(file=sys.stderr)
        _fail(str(e), "PROCESSING_ERROR", is_json)

    if not is_json:
        print(f"Saved to {output_path}", file=sys.stderr)
    else:
        summary = {
            "status": "success",
            "input": input_display,
            "output": str(output_path),
            "settings": {"bits": args.bits},
            "metadata": {
                "width": result.width,
                "height": result.height,
                "levels": 2**args.bits,
                "output_format": output_path.suffix.lstrip("."),
            },
        }
        print(json.dumps(summary, indent=2))


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command == "convert":
        _run_convert(args)


if __name__ == "__main__":
    main()

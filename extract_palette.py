#!/usr/bin/env python3
"""
extract_palette.py
Extract ordered colour palettes from sprite images.

Usage:
  python extract_palette.py SRC [--id N] [--special-cases FILE] [--no-special-cases]
                               [--output FILE] [--crop-dir DIR] [--jobs N] [--debug]

Input:
  A Pillow-readable sprite, or a folder of them (.png .gif .webp .jpg .jpeg).
  In folder mode the special-case id comes from the leading digits of each file
  name (e.g. 25.png, 493-fire.png).

Output:
  A banner and palette listing per sprite; primary colours are starred.
  With --output, a JSON list of records:
    {id, name, colors: [{hex, percentage}], hexColors, primaryColors,
     specialCase, dimensions: {width, height}}
  With --crop-dir, each sprite cropped to its content and padded square is
  written there as PNG.

Notes:
  The bundled special-case roster is used unless --special-cases or
  --no-special-cases is given. Files are processed with a ThreadPoolExecutor
  when --jobs > 1; output is captured per file and printed in order.
"""

from __future__ import annotations

import argparse
import json
import os
import re
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from PIL import UnidentifiedImageError

from sprite_palette.core_types import (
    DEFAULT_CONFIG,
    PaletteConfig,
    PaletteResult,
    SpecialCaseRule,
)
from sprite_palette.image_io import (
    SPRITE_EXTENSIONS,
    crop_to_content,
    load_pixel_image,
    pad_to_square,
    save_png,
)
from sprite_palette.palette import extract_palette
from sprite_palette.special_cases import (
    DEFAULT_SPECIAL_CASES,
    describe_rule,
    load_special_cases,
    rule_for,
)
from sprite_palette.utils import (
    # formatting
    format_seconds_compact,
    palette_report_lines,
    # pretty logging
    print_banner,
    log,
    debug_log,
    warn,
    error,
    print_config_line,
    key_value_pairs_to_string,
    enable_line_buffered_stdout,
    captured_output,
)

Record = Dict[str, Any]

_LEADING_DIGITS = re.compile(r"^(\d+)")

# CLI args & small helpers


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for palette extraction.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        id: optional int special-case id for a single file
        special_cases: optional Path to a JSON rule table
        no_special_cases: bool, run without any rules
        output: optional Path for the JSON records
        crop_dir: optional Path for cropped sprites
        jobs: parallel file workers
        debug: bool for per-stage details
    """
    parser = argparse.ArgumentParser(
        prog="extract_palette",
        description="Extract ordered colour palettes from sprite image(s).",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--id", type=int, default=None, help="Special-case id (single file only)"
    )
    rules = parser.add_mutually_exclusive_group()
    rules.add_argument(
        "--special-cases",
        type=Path,
        default=None,
        help="JSON rule table; replaces the bundled roster",
    )
    rules.add_argument(
        "--no-special-cases",
        action="store_true",
        help="Ignore every special-case rule",
    )
    parser.add_argument(
        "--output", type=Path, default=None, help="Write JSON records here"
    )
    parser.add_argument(
        "--crop-dir", type=Path, default=None, help="Write cropped square sprites here"
    )
    parser.add_argument("--jobs", type=int, default=2, help="Files processed in parallel")
    parser.add_argument("--debug", action="store_true", help="Verbose stage details")
    return parser.parse_args(argv)


def identifier_from_name(path: Path) -> Optional[int]:
    """Leading digits of the file stem, or None."""
    m = _LEADING_DIGITS.match(path.stem)
    return int(m.group(1)) if m else None


def resolve_special_cases(args: argparse.Namespace) -> Mapping[int, SpecialCaseRule]:
    if args.no_special_cases:
        return {}
    if args.special_cases is not None:
        return load_special_cases(args.special_cases)
    return DEFAULT_SPECIAL_CASES


def list_sprite_files(folder: Path) -> List[Path]:
    files = [
        p
        for p in folder.iterdir()
        if p.is_file() and p.suffix.lower() in SPRITE_EXTENSIONS
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


def palette_record(
    identifier: Optional[int],
    name: str,
    palette: PaletteResult,
    rule: Optional[SpecialCaseRule],
    size: Tuple[int, int],
    primary: int,
) -> Record:
    hex_colours = [entry.hex for entry in palette]
    return {
        "id": identifier,
        "name": name,
        "colors": [
            {"hex": entry.hex, "percentage": round(entry.percentage, 4)}
            for entry in palette
        ],
        "hexColors": hex_colours,
        "primaryColors": hex_colours[:primary],
        "specialCase": None if rule is None else describe_rule(rule),
        "dimensions": {"width": size[0], "height": size[1]},
    }


# Per-file processing


def _process_single_image(
    src_path: Path,
    identifier: Optional[int],
    special_cases: Mapping[int, SpecialCaseRule],
    config: PaletteConfig,
    crop_dir: Optional[Path],
    debug: bool,
) -> Optional[Record]:
    """
    Process a single sprite end-to-end:
      load -> extract -> optional crop/save -> report.
    Returns None when the file cannot be decoded.
    """
    t_start = time.perf_counter()
    print_banner(src_path.name)

    try:
        image = load_pixel_image(src_path)
    except (UnidentifiedImageError, OSError) as exc:
        error(f"{src_path.name}: cannot read image ({exc})")
        return None

    rule = rule_for(special_cases, identifier)
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Loaded", f"{image.width}x{image.height}"),
                    ("Id", "-" if identifier is None else identifier),
                    ("Rule", describe_rule(rule)),
                ]
            )
        )

    palette = extract_palette(image, identifier, special_cases, config, debug)

    if crop_dir is not None:
        cropped = crop_to_content(image)
        if cropped is None:
            if debug:
                debug_log("nothing to crop (fully transparent)")
        else:
            crop_dir.mkdir(parents=True, exist_ok=True)
            out_path = save_png(crop_dir / f"{src_path.stem}.png", pad_to_square(cropped))
            if debug:
                debug_log(f"cropped {cropped.width}x{cropped.height} -> {out_path.name}")

    if palette:
        log(f"Palette ({len(palette)} colours):")
        for line in palette_report_lines(palette, config.pick_count):
            log(line)
    else:
        log("No palette (no usable pixels)")
    log(f"Total time {format_seconds_compact(time.perf_counter() - t_start)}")

    return palette_record(
        identifier,
        src_path.stem,
        palette,
        rule,
        (image.width, image.height),
        config.pick_count,
    )


def _process_one_captured(
    path: Path,
    identifier: Optional[int],
    special_cases: Mapping[int, SpecialCaseRule],
    config: PaletteConfig,
    crop_dir: Optional[Path],
    debug: bool,
) -> Tuple[str, Optional[Record]]:
    """
    Process a single file with stdout capture.

    Useful for concurrent execution where output should be printed in order.
    """
    with captured_output() as buf:
        record = _process_single_image(
            path, identifier, special_cases, config, crop_dir, debug
        )
    return buf.getvalue(), record


def write_records(path: Path, records: List[Record]) -> None:
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(records, fh, indent=2)
        fh.write("\n")


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    CLI entry point.

    Handles single file or folder. In folder mode supports --jobs parallelism
    while preserving readable output ordering.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        sys.exit(2)

    try:
        special_cases = resolve_special_cases(args)
    except (OSError, ValueError) as exc:
        error(f"cannot load special cases: {exc}")
        sys.exit(2)

    config = DEFAULT_CONFIG
    jobs = max(1, int(args.jobs))
    print_config_line(
        "run",
        [
            ("CPU cores", os.cpu_count() or 1),
            ("Jobs", jobs),
            ("Special cases", len(special_cases)),
        ],
        debug=False,
    )

    records: List[Record] = []
    if src.is_dir():
        if args.id is not None:
            warn("--id is ignored in folder mode; ids come from file names")
        files = list_sprite_files(src)
        if args.debug:
            debug_log(key_value_pairs_to_string([("Images", len(files)), ("Jobs", jobs)]))

        if jobs == 1:
            for p in files:
                rec = _process_single_image(
                    p,
                    identifier_from_name(p),
                    special_cases,
                    config,
                    args.crop_dir,
                    args.debug,
                )
                if rec is not None:
                    records.append(rec)
        else:
            with ThreadPoolExecutor(max_workers=jobs) as ex:
                futures = [
                    ex.submit(
                        _process_one_captured,
                        p,
                        identifier_from_name(p),
                        special_cases,
                        config,
                        args.crop_dir,
                        args.debug,
                    )
                    for p in files
                ]
                results = [f.result() for f in futures]
            print("".join(text for text, _rec in results), end="", flush=True)
            records.extend(rec for _text, rec in results if rec is not None)
    else:
        identifier = args.id if args.id is not None else identifier_from_name(src)
        rec = _process_single_image(
            src, identifier, special_cases, config, args.crop_dir, args.debug
        )
        if rec is not None:
            records.append(rec)

    if args.output is not None:
        write_records(args.output, records)
        log(f"Wrote {len(records)} record(s) to {args.output}")


if __name__ == "__main__":
    main()

# sprite_palette/utils.py
"""
Shared utilities for sprite_palette.

Text formatting for durations, key/value lines and palette listings, plus the
print-based console helpers used by the pipeline and the CLI.
"""

from __future__ import annotations

import io
import sys
import threading
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Sequence, Tuple

from .core_types import PaletteEntry


#  Text formatting


def format_seconds_compact(seconds: float) -> str:
    """'12.3ms' under a second, '4.567s' under a minute, else '2m 5.0s'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes, rest = divmod(seconds, 60.0)
    return f"{int(minutes)}m {rest:.1f}s"


def format_percentage(x: float, decimals: int = 1) -> str:
    return f"{x:.{decimals}f}%"


def format_value(value: Any) -> str:
    """on/off for bools, 1,234 for ints, trimmed floats, str() for the rest."""
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:.3f}".rstrip("0").rstrip(".")
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """'Name: value' blocks joined by sep."""
    return sep.join(f"{name}{eq}{format_value(value)}" for name, value in pairs)


def palette_report_lines(
    entries: Sequence[PaletteEntry], primary: int = 3
) -> List[str]:
    """
    One line per palette entry, primary entries starred:
       1. #f6e652   42.1% *
    """
    return [
        f"  {i + 1:>2}. {entry.hex}  {format_percentage(entry.percentage):>6}"
        + (" *" if i < primary else "")
        for i, entry in enumerate(entries)
    ]


#  Console output


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [run] Images: 12  Jobs: 2  Special cases: 25
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


_CAPTURE = threading.local()


def _stdout():
    buf = getattr(_CAPTURE, "buffer", None)
    return sys.stdout if buf is None else buf


@contextmanager
def captured_output() -> Iterator[io.StringIO]:
    """
    Collect this thread's log lines in a StringIO instead of stdout.
    Other threads keep printing normally.
    """
    previous = getattr(_CAPTURE, "buffer", None)
    buf = io.StringIO()
    _CAPTURE.buffer = buf
    try:
        yield buf
    finally:
        _CAPTURE.buffer = previous


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", file=_stdout(), flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, file=_stdout(), flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", file=_stdout(), flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", file=_stdout(), flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live progress printing in terminals that expose .reconfigure().
    """
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


__all__ = [
    "format_seconds_compact",
    "format_percentage",
    "format_value",
    "key_value_pairs_to_string",
    "palette_report_lines",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
    "captured_output",
    "enable_line_buffered_stdout",
]

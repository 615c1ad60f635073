# sprite_palette/special_cases.py
"""
Special-case rule tables.

The engine never reads a global table: callers pass a Mapping[int, SpecialCaseRule]
(empty by default). This module builds and validates such tables.

Exports:
  DEFAULT_SPECIAL_CASES: Dict[int, SpecialCaseRule]  # bundled roster, used by the CLI
  build_special_cases(raw) -> Dict[int, SpecialCaseRule]
  load_special_cases(path) -> Dict[int, SpecialCaseRule]
  rule_for(table, identifier) -> Optional[SpecialCaseRule]
  describe_rule(rule) -> str

Raw tables use the JSON shape
  {"25": {"type": "handPickedColors", "value": [["246", "230", "82"], ...]}}
("mode"/"parameter" are accepted as key aliases).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .core_types import (
    SPECIAL_CASE_MODES,
    InvalidSpecialCase,
    RGBTuple,
    SpecialCaseRule,
    coerce_to_rgb_tuple,
)

_INT_MODES = ("topNColors", "mostFrequent", "leastBoringColor")


def _parse_picked(identifier: int, value: Any) -> Tuple[RGBTuple, ...]:
    if not isinstance(value, (list, tuple)):
        raise InvalidSpecialCase(f"{identifier}: handPickedColors needs a list of RGB triples")
    picked = []
    for triple in value:
        if not isinstance(triple, (list, tuple)) or len(triple) != 3:
            raise InvalidSpecialCase(f"{identifier}: bad RGB triple {triple!r}")
        try:
            rgb = coerce_to_rgb_tuple(triple)
        except (TypeError, ValueError) as exc:
            raise InvalidSpecialCase(f"{identifier}: bad RGB triple {triple!r}") from exc
        if any(c < 0 or c > 255 for c in rgb):
            raise InvalidSpecialCase(f"{identifier}: RGB channel out of range {triple!r}")
        picked.append(rgb)
    return tuple(picked)


def parse_rule(identifier: int, raw: Mapping[str, Any]) -> SpecialCaseRule:
    """Validate one raw entry into a SpecialCaseRule."""
    mode = raw.get("type", raw.get("mode"))
    if mode not in SPECIAL_CASE_MODES:
        raise InvalidSpecialCase(f"{identifier}: unknown mode {mode!r}")
    value = raw.get("value", raw.get("parameter"))

    if mode == "handPickedColors":
        return SpecialCaseRule(mode=mode, parameter=_parse_picked(identifier, value))
    if mode in _INT_MODES:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidSpecialCase(f"{identifier}: {mode} needs a positive integer")
        return SpecialCaseRule(mode=mode, parameter=int(value))
    return SpecialCaseRule(mode=mode)


def build_special_cases(raw: Mapping[Any, Mapping[str, Any]]) -> Dict[int, SpecialCaseRule]:
    """Convert a raw (JSON-shaped) table into validated rules keyed by int id."""
    table: Dict[int, SpecialCaseRule] = {}
    for key, entry in raw.items():
        try:
            identifier = int(key)
        except (TypeError, ValueError) as exc:
            raise InvalidSpecialCase(f"identifier must be an integer, got {key!r}") from exc
        if not isinstance(entry, Mapping):
            raise InvalidSpecialCase(f"{identifier}: entry must be an object")
        table[identifier] = parse_rule(identifier, entry)
    return table


def load_special_cases(path: Path) -> Dict[int, SpecialCaseRule]:
    """Read a JSON rule table from disk."""
    with open(path, "r", encoding="utf-8") as fh:
        raw = json.load(fh)
    if not isinstance(raw, dict):
        raise InvalidSpecialCase("special-case file must contain a JSON object")
    return build_special_cases(raw)


def rule_for(
    table: Optional[Mapping[int, SpecialCaseRule]], identifier: Optional[int]
) -> Optional[SpecialCaseRule]:
    """Look up a rule; None when there is no table, no id, or no entry."""
    if not table or identifier is None:
        return None
    return table.get(int(identifier))


def describe_rule(rule: Optional[SpecialCaseRule]) -> str:
    """Short text form, e.g. 'topNColors=8' or 'handPickedColors(3)'."""
    if rule is None:
        return "-"
    if isinstance(rule.parameter, tuple):
        return f"{rule.mode}({len(rule.parameter)})"
    if rule.parameter is None:
        return rule.mode
    return f"{rule.mode}={rule.parameter}"


_RAW_DEFAULTS: Dict[int, Dict[str, Any]] = {
    990: {"type": "colorDistance"},  # Iron Treads
    915: {"type": "colorDistance"},  # Lechonk
    887: {"type": "topNColors", "value": 7},  # Dragapult
    317: {"type": "topNColors", "value": 8},  # Swalot
    473: {"type": "topNColors", "value": 8},  # Mamoswine
    518: {"type": "topNColors", "value": 4},  # Musharna
    573: {"type": "topNColors", "value": 5},  # Cinccino
    15: {"type": "topNColors", "value": 5},  # Beedrill
    873: {"type": "topNColors", "value": 5},  # Frosmoth
    396: {"type": "topNColors", "value": 4},  # Starly
    591: {"type": "topNColors", "value": 4},  # Amoonguss
    847: {"type": "topNColors", "value": 4},  # Barraskewda
    209: {"type": "topNColors", "value": 4},  # Snubbull
    319: {"type": "topNColors", "value": 7},  # Sharpedo
    9: {"type": "mostFrequent", "value": 50},  # Blastoise
    562: {"type": "leastBoringColor", "value": 23},  # Yamask
    25: {  # Pikachu
        "type": "handPickedColors",
        "value": [(246, 230, 82), (41, 41, 41), (197, 32, 24)],
    },
    395: {  # Empoleon
        "type": "handPickedColors",
        "value": [(82, 139, 230), (16, 32, 65), (238, 205, 98)],
    },
    1009: {  # Walking Wake
        "type": "handPickedColors",
        "value": [(46, 149, 167), (53, 194, 219), (165, 103, 167)],
    },
    587: {  # Emolga
        "type": "handPickedColors",
        "value": [(255, 213, 0), (255, 255, 255), (65, 65, 65)],
    },
    324: {  # Torkoal
        "type": "handPickedColors",
        "value": [(189, 172, 164), (98, 98, 98), (238, 131, 65)],
    },
    521: {  # Unfezant
        "type": "handPickedColors",
        "value": [(65, 65, 82), (255, 65, 123), (49, 115, 74)],
    },
    107: {  # Hitmonchan
        "type": "handPickedColors",
        "value": [(205, 180, 123), (197, 180, 197), (189, 49, 74)],
    },
    996: {  # Frigibax
        "type": "handPickedColors",
        "value": [(144, 154, 165), (195, 232, 234), (223, 224, 223)],
    },
    181: {  # Ampharos
        "type": "handPickedColors",
        "value": [(255, 238, 74), (255, 197, 16)],
    },
}

DEFAULT_SPECIAL_CASES: Dict[int, SpecialCaseRule] = build_special_cases(_RAW_DEFAULTS)


__all__ = [
    "DEFAULT_SPECIAL_CASES",
    "parse_rule",
    "build_special_cases",
    "load_special_cases",
    "rule_for",
    "describe_rule",
]

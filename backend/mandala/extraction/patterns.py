"""Naming conventions of the hand-authored reference diagrams.

Illustrator exports layer names as ids, replacing spaces with underscores, so
"SYMBOL - GATE - 13" arrives as ``SYMBOL_-_GATE_-_13``. Each pattern class
full-matches one convention and knows how many items a complete diagram holds.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from mandala.core.gates import ALL_GATES, CHANNEL_PAIRS, TOTAL_GATES


def _gate_key(m: re.Match) -> str:
    return str(int(m.group(1)))


def _pair_key(m: re.Match) -> str:
    a, b = sorted((int(m.group("a")), int(m.group("b"))))
    return f"{a}-{b}"


def _name_key(m: re.Match) -> str:
    return m.group(1)


_GATE_KEYS = frozenset(str(g) for g in ALL_GATES)
_CHANNEL_KEYS = frozenset(f"{a}-{b}" for a, b in CHANNEL_PAIRS)


@dataclass(frozen=True)
class PatternClass:
    name: str
    regex: re.Pattern
    expected: int
    key: Callable[[re.Match], str]
    # Exact identifier set a complete diagram holds, when it is known
    expected_keys: frozenset[str] | None = None
    # Pattern class of an enclosing group this item must sit inside
    parent: str | None = None
    description: str = ""


PATTERN_CLASSES: dict[str, PatternClass] = {
    p.name: p
    for p in (
        PatternClass(
            name="gate",
            regex=re.compile(r"SYMBOL_-_GATE_-_(\d{1,2})"),
            expected=TOTAL_GATES,
            key=_gate_key,
            expected_keys=_GATE_KEYS,
            description="gate number symbol",
        ),
        PatternClass(
            name="gate_dot",
            regex=re.compile(r"SYMBOL_-_GATE-DOT_-_(\d{1,2})"),
            expected=TOTAL_GATES,
            key=_gate_key,
            expected_keys=_GATE_KEYS,
            description="gate activation dot",
        ),
        PatternClass(
            name="channel",
            regex=re.compile(r"GROUP_-_THE_CHANNEL_OF_([A-Z0-9_-]+?)_-_(?P<a>\d{1,2})_(?P<b>\d{1,2})"),
            expected=len(CHANNEL_PAIRS),
            key=_pair_key,
            expected_keys=_CHANNEL_KEYS,
            description="channel group",
        ),
        PatternClass(
            name="channel_path",
            regex=re.compile(r"PATH_-_(\d+)"),
            expected=2 * len(CHANNEL_PAIRS),
            key=_name_key,
            parent="channel",
            description="channel half-path inside a channel group",
        ),
        PatternClass(
            name="center",
            regex=re.compile(r"SYMBOL_-_CENTRE_-_([A-Z][A-Z_-]*)"),
            expected=9,
            key=_name_key,
            description="bodygraph centre",
        ),
        PatternClass(
            name="direct_connector",
            regex=re.compile(r"DIRECT-CONNECTION_-_(\d{1,2})"),
            expected=TOTAL_GATES,
            key=_gate_key,
            expected_keys=_GATE_KEYS,
            description="straight gate connector",
        ),
        PatternClass(
            name="curved_connector",
            regex=re.compile(r"CURVED-CONNECTION_-_(\d{1,2})"),
            expected=TOTAL_GATES,
            key=_gate_key,
            expected_keys=_GATE_KEYS,
            description="curved gate connector",
        ),
        PatternClass(
            name="ring_circle",
            regex=re.compile(r"RING_-_(INNER|OUTER)"),
            expected=2,
            key=_name_key,
            expected_keys=frozenset({"INNER", "OUTER"}),
            description="band boundary circle",
        ),
        PatternClass(
            name="hexagram_group",
            regex=re.compile(r"_GROUP_-_GATE_-_(\d{1,2})_-_[ACGU]{3}"),
            expected=TOTAL_GATES,
            key=_gate_key,
            expected_keys=_GATE_KEYS,
            description="rotated hexagram glyph group",
        ),
    )
}

EXPECTED_COUNTS: dict[str, int] = {name: p.expected for name, p in PATTERN_CLASSES.items()}


def get_pattern(name: str) -> PatternClass:
    try:
        return PATTERN_CLASSES[name]
    except KeyError:
        raise ValueError(
            f"Unknown pattern class: {name} (known: {', '.join(PATTERN_CLASSES)})"
        ) from None

"""Shared test fixtures."""

from __future__ import annotations

import pytest

from mandala.core.gates import ALL_GATES, CHANNEL_PAIRS
from mandala.core.geometry import POSITION_OFFSET, to_canvas_angle, to_outward_rotation
from mandala.core.positioning import dock
from mandala.core.sequence import RAVE_WHEEL_ORDERING, Direction, SequenceConfiguration, get_preset
from mandala.models.knowledge import KnowledgePayload

CENTRES = ("HEAD", "AJNA", "THROAT", "G", "HEART", "SACRAL", "SOLAR_PLEXUS", "SPLEEN", "ROOT")

CENTER = (500.0, 500.0)


def rave_wheel(direction: str = "clockwise", offset: float = 0.0) -> SequenceConfiguration:
    return get_preset("rave-wheel", direction=direction, rotation_offset_degrees=offset)


def reference_svg(
    drop: set[str] | None = None,
    extra: list[str] | None = None,
    config: SequenceConfiguration | None = None,
    position_offset: float = POSITION_OFFSET,
) -> str:
    """A synthetic master diagram holding exactly the expected count of every pattern class.

    `drop` removes elements by id; `extra` appends raw markup inside the root.
    """
    drop = drop or set()
    config = config or rave_wheel()
    parts = [
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 1000 1000">',
        f'  <circle id="RING_-_INNER" cx="{CENTER[0]}" cy="{CENTER[1]}" r="300" fill="none"/>',
        f'  <circle id="RING_-_OUTER" cx="{CENTER[0]}" cy="{CENTER[1]}" r="400" fill="none"/>',
    ]
    for gate in ALL_GATES:
        parts.append(f'  <path id="SYMBOL_-_GATE_-_{gate}" d="M{gate} 10 L{gate + 5} 20 Z"/>')
        parts.append(f'  <circle id="SYMBOL_-_GATE-DOT_-_{gate}" cx="{gate * 10}" cy="50" r="3"/>')
        parts.append(f'  <line id="DIRECT-CONNECTION_-_{gate}" x1="0" y1="0" x2="{gate}" y2="{gate}"/>')
        parts.append(f'  <path id="CURVED-CONNECTION_-_{gate}" d="M0 0 Q{gate} 40 {gate * 2} 0"/>')
        d = dock(gate, config)
        rotation = to_outward_rotation(to_canvas_angle(d.angle_degrees, position_offset))
        parts.append(
            f'  <g id="_GROUP_-_GATE_-_{gate}_-_{d.codon}" transform="translate(1 1) rotate({rotation:.4f})">'
            f'<rect x="0" y="0" width="8" height="1"/></g>'
        )
    for a, b in CHANNEL_PAIRS:
        # One part per group so dropping the group drops its paths too
        parts.append(
            f'  <g id="GROUP_-_THE_CHANNEL_OF_LINK_{a}_{b}_-_{a}_{b}">\n'
            f'    <polyline id="PATH_-_1" points="0,0 {a},{b} {a + 1},{b + 2}"/>\n'
            f'    <path id="PATH_-_2" d="M{b} {a} L{b + 3} {a + 4}"/>\n'
            "  </g>"
        )
    for name in CENTRES:
        parts.append(f'  <rect id="SYMBOL_-_CENTRE_-_{name}" x="10" y="10" width="20" height="20"/>')
    parts.extend(extra or [])
    parts.append("</svg>")

    if drop:
        parts = [p for p in parts if not any(f'id="{i}"' in p for i in drop)]
    return "\n".join(parts)


def sample_payload() -> KnowledgePayload:
    return KnowledgePayload.model_validate(
        {
            "gates": {str(g): {"name": f"Name {g}", "keynote": f"Keynote {g}"} for g in ALL_GATES},
            "lines": {
                f"{g}.{n}": {"keynote": "Keynote", "exaltation": ["Sun"], "detriment": ["Mars"]}
                for g in ALL_GATES
                for n in range(1, 7)
            },
            "channels": [
                {"gates": [a, b], "name": f"Link {a}-{b}", "circuit": "Test"} for a, b in CHANNEL_PAIRS
            ],
        }
    )


@pytest.fixture
def clockwise() -> SequenceConfiguration:
    return rave_wheel()


@pytest.fixture
def counter_clockwise() -> SequenceConfiguration:
    return rave_wheel("counter-clockwise")


@pytest.fixture
def reference_alignment() -> SequenceConfiguration:
    return SequenceConfiguration(
        name="reference",
        ordering=RAVE_WHEEL_ORDERING,
        direction=Direction.CLOCKWISE,
        rotation_offset_degrees=33.75,
    )


@pytest.fixture
def payload() -> KnowledgePayload:
    return sample_payload()


@pytest.fixture
def reference() -> str:
    return reference_svg()

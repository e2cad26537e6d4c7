"""Tests for the ring generators."""

import re
from collections import Counter

import pytest

from mandala.core.binary import Face, Quarter
from mandala.core.gates import CHANNEL_PAIRS
from mandala.core.geometry import POSITION_OFFSET, sub_band_radius
from mandala.errors import MissingKnowledge
from mandala.extraction.extractor import extract_constants
from mandala.models.ring import MASTER_GEOMETRY, RingGeometry
from mandala.rings.generators.channels import slot_offset
from mandala.rings.generators.lines import FIELDS, field_offsets
from mandala.rings.renderer import render_ring
from mandala.svg.reader import read_diagram
from tests.conftest import rave_wheel

GEOMETRY = RingGeometry(center=(500.0, 500.0), inner_radius=300.0, outer_radius=400.0)


def _nodes(node, tag=None):
    """Depth-first walk over a node dict and its children."""
    if tag is None or node.get("tag") == tag:
        yield node
    for child in node.get("children", []):
        yield from _nodes(child, tag)


@pytest.mark.parametrize(
    "ring_id, count",
    [
        ("hexagrams", 64),
        ("numbers", 64),
        ("gate-names", 64),
        ("trigrams", 64),
        ("quarters-faces", 64),
        ("channels", 72),
        ("lines", 384),
    ],
)
def test_unit_counts_at_master_geometry(ring_id, count, clockwise, payload):
    output = render_ring(ring_id, clockwise, payload=payload)
    assert output.element_count == count
    assert output.geometry == MASTER_GEOMETRY[ring_id]
    keys = [e.sort_key for e in output.elements]
    assert keys == sorted(keys)
    for e in output.elements:
        node = e.to_node()
        assert node["data-ring"] == ring_id
        assert node["data-gate"] == str(e.gate)
        assert node["data-source"]


@pytest.mark.parametrize("ring_id", ["hexagrams", "numbers", "trigrams", "quarters-faces"])
def test_rings_without_knowledge(ring_id, counter_clockwise):
    assert render_ring(ring_id, counter_clockwise, GEOMETRY).element_count == 64


@pytest.mark.parametrize("ring_id", ["gate-names", "channels", "lines"])
def test_missing_knowledge_aborts(ring_id, clockwise):
    with pytest.raises(MissingKnowledge) as exc:
        render_ring(ring_id, clockwise)
    assert exc.value.ring_id == ring_id


def test_render_is_deterministic(clockwise, payload):
    first = render_ring("gate-names", clockwise, payload=payload).to_svg()
    second = render_ring("gate-names", clockwise, payload=payload).to_svg()
    assert first == second


def test_structure_has_circles_and_dividers(clockwise):
    output = render_ring("numbers", clockwise, GEOMETRY)
    rings, dividers = output.structure["children"]
    assert [c["id"] for c in rings["children"]] == ["RING_-_INNER", "RING_-_OUTER"]
    assert len(dividers["children"]) == 64
    assert dividers["children"][0]["id"] == "LINE_-_41_19"


def test_divider_between_10_and_11_at_top(clockwise):
    output = render_ring("numbers", clockwise, GEOMETRY)
    divider = next(n for n in _nodes(output.structure, "line") if n["id"] == "LINE_-_11_10")
    assert float(divider["x1"]) == pytest.approx(500.0, abs=1e-3)
    assert float(divider["y1"]) == pytest.approx(102.0, abs=1e-3)
    assert float(divider["y2"]) == pytest.approx(198.0, abs=1e-3)


def test_hexagram_glyphs(clockwise):
    output = render_ring("hexagrams", clockwise, GEOMETRY)
    gate1 = output.elements[0].to_node()
    assert gate1["id"] == "_GROUP_-_GATE_-_1_-_AAA"
    lines = [c for c in gate1["children"]]
    assert [c["data-type"] for c in lines] == ["yang"] * 6
    gate2 = output.elements[1].to_node()
    assert all(c["tag"] == "g" and len(c["children"]) == 2 for c in gate2["children"])


def test_hexagram_ring_calibrates_back_to_offset(reference_alignment):
    svg = render_ring("hexagrams", reference_alignment, GEOMETRY).to_svg()
    report = extract_constants(svg, ["hexagram_group", "ring_circle"], reference_alignment)
    assert report.position_offset.mean == pytest.approx(POSITION_OFFSET, abs=1e-4)
    assert report.position_offset.std == pytest.approx(0.0, abs=1e-4)
    assert report.ring_geometry == GEOMETRY


def test_numbers_text(clockwise):
    output = render_ring("numbers", clockwise, GEOMETRY)
    assert [e.text for e in output.elements] == [str(g) for g in range(1, 65)]
    assert output.elements[0].attributes["font-size"] == output.elements[63].attributes["font-size"]


def test_numbers_font_scales_with_band(clockwise):
    small = render_ring("numbers", clockwise, GEOMETRY).elements[0]
    wide = RingGeometry(center=(500.0, 500.0), inner_radius=300.0, outer_radius=500.0)
    large = render_ring("numbers", clockwise, wide).elements[0]
    assert float(large.attributes["font-size"]) == pytest.approx(2 * float(small.attributes["font-size"]), rel=1e-3)


def test_gate_names(clockwise, payload):
    output = render_ring("gate-names", clockwise, payload=payload)
    node = output.elements[12].to_node()
    assert node["data-gate-name"] == "Name 13"
    assert "".join(t["text"] for t in node["children"]).replace(" ", "") == "Name13"


def test_trigrams_upper_outer_lower_inner(clockwise):
    output = render_ring("trigrams", clockwise, GEOMETRY)
    gate13 = output.elements[12].to_node()
    outer, inner = gate13["children"]
    assert (outer["data-sub-index"], outer["data-trigram"]) == ("0", "Heaven")
    assert (inner["data-sub-index"], inner["data-trigram"]) == ("1", "Fire")


def test_quarters_outer_faces_inner(clockwise):
    output = render_ring("quarters-faces", clockwise, GEOMETRY)
    gate13 = output.elements[12].to_node()
    assert gate13["id"] == "quarters-faces-13"
    outer, inner = gate13["children"]
    assert (outer["data-sub-index"], outer["data-source"], outer["data-quarter"]) == ("0", "quarter", "Initiation")
    assert (inner["data-sub-index"], inner["data-source"]) == ("1", "face")
    assert (inner["data-face"], inner["data-face-codons"]) == ("Kali", "CA")
    assert " ".join(t["text"] for t in outer["children"]) == "Initiation"
    assert " ".join(t["text"] for t in inner["children"]) == "Kali (CA)"


def test_quarters_faces_labels_follow_sub_band_radii(clockwise):
    output = render_ring("quarters-faces", clockwise)
    geometry = MASTER_GEOMETRY["quarters-faces"]
    cx, cy = geometry.center
    for e in output.elements[:8]:
        radii = []
        for label in e.to_node()["children"]:
            x, y = (float(v) for v in re.match(r"translate\(([-\d.]+), ([-\d.]+)\)", label["transform"]).groups())
            radii.append(((x - cx) ** 2 + (y - cy) ** 2) ** 0.5)
        assert radii[0] == pytest.approx(sub_band_radius(geometry, 0, 2), abs=1e-3)
        assert radii[1] == pytest.approx(sub_band_radius(geometry, 1, 2), abs=1e-3)
        assert geometry.inner_radius < radii[1] < radii[0] < geometry.outer_radius


def test_quarters_and_faces_share_out_the_wheel(counter_clockwise):
    output = render_ring("quarters-faces", counter_clockwise)
    quarters = Counter()
    faces = Counter()
    for e in output.elements:
        outer, inner = e.to_node()["children"]
        quarters[outer["data-quarter"]] += 1
        faces[inner["data-face-codons"]] += 1
    assert quarters == {q.value: 16 for q in Quarter}
    assert faces == {f.codons: 4 for f in Face}


def test_long_face_label_wraps(clockwise):
    output = render_ring("quarters-faces", clockwise)
    keepers = next(e for e in output.elements if e.attributes["data-face"] == "Keepers of the Wheel")
    inner = keepers.to_node()["children"][1]
    lines = [t["text"] for t in inner["children"]]
    assert 1 < len(lines) <= 4
    assert " ".join(lines) == "Keepers of the Wheel (AU)"


def test_channels_pair_both_members(clockwise, payload):
    output = render_ring("channels", clockwise, payload=payload)
    seen = Counter(e.attributes["data-channel"] for e in output.elements)
    assert set(seen) == {f"{a}-{b}" for a, b in CHANNEL_PAIRS}
    assert set(seen.values()) == {2}
    for e in output.elements:
        a, b = (int(g) for g in e.attributes["data-channel"].split("-"))
        assert e.gate in (a, b)
        assert int(e.attributes["data-partner-gate"]) == (b if e.gate == a else a)


def test_channels_slots_stay_inside_sector():
    for count in (1, 2, 3):
        offsets = [slot_offset(i, count) for i in range(count)]
        assert all(abs(o) < 2.8125 for o in offsets)
        assert sum(offsets) == pytest.approx(0.0)
        assert len(set(offsets)) == count
    assert slot_offset(0, 1) == 0.0


def test_channels_gate_with_three_channels(clockwise, payload):
    output = render_ring("channels", clockwise, payload=payload)
    at_10 = [e for e in output.elements if e.gate == 10]
    assert [e.attributes["data-partner-gate"] for e in at_10] == ["20", "34", "57"]
    assert [e.sub_index for e in at_10] == [0, 1, 2]


def test_lines_ring_layout(clockwise, payload):
    output = render_ring("lines", clockwise, payload=payload)
    geometry = MASTER_GEOMETRY["lines"]
    gate1 = [e for e in output.elements if e.gate == 1]
    assert [e.sub_index for e in gate1] == [1, 2, 3, 4, 5, 6]
    radii = [float(e.attributes["data-radius"]) for e in gate1]
    assert radii == sorted(radii)
    slot = geometry.band_width / 6
    assert radii[-1] == pytest.approx(geometry.outer_radius - slot / 2, abs=1e-3)
    assert radii[0] == pytest.approx(geometry.inner_radius + slot / 2, abs=1e-3)


def test_lines_fields(clockwise, payload):
    output = render_ring("lines", clockwise, payload=payload)
    node = output.elements[0].to_node()
    texts = ["".join(t["text"] for t in field["children"]) for field in node["children"]]
    assert texts == ["▲", "Mars", "1", "Sun", "Keynote"]
    assert [f["data-source"] for f in node["children"]] == [source for _, source, _ in FIELDS]
    yin = next(e for e in output.elements if e.gate == 2).to_node()
    assert yin["data-polarity"] == "yin"
    assert yin["children"][0]["children"][0]["text"] == "▼"


def test_line_field_spans_fill_sector():
    spans = field_offsets()
    assert sum(w for _, w in spans) == pytest.approx(5.625)
    assert spans[0][0] - spans[0][1] / 2 == pytest.approx(-2.8125)
    assert spans[-1][0] + spans[-1][1] / 2 == pytest.approx(2.8125)


def test_ring_svg_is_readable(clockwise, payload):
    svg = render_ring("channels", clockwise, payload=payload).to_svg()
    diagram = read_diagram(svg)
    ids = [e.id for e in diagram.elements]
    assert ids[0] == "channels"
    assert len([i for i in ids if re.fullmatch(r"channel-\d+-\d+-at-\d+", i)]) == 72


def test_sequence_changes_positions_not_content(payload):
    a = render_ring("numbers", rave_wheel(), GEOMETRY)
    b = render_ring("numbers", rave_wheel(offset=90.0), GEOMETRY)
    assert [e.text for e in a.elements] == [e.text for e in b.elements]
    assert a.elements[0].attributes["transform"] != b.elements[0].attributes["transform"]


def test_lines_carry_line_angle(clockwise, payload):
    output = render_ring("lines", clockwise, payload=payload)
    gate19 = [e for e in output.elements if e.gate == 19]
    angles = [float(e.attributes["data-line-angle"]) for e in gate19]
    assert angles == pytest.approx([5.625 + (2.5 - i) * 0.9375 for i in range(6)])

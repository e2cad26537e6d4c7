"""Reference-diagram extractor — constants and a completeness audit from a master SVG.

Pipeline: read the diagram, locate items by naming convention, audit the counts,
and only then derive constants. A diagram that fails the audit yields nothing.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable

import numpy as np
from svgpathtools import parse_path, polygon, polyline

from mandala.core.geometry import fold_angle
from mandala.core.positioning import normalize_angle, wheel_position
from mandala.core.sequence import SequenceConfiguration, validate
from mandala.models.extraction import (
    AuditReport,
    Discrepancy,
    ExtractedItem,
    ExtractionReport,
    OffsetCalibration,
)
from mandala.models.ring import RingGeometry
from mandala.extraction.patterns import EXPECTED_COUNTS, PATTERN_CLASSES, get_pattern
from mandala.svg.reader import Diagram, DiagramElement, read_diagram

logger = logging.getLogger(__name__)

_ROTATE_RE = re.compile(r"rotate\(\s*(-?[\d.]+(?:[eE][-+]?\d+)?)")
_NUMBER_RE = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def locate_by_naming_convention(diagram: Diagram, pattern_class: str) -> list[ExtractedItem]:
    """Items whose id full-matches the class convention, attributes copied verbatim."""
    pattern = get_pattern(pattern_class)
    parent = get_pattern(pattern.parent) if pattern.parent else None
    items: list[ExtractedItem] = []

    for element in diagram.elements:
        m = pattern.regex.fullmatch(element.id)
        if not m:
            continue
        key = pattern.key(m)
        if parent is not None:
            owner = _nearest_ancestor(element, parent.regex)
            if owner is None:
                continue
            key = f"{parent.key(owner)}/{key}"
        items.append(
            ExtractedItem(
                pattern_class=pattern.name,
                key=key,
                element_id=element.id,
                tag=element.tag,
                attributes=dict(element.attributes),
                ancestors=list(element.ancestors),
                bbox=_bbox(element),
            )
        )

    logger.debug("Located %d %s items", len(items), pattern_class)
    return items


def _nearest_ancestor(element: DiagramElement, regex: re.Pattern) -> re.Match | None:
    for ancestor_id in reversed(element.ancestors):
        m = regex.fullmatch(ancestor_id)
        if m:
            return m
    return None


def audit_completeness(
    extracted: dict[str, list[ExtractedItem]],
    expected: dict[str, int] = EXPECTED_COUNTS,
) -> AuditReport:
    """Compare found against expected per class, naming the offending identifiers."""
    report = AuditReport()
    for name, items in extracted.items():
        want = expected.get(name, PATTERN_CLASSES[name].expected)
        keys = Counter(item.key for item in items)
        report.counts[name] = len(items)

        duplicated = sorted(k for k, n in keys.items() if n > 1)
        known = PATTERN_CLASSES[name].expected_keys
        missing: list[str] = []
        unexpected: list[str] = []
        if known is not None:
            missing = sorted(known - keys.keys(), key=_natural)
            unexpected = sorted(keys.keys() - known, key=_natural)

        if len(items) != want or duplicated or missing or unexpected:
            report.discrepancies.append(
                Discrepancy(
                    pattern_class=name,
                    expected=want,
                    found=len(items),
                    missing=missing,
                    duplicated=duplicated,
                    unexpected=unexpected,
                )
            )
            logger.warning(
                "Audit %s: expected %d, found %d (missing %s, duplicated %s, unexpected %s)",
                name,
                want,
                len(items),
                missing,
                duplicated,
                unexpected,
            )
        else:
            logger.info("Audit %s: %d/%d", name, len(items), want)
    return report


def _natural(key: str) -> tuple:
    return tuple(int(p) if p.isdigit() else p for p in re.split(r"(\d+)", key))


def ring_geometry_from_circles(items: Iterable[ExtractedItem]) -> RingGeometry | None:
    """RingGeometry from the RING_-_INNER / RING_-_OUTER circles, centred on the inner one."""
    circles = {item.key: item.attributes for item in items}
    if "INNER" not in circles or "OUTER" not in circles:
        return None
    inner, outer = circles["INNER"], circles["OUTER"]
    centre = (float(inner["cx"]), float(inner["cy"]))
    outer_centre = (float(outer["cx"]), float(outer["cy"]))
    if np.hypot(centre[0] - outer_centre[0], centre[1] - outer_centre[1]) > 1e-3:
        logger.warning("Ring circles are not concentric: inner %s, outer %s", centre, outer_centre)
    return RingGeometry(center=centre, inner_radius=float(inner["r"]), outer_radius=float(outer["r"]))


def calibrate_offset(items: Iterable[ExtractedItem], config: SequenceConfiguration) -> OffsetCalibration | None:
    """Position offset = glyph rotation + wheel angle, averaged over every hexagram group.

    Averaging is circular so samples either side of 0°/360° do not cancel.
    """
    validate(config)
    samples = []
    for item in items:
        m = _ROTATE_RE.search(item.attributes.get("transform", ""))
        if not m:
            logger.warning("Hexagram group %s has no rotate()", item.element_id)
            continue
        wheel = wheel_position(int(item.key), config).angle_degrees
        samples.append(float(m.group(1)) + wheel)
    if not samples:
        return None

    rad = np.radians(np.asarray(samples, dtype=np.float64))
    mean = normalize_angle(float(np.degrees(np.arctan2(np.sin(rad).mean(), np.cos(rad).mean()))))
    deviations = np.array([fold_angle(s - mean) for s in samples])
    std = float(np.sqrt(np.mean(deviations**2)))
    logger.info("Calibrated position offset %.4f° (σ %.4f°, %d samples)", mean, std, len(samples))
    return OffsetCalibration(mean=round(mean, 6), std=round(std, 6), samples=len(samples))


def extract_constants(
    svg_text: str,
    classes: Iterable[str] | None = None,
    config: SequenceConfiguration | None = None,
    expected: dict[str, int] = EXPECTED_COUNTS,
) -> ExtractionReport:
    """Parse, locate, audit (raising on any discrepancy), then derive constants.

    The position offset is calibrated only when a sequence is given; the ring
    geometry only when the ring circles class was requested.
    """
    names = list(classes) if classes is not None else list(PATTERN_CLASSES)
    for name in names:
        get_pattern(name)

    diagram = read_diagram(svg_text)
    extracted = {name: locate_by_naming_convention(diagram, name) for name in names}
    audit = audit_completeness(extracted, expected)
    audit.raise_for_discrepancies()

    report = ExtractionReport(
        counts=dict(audit.counts),
        view_box=diagram.view_box,
        items=extracted,
        audit=audit,
    )
    if "ring_circle" in extracted:
        report.ring_geometry = ring_geometry_from_circles(extracted["ring_circle"])
    if "hexagram_group" in extracted:
        if config is None:
            logger.info("No sequence given; skipping offset calibration")
        else:
            report.position_offset = calibrate_offset(extracted["hexagram_group"], config)
    return report


def _bbox(element: DiagramElement) -> tuple[float, float, float, float] | None:
    a = element.attributes
    try:
        if element.tag == "path" and a.get("d"):
            xmin, xmax, ymin, ymax = parse_path(a["d"]).bbox()
        elif element.tag in ("polyline", "polygon") and a.get("points"):
            nums = [float(n) for n in _NUMBER_RE.findall(a["points"])]
            pts = [complex(x, y) for x, y in zip(nums[0::2], nums[1::2])]
            if len(pts) < 2:
                return None
            shape = polygon(*pts) if element.tag == "polygon" else polyline(*pts)
            xmin, xmax, ymin, ymax = shape.bbox()
        elif element.tag == "circle":
            cx, cy, r = float(a["cx"]), float(a["cy"]), float(a["r"])
            xmin, xmax, ymin, ymax = cx - r, cx + r, cy - r, cy + r
        elif element.tag == "line":
            xs = (float(a.get("x1", 0)), float(a.get("x2", 0)))
            ys = (float(a.get("y1", 0)), float(a.get("y2", 0)))
            xmin, xmax, ymin, ymax = min(xs), max(xs), min(ys), max(ys)
        elif element.tag == "rect":
            x, y = float(a.get("x", 0)), float(a.get("y", 0))
            xmin, xmax, ymin, ymax = x, x + float(a["width"]), y, y + float(a["height"])
        else:
            return None
    except (ValueError, KeyError, IndexError) as e:
        logger.warning("Failed to measure %s: %s", element.id, e)
        return None
    return (float(xmin), float(ymin), float(xmax), float(ymax))

"""Error taxonomy. Every error is fatal to a run and names what it rejected."""

from __future__ import annotations


class MandalaError(ValueError):
    """Base class for all engine errors."""


class InvalidLinePattern(MandalaError):
    def __init__(self, pattern: object, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid line pattern {pattern!r}: {reason}")


class InvalidGate(MandalaError):
    def __init__(self, gate: object) -> None:
        self.gate = gate
        super().__init__(f"Invalid gate identifier: {gate!r} (must be 1-64)")


class IncompleteSequence(MandalaError):
    """Ordering is not an exact permutation of the 64 gate identifiers."""

    def __init__(
        self,
        name: str,
        missing: list[int] | None = None,
        duplicates: list[int] | None = None,
        unknown: list[object] | None = None,
    ) -> None:
        self.name = name
        self.missing = missing or []
        self.duplicates = duplicates or []
        self.unknown = unknown or []
        parts = []
        if self.missing:
            parts.append(f"missing {self.missing}")
        if self.duplicates:
            parts.append(f"duplicated {self.duplicates}")
        if self.unknown:
            parts.append(f"unknown {self.unknown}")
        super().__init__(f"Sequence '{name}' is not a permutation of gates 1-64: {'; '.join(parts)}")


class MissingMandatoryField(MandalaError):
    def __init__(self, name: str, field: str) -> None:
        self.name = name
        self.field = field
        super().__init__(f"Sequence '{name}' is missing mandatory field '{field}'")


class OverflowUnresolved(MandalaError):
    """Text does not fit its band even at maximum compression."""

    def __init__(self, content: str, band_width: float, reason: str, gate: int | None = None) -> None:
        self.content = content
        self.band_width = band_width
        self.reason = reason
        self.gate = gate
        where = f" (gate {gate})" if gate is not None else ""
        super().__init__(f"Cannot fit {content!r} in band {band_width:.2f}{where}: {reason}")

    def for_gate(self, gate: int) -> OverflowUnresolved:
        return OverflowUnresolved(self.content, self.band_width, self.reason, gate=gate)


class ExtractionCompletenessFailure(MandalaError):
    """Reference diagram does not hold the exact element counts the generators assume."""

    def __init__(self, discrepancies: list) -> None:
        self.discrepancies = discrepancies
        summary = ", ".join(
            f"{d.pattern_class}: expected {d.expected}, found {d.found}" for d in discrepancies
        )
        super().__init__(f"Reference diagram failed completeness audit: {summary}")


class UnknownRing(MandalaError):
    def __init__(self, ring_id: str) -> None:
        self.ring_id = ring_id
        super().__init__(f"Unknown ring: {ring_id}")


class MissingKnowledge(MandalaError):
    def __init__(self, ring_id: str, key: str, field: str) -> None:
        self.ring_id = ring_id
        self.key = key
        self.field = field
        super().__init__(f"Ring '{ring_id}' has no '{field}' for {key}")


class InvalidDiagram(MandalaError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Reference diagram could not be read: {reason}")

"""Ring geometry — the read-only calibration constant each ring draws into."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RingGeometry(BaseModel):
    model_config = ConfigDict(frozen=True)

    center: tuple[float, float]
    inner_radius: float = Field(..., ge=0)
    outer_radius: float = Field(..., gt=0)

    @model_validator(mode="after")
    def _check_band(self) -> RingGeometry:
        if self.outer_radius <= self.inner_radius:
            raise ValueError(
                f"outer_radius ({self.outer_radius}) must exceed inner_radius ({self.inner_radius})"
            )
        return self

    @property
    def band_width(self) -> float:
        return self.outer_radius - self.inner_radius

    @property
    def mid_radius(self) -> float:
        return (self.inner_radius + self.outer_radius) / 2


# Band geometry measured from the verified master diagrams, one per ring type.
MASTER_GEOMETRY: dict[str, RingGeometry] = {
    "hexagrams": RingGeometry(center=(1451.344, 1451.344), inner_radius=1334.4257, outer_radius=1451.094),
    "numbers": RingGeometry(center=(1657.7978, 1657.4867), inner_radius=1538.587, outer_radius=1648.5514),
    "gate-names": RingGeometry(center=(1538.3667, 1538.3667), inner_radius=1457.367, outer_radius=1538.0506),
    "trigrams": RingGeometry(center=(1122.0567, 1130.6034), inner_radius=858.2697, outer_radius=1084.3718),
    "quarters-faces": RingGeometry(center=(447.6371, 448.3389), inner_radius=290.0, outer_radius=447.0),
    "channels": RingGeometry(center=(6482.5278, 6486.1582), inner_radius=4504.9828, outer_radius=6481.1808),
    "lines": RingGeometry(center=(6536.0, 6536.0), inner_radius=5160.0, outer_radius=5658.0),
}

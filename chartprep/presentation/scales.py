"""Scale mapping and polar geometry for the two charts.

The renderer only needs numbers: arc angles and radii for the usage chart,
and x/y scales for the asset line chart. Nothing here draws.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from chartprep.domain.models import ShichenCell
from chartprep.domain.results import AssetSeriesBundle, ShichenGrid
from chartprep.domain.services import PERIOD_COUNT

logger = logging.getLogger(__name__)

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _nice_step(start: float, stop: float, count: int) -> tuple[float, bool]:
    """Return (step, inverted); an inverted step is the reciprocal of the real one."""
    raw = (stop - start) / max(1, count)
    power = math.floor(math.log10(raw))
    error = raw / 10**power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power >= 0:
        return factor * 10**power, False
    return 10 ** (-power) / factor, True


@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return r0
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0:
            return d0
        return d0 + (value - r0) / (r1 - r0) * (d1 - d0)

    def nice(self, count: int = 10) -> "LinearScale":
        d0, d1 = self.domain
        reverse = d1 < d0
        if reverse:
            d0, d1 = d1, d0
        for _ in range(10):
            if d1 <= d0:
                break
            step, inverted = _nice_step(d0, d1, count)
            if inverted:
                n0, n1 = math.floor(d0 * step) / step, math.ceil(d1 * step) / step
            else:
                n0, n1 = math.floor(d0 / step) * step, math.ceil(d1 / step) * step
            if (n0, n1) == (d0, d1):
                break
            d0, d1 = n0, n1
        domain = (d1, d0) if reverse else (d0, d1)
        return LinearScale(domain=domain, range=self.range)

    def ticks(self, count: int = 10) -> list[float]:
        d0, d1 = sorted(self.domain)
        if d1 <= d0:
            return [d0]
        step, inverted = _nice_step(d0, d1, count)
        if inverted:
            lo, hi = math.ceil(d0 * step), math.floor(d1 * step)
            return [i / step for i in range(lo, hi + 1)]
        lo, hi = math.ceil(d0 / step), math.floor(d1 / step)
        return [i * step for i in range(lo, hi + 1)]


@dataclass(frozen=True)
class LogScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __post_init__(self) -> None:
        if min(self.domain) <= 0:
            raise ValueError(f"Log scale domain must be positive, got {self.domain}")

    def __call__(self, value: float) -> float:
        if value <= 0:
            raise ValueError(f"Log scale cannot map non-positive value {value}")
        l0, l1 = (math.log10(d) for d in self.domain)
        r0, r1 = self.range
        if l1 == l0:
            return r0
        return r0 + (math.log10(value) - l0) / (l1 - l0) * (r1 - r0)

    def invert(self, value: float) -> float:
        l0, l1 = (math.log10(d) for d in self.domain)
        r0, r1 = self.range
        if r1 == r0:
            return self.domain[0]
        return 10 ** (l0 + (value - r0) / (r1 - r0) * (l1 - l0))


@dataclass(frozen=True)
class Margin:
    top: float = 32
    right: float = 32
    bottom: float = 64
    left: float = 32


@dataclass(frozen=True)
class PolarLayout:
    cx: float
    cy: float
    inner_radius: float
    outer_radius: float
    max_radius: float
    band_thickness: float


@dataclass(frozen=True)
class ArcSpec:
    cell: ShichenCell
    start_angle: float
    end_angle: float
    inner_radius: float
    outer_radius: float


def polar_layout(
    grid: ShichenGrid,
    width: float = 320,
    height: float = 360,
    margin: Margin = Margin(),
    inner_ratio: float = 0.25,
    outer_ratio: float = 0.9,
) -> tuple[PolarLayout, list[ArcSpec]]:
    """Place each drawable cell on a ring: angle by period, radial band by day."""
    inner_width = width - margin.left - margin.right
    inner_height = height - margin.top - margin.bottom
    max_radius = min(inner_width, inner_height) / 2
    inner_radius = max_radius * inner_ratio
    outer_radius = max_radius * outer_ratio

    # One spare band keeps the outermost day off the edge.
    band = (outer_radius - inner_radius) / (max(1, grid.num_dates) + 1)
    layout = PolarLayout(
        cx=margin.left + inner_width / 2,
        cy=margin.top + inner_height / 2,
        inner_radius=inner_radius,
        outer_radius=outer_radius,
        max_radius=max_radius,
        band_thickness=band,
    )

    radius = LinearScale(domain=(0.0, grid.max_minutes or 1.0), range=(0.0, band * 0.9)).nice()
    sector = 2 * math.pi / PERIOD_COUNT
    arcs = []
    for cell in grid.drawable_cells():
        base = inner_radius + cell.date_index * band
        arcs.append(
            ArcSpec(
                cell=cell,
                start_angle=cell.period_index * sector,
                end_angle=(cell.period_index + 1) * sector,
                inner_radius=base,
                outer_radius=base + radius(cell.minutes),
            )
        )
    return layout, arcs


def line_scales(
    bundle: AssetSeriesBundle,
    width: float = 780,
    height: float = 440,
    margin: Margin = Margin(top=48, right=120, bottom=48, left=64),
    log_scale: bool = False,
) -> tuple[LinearScale, LinearScale | LogScale] | None:
    if bundle.is_empty():
        return None
    inner_width = width - margin.left - margin.right
    inner_height = height - margin.top - margin.bottom
    first, last = bundle.year_range  # type: ignore[misc]
    x = LinearScale(domain=(float(first), float(last)), range=(0.0, inner_width))

    y_min, y_max = bundle.y_domain
    if log_scale and y_min > 0:
        return x, LogScale(domain=(y_min, y_max), range=(inner_height, 0.0))
    if log_scale:
        logger.warning("Value domain %s is not positive; falling back to a linear scale", bundle.y_domain)
    return x, LinearScale(domain=(y_min, y_max), range=(inner_height, 0.0)).nice()


def series_coordinates(
    bundle: AssetSeriesBundle, x: LinearScale, y: LinearScale | LogScale
) -> dict[str, Sequence[tuple[float, float]]]:
    return {
        series.key: [(x(point.year), y(point.value)) for point in series.points]
        for series in bundle.series
    }

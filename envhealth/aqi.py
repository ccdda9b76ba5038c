"""AQI tier classification and the small display helpers derived from it."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class AqiCategory(BaseModel):
    """Display tier for an AQI value."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str
    color: str
    progress_color: str = Field(alias="progressColor")


# (inclusive upper bound, category), ascending. Anything above the last bound is hazardous.
AQI_TIERS: Tuple[Tuple[float, AqiCategory], ...] = (
    (50, AqiCategory(label="Good", color="bg-green-100 text-green-800", progress_color="bg-green-500")),
    (100, AqiCategory(label="Moderate", color="bg-yellow-100 text-yellow-800", progress_color="bg-yellow-500")),
    (150, AqiCategory(
        label="Unhealthy for Sensitive Groups",
        color="bg-orange-100 text-orange-800",
        progress_color="bg-orange-500",
    )),
    (200, AqiCategory(label="Unhealthy", color="bg-red-100 text-red-800", progress_color="bg-red-500")),
    (300, AqiCategory(label="Very Unhealthy", color="bg-purple-100 text-purple-800", progress_color="bg-purple-500")),
)
HAZARDOUS = AqiCategory(label="Hazardous", color="bg-rose-100 text-rose-800", progress_color="bg-rose-800")

AQI_GAUGE_MAX = 300

# Scale maxima for the pollutant progress bars (μg/m³).
POLLUTANT_SCALES: Tuple[Tuple[str, str, float], ...] = (
    ("pm2_5", "PM2.5", 50.0),
    ("pm10", "PM10", 100.0),
    ("no2", "NO₂", 200.0),
    ("o3", "O₃", 180.0),
)
POLLUTANT_UNIT = "μg/m³"


class PollutantGauge(BaseModel):
    """One labelled progress bar for a pollutant reading."""
    key: str
    label: str
    value: Optional[float] = None
    unit: str = POLLUTANT_UNIT
    percent: float


def get_aqi_category(aqi: float) -> AqiCategory:
    """Map any numeric AQI to exactly one tier; values above 300 are Hazardous."""
    for upper, category in AQI_TIERS:
        if aqi <= upper:
            return category
    return HAZARDOUS


def general_health_impact(aqi: float) -> str:
    """Sentence describing the risk for the general population."""
    if aqi <= 50:
        return "Air quality is considered satisfactory, and air pollution poses little or no risk."
    if aqi <= 100:
        return ("Air quality is acceptable; however, there may be a moderate health concern "
                "for a very small number of people.")
    if aqi <= 150:
        return ("Members of sensitive groups may experience health effects. "
                "The general public is not likely to be affected.")
    return ("Everyone may begin to experience health effects; members of sensitive groups "
            "may experience more serious health effects.")


def aqi_ring_fraction(aqi: float) -> float:
    """Filled share of the circular AQI gauge, in [0, 1]."""
    return max(0.0, min(aqi / AQI_GAUGE_MAX, 1.0))


def _percent(value: float, scale: float) -> float:
    return max(0.0, min(value / scale * 100, 100.0))


def pollutant_gauges(current) -> List[PollutantGauge]:
    """Build progress bars for the pollutants shown on the current-conditions card.

    A missing reading yields an empty bar with no value.
    """
    gauges: List[PollutantGauge] = []
    for key, label, scale in POLLUTANT_SCALES:
        value = getattr(current, key)
        if value is None:
            gauges.append(PollutantGauge(key=key, label=label, percent=0.0))
            continue
        value = float(value)
        gauges.append(
            PollutantGauge(key=key, label=label, value=round(value, 1), percent=_percent(value, scale))
        )
    return gauges

"""Pydantic schemas for the backend payloads and the parsing boundary around them.

Every domain snapshot is immutable and is replaced wholesale on each fetch.
The ``parse_*`` helpers are the only place that decides whether a payload is
usable: they return the model, or ``None`` when the shape does not match, and
the dashboard substitutes fallback data for ``None``.
"""

from __future__ import annotations

from typing import Any, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field, field_validator

from .aqi import AqiCategory, get_aqi_category
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="models")


class _Snapshot(BaseModel):
    """Frozen base model that accepts both wire (camelCase) and python names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def _round_to_int(value: Any) -> Any:
    if isinstance(value, float):
        return int(round(value))
    return value


def _missing_if_negative(value: Any) -> Any:
    # sensors report -1 (or similar) for a missing reading
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value < 0:
        return None
    return value


# ---------------------------------------------------------------------------
# Air quality
# ---------------------------------------------------------------------------

class AirQualityCurrent(_Snapshot):
    """Current pollutant readings (μg/m³) and the headline AQI."""
    pm2_5: Optional[float] = None
    pm10: Optional[float] = None
    no2: Optional[float] = None
    o3: Optional[float] = None
    so2: Optional[float] = None
    co: Optional[float] = None
    aqi: int

    drop_missing_readings = field_validator("pm2_5", "pm10", "no2", "o3", "so2", "co", mode="before")(
        _missing_if_negative
    )

    @field_validator("aqi", mode="before")
    @classmethod
    def coerce_aqi(cls, value: Any) -> Any:
        """Round fractional indices; negative ones floor at 0. There is no upper cap."""
        value = _round_to_int(value)
        if isinstance(value, int) and not isinstance(value, bool) and value < 0:
            return 0
        return value

    @computed_field(alias="aqiCategory")  # type: ignore[prop-decorator]
    @property
    def aqi_category(self) -> AqiCategory:
        return get_aqi_category(self.aqi)


class AirQualityHourly(_Snapshot):
    time: List[str]
    pm2_5: List[Optional[float]] = Field(default_factory=list)
    pm10: List[Optional[float]] = Field(default_factory=list)
    aqi: List[Optional[float]] = Field(default_factory=list)


class AirQualitySnapshot(_Snapshot):
    current: AirQualityCurrent
    hourly: Optional[AirQualityHourly] = None


class AqiForecastHourly(_Snapshot):
    time: List[str]
    european_aqi: List[Optional[float]]
    pm2_5: Optional[List[Optional[float]]] = None
    pm10: Optional[List[Optional[float]]] = None


class AqiForecast(_Snapshot):
    hourly: Optional[AqiForecastHourly] = None


# ---------------------------------------------------------------------------
# Pollen
# ---------------------------------------------------------------------------

class PollenDaily(_Snapshot):
    time: List[str]
    grass_pollen: List[Optional[float]] = Field(default_factory=list)
    tree_pollen: List[Optional[float]] = Field(default_factory=list)
    weed_pollen: List[Optional[float]] = Field(default_factory=list)


class PollenForecast(_Snapshot):
    daily: Optional[PollenDaily] = None


# ---------------------------------------------------------------------------
# Health recommendations
# ---------------------------------------------------------------------------

class TemperatureAdvice(_Snapshot):
    current: Optional[float] = None
    is_hot: bool = Field(default=False, alias="isHot")
    is_cold: bool = Field(default=False, alias="isCold")
    recommendations: List[str] = Field(default_factory=list)


class UvAdvice(_Snapshot):
    index: Optional[float] = None
    category: Optional[str] = None
    recommendations: List[str] = Field(default_factory=list)


class AirQualityAdvice(_Snapshot):
    aqi: Optional[int] = None
    category: Union[AqiCategory, str, None] = None
    recommendations: List[str] = Field(default_factory=list)

    coerce_aqi = field_validator("aqi", mode="before")(_round_to_int)


class HealthRecommendations(_Snapshot):
    temperature: TemperatureAdvice
    uv: UvAdvice
    air_quality: AirQualityAdvice = Field(alias="airQuality")


# ---------------------------------------------------------------------------
# Chart records
# ---------------------------------------------------------------------------

class ChartPoint(BaseModel):
    """One flattened time bucket for a line or bar chart."""
    name: Union[int, str]
    aqi: Optional[float] = None
    pm2_5: Optional[float] = None
    pm10: Optional[float] = None
    grass: Optional[float] = None
    tree: Optional[float] = None
    weed: Optional[float] = None


# ---------------------------------------------------------------------------
# Parsing boundary
# ---------------------------------------------------------------------------

M = TypeVar("M", bound=BaseModel)


def _parse(model: Type[M], payload: Any, *, context: str) -> Optional[M]:
    """Validate a decoded JSON payload, returning None when the shape is wrong."""
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.warning(
            "Response shape mismatch",
            extra={"context": context, "errors": exc.error_count(), "detail": str(exc)[:300]},
        )
        return None


def parse_air_quality(payload: Any) -> Optional[AirQualitySnapshot]:
    return _parse(AirQualitySnapshot, payload, context="air_quality")


def parse_aqi_forecast(payload: Any) -> Optional[AqiForecast]:
    return _parse(AqiForecast, payload, context="aqi_forecast")


def parse_health_recommendations(payload: Any) -> Optional[HealthRecommendations]:
    return _parse(HealthRecommendations, payload, context="health_recommendations")


def parse_pollen(payload: Any) -> Optional[PollenForecast]:
    return _parse(PollenForecast, payload, context="pollen")

"""Reshape nested forecast payloads into flat per-bucket chart points.

Both transforms are pure. Parallel arrays are expected to share the length of
``time``; when they do not, output is clamped to the shortest required series
and optional series yield ``None`` past their end.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, List, Optional, Sequence, Union

from pydantic import BaseModel

from envhealth.models import AqiForecast, ChartPoint, PollenForecast, parse_aqi_forecast, parse_pollen

FORECAST_HOURS = 24
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class ChartSeries(BaseModel):
    """Series definition handed to the chart renderer."""
    key: str
    color: str
    name: str


AQI_FORECAST_SERIES = (
    ChartSeries(key="aqi", color="#1976d2", name="AQI"),
    ChartSeries(key="pm2_5", color="#f57c00", name="PM2.5 (μg/m³)"),
    ChartSeries(key="pm10", color="#43a047", name="PM10 (μg/m³)"),
)

POLLEN_SERIES = (
    ChartSeries(key="grass", color="#4caf50", name="Grass Pollen"),
    ChartSeries(key="tree", color="#8bc34a", name="Tree Pollen"),
    ChartSeries(key="weed", color="#cddc39", name="Weed Pollen"),
)


def _value_at(series: Optional[Sequence[Optional[float]]], i: int) -> Optional[float]:
    if series is None or i >= len(series):
        return None
    return series[i]


def _parse_time(value: str) -> Optional[dt.datetime]:
    try:
        return dt.datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def hour_label(value: str) -> Union[int, str]:
    """Hour of day (0-23) of an ISO timestamp, or the raw string if it does not parse."""
    parsed = _parse_time(value)
    return parsed.hour if parsed else value


def weekday_label(value: str) -> str:
    """Short English weekday of an ISO date, or the raw string if it does not parse."""
    parsed = _parse_time(value)
    return WEEKDAY_LABELS[parsed.weekday()] if parsed else value


def format_aqi_forecast_data(forecast: Union[AqiForecast, dict, Any, None]) -> List[ChartPoint]:
    """Hourly AQI (and PM2.5/PM10 where present) for at most the first 24 hours."""
    if forecast is None:
        return []
    forecast = parse_aqi_forecast(forecast)
    if forecast is None or forecast.hourly is None:
        return []

    hourly = forecast.hourly
    count = min(FORECAST_HOURS, len(hourly.time), len(hourly.european_aqi))
    return [
        ChartPoint(
            name=hour_label(hourly.time[i]),
            aqi=hourly.european_aqi[i],
            pm2_5=_value_at(hourly.pm2_5, i),
            pm10=_value_at(hourly.pm10, i),
        )
        for i in range(count)
    ]


def format_pollen_data(pollen: Union[PollenForecast, dict, Any, None]) -> List[ChartPoint]:
    """One point per forecast day with grass, tree and weed levels."""
    if pollen is None:
        return []
    pollen = parse_pollen(pollen)
    if pollen is None or pollen.daily is None:
        return []

    daily = pollen.daily
    count = min(len(daily.time), len(daily.grass_pollen), len(daily.tree_pollen), len(daily.weed_pollen))
    return [
        ChartPoint(
            name=weekday_label(daily.time[i]),
            grass=daily.grass_pollen[i],
            tree=daily.tree_pollen[i],
            weed=daily.weed_pollen[i],
        )
        for i in range(count)
    ]

"""Placeholder datasets used whenever a live fetch has no usable result.

Values are plausible but synthetic. Hourly series always hold 24 entries, one
per hour starting at the current hour; static structures mirror the live
payload shape key for key.
"""
from __future__ import annotations

import datetime as dt
import random
from typing import List, Optional

from .aqi import get_aqi_category
from .models import (
    AirQualityAdvice,
    AirQualityCurrent,
    AirQualityHourly,
    AirQualitySnapshot,
    AqiForecast,
    AqiForecastHourly,
    HealthRecommendations,
    PollenDaily,
    PollenForecast,
    TemperatureAdvice,
    UvAdvice,
)

FALLBACK_HOURS = 24
FALLBACK_POLLEN_DAYS = 7
FALLBACK_AQI = 85

# Jitter bands: (low, high), inclusive after rounding.
PM2_5_BAND = (20, 30)
PM10_BAND = (35, 50)
AQI_BAND = (75, 95)

FALLBACK_CURRENT = {
    "pm2_5": 25,
    "pm10": 40,
    "no2": 15,
    "o3": 30,
    "so2": 8,
    "co": 4,
    "aqi": FALLBACK_AQI,
}

# Index levels per day (0 none .. 5 very high).
FALLBACK_GRASS = (2, 2, 3, 3, 2, 1, 2)
FALLBACK_TREE = (3, 3, 4, 3, 3, 2, 3)
FALLBACK_WEED = (1, 1, 1, 2, 1, 1, 1)


def hourly_timestamps(now: Optional[dt.datetime] = None, hours: int = FALLBACK_HOURS) -> List[str]:
    """ISO timestamps for `hours` consecutive hours starting at the hour containing `now`."""
    start = (now or dt.datetime.now()).replace(minute=0, second=0, microsecond=0)
    return [(start + dt.timedelta(hours=i)).isoformat(timespec="minutes") for i in range(hours)]


def _jitter(rng: random.Random, band: tuple, count: int = FALLBACK_HOURS) -> List[float]:
    low, high = band
    return [float(round(low + rng.random() * (high - low))) for _ in range(count)]


def fallback_air_quality(
    now: Optional[dt.datetime] = None,
    rng: Optional[random.Random] = None,
) -> AirQualitySnapshot:
    """Current readings at AQI 85 (Moderate) plus a jittered 24-hour series."""
    rng = rng or random.Random()
    return AirQualitySnapshot(
        current=AirQualityCurrent(**FALLBACK_CURRENT),
        hourly=AirQualityHourly(
            time=hourly_timestamps(now),
            pm2_5=_jitter(rng, PM2_5_BAND),
            pm10=_jitter(rng, PM10_BAND),
            aqi=_jitter(rng, AQI_BAND),
        ),
    )


def fallback_aqi_forecast(
    now: Optional[dt.datetime] = None,
    rng: Optional[random.Random] = None,
) -> AqiForecast:
    rng = rng or random.Random()
    return AqiForecast(
        hourly=AqiForecastHourly(
            time=hourly_timestamps(now),
            european_aqi=_jitter(rng, AQI_BAND),
        )
    )


def fallback_health_recommendations() -> HealthRecommendations:
    return HealthRecommendations(
        temperature=TemperatureAdvice(
            current=28,
            is_hot=True,
            is_cold=False,
            recommendations=[
                "Stay hydrated by drinking plenty of water throughout the day.",
                "Wear lightweight, loose-fitting clothing when outdoors.",
                "Use fans or air conditioning to stay cool indoors.",
            ],
        ),
        uv=UvAdvice(
            index=7,
            category="High",
            recommendations=[
                "Apply SPF 30+ sunscreen when outdoors.",
                "Wear sunglasses and a wide-brimmed hat for additional protection.",
                "Seek shade during peak UV hours (10am-4pm).",
            ],
        ),
        air_quality=AirQualityAdvice(
            aqi=FALLBACK_AQI,
            category=get_aqi_category(FALLBACK_AQI),
            recommendations=[
                "Consider limiting prolonged outdoor activities if you have respiratory conditions.",
                "Keep windows closed during periods of high pollution.",
                "Use air purifiers indoors if available.",
            ],
        ),
    )


def fallback_pollen(today: Optional[dt.date] = None) -> PollenForecast:
    """Seven days of fixed pollen levels starting today."""
    start = today or dt.date.today()
    return PollenForecast(
        daily=PollenDaily(
            time=[(start + dt.timedelta(days=i)).isoformat() for i in range(FALLBACK_POLLEN_DAYS)],
            grass_pollen=[float(v) for v in FALLBACK_GRASS],
            tree_pollen=[float(v) for v in FALLBACK_TREE],
            weed_pollen=[float(v) for v in FALLBACK_WEED],
        )
    )

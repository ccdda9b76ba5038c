"""View models for each dashboard tab.

These are the JSON documents a browser renderer turns into cards, gauges and
charts. Builders are pure: they take effective (live or fallback) data, the
user's profile and per-section loading flags, and return pydantic models.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from envhealth.aqi import (
    AqiCategory,
    PollutantGauge,
    aqi_ring_fraction,
    general_health_impact,
    get_aqi_category,
    pollutant_gauges,
)
from envhealth.models import AirQualitySnapshot, AqiForecast, ChartPoint, HealthRecommendations, PollenForecast
from envhealth.profile import UserContext
from envhealth.shaping import (
    AQI_FORECAST_SERIES,
    POLLEN_SERIES,
    ChartSeries,
    format_aqi_forecast_data,
    format_pollen_data,
)

NOT_AVAILABLE = "N/A"
UV_INDEX_SCALE = 11


class Tab(str, Enum):
    AIR_QUALITY = "air-quality"
    RECOMMENDATIONS = "recommendations"
    POLLEN = "pollen"


class AlertView(BaseModel):
    title: str
    description: str
    variant: Literal["default", "destructive", "info"] = "default"


class ChartView(BaseModel):
    kind: Literal["line", "bar"]
    points: List[ChartPoint]
    series: List[ChartSeries]
    height: int
    x_axis_label: Optional[str] = None


class AqiGaugeView(BaseModel):
    value: int
    category: AqiCategory
    fraction: float
    label: str = "Air Quality Index"


class AirQualityTabView(BaseModel):
    loading: bool
    forecast_loading: bool
    location: str
    gauge: AqiGaugeView
    pollutants: List[PollutantGauge]
    health_impact: str
    alerts: List[AlertView] = Field(default_factory=list)
    forecast: ChartView


class RespiratoryCard(BaseModel):
    personalized: bool
    intro: Optional[str] = None
    advice: List[str] = Field(default_factory=list)
    message: Optional[str] = None


class UvCard(BaseModel):
    index: str
    category: str
    progress: float
    headline: str
    advice: List[str]


class TemperatureCard(BaseModel):
    current: str
    headline: str
    recommendations: List[str]


class RecommendationsTabView(BaseModel):
    loading: bool
    banner: AlertView
    respiratory: RespiratoryCard
    uv: UvCard
    temperature: TemperatureCard


class PollenImpactView(BaseModel):
    personalized: bool
    alert: Optional[AlertView] = None
    protection_measures: List[str] = Field(default_factory=list)
    indoor_air: List[str] = Field(default_factory=list)
    message: List[str] = Field(default_factory=list)


class PollenTabView(BaseModel):
    loading: bool
    location: str
    chart: ChartView
    impact: PollenImpactView


class HealthPageView(BaseModel):
    active_tab: Tab
    air_quality: Optional[AirQualityTabView] = None
    recommendations: Optional[RecommendationsTabView] = None
    pollen: Optional[PollenTabView] = None


RESPIRATORY_ADVICE = (
    "Limit outdoor activities, especially during peak traffic hours",
    "Carry your rescue medications when going out",
    "Wear a proper mask outdoors (N95 recommended)",
    "Keep windows closed during poor air quality periods",
    "Use air purifiers indoors if available",
)

POLLEN_PROTECTION_MEASURES = (
    "Wear sunglasses to protect eyes from pollen",
    "Consider wearing a mask when outdoors",
    "Change clothes after being outdoors",
    "Shower before bedtime to remove pollen",
)

POLLEN_INDOOR_AIR = (
    "Keep windows closed during high pollen times",
    "Use air conditioning with clean filters",
    "Consider using a HEPA air purifier",
    "Clean surfaces frequently to remove settled pollen",
)


def _display(value) -> str:
    """Render a reading, treating None and zero as unavailable."""
    if not value:
        return NOT_AVAILABLE
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_air_quality_tab(
    air_quality: AirQualitySnapshot,
    forecast: AqiForecast,
    user: UserContext,
    *,
    location: str,
    loading: bool = False,
    forecast_loading: bool = False,
) -> AirQualityTabView:
    current = air_quality.current
    alerts: List[AlertView] = []
    if user.has_respiratory_conditions:
        alerts.append(AlertView(
            title="Respiratory Condition Alert",
            description=("With your respiratory conditions, current air quality may affect your breathing. "
                         "Consider limiting outdoor activities and using an air purifier."),
            variant="destructive",
        ))
    if user.has_allergies and current.aqi > 50:
        alerts.append(AlertView(
            title="Allergy Sensitivity",
            description=("Today's air quality may trigger your allergies. "
                         "Keep medications handy and consider wearing a mask outdoors."),
        ))

    return AirQualityTabView(
        loading=loading,
        forecast_loading=forecast_loading,
        location=location,
        gauge=AqiGaugeView(
            value=current.aqi,
            category=get_aqi_category(current.aqi),
            fraction=aqi_ring_fraction(current.aqi),
        ),
        pollutants=pollutant_gauges(current),
        health_impact=general_health_impact(current.aqi),
        alerts=alerts,
        forecast=ChartView(
            kind="line",
            points=format_aqi_forecast_data(forecast),
            series=list(AQI_FORECAST_SERIES),
            height=300,
            x_axis_label="Hour of Day",
        ),
    )


def build_recommendations_tab(
    recommendations: HealthRecommendations,
    air_quality: AirQualitySnapshot,
    user: UserContext,
    *,
    location: str,
    loading: bool = False,
) -> RecommendationsTabView:
    if user.has_respiratory_conditions:
        respiratory = RespiratoryCard(
            personalized=True,
            intro=(f"With your respiratory conditions, current AQI of "
                   f"{_display(air_quality.current.aqi)} means you should:"),
            advice=list(RESPIRATORY_ADVICE),
        )
    else:
        respiratory = RespiratoryCard(
            personalized=False,
            message=("Current air quality presents minimal respiratory risks for people without "
                     "pre-existing conditions. General precautions are recommended during high pollution days."),
        )

    uv = recommendations.uv
    high_uv = user.high_uv_sensitivity
    uv_card = UvCard(
        index=_display(uv.index),
        category=uv.category or NOT_AVAILABLE,
        progress=min((uv.index or 0) / UV_INDEX_SCALE * 100, 100.0),
        headline=("With your high UV sensitivity, extra protection is needed."
                  if high_uv else "Recommended sun protection measures:"),
        advice=[
            f"Use SPF {'50+' if high_uv else '30+'} sunscreen",
            "Wear a hat and sunglasses when outdoors",
            "Seek shade during peak sun hours (10am-4pm)",
            "Consider UV-protective clothing",
        ],
    )

    temperature = recommendations.temperature
    if temperature.is_hot:
        headline = "High temperature alert - take precautions:"
    elif temperature.is_cold:
        headline = "Cooler temperature - stay warm:"
    else:
        headline = "Comfortable temperature range today:"

    return RecommendationsTabView(
        loading=loading,
        banner=AlertView(
            title="Personalized Health Recommendations",
            description=f"Based on current environmental conditions in {location} and your health profile",
            variant="info",
        ),
        respiratory=respiratory,
        uv=uv_card,
        temperature=TemperatureCard(
            current=f"{_display(temperature.current)}°C",
            headline=headline,
            recommendations=list(temperature.recommendations),
        ),
    )


def build_pollen_tab(
    pollen: PollenForecast,
    user: UserContext,
    *,
    location: str,
    loading: bool = False,
) -> PollenTabView:
    if user.has_allergies:
        impact = PollenImpactView(
            personalized=True,
            alert=AlertView(
                title="You have indicated allergies in your profile",
                description="Based on current pollen levels, here are some recommendations:",
            ),
            protection_measures=list(POLLEN_PROTECTION_MEASURES),
            indoor_air=list(POLLEN_INDOOR_AIR),
        )
    else:
        impact = PollenImpactView(
            personalized=False,
            message=[
                "You have not indicated any pollen allergies in your profile.",
                f"Generally, pollen levels in {location} are moderate during this season.",
            ],
        )

    return PollenTabView(
        loading=loading,
        location=location,
        chart=ChartView(kind="bar", points=format_pollen_data(pollen), series=list(POLLEN_SERIES), height=300),
        impact=impact,
    )

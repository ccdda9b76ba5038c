import unittest

from envhealth.models import (
    AirQualitySnapshot,
    parse_air_quality,
    parse_aqi_forecast,
    parse_health_recommendations,
    parse_pollen,
)


def _air_payload(**current_overrides):
    current = {"pm2_5": 12.5, "pm10": 20.0, "no2": 5.0, "o3": 40.0, "so2": 1.0, "co": 0.3, "aqi": 42}
    current.update(current_overrides)
    return {
        "current": current,
        "hourly": {
            "time": ["2024-01-01T12:00", "2024-01-01T13:00"],
            "pm2_5": [12.0, 13.0],
            "pm10": [20.0, 21.0],
            "aqi": [40, 44],
        },
    }


class TestParseAirQuality(unittest.TestCase):
    def test_valid_payload(self):
        snapshot = parse_air_quality(_air_payload())
        self.assertIsInstance(snapshot, AirQualitySnapshot)
        self.assertEqual(snapshot.current.aqi, 42)
        self.assertEqual(snapshot.current.aqi_category.label, "Good")
        self.assertEqual(len(snapshot.hourly.time), 2)

    def test_derived_category_ignores_payload_value(self):
        snapshot = parse_air_quality(_air_payload(aqi=160, aqiCategory={"label": "Good"}))
        self.assertEqual(snapshot.current.aqi_category.label, "Unhealthy")
        dumped = snapshot.model_dump(by_alias=True)
        self.assertEqual(dumped["current"]["aqiCategory"]["label"], "Unhealthy")

    def test_fractional_aqi_rounds(self):
        snapshot = parse_air_quality(_air_payload(aqi=84.6))
        self.assertEqual(snapshot.current.aqi, 85)

    def test_missing_current_is_none(self):
        self.assertIsNone(parse_air_quality({"hourly": {"time": []}}))

    def test_negative_reading_marks_pollutant_missing(self):
        snapshot = parse_air_quality(_air_payload(no2=-1, aqi=250))
        self.assertIsNotNone(snapshot)
        self.assertIsNone(snapshot.current.no2)
        self.assertEqual(snapshot.current.pm10, 20.0)
        self.assertEqual(snapshot.current.aqi_category.label, "Very Unhealthy")

    def test_aqi_above_scale_is_kept(self):
        snapshot = parse_air_quality(_air_payload(aqi=612))
        self.assertEqual(snapshot.current.aqi, 612)
        self.assertEqual(snapshot.current.aqi_category.label, "Hazardous")

    def test_negative_aqi_floors_at_zero(self):
        snapshot = parse_air_quality(_air_payload(aqi=-3))
        self.assertEqual(snapshot.current.aqi, 0)
        self.assertEqual(snapshot.current.aqi_category.label, "Good")

    def test_missing_aqi_is_none(self):
        payload = _air_payload()
        del payload["current"]["aqi"]
        self.assertIsNone(parse_air_quality(payload))

    def test_non_dict_is_none(self):
        self.assertIsNone(parse_air_quality(["not", "a", "snapshot"]))
        self.assertIsNone(parse_air_quality(None))

    def test_hourly_optional(self):
        payload = _air_payload()
        del payload["hourly"]
        self.assertIsNone(parse_air_quality(payload).hourly)

    def test_snapshot_is_frozen(self):
        snapshot = parse_air_quality(_air_payload())
        with self.assertRaises(Exception):
            snapshot.current.aqi = 10


class TestParseOtherDomains(unittest.TestCase):
    def test_forecast_without_hourly(self):
        forecast = parse_aqi_forecast({})
        self.assertIsNotNone(forecast)
        self.assertIsNone(forecast.hourly)

    def test_forecast_requires_european_aqi(self):
        self.assertIsNone(parse_aqi_forecast({"hourly": {"time": ["2024-01-01T00:00"]}}))

    def test_pollen_without_daily(self):
        self.assertIsNone(parse_pollen({}).daily)

    def test_recommendations_camel_case(self):
        recs = parse_health_recommendations({
            "temperature": {"current": 31, "isHot": True, "recommendations": ["Drink water"]},
            "uv": {"index": 9, "category": "Very High", "recommendations": []},
            "airQuality": {"aqi": 120, "category": "Unhealthy for Sensitive Groups", "recommendations": []},
        })
        self.assertTrue(recs.temperature.is_hot)
        self.assertFalse(recs.temperature.is_cold)
        self.assertEqual(recs.air_quality.aqi, 120)
        self.assertEqual(recs.air_quality.category, "Unhealthy for Sensitive Groups")

    def test_recommendations_missing_domain(self):
        self.assertIsNone(parse_health_recommendations({"temperature": {}, "uv": {}}))


if __name__ == "__main__":
    unittest.main()

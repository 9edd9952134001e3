import datetime as dt
import unittest

from pydantic import ValidationError

from app.domain import (
    DailyStats,
    HourlySeries,
    Icon,
    Location,
    Modifier,
    Preference,
    PREFERENCE_OFFSETS,
    Recommendation,
)


class TestDomainModels(unittest.TestCase):
    """Schema-level guarantees the engine relies on."""

    def test_preference_offsets(self):
        self.assertEqual(PREFERENCE_OFFSETS[Preference.COLD], -3.0)
        self.assertEqual(PREFERENCE_OFFSETS[Preference.NORMAL], 0.0)
        self.assertEqual(PREFERENCE_OFFSETS[Preference.HOT], 3.0)
        self.assertEqual(set(PREFERENCE_OFFSETS), set(Preference))

    def test_daily_stats_rejects_high_below_low(self):
        with self.assertRaises(ValidationError):
            DailyStats(high=1.0, low=2.0)

    def test_daily_stats_rejects_non_finite_values(self):
        with self.assertRaises(ValidationError):
            DailyStats(high=float("nan"), low=0)
        with self.assertRaises(ValidationError):
            DailyStats(high=float("inf"), low=0)
        with self.assertRaises(ValidationError):
            DailyStats(high=5.0, low=0.0, max_wind=float("nan"))

    def test_hourly_series_rejects_non_finite_samples(self):
        with self.assertRaises(ValidationError):
            HourlySeries(times=[dt.datetime(2024, 1, 1)], temperature=[float("nan")])

    def test_recommendation_modifiers_are_immutable(self):
        rec = Recommendation(
            icon=Icon.TSHIRT,
            label="Light clothes (T-shirt) + 💨",
            reasoning="Day high 25°C, low 24°C. Windproof layer recommended",
            clothing="Light clothes (T-shirt)",
            modifiers=[Modifier(text="Windproof layer recommended", icon=Icon.WIND)],
        )
        self.assertIsInstance(rec.modifiers, tuple)
        self.assertEqual(Recommendation(icon=Icon.COAT, label="x", reasoning="y", clothing="x").modifiers, ())

    def test_daily_stats_defaults_and_immutability(self):
        stats = DailyStats(high=5.0, low=5.0)
        self.assertEqual(stats.max_precipitation, 0.0)
        self.assertEqual(stats.max_wind, 0.0)
        with self.assertRaises(ValidationError):
            stats.high = 9.0

    def test_recommendation_serializes_icons_as_emoji(self):
        rec = Recommendation(
            icon=Icon.COAT,
            label="Jacket / sweater + ☔",
            reasoning="Day high 12°C, low 9°C. Bring umbrella or rain jacket",
            clothing="Jacket / sweater",
            modifiers=[Modifier(text="Bring umbrella or rain jacket", icon=Icon.UMBRELLA)],
        )
        dumped = rec.model_dump(mode="json")
        self.assertEqual(dumped["icon"], "🧥")
        self.assertEqual(dumped["modifiers"][0]["icon"], "☔")

    def test_extra_fields_forbidden(self):
        with self.assertRaises(ValidationError):
            DailyStats(high=1.0, low=0.0, humidity=40)

    def test_location_bounds(self):
        with self.assertRaises(ValidationError):
            Location(name="nowhere", latitude=95.0, longitude=0.0)

    def test_hourly_series_from_open_meteo(self):
        series = HourlySeries.from_open_meteo(
            {
                "time": ["2024-02-29T23:00", "2024-03-01T00:00"],
                "temperature_2m": [1.0, None],
                "precipitation_probability": [None, 5],
                "windspeed_10m": [3.0, 4.0],
            },
            {"temperature_2m": "°C", "windspeed_10m": "m/s"},
            timezone="Asia/Tokyo",
        )
        self.assertEqual(series.times[0], dt.datetime(2024, 2, 29, 23, 0))
        self.assertEqual(series.temperature, [1.0, None])
        self.assertEqual(series.wind_speed, [3.0, 4.0])
        self.assertEqual(series.wind_speed_unit, "m/s")
        self.assertEqual(series.temperature_unit, "°C")
        self.assertEqual(series.timezone, "Asia/Tokyo")

    def test_hourly_series_allows_missing_required_arrays(self):
        series = HourlySeries()
        self.assertIsNone(series.times)
        self.assertIsNone(series.temperature)


if __name__ == "__main__":
    unittest.main()

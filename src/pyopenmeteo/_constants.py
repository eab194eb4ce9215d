"""Internal constants shared across the library."""

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
AIR_QUALITY_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"
USER_AGENT = "pyopenmeteo/1"

ICON_BASE_URL = "/adapter/open-meteo-weather/icons"

# Top-level folder for controller bookkeeping; never a location slug.
INFO_FOLDER = "info"
LAST_UPDATE_KEY = "last_update"

DEFAULT_LANGUAGE = "en"

# ------------------------------------------------------------------
# Forecast window limits (Open-Meteo API)
# ------------------------------------------------------------------

MAX_FORECAST_DAYS = 16
MAX_FORECAST_HOURS = MAX_FORECAST_DAYS * 24

# ------------------------------------------------------------------
# Unit conversion
# ------------------------------------------------------------------

KMH_PER_MPH = 1.60934


def fahrenheit_to_celsius(temp_f: float) -> float:
    return (temp_f - 32.0) * 5.0 / 9.0


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9.0 / 5.0 + 32.0


# ------------------------------------------------------------------
# Derived-point icon tables (file names below the icon base URL)
# ------------------------------------------------------------------

WIND_DIRECTION_ICONS: tuple[str, ...] = (
    "wind/n.png",
    "wind/ne.png",
    "wind/e.png",
    "wind/se.png",
    "wind/s.png",
    "wind/sw.png",
    "wind/w.png",
    "wind/nw.png",
)

# Lowest band first.
WIND_GUST_ICONS: tuple[str, ...] = (
    "gust/0_calm.png",
    "gust/1_strong.png",
    "gust/2_stormy.png",
    "gust/3_storm.png",
    "gust/4_severe_storm.png",
    "gust/5_hurricane.png",
)

# km/h, lower bound of bands 1..5.
WIND_GUST_THRESHOLDS_KMH: tuple[float, ...] = (39.0, 50.0, 62.0, 75.0, 89.0)

POLLEN_THRESHOLDS: tuple[float, float, float] = (1.0, 10.0, 50.0)
POLLEN_THRESHOLDS_BY_SPECIES: dict[str, tuple[float, float, float]] = {
    "birch": (10.0, 100.0, 500.0),
}

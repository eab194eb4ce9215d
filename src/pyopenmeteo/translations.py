"""Translation tables for labels and derived texts.

Keys are namespaced: ``label.<field>``, ``weather.<code>``,
``direction.<point>``, ``pollen.<level>``, ``moon.<phase>``,
``weekday.<0-6>`` (Monday is 0). Lookups fall back to the default
locale, then to the key itself.
"""

from __future__ import annotations

from pyopenmeteo._constants import DEFAULT_LANGUAGE

_EN: dict[str, str] = {
    # Raw fields
    "label.time": "Time",
    "label.temperature_2m": "Temperature",
    "label.relative_humidity_2m": "Relative humidity",
    "label.apparent_temperature": "Apparent temperature",
    "label.is_day": "Daylight",
    "label.precipitation": "Precipitation",
    "label.rain": "Rain",
    "label.showers": "Showers",
    "label.snowfall": "Snowfall",
    "label.weather_code": "Weather code",
    "label.cloud_cover": "Cloud cover",
    "label.pressure_msl": "Sea level pressure",
    "label.surface_pressure": "Surface pressure",
    "label.wind_speed_10m": "Wind speed",
    "label.wind_direction_10m": "Wind direction",
    "label.wind_gusts_10m": "Wind gusts",
    "label.temperature_2m_max": "Maximum temperature",
    "label.temperature_2m_min": "Minimum temperature",
    "label.apparent_temperature_max": "Maximum apparent temperature",
    "label.apparent_temperature_min": "Minimum apparent temperature",
    "label.sunrise": "Sunrise",
    "label.sunset": "Sunset",
    "label.sunshine_duration": "Sunshine duration",
    "label.uv_index": "UV index",
    "label.uv_index_max": "Maximum UV index",
    "label.precipitation_sum": "Precipitation total",
    "label.rain_sum": "Rain total",
    "label.showers_sum": "Showers total",
    "label.snowfall_sum": "Snowfall total",
    "label.precipitation_probability": "Precipitation probability",
    "label.precipitation_probability_max": "Maximum precipitation probability",
    "label.wind_speed_10m_max": "Maximum wind speed",
    "label.wind_gusts_10m_max": "Maximum wind gusts",
    "label.wind_direction_10m_dominant": "Dominant wind direction",
    "label.dew_point_2m_mean": "Mean dew point",
    "label.european_aqi": "European air quality index",
    "label.pm10": "Particulate matter PM10",
    "label.pm2_5": "Particulate matter PM2.5",
    "label.nitrogen_dioxide": "Nitrogen dioxide",
    "label.ozone": "Ozone",
    "label.alder_pollen": "Alder pollen",
    "label.birch_pollen": "Birch pollen",
    "label.grass_pollen": "Grass pollen",
    "label.mugwort_pollen": "Mugwort pollen",
    "label.olive_pollen": "Olive pollen",
    "label.ragweed_pollen": "Ragweed pollen",
    # Derived points
    "label.weather_text": "Weather",
    "label.icon_url": "Weather icon",
    "label.wind_direction_text": "Wind direction (text)",
    "label.wind_direction_icon": "Wind direction icon",
    "label.wind_gust_icon": "Wind gust warning icon",
    "label.dew_point_2m": "Dew point",
    "label.alder_pollen_text": "Alder pollen load",
    "label.birch_pollen_text": "Birch pollen load",
    "label.grass_pollen_text": "Grass pollen load",
    "label.mugwort_pollen_text": "Mugwort pollen load",
    "label.olive_pollen_text": "Olive pollen load",
    "label.ragweed_pollen_text": "Ragweed pollen load",
    "label.day_name": "Weekday",
    "label.moonrise": "Moonrise",
    "label.moonset": "Moonset",
    "label.moon_phase_value": "Moon phase",
    "label.moon_phase_text": "Moon phase (text)",
    "label.moon_phase_icon": "Moon phase icon",
    "label.last_update": "Last update",
    # Weather codes (WMO)
    "weather.0": "Clear sky",
    "weather.1": "Mainly clear",
    "weather.2": "Partly cloudy",
    "weather.3": "Overcast",
    "weather.45": "Fog",
    "weather.48": "Depositing rime fog",
    "weather.51": "Light drizzle",
    "weather.53": "Moderate drizzle",
    "weather.55": "Dense drizzle",
    "weather.56": "Light freezing drizzle",
    "weather.57": "Dense freezing drizzle",
    "weather.61": "Slight rain",
    "weather.63": "Moderate rain",
    "weather.65": "Heavy rain",
    "weather.66": "Light freezing rain",
    "weather.67": "Heavy freezing rain",
    "weather.71": "Slight snowfall",
    "weather.73": "Moderate snowfall",
    "weather.75": "Heavy snowfall",
    "weather.77": "Snow grains",
    "weather.80": "Slight rain showers",
    "weather.81": "Moderate rain showers",
    "weather.82": "Violent rain showers",
    "weather.85": "Slight snow showers",
    "weather.86": "Heavy snow showers",
    "weather.95": "Thunderstorm",
    "weather.96": "Thunderstorm with slight hail",
    "weather.99": "Thunderstorm with heavy hail",
    "weather.unknown": "Unknown",
    # Compass
    "direction.n": "N",
    "direction.ne": "NE",
    "direction.e": "E",
    "direction.se": "SE",
    "direction.s": "S",
    "direction.sw": "SW",
    "direction.w": "W",
    "direction.nw": "NW",
    # Pollen
    "pollen.none": "None",
    "pollen.low": "Low",
    "pollen.moderate": "Moderate",
    "pollen.high": "High",
    # Moon
    "moon.new_moon": "New moon",
    "moon.waxing_crescent": "Waxing crescent",
    "moon.first_quarter": "First quarter",
    "moon.waxing_gibbous": "Waxing gibbous",
    "moon.full_moon": "Full moon",
    "moon.waning_gibbous": "Waning gibbous",
    "moon.last_quarter": "Last quarter",
    "moon.waning_crescent": "Waning crescent",
    # Weekdays
    "weekday.0": "Monday",
    "weekday.1": "Tuesday",
    "weekday.2": "Wednesday",
    "weekday.3": "Thursday",
    "weekday.4": "Friday",
    "weekday.5": "Saturday",
    "weekday.6": "Sunday",
}

_DE: dict[str, str] = {
    "label.time": "Zeit",
    "label.temperature_2m": "Temperatur",
    "label.relative_humidity_2m": "Relative Luftfeuchtigkeit",
    "label.apparent_temperature": "Gefühlte Temperatur",
    "label.is_day": "Tageslicht",
    "label.precipitation": "Niederschlag",
    "label.rain": "Regen",
    "label.showers": "Schauer",
    "label.snowfall": "Schneefall",
    "label.weather_code": "Wettercode",
    "label.cloud_cover": "Bewölkung",
    "label.pressure_msl": "Luftdruck (Meereshöhe)",
    "label.surface_pressure": "Luftdruck (Boden)",
    "label.wind_speed_10m": "Windgeschwindigkeit",
    "label.wind_direction_10m": "Windrichtung",
    "label.wind_gusts_10m": "Windböen",
    "label.temperature_2m_max": "Höchsttemperatur",
    "label.temperature_2m_min": "Tiefsttemperatur",
    "label.apparent_temperature_max": "Gefühlte Höchsttemperatur",
    "label.apparent_temperature_min": "Gefühlte Tiefsttemperatur",
    "label.sunrise": "Sonnenaufgang",
    "label.sunset": "Sonnenuntergang",
    "label.sunshine_duration": "Sonnenscheindauer",
    "label.uv_index": "UV-Index",
    "label.uv_index_max": "Maximaler UV-Index",
    "label.precipitation_sum": "Niederschlagsmenge",
    "label.rain_sum": "Regenmenge",
    "label.showers_sum": "Schauermenge",
    "label.snowfall_sum": "Schneemenge",
    "label.precipitation_probability": "Niederschlagswahrscheinlichkeit",
    "label.precipitation_probability_max": "Maximale Niederschlagswahrscheinlichkeit",
    "label.wind_speed_10m_max": "Maximale Windgeschwindigkeit",
    "label.wind_gusts_10m_max": "Maximale Windböen",
    "label.wind_direction_10m_dominant": "Vorherrschende Windrichtung",
    "label.dew_point_2m_mean": "Mittlerer Taupunkt",
    "label.european_aqi": "Europäischer Luftqualitätsindex",
    "label.pm10": "Feinstaub PM10",
    "label.pm2_5": "Feinstaub PM2,5",
    "label.nitrogen_dioxide": "Stickstoffdioxid",
    "label.ozone": "Ozon",
    "label.alder_pollen": "Erlenpollen",
    "label.birch_pollen": "Birkenpollen",
    "label.grass_pollen": "Gräserpollen",
    "label.mugwort_pollen": "Beifußpollen",
    "label.olive_pollen": "Olivenpollen",
    "label.ragweed_pollen": "Ambrosiapollen",
    "label.weather_text": "Wetter",
    "label.icon_url": "Wettersymbol",
    "label.wind_direction_text": "Windrichtung (Text)",
    "label.wind_direction_icon": "Windrichtungssymbol",
    "label.wind_gust_icon": "Böenwarnsymbol",
    "label.dew_point_2m": "Taupunkt",
    "label.alder_pollen_text": "Erlenpollenbelastung",
    "label.birch_pollen_text": "Birkenpollenbelastung",
    "label.grass_pollen_text": "Gräserpollenbelastung",
    "label.mugwort_pollen_text": "Beifußpollenbelastung",
    "label.olive_pollen_text": "Olivenpollenbelastung",
    "label.ragweed_pollen_text": "Ambrosiapollenbelastung",
    "label.day_name": "Wochentag",
    "label.moonrise": "Mondaufgang",
    "label.moonset": "Monduntergang",
    "label.moon_phase_value": "Mondphase",
    "label.moon_phase_text": "Mondphase (Text)",
    "label.moon_phase_icon": "Mondphasensymbol",
    "label.last_update": "Letzte Aktualisierung",
    "weather.0": "Klarer Himmel",
    "weather.1": "Überwiegend klar",
    "weather.2": "Teilweise bewölkt",
    "weather.3": "Bedeckt",
    "weather.45": "Nebel",
    "weather.48": "Raureifnebel",
    "weather.51": "Leichter Nieselregen",
    "weather.53": "Mäßiger Nieselregen",
    "weather.55": "Starker Nieselregen",
    "weather.56": "Leichter gefrierender Nieselregen",
    "weather.57": "Starker gefrierender Nieselregen",
    "weather.61": "Leichter Regen",
    "weather.63": "Mäßiger Regen",
    "weather.65": "Starker Regen",
    "weather.66": "Leichter gefrierender Regen",
    "weather.67": "Starker gefrierender Regen",
    "weather.71": "Leichter Schneefall",
    "weather.73": "Mäßiger Schneefall",
    "weather.75": "Starker Schneefall",
    "weather.77": "Schneegriesel",
    "weather.80": "Leichte Regenschauer",
    "weather.81": "Mäßige Regenschauer",
    "weather.82": "Heftige Regenschauer",
    "weather.85": "Leichte Schneeschauer",
    "weather.86": "Starke Schneeschauer",
    "weather.95": "Gewitter",
    "weather.96": "Gewitter mit leichtem Hagel",
    "weather.99": "Gewitter mit starkem Hagel",
    "weather.unknown": "Unbekannt",
    "direction.n": "N",
    "direction.ne": "NO",
    "direction.e": "O",
    "direction.se": "SO",
    "direction.s": "S",
    "direction.sw": "SW",
    "direction.w": "W",
    "direction.nw": "NW",
    "pollen.none": "Keine",
    "pollen.low": "Gering",
    "pollen.moderate": "Mäßig",
    "pollen.high": "Hoch",
    "moon.new_moon": "Neumond",
    "moon.waxing_crescent": "Zunehmende Sichel",
    "moon.first_quarter": "Erstes Viertel",
    "moon.waxing_gibbous": "Zunehmender Mond",
    "moon.full_moon": "Vollmond",
    "moon.waning_gibbous": "Abnehmender Mond",
    "moon.last_quarter": "Letztes Viertel",
    "moon.waning_crescent": "Abnehmende Sichel",
    "weekday.0": "Montag",
    "weekday.1": "Dienstag",
    "weekday.2": "Mittwoch",
    "weekday.3": "Donnerstag",
    "weekday.4": "Freitag",
    "weekday.5": "Samstag",
    "weekday.6": "Sonntag",
}

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": _EN,
    "de": _DE,
}

# strftime patterns for rise/set times.
TIME_FORMATS: dict[str, str] = {
    "en": "%I:%M %p",
    "de": "%H:%M",
}


def translate(locale: str, key: str) -> str:
    """Look up *key* for *locale*, then the default locale, then return *key*."""
    table = TRANSLATIONS.get(locale)
    if table is not None and key in table:
        return table[key]
    fallback = TRANSLATIONS[DEFAULT_LANGUAGE]
    return fallback.get(key, key)


class Translator:
    """Translation lookups bound to one locale."""

    def __init__(self, language: str = DEFAULT_LANGUAGE) -> None:
        self.language = language

    def translate(self, key: str) -> str:
        return translate(self.language, key)

    def label(self, key: str) -> str:
        """Display label for a field or derived point; the bare key when untranslated."""
        text = translate(self.language, f"label.{key}")
        return key if text == f"label.{key}" else text

    @property
    def time_format(self) -> str:
        return TIME_FORMATS.get(self.language, TIME_FORMATS[DEFAULT_LANGUAGE])

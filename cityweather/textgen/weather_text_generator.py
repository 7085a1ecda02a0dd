# textgen/weather_text_generator.py

from typing import List, Optional

from ..models import WeatherSample
from ..utils.units import round1

# WMO weather code → 설명
WEATHER_CODE_TEXT = {
    0: "clear", 1: "mostly clear", 2: "partly cloudy", 3: "cloudy",
    45: "fog", 48: "freezing fog",
    51: "light drizzle", 53: "moderate drizzle", 55: "heavy drizzle",
    56: "light freezing drizzle", 57: "heavy freezing drizzle",
    61: "light rain", 63: "moderate rain", 65: "heavy rain",
    66: "light freezing rain", 67: "heavy freezing rain",
    71: "light snow", 73: "moderate snow", 75: "heavy snow", 77: "snow grains",
    80: "light rain showers", 81: "moderate rain showers", 82: "heavy rain showers",
    85: "light snow showers", 86: "heavy snow showers",
    95: "thunderstorm", 96: "thunderstorm with light hail", 99: "thunderstorm with heavy hail",
}


def weather_code_text(code: Optional[int]) -> str:
    if code is None:
        return ""
    return WEATHER_CODE_TEXT.get(code, "")


def _cloud_phrase(cloud: Optional[float]) -> str:
    if cloud is None:
        return ""
    if cloud < 15:
        return "clear sky"
    if cloud < 50:
        return "partly cloudy"
    return "overcast"


def _wind_phrase(wind: Optional[float]) -> str:
    if wind is None:
        return ""
    if wind >= 50:
        return "stormy"
    if wind >= 25:
        return "windy"
    return ""


def _percent(value: float) -> str:
    return f"{int(value)}%" if float(value).is_integer() else f"{value}%"


def generate_weather_description(sample: WeatherSample) -> str:
    """
    예보 한 슬롯 → 짧은 설명 문구 (", "로 연결)
    순서 고정: 날씨코드, 구름, 바람, 강수확률, 강수량, 비, 소나기, 눈
    """
    parts: List[str] = [
        weather_code_text(sample.weather_code),
        _cloud_phrase(sample.cloud_cover),
        _wind_phrase(sample.wind_speed),
    ]

    pop = sample.precipitation_probability
    if pop is not None and pop >= 40:
        parts.append(f"precip. chance {_percent(pop)}")
    if sample.precipitation is not None and sample.precipitation > 0:
        parts.append(f"{round1(sample.precipitation):.1f} mm precipitation")
    if sample.rain is not None and sample.rain > 0:
        parts.append(f"{round1(sample.rain):.1f} mm rain")
    if sample.showers is not None and sample.showers > 0:
        parts.append("showers")
    if sample.snowfall is not None and sample.snowfall > 0:
        parts.append("snowfall")

    return ", ".join(p for p in parts if p)

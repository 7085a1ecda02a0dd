# logic/weather.py

import math
from datetime import datetime
from typing import Optional

from dateutil import tz

from ..models import WeatherReport, WeatherSample
from ..textgen.weather_text_generator import generate_weather_description
from ..utils.time_parser import format_local_time, select_slot
from ..utils.units import c_to_f, round1

# WeatherSample 필드 → hourly 응답에서 허용하는 변수명 (앞쪽 우선)
WEATHER_FIELD_ALIASES = {
    "temperature": ["temperature_2m", "temperature"],
    "apparent_temperature": ["apparent_temperature"],
    "precipitation_probability": ["precipitation_probability"],
    "precipitation": ["precipitation"],
    "rain": ["rain"],
    "showers": ["showers"],
    "snowfall": ["snowfall"],
    "cloud_cover": ["cloud_cover", "cloudcover"],
    "wind_speed": ["wind_speed_10m", "windspeed_10m"],
    "wind_gust": ["wind_gusts_10m", "windgusts_10m"],
    "weather_code": ["weather_code", "weathercode"],
}


def _value_at(series, index: int) -> Optional[float]:
    if not isinstance(series, list) or index >= len(series):
        return None
    value = series[index]
    if value is None or isinstance(value, bool):
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def extract_sample(hourly: dict, index: int) -> WeatherSample:
    """hourly 응답의 index 번째 슬롯 → WeatherSample (모르는 변수는 버림)"""
    values = {}
    for field_name, aliases in WEATHER_FIELD_ALIASES.items():
        values[field_name] = None
        for alias in aliases:
            if alias in hourly:
                values[field_name] = _value_at(hourly[alias], index)
                break

    if values["weather_code"] is not None:
        values["weather_code"] = int(values["weather_code"])

    times = hourly.get("time") or []
    values["time"] = times[index] if index < len(times) else None
    return WeatherSample(**values)


def build_weather_report(forecast: dict, now: Optional[datetime] = None) -> WeatherReport:
    """
    예보 응답 → 다음 한 시간 슬롯 선택 → 요약
    """
    hourly = forecast.get("hourly") or {}
    timezone_name = forecast.get("timezone")

    now = now or datetime.now(tz.tzutc())
    zone = tz.gettz(timezone_name) if timezone_name else None
    index = select_slot(hourly.get("time") or [], now, zone)

    sample = extract_sample(hourly, index)
    description = generate_weather_description(sample)

    temperature_c = round1(sample.temperature)
    temperature_f = round1(c_to_f(temperature_c)) if temperature_c is not None else None

    return WeatherReport(
        sample=sample,
        narrative=description,
        timezone=timezone_name,
        local_time=format_local_time(timezone_name, now),
        temperature_c=temperature_c,
        temperature_f=temperature_f,
    )

# utils/openmeteo_weather.py

import requests

from ..config import OPENMETEO_URL, WEATHER_TIMEOUT
from ..errors import WeatherUpstreamError
from .logger import log

HOURLY_VARIABLES = [
    "temperature_2m", "relative_humidity_2m", "rain", "showers", "snowfall", "snow_depth",
    "precipitation", "precipitation_probability", "apparent_temperature", "dew_point_2m",
    "weather_code", "pressure_msl", "surface_pressure", "cloud_cover", "cloud_cover_low",
    "cloud_cover_mid", "cloud_cover_high", "visibility", "vapour_pressure_deficit",
    "wind_gusts_10m", "wind_direction_10m", "wind_speed_10m",
]


def get_openmeteo_forecast(lat: float, lon: float, timeout: float = WEATHER_TIMEOUT) -> dict:
    """
    Open-Meteo에서 오늘 하루치 시간별 예보를 받아 그대로 반환합니다.

    반환 예시:
    {
        "timezone": "Europe/Paris",
        "hourly": {
            "time": ["2025-04-17T00:00", ...],
            "temperature_2m": [11.2, ...],
            ...
        }
    }
    """
    params = {
        "latitude": str(lat),
        "longitude": str(lon),
        "hourly": ",".join(HOURLY_VARIABLES),
        "forecast_days": "1",
        "timezone": "auto",
    }

    try:
        res = requests.get(OPENMETEO_URL, params=params, timeout=timeout)
        res.raise_for_status()
        data = res.json()
    except requests.Timeout as e:
        log(f"❌ Open-Meteo forecast API 타임아웃: {e}", level="error")
        raise WeatherUpstreamError("Failed to load weather: request timed out") from e
    except ValueError as e:
        log(f"❌ Open-Meteo 응답 JSON 파싱 실패: {e}", level="error")
        raise WeatherUpstreamError("Failed to load weather: malformed response") from e
    except requests.RequestException as e:
        log(f"❌ Open-Meteo forecast API 실패: {e}", level="error")
        raise WeatherUpstreamError(f"Failed to load weather: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("hourly"), dict):
        raise WeatherUpstreamError("Failed to load weather: response has no hourly data")

    return data

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .utils.units import describe_temperature


@dataclass(frozen=True)
class CityRecord:
    name: str
    country: Optional[str]
    lat: float
    lon: float

    @property
    def label(self) -> str:
        return f"{self.name}, {self.country}" if self.country else self.name

    def to_dict(self) -> dict:
        return {"name": self.name, "country": self.country, "lat": self.lat, "lon": self.lon}


@dataclass(frozen=True)
class WeatherSample:
    """
    한 시간 단위 예보 한 줄. 각 필드는 원본에 없거나 숫자가 아니면 None.
    """
    temperature: Optional[float] = None
    apparent_temperature: Optional[float] = None
    precipitation_probability: Optional[float] = None
    precipitation: Optional[float] = None
    rain: Optional[float] = None
    showers: Optional[float] = None
    snowfall: Optional[float] = None
    cloud_cover: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_gust: Optional[float] = None
    weather_code: Optional[int] = None
    time: Optional[str] = None


@dataclass(frozen=True)
class Generated:
    path: str

    @property
    def fallback(self) -> bool:
        return False

    @property
    def reason(self) -> Optional[str]:
        return None

    def to_dict(self) -> dict:
        return {"path": self.path, "fallback": False, "reason": None}


@dataclass(frozen=True)
class Fallback:
    path: str
    reason: str

    @property
    def fallback(self) -> bool:
        return True

    def to_dict(self) -> dict:
        return {"path": self.path, "fallback": True, "reason": self.reason}


ImageResult = Union[Generated, Fallback]


@dataclass(frozen=True)
class WeatherReport:
    sample: WeatherSample
    narrative: str
    timezone: Optional[str]
    local_time: Optional[str]
    temperature_c: Optional[float]
    temperature_f: Optional[float]


class PipelineState(str, Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    FETCHING_WEATHER = "fetching_weather"
    SUMMARIZING = "summarizing"
    GENERATING_IMAGE = "generating_image"
    DONE = "done"
    ERROR = "error"


@dataclass
class RunContext:
    """한 번의 실행(run)이 단독으로 소유하는 상태. 다른 run과 공유하지 않는다."""
    run_id: int
    city: Optional[CityRecord] = None
    state: PipelineState = PipelineState.IDLE
    message: str = ""
    error: Optional[str] = None
    status_code: int = 200
    result: Optional["RunResult"] = None
    history: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "run_id": self.run_id,
            "state": self.state.value,
            "message": self.message,
            "error": self.error,
            "city": self.city.to_dict() if self.city else None,
        }


@dataclass(frozen=True)
class RunResult:
    run_id: int
    city: CityRecord
    report: WeatherReport
    image: ImageResult

    @property
    def city_line(self) -> str:
        if self.report.temperature_c is None:
            return self.city.label
        return f"{self.city.label}, {describe_temperature(self.report.temperature_c)}"

    def to_dict(self) -> dict:
        return {
            "run_id": self.run_id,
            "city": self.city.to_dict(),
            "city_line": self.city_line,
            "narrative": self.report.narrative,
            "local_time": self.report.local_time,
            "timezone": self.report.timezone,
            "image": self.image.to_dict(),
        }

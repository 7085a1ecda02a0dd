# logic/city_index.py

import math
from typing import Iterable, List, Optional

from ..errors import CityInputError
from ..models import CityRecord

MAX_RESULTS = 30

# 정규 필드 → 원본 데이터에서 허용하는 별칭 (앞쪽 우선)
CITY_FIELD_ALIASES = {
    "name": ["name", "ascii", "city", "town", "display_name"],
    "country": ["country", "countryCode", "cc", "country_name"],
    "lat": ["lat", "latitude", "y", "coord.lat"],
    "lon": ["lon", "lng", "longitude", "x", "coord.lon"],
}


def _lookup(raw: dict, alias: str):
    value = raw
    for key in alias.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _first_text(raw: dict, aliases: List[str]) -> Optional[str]:
    for alias in aliases:
        value = _lookup(raw, alias)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _coerce_number(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _first_number(raw: dict, aliases: List[str]) -> Optional[float]:
    for alias in aliases:
        value = _lookup(raw, alias)
        if value is not None:
            # 첫 번째로 존재하는 별칭만 본다
            return _coerce_number(value)
    return None


def normalize_city(raw) -> Optional[CityRecord]:
    """
    임의 형태의 원본 레코드 → CityRecord
    이름이 없거나 좌표가 유한한 숫자가 아니면 None
    """
    if not isinstance(raw, dict):
        return None

    name = _first_text(raw, CITY_FIELD_ALIASES["name"])
    country = _first_text(raw, CITY_FIELD_ALIASES["country"])
    lat = _first_number(raw, CITY_FIELD_ALIASES["lat"])
    lon = _first_number(raw, CITY_FIELD_ALIASES["lon"])

    if name is None or lat is None or lon is None:
        return None
    return CityRecord(name=name, country=country, lat=lat, lon=lon)


def load_cities(raw_list: Iterable) -> List[CityRecord]:
    if isinstance(raw_list, dict):
        raw_list = raw_list.get("cities") or []

    cities = []
    for raw in raw_list or []:
        city = normalize_city(raw)
        if city is not None:
            cities.append(city)
    return cities


def search_cities(query: str, index: List[CityRecord], limit: int = MAX_RESULTS) -> List[CityRecord]:
    """
    이름에 query가 포함된 도시 (대소문자 무시, 원본 순서 유지, 최대 limit개)
    빈 검색어는 전체 목록이 아니라 빈 결과
    """
    needle = (query or "").strip().lower()
    if not needle:
        return []

    matches = []
    for city in index:
        if needle in city.name.lower():
            matches.append(city)
            if len(matches) >= limit:
                break
    return matches


def resolve_city(query: str, index: List[CityRecord]) -> CityRecord:
    matches = search_cities(query, index, limit=1)
    if not matches:
        raise CityInputError(f"No city matches '{(query or '').strip()}'")
    return matches[0]

import json
import os

from ..errors import CityInputError
from .logger import log


def read_city_dataset(path: str):
    """
    도시 데이터 파일(JSON)을 읽어 원본 레코드 리스트를 반환
    배열 또는 {"cities": [...]} 형태 모두 허용
    """
    if not os.path.exists(path):
        raise CityInputError(f"Could not load city dataset: {os.path.basename(path)} not found")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise CityInputError(f"Could not load city dataset: {e}") from e

    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("cities"), list):
        return data["cities"]

    log(f"⚠️ 도시 데이터 형식 인식 불가: {type(data).__name__}", level="warning")
    return []

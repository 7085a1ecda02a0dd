class CityWeatherError(Exception):
    """파이프라인에서 사용자에게 그대로 보여줄 수 있는 오류의 공통 부모"""

    status_code = 500


class CityInputError(CityWeatherError):
    """도시 데이터 로드 실패, 검색 결과 없음, 필수 입력 누락"""

    status_code = 400


class WeatherUpstreamError(CityWeatherError):
    """Open-Meteo 응답 실패 (연결 불가, 비정상 상태코드, 타임아웃, 잘못된 본문)"""

    status_code = 502


class ConfigurationError(CityWeatherError):
    """필수 자격 증명이 설정되지 않음. 재시도해도 성공할 수 없다."""

    status_code = 500

import itertools
import threading
from datetime import datetime
from typing import Callable, List, Optional, Union

from dateutil import tz

from ..errors import CityWeatherError
from ..logic.city_index import resolve_city
from ..logic.weather import build_weather_report
from ..models import CityRecord, PipelineState, RunContext, RunResult
from ..services.image_service import ensure_api_key, generate_city_image
from ..utils.logger import log
from ..utils.openmeteo_weather import get_openmeteo_forecast


class PipelineController:
    """
    도시 선택 1회 = run 1회
    Idle → Selecting → FetchingWeather → Summarizing → GeneratingImage → Done (실패 시 Error)

    run마다 증가하는 run_id를 부여하고, 가장 최근에 시작된 run만 상태/결과를 반영한다.
    늦게 끝난 이전 run의 결과는 버린다.
    """

    def __init__(
        self,
        cities: Optional[List[CityRecord]] = None,
        fetch_forecast: Callable[[float, float], dict] = get_openmeteo_forecast,
        generate_image: Callable = generate_city_image,
        check_config: Callable[[], str] = ensure_api_key,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.cities = cities or []
        self.fetch_forecast = fetch_forecast
        self.generate_image = generate_image
        self.check_config = check_config
        self.clock = clock or (lambda: datetime.now(tz.tzutc()))

        self._lock = threading.Lock()
        self._run_ids = itertools.count(1)
        self._current = RunContext(run_id=0)
        self._latest_result: Optional[RunResult] = None

    # ---------------------------------------------------------------- 상태 조회
    def status(self) -> RunContext:
        return self._current

    def latest_result(self) -> Optional[RunResult]:
        return self._latest_result

    def is_current(self, ctx: RunContext) -> bool:
        return ctx.run_id == self._current.run_id

    # ---------------------------------------------------------------- 실행
    def start_run(self) -> RunContext:
        with self._lock:
            ctx = RunContext(run_id=next(self._run_ids))
            self._current = ctx
        return ctx

    def _transition(self, ctx: RunContext, state: PipelineState, message: str = ""):
        ctx.state = state
        ctx.message = message
        ctx.history.append(state)
        if message:
            log(f"[run {ctx.run_id}] {state.value}: {message}")

    def _publish(self, ctx: RunContext, result: RunResult):
        with self._lock:
            if not self.is_current(ctx):
                log(f"⏭ run {ctx.run_id} 결과 폐기 (최신 run {self._current.run_id})", level="warning")
                return
            self._latest_result = result

    def select(self, city: Union[CityRecord, str]) -> RunContext:
        """CityRecord 또는 검색어로 run 1회 실행. 실패해도 예외 대신 Error 상태의 ctx 반환"""
        ctx = self.start_run()
        self._transition(ctx, PipelineState.SELECTING)

        try:
            if not isinstance(city, CityRecord):
                city = resolve_city(city, self.cities)
            ctx.city = city
            self.check_config()

            self._transition(ctx, PipelineState.FETCHING_WEATHER, f"Fetching weather for {city.name}...")
            forecast = self.fetch_forecast(city.lat, city.lon)

            self._transition(ctx, PipelineState.SUMMARIZING, "Summarizing conditions...")
            report = build_weather_report(forecast, self.clock())

            self._transition(ctx, PipelineState.GENERATING_IMAGE, "Generating image...")
            image = self.generate_image(city.name, report.narrative, report.local_time)

            result = RunResult(run_id=ctx.run_id, city=city, report=report, image=image)
        except CityWeatherError as e:
            return self._fail(ctx, e)
        except Exception as e:
            log(f"❌ run {ctx.run_id} 예기치 못한 오류: {e!r}", level="error")
            return self._fail(ctx, e)

        ctx.result = result
        message = ""
        if image.fallback:
            message = f"Note: Using fallback image. Reason: {image.reason or 'unknown'}"
        self._transition(ctx, PipelineState.DONE, message)
        self._publish(ctx, result)
        return ctx

    def _fail(self, ctx: RunContext, err: Exception) -> RunContext:
        ctx.error = str(err) or err.__class__.__name__
        ctx.status_code = getattr(err, "status_code", 500)
        self._transition(ctx, PipelineState.ERROR, ctx.error)
        return ctx

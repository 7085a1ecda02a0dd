from datetime import datetime, tzinfo
from typing import List, Optional

from dateutil import parser, tz


def _as_aware(dt: datetime, zone: Optional[tzinfo]) -> datetime:
    if dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=zone or tz.tzlocal())


def select_slot(times: List[str], reference: datetime, zone: Optional[tzinfo] = None) -> int:
    """
    reference 이후(같은 시각 포함) 가장 가까운 예보 슬롯의 인덱스
    모두 과거이거나 목록이 비어 있으면 0

    오프셋 없는 시각은 zone(예보 지역 시간대) 기준으로 해석
    """
    reference = _as_aware(reference, zone)
    zone = zone or reference.tzinfo

    best_idx = 0
    best_delta = None
    for i, raw in enumerate(times):
        try:
            t = _as_aware(parser.isoparse(raw), zone)
        except (AttributeError, TypeError, ValueError):
            continue
        delta = t - reference
        # 동률이면 앞쪽(더 이른) 슬롯 유지
        if delta.total_seconds() >= 0 and (best_delta is None or delta < best_delta):
            best_delta = delta
            best_idx = i
    return best_idx


def format_local_time(timezone_name: Optional[str], now: Optional[datetime] = None) -> str:
    """예보 지역 기준 현재 시각 "HH:MM" (24시간제). 모르는 시간대면 서버 로컬 시각"""
    now = now or datetime.now(tz.tzutc())
    if now.tzinfo is None:
        now = now.replace(tzinfo=tz.tzlocal())

    zone = tz.gettz(timezone_name) if timezone_name else None
    local = now.astimezone(zone) if zone else now.astimezone(tz.tzlocal())
    return local.strftime("%H:%M")

import atexit
from datetime import datetime
from apscheduler.schedulers.background import BackgroundScheduler

from ..config import IMAGE_FOLDER, IMAGE_TTL_HOURS
from .logger import log
from .storage_utils import delete_expired_images


def scheduled_cleanup(folder: str = IMAGE_FOLDER, ttl_hours: int = IMAGE_TTL_HOURS):
    log(f"🧹 이미지 TTL cleanup 시작 at {datetime.now().isoformat()}")
    try:
        removed = delete_expired_images(ttl_hours, folder)
        log(f"✅ 이미지 TTL cleanup 완료 ({removed}개 삭제)")
    except OSError as e:
        log(f"❌ 이미지 TTL cleanup 실패: {e}", level="error")


def start_scheduler() -> BackgroundScheduler:
    scheduler = BackgroundScheduler()
    scheduler.add_job(scheduled_cleanup, 'interval', hours=1)
    scheduler.start()
    atexit.register(lambda: scheduler.shutdown())
    log("📅 이미지 TTL 스케줄러가 시작되었습니다.")
    return scheduler

# utils/logger.py

import logging

# 로그 포맷 설정
FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
logging.basicConfig(level=logging.INFO, format=FORMAT)

logger = logging.getLogger("cityweather")

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def log(msg, level="info"):
    """
    사용 예:
    log("시작됨")
    log("오류 발생", level="error")
    """
    logger.log(_LEVELS.get(level, logging.INFO), msg)

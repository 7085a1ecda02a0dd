# 📁 utils/storage_utils.py
import os
import re
import time
from datetime import datetime, timedelta

from ..config import IMAGE_FOLDER
from .logger import log

_UNSAFE = re.compile(r"[^a-z0-9-_]+")


def sanitize_city_name(city: str) -> str:
    """소문자화 + [a-z0-9-_] 외 문자열은 '-'로 치환, 40자 제한, 비면 'city'"""
    safe = _UNSAFE.sub("-", str(city).lower())[:40]
    return safe or "city"


def build_image_name(city: str, ext: str) -> str:
    return f"{sanitize_city_name(city)}-{int(time.time() * 1000)}.{ext}"


def save_image(content, file_name: str, folder: str = IMAGE_FOLDER) -> str:
    """folder에 파일 저장 후 public 기준 경로(img/<file>) 반환"""
    os.makedirs(folder, exist_ok=True)
    path = os.path.join(folder, file_name)

    if isinstance(content, str):
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    else:
        with open(path, "wb") as f:
            f.write(content)

    log(f"💾 이미지 저장: {path}")
    return f"img/{file_name}"


def delete_expired_images(ttl_hours: int, folder: str = IMAGE_FOLDER) -> int:
    """ttl_hours 보다 오래된 생성 이미지 삭제, 삭제한 개수 반환"""
    if not os.path.isdir(folder):
        return 0

    cutoff = (datetime.now() - timedelta(hours=ttl_hours)).timestamp()
    removed = 0
    for name in os.listdir(folder):
        if not name.endswith((".png", ".svg")):
            continue
        path = os.path.join(folder, name)
        if os.path.getmtime(path) < cutoff:
            os.remove(path)
            removed += 1
    return removed

import base64
import binascii
from typing import Optional
from urllib.parse import quote

import requests

from .. import config
from ..assemblers.prompt_assembler import assemble_image_prompt
from ..errors import CityInputError, ConfigurationError
from ..models import Fallback, Generated, ImageResult
from ..utils.logger import log
from ..utils.storage_utils import build_image_name, save_image
from ..utils.svg_poster import render_placeholder_svg

NO_IMAGE_REASON = "No image data from Google GenAI"


def ensure_api_key(api_key: Optional[str] = None) -> str:
    api_key = api_key or config.GOOGLE_API_KEY
    if not api_key:
        raise ConfigurationError(
            "GOOGLE_API_KEY not configured on server. Set it in the environment or .env and restart."
        )
    return api_key


def find_inline_image(data) -> Optional[str]:
    """
    generateContent 응답에서 base64 이미지 추출
    inlineData / inline_data 두 표기 모두 허용
    """
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None

    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    for part in parts or []:
        if not isinstance(part, dict):
            continue
        for key in ("inlineData", "inline_data"):
            inline = part.get(key)
            if isinstance(inline, dict) and inline.get("data"):
                return inline["data"]
    return None


def _request_image(prompt: str, api_key: str, model: str, timeout: float):
    url = f"{config.GOOGLE_API_BASE}/models/{quote(model, safe='')}:generateContent"
    payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
    return requests.post(url, params={"key": api_key}, json=payload, timeout=timeout)


def _fallback(city: str, narrative: str, reason: str, folder: str) -> Fallback:
    log(f"⚠️ 이미지 생성 fallback → 포스터 사용: {reason}", level="warning")
    svg = render_placeholder_svg(city, narrative)
    path = save_image(svg, build_image_name(city, "svg"), folder)
    return Fallback(path=path, reason=reason)


def generate_city_image(
    city: str,
    narrative: str,
    local_time: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    folder: Optional[str] = None,
    timeout: Optional[float] = None,
) -> ImageResult:
    """
    도시 + 날씨 설명 → 이미지 생성 (Google GenAI REST)
    이미지가 없거나 업스트림 실패 시 SVG 포스터로 대체 (Fallback)
    API 키가 없으면 요청 없이 ConfigurationError
    """
    if not city or not narrative:
        raise CityInputError("Missing city or conditions")

    api_key = ensure_api_key(api_key)
    model = model or config.GOOGLE_MODEL
    folder = folder or config.IMAGE_FOLDER
    timeout = timeout or config.IMAGE_TIMEOUT
    prompt = assemble_image_prompt(city, narrative, local_time)

    log(f"🎨 이미지 생성 요청: {city} ({model})")
    try:
        res = _request_image(prompt, api_key, model, timeout)
    except requests.Timeout:
        return _fallback(city, narrative, f"Google GenAI request timed out after {timeout}s", folder)
    except requests.RequestException as e:
        return _fallback(city, narrative, f"Google GenAI request failed: {e}", folder)

    if not res.ok:
        return _fallback(city, narrative, f"Google GenAI error ({res.status_code}): {res.text[:200]}", folder)

    try:
        data = res.json()
    except ValueError:
        return _fallback(city, narrative, "Google GenAI returned a malformed response", folder)

    b64 = find_inline_image(data)
    if not b64:
        return _fallback(city, narrative, NO_IMAGE_REASON, folder)

    try:
        content = base64.b64decode(b64, validate=True)
    except (binascii.Error, ValueError):
        return _fallback(city, narrative, "Google GenAI returned undecodable image data", folder)

    path = save_image(content, build_image_name(city, "png"), folder)
    log(f"✅ 이미지 생성 완료: {path}")
    return Generated(path=path)

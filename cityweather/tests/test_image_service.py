import base64
import os
import xml.etree.ElementTree as ET

import pytest
import requests

from cityweather import config
from cityweather.assemblers.prompt_assembler import assemble_image_prompt
from cityweather.errors import CityInputError, ConfigurationError
from cityweather.models import Fallback, Generated
from cityweather.services import image_service
from cityweather.services.image_service import NO_IMAGE_REASON, find_inline_image, generate_city_image
from cityweather.utils.storage_utils import sanitize_city_name
from cityweather.utils.svg_poster import render_placeholder_svg

from .fakes import FakeResponse

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-body"


def image_payload(key="inlineData"):
    data = base64.b64encode(PNG_BYTES).decode("ascii")
    return {"candidates": [{"content": {"parts": [
        {"text": "Here is your image"},
        {key: {"mimeType": "image/png", "data": data}},
    ]}}]}


@pytest.fixture
def posts(monkeypatch):
    """requests.post 대체. 응답은 posts.response 로 지정"""
    class Recorder:
        response = FakeResponse(image_payload())
        calls = []

    def fake_post(url, params=None, json=None, timeout=None):
        Recorder.calls.append({"url": url, "params": params, "json": json, "timeout": timeout})
        if isinstance(Recorder.response, Exception):
            raise Recorder.response
        return Recorder.response

    Recorder.calls = []
    monkeypatch.setattr(image_service.requests, "post", fake_post)
    return Recorder


@pytest.mark.parametrize("key", ["inlineData", "inline_data"])
def test_generated_image_is_saved_as_png(tmp_path, posts, key):
    posts.response = FakeResponse(image_payload(key))
    result = generate_city_image("Paris", "light rain, overcast", "09:30", api_key="test-key", folder=str(tmp_path))

    assert isinstance(result, Generated)
    assert result.fallback is False
    assert result.reason is None
    assert result.path.startswith("img/paris-") and result.path.endswith(".png")
    saved = tmp_path / result.path.split("/", 1)[1]
    assert saved.read_bytes() == PNG_BYTES

    call = posts.calls[0]
    assert ":generateContent" in call["url"]
    assert config.GOOGLE_MODEL in call["url"]
    assert call["params"] == {"key": "test-key"}
    prompt = call["json"]["contents"][0]["parts"][0]["text"]
    assert "Paris" in prompt and "light rain, overcast" in prompt and "09:30" in prompt


def test_no_image_payload_falls_back_to_svg(tmp_path, posts):
    posts.response = FakeResponse({"candidates": [{"content": {"parts": [{"text": "sorry"}]}}]})
    result = generate_city_image("Paris", "light rain, overcast", api_key="k", folder=str(tmp_path))

    assert isinstance(result, Fallback)
    assert result.fallback is True
    assert result.reason == NO_IMAGE_REASON
    assert result.path.endswith(".svg")

    files = os.listdir(tmp_path)
    assert len(files) == 1
    root = ET.parse(tmp_path / files[0]).getroot()
    texts = [el.text for el in root.iter("{http://www.w3.org/2000/svg}text")]
    assert texts == ["Paris", "light rain, overcast"]


def test_upstream_error_status_falls_back(tmp_path, posts):
    posts.response = FakeResponse({"error": {"message": "quota"}}, status_code=429)
    result = generate_city_image("Paris", "clear", api_key="k", folder=str(tmp_path))
    assert result.fallback is True
    assert "429" in result.reason
    assert len(os.listdir(tmp_path)) == 1


@pytest.mark.parametrize("exc", [requests.ConnectionError("down"), requests.Timeout("slow")])
def test_transport_failure_falls_back(tmp_path, posts, exc):
    posts.response = exc
    result = generate_city_image("Paris", "clear", api_key="k", folder=str(tmp_path), timeout=1)
    assert result.fallback is True
    assert result.reason


def test_malformed_body_falls_back(tmp_path, posts):
    posts.response = FakeResponse(None, text="not json")
    result = generate_city_image("Paris", "clear", api_key="k", folder=str(tmp_path))
    assert result.fallback is True
    assert "malformed" in result.reason


def test_bad_base64_falls_back(tmp_path, posts):
    posts.response = FakeResponse({"candidates": [{"content": {"parts": [{"inlineData": {"data": "@@@"}}]}}]})
    result = generate_city_image("Paris", "clear", api_key="k", folder=str(tmp_path))
    assert result.fallback is True


def test_missing_key_is_configuration_error(tmp_path, posts, monkeypatch):
    monkeypatch.setattr(config, "GOOGLE_API_KEY", None)
    with pytest.raises(ConfigurationError, match="GOOGLE_API_KEY"):
        generate_city_image("Paris", "clear", folder=str(tmp_path))
    assert posts.calls == []
    assert os.listdir(tmp_path) == []


def test_missing_city_or_conditions(tmp_path, posts):
    with pytest.raises(CityInputError):
        generate_city_image("", "clear", api_key="k", folder=str(tmp_path))
    with pytest.raises(CityInputError):
        generate_city_image("Paris", "", api_key="k", folder=str(tmp_path))


@pytest.mark.parametrize("data", [None, {}, {"candidates": []}, {"candidates": ["x"]},
                                  {"candidates": [{"content": {"parts": ["x", {"inlineData": {}}]}}]}])
def test_find_inline_image_handles_odd_shapes(data):
    assert find_inline_image(data) is None


@pytest.mark.parametrize("city, expected", [
    ("Paris", "paris"),
    ("São Paulo", "s-o-paulo"),
    ("New_York-City", "new_york-city"),
    ("", "city"),
    ("x" * 60, "x" * 40),
])
def test_sanitize_city_name(city, expected):
    assert sanitize_city_name(city) == expected


def test_placeholder_escapes_text():
    svg = render_placeholder_svg("A & B <x>", "rain \"heavy\"")
    root = ET.fromstring(svg.encode("utf-8"))
    texts = [el.text for el in root.iter("{http://www.w3.org/2000/svg}text")]
    assert texts == ["A & B <x>", "rain \"heavy\""]


def test_prompt_time_clause_is_optional():
    with_time = assemble_image_prompt("Paris", "clear", "21:05")
    without = assemble_image_prompt("Paris", "clear")
    assert with_time.endswith("Time of day: 21:05 (local).")
    assert "Time of day" not in without
    assert without.startswith("Create a high-quality, photorealistic image of Paris")

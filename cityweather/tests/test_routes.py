import pytest

from cityweather import config
from cityweather.app import create_app, load_city_index
from cityweather.controllers.pipeline_controller import PipelineController
from cityweather.logic.city_index import load_cities
from cityweather.models import Generated

from .fakes import hourly_forecast

CITIES = load_cities([
    {"name": "Paris", "country": "FR", "lat": 48.8566, "lon": 2.3522},
    {"name": "Parma", "country": "IT", "lat": 44.8, "lon": 10.33},
    {"name": "Oslo", "country": "NO", "lat": 59.91, "lon": 10.75},
])


@pytest.fixture
def client(paris_morning):
    controller = PipelineController(
        cities=CITIES,
        fetch_forecast=lambda lat, lon: hourly_forecast(weather_code=61, cloud_cover=80),
        generate_image=lambda city, narrative, local_time: Generated(path="img/paris-1.png"),
        check_config=lambda: "test-key",
        clock=lambda: paris_morning,
    )
    app = create_app(cities=CITIES, controller=controller, with_scheduler=False)
    return app.test_client()


def test_city_search(client):
    res = client.get("/api/cities?q=par")
    assert res.status_code == 200
    assert [c["name"] for c in res.get_json()["results"]] == ["Paris", "Parma"]

    res = client.get("/api/cities?q=")
    assert res.get_json()["results"] == []


def test_city_search_reports_dataset_error(paris_morning):
    app = create_app(cities=[], with_scheduler=False)
    app.config["CITY_ERROR"] = "Could not load city dataset: cities500.json not found"
    res = app.test_client().get("/api/cities?q=par")
    assert res.status_code == 503
    assert "cities500.json" in res.get_json()["error"]


def test_run_by_query(client):
    res = client.post("/api/runs", json={"query": "Paris"})
    assert res.status_code == 200
    body = res.get_json()
    assert body["status"] == "ok"
    assert body["result"]["narrative"] == "light rain, overcast"
    assert body["result"]["city_line"] == "Paris, FR, 15.0°C (59.0°F)"
    assert body["result"]["image"] == {"path": "img/paris-1.png", "fallback": False, "reason": None}
    assert body["run"]["state"] == "done"

    latest = client.get("/api/runs/latest").get_json()
    assert latest["result"]["city"]["name"] == "Paris"
    assert latest["run"]["state"] == "done"


def test_run_by_city_record(client):
    res = client.post("/api/runs", json={"name": "Oslo", "country": "NO", "lat": 59.91, "lon": 10.75})
    assert res.status_code == 200
    assert res.get_json()["result"]["city"]["name"] == "Oslo"


def test_run_errors(client):
    res = client.post("/api/runs", json={})
    assert res.status_code == 400

    res = client.post("/api/runs", json={"query": "Atlantis"})
    assert res.status_code == 400
    body = res.get_json()
    assert body["status"] == "fail"
    assert "Atlantis" in body["error"]
    assert body["run"]["state"] == "error"


def test_latest_before_any_run(client):
    body = client.get("/api/runs/latest").get_json()
    assert body["result"] is None
    assert body["run"]["state"] == "idle"


def test_env_check_masks_key(client, monkeypatch):
    monkeypatch.setattr(config, "GOOGLE_API_KEY", "abcdef1234567890wxyz")
    res = client.get("/api/env-check")
    body = res.get_json()
    assert res.headers["Cache-Control"] == "no-store"
    assert body["hasGoogleKey"] is True
    assert body["googleKey"] == "abcdef…wxyz (len=20)"
    assert "1234567890" not in str(body)


def test_generated_images_are_served(client, tmp_path, monkeypatch):
    monkeypatch.setattr(config, "IMAGE_FOLDER", str(tmp_path))
    (tmp_path / "paris-1.svg").write_text("<svg/>", encoding="utf-8")
    res = client.get("/img/paris-1.svg")
    assert res.status_code == 200
    assert res.data == b"<svg/>"


def test_load_city_index_missing_file(tmp_path):
    cities, error = load_city_index(str(tmp_path / "missing.json"))
    assert cities == []
    assert "not found" in error

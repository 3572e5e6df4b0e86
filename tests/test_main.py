import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import krugerville_payload, make_client
from weatherapp.main import app, get_settings
from weatherapp.repository import OpenWeatherRepository
from weatherapp.state import WeatherViewModel
from weatherapp.use_cases import GetWeatherByCity, GetWeatherByLocation


@pytest.fixture
def upstream():
    calls = []
    responses = {}

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        status_code, body = responses.get(request.url.params.get("q"), (200, krugerville_payload()))
        return httpx.Response(status_code, json=body)

    handler.calls = calls
    handler.responses = responses
    return handler


@pytest.fixture
def client(monkeypatch, tmp_path, upstream):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "test-key")
    monkeypatch.setenv("PREFERENCES_PATH", str(tmp_path / "prefs.json"))
    get_settings.cache_clear()

    with TestClient(app) as test_client:
        repository = OpenWeatherRepository(client=make_client(upstream))
        app.state.view_model = WeatherViewModel(
            get_weather_by_city=GetWeatherByCity(repository),
            get_weather_by_location=GetWeatherByLocation(repository),
            last_city_store=app.state.last_city_store,
        )
        yield test_client

    get_settings.cache_clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_initial_state(client):
    assert client.get("/state").json() == {"weather": None, "is_loading": False, "error": None}


def test_search_returns_weather_and_remembers_city(client):
    resp = client.post("/search", json={"city": "  Krugerville "})

    assert resp.status_code == 200
    assert resp.json() == {
        "weather": {
            "city": "Krugerville",
            "temperature": 8.7,
            "description": "clear sky",
            "icon_url": "https://openweathermap.org/img/wn/01d@2x.png",
        },
        "is_loading": False,
        "error": None,
    }
    assert client.get("/last-city").json() == {"city": "Krugerville"}


@pytest.mark.parametrize("city", ["", "   ", "A", "London,UK"])
def test_invalid_search_is_rejected_before_fetching(client, upstream, city):
    resp = client.post("/search", json={"city": city})

    assert resp.status_code == 422
    assert upstream.calls == []


def test_search_failure_is_reported_in_state(client, upstream):
    upstream.responses["Atlantis"] = (404, {"cod": "404", "message": "city not found"})

    body = client.post("/search", json={"city": "Atlantis"}).json()

    assert body["weather"] is None
    assert body["error"] == {"kind": "city_not_found", "message": "Location not found", "code": 404}
    assert client.get("/last-city").json() == {"city": None}


def test_location_flow(client, upstream):
    body = client.post("/location", json={"latitude": 33.28, "longitude": -96.99}).json()

    assert body["weather"]["city"] == "Krugerville"
    assert upstream.calls[0].url.params["lat"] == "33.28"
    assert client.get("/last-city").json() == {"city": None}


def test_location_out_of_range_is_rejected(client, upstream):
    resp = client.post("/location", json={"latitude": 91, "longitude": 0})

    assert resp.status_code == 422
    assert upstream.calls == []


def test_permission_denied_then_clear_error(client):
    body = client.post("/location/permission-denied").json()
    assert body["error"]["kind"] == "permission_denied"
    assert body["is_loading"] is False

    body = client.delete("/state/error").json()
    assert body["error"] is None


def test_load_last_city(client, upstream):
    client.post("/search", json={"city": "Krugerville"})
    client.delete("/last-city")
    assert client.post("/last-city/load").json()["weather"]["city"] == "Krugerville"
    assert len(upstream.calls) == 1

    app.state.last_city_store.save("Oslo")
    client.post("/last-city/load")

    assert upstream.calls[-1].url.params["q"] == "Oslo"


def test_search_succeeds_when_preferences_cannot_be_written(client, tmp_path):
    (tmp_path / "prefs.json").mkdir()

    resp = client.post("/search", json={"city": "Krugerville"})

    assert resp.status_code == 200
    assert resp.json()["weather"]["city"] == "Krugerville"
    assert resp.json()["error"] is None

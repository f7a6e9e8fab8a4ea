from fastapi.testclient import TestClient

from weather_proxy.domains.weather.router import get_weather_service
from weather_proxy.domains.weather.schemas import RegionWeather
from weather_proxy.main import app


class StubService:
    def __init__(self):
        self.hours = []

    async def get_weather(self, hour=None):
        self.hours.append(hour)
        return {
            "서울특별시": RegionWeather(temperature="21", humidity="60", base_time="1330"),
        }

    async def get_available_hours(self):
        return [9, 14]


def _build_client(service):
    app.dependency_overrides[get_weather_service] = lambda: service
    return TestClient(app)


def teardown_function():
    app.dependency_overrides.clear()


def test_all_weather_uses_frontend_keys():
    service = StubService()
    client = _build_client(service)

    response = client.get("/api/weather/all", params={"hour": 14})

    assert response.status_code == 200
    assert response.json() == {
        "서울특별시": {"tmp": "21", "hum": "60", "rain": None, "wind": None, "baseTime": "1330"},
    }
    assert service.hours == [14]


def test_all_weather_defaults_to_now():
    service = StubService()
    client = _build_client(service)

    assert client.get("/api/weather/all").status_code == 200
    assert service.hours == [None]


def test_invalid_hour_is_rejected():
    client = _build_client(StubService())

    response = client.get("/api/weather/all", params={"hour": 25})

    assert response.status_code == 422
    assert response.json()["status"] == "fail"


def test_available_hours():
    client = _build_client(StubService())

    response = client.get("/api/weather/available-hours")

    assert response.status_code == 200
    assert response.json() == [9, 14]


def test_health_check():
    client = TestClient(app)

    assert client.get("/").json()["status"] == "ok"

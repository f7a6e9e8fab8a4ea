import json
import logging
from datetime import datetime

from fastapi.testclient import TestClient

from weather_proxy.core.logger import JsonFormatter
from weather_proxy.domains.weather.router import get_weather_service
from weather_proxy.main import app


def _record(level=logging.INFO, **extra):
    record = logging.LogRecord("weather_proxy.test", level, __file__, 10, "저장", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_includes_region_fields():
    observed_at = datetime(2026, 10, 19, 14, 0)

    line = json.loads(JsonFormatter().format(_record(region="서울특별시", observed_at=observed_at, attempt=0)))

    assert line["message"] == "저장"
    assert line["region"] == "서울특별시"
    assert line["observed_at"] == str(observed_at)
    assert line["attempt"] == "0"
    assert "location" not in line


def test_formatter_adds_location_for_errors():
    line = json.loads(JsonFormatter().format(_record(level=logging.ERROR)))

    assert line["location"].endswith(":10")
    assert "region" not in line


class EmptyService:
    async def get_weather(self, hour=None):
        return {}


def test_access_log_records_query(caplog):
    app.dependency_overrides[get_weather_service] = lambda: EmptyService()
    try:
        with caplog.at_level(logging.INFO, logger="api_monitor"):
            TestClient(app).get("/api/weather/all", params={"hour": 14})
            TestClient(app).get("/api/weather/all", params={"hour": 99})
    finally:
        app.dependency_overrides.clear()

    success = [r.getMessage() for r in caplog.records if r.getMessage().startswith("SUCCESS")]
    assert any("/api/weather/all" in msg and "'hour': '14'" in msg for msg in success)

    failures = [json.loads(r.getMessage()) for r in caplog.records
                if r.levelno == logging.WARNING and r.name == "api_monitor"]
    assert failures[-1]["status"] == 422
    assert failures[-1]["query"] == {"hour": "99"}

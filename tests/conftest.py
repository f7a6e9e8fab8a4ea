import os

# 설정 객체가 만들어지기 전에 테스트용 환경 변수 지정
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATA_API_KEY", "test-key")

from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from weather_proxy.core.database import create_tables
from weather_proxy.domains.weather.models import ForecastRecord
from weather_proxy.domains.weather.schemas import FallbackResult, ObservationAttributes


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'weather.db'}")
    await create_tables(engine)
    try:
        yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await engine.dispose()


class FakeResponse:
    def __init__(self, json_data=None, status_code=200, text=None):
        self._json = json_data
        self.status_code = status_code
        self.text = text

    def json(self):
        if self._json is None:
            raise ValueError("not json")
        return self._json


class FakeSession:
    """requests.Session 대체. 호출 기록을 남기고 준비된 응답을 순서대로 돌려준다"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        outcome = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeFetcher:
    """지역 이름 -> FallbackResult (또는 예외) 매핑으로 동작하는 fetcher"""

    def __init__(self, outcomes=None):
        self.outcomes = outcomes or {}
        self.calls = []

    async def fetch_with_fallback(self, location, target, max_attempts=None):
        self.calls.append((location.name, target))
        outcome = self.outcomes.get(location.name)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_payload(items, result_code="00"):
    return {
        "response": {
            "header": {"resultCode": result_code, "resultMsg": "NORMAL_SERVICE"},
            "body": {"items": {"item": items}},
        }
    }


def make_item(category, value, fcst_time="1400", fcst_date="20261019"):
    return {
        "baseDate": fcst_date,
        "baseTime": "1330",
        "category": category,
        "fcstDate": fcst_date,
        "fcstTime": fcst_time,
        "fcstValue": value,
        "nx": 60,
        "ny": 127,
    }


def make_fallback(observed_at: datetime, temperature="21", issued_at=None, **attrs):
    return FallbackResult(
        attributes=ObservationAttributes(temperature=temperature, **attrs),
        issued_at=issued_at or observed_at.replace(hour=(observed_at.hour - 1) % 24, minute=30),
        observed_at=observed_at,
    )


async def seed_record(session_factory, location, observed_at, temperature="10"):
    async with session_factory() as db:
        db.add(ForecastRecord(
            region=location.name,
            nx=location.nx,
            ny=location.ny,
            observed_at=observed_at,
            temperature=temperature,
            humidity="50",
            recorded_at=datetime.now(),
        ))
        await db.commit()

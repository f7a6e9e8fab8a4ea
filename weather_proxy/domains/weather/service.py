# weather_proxy/domains/weather/service.py

import asyncio
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from weather_proxy.core.database import AsyncSessionLocal
from weather_proxy.core.exceptions import PersistenceConflict
from weather_proxy.domains.weather.fetcher import FallbackFetcher
from weather_proxy.domains.weather.models import ForecastRecord
from weather_proxy.domains.weather.repository import WeatherRepository, weather_repository
from weather_proxy.domains.weather.schemas import FallbackResult, RegionWeather
from weather_proxy.utils.location import LOCATIONS, Location

logger = logging.getLogger(__name__)


class WeatherService:
    """
    DB 캐시를 먼저 보고, 빠진 지역만 API(fallback)로 채운 뒤 새 레코드를 저장한다.
    같은 (지역, 예보시각) 레코드는 한 번만 저장된다.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker = AsyncSessionLocal,
        fetcher: FallbackFetcher = None,
        locations: Iterable[Location] = LOCATIONS,
        repository: WeatherRepository = weather_repository,
    ):
        self.session_factory = session_factory
        self.fetcher = fetcher or FallbackFetcher()
        self.locations = tuple(locations)
        self.repository = repository

    @staticmethod
    def resolve_target_time(hour: Optional[int] = None, now: datetime = None) -> datetime:
        """hour 가 있으면 오늘 해당 정각, 없으면 현재 시각의 정각"""
        now = now or datetime.now()
        if hour is not None:
            if not 0 <= hour <= 23:
                raise ValueError(f"hour 는 0~23 이어야 합니다: {hour}")
            now = now.replace(hour=hour)
        return now.replace(minute=0, second=0, microsecond=0)

    async def get_weather(self, hour: Optional[int] = None) -> Dict[str, RegionWeather]:
        target = self.resolve_target_time(hour)

        # 1. DB 조회: 해당 정각 데이터
        results = await self._load_cached(target)

        # 모든 지역 데이터가 DB에 있으면 API 호출 없이 반환
        missing = [loc for loc in self.locations if loc.name not in results]
        if not missing:
            logger.info(f"DB 캐시 사용: {target:%Y-%m-%d %H시}")
            return results

        # 2. 빠진 지역만 API 호출 (지역별로 독립적이므로 동시에)
        logger.info(f"{target:%Y-%m-%d %H시} 데이터 {len(missing)}개 지역 누락, API 호출...")
        fetched = await asyncio.gather(
            *(self.fetcher.fetch_with_fallback(loc, target) for loc in missing),
            return_exceptions=True,
        )

        # 3. 결과 반영 및 저장 (한 지역 실패가 다른 지역에 영향 없음)
        for location, outcome in zip(missing, fetched):
            if isinstance(outcome, Exception):
                logger.error(f"❌ {location.name} 조회 실패: {outcome}", exc_info=outcome)
                continue
            if outcome is None:
                continue

            results[location.name] = RegionWeather(
                **outcome.attributes.model_dump(),
                base_time=outcome.issued_at.strftime("%H%M"),
            )
            try:
                await self._persist(location, outcome, target)
            except Exception:
                logger.exception(f"❌ {location.name} 저장 실패")

        return results

    async def get_available_hours(self, since: datetime = None) -> List[int]:
        since = since or datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
        async with self.session_factory() as db:
            return await self.repository.find_distinct_observed_hours(db, since)

    async def _load_cached(self, target: datetime) -> Dict[str, RegionWeather]:
        known = {loc.name for loc in self.locations}
        async with self.session_factory() as db:
            records = await self.repository.find_all(db, target)

        results = {}
        for record in records:
            if record.region not in known:
                continue
            results[record.region] = RegionWeather(
                temperature=record.temperature,
                humidity=record.humidity,
                precipitation=record.precipitation,
                wind_speed=record.wind_speed,
                base_time=record.observed_at.strftime("%H%M"),
            )
        return results

    async def _persist(self, location: Location, outcome: FallbackResult, target: datetime) -> bool:
        """저장했으면 True. 예보시각이 요청 시각과 다르거나 이미 있으면 False"""
        observed_at = outcome.observed_at
        if observed_at is None or observed_at.hour != target.hour:
            logger.info(f"{location.name}: 요청 {target:%H}시와 다른 예보({observed_at}), 저장 생략")
            return False

        async with self.session_factory() as db:
            if await self.repository.exists(db, location.name, observed_at):
                return False

            attrs = outcome.attributes
            record = ForecastRecord(
                region=location.name,
                nx=location.nx,
                ny=location.ny,
                observed_at=observed_at,
                temperature=attrs.temperature,
                humidity=attrs.humidity,
                precipitation=attrs.precipitation,
                wind_speed=attrs.wind_speed,
                recorded_at=datetime.now(),
            )
            try:
                await self.repository.save(db, record)
            except PersistenceConflict:
                # 다른 수집 작업이 먼저 저장함
                logger.debug(f"{location.name} {observed_at} 이미 저장됨",
                             extra={"region": location.name, "observed_at": observed_at})
                return False

        logger.info(f"✅ 저장: {location.name} @ {observed_at:%Y-%m-%d %H:%M}",
                    extra={"region": location.name, "observed_at": observed_at})
        return True


weather_service = WeatherService()

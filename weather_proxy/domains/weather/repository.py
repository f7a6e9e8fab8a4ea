# weather_proxy/domains/weather/repository.py

from datetime import datetime
from typing import List
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from weather_proxy.core.exceptions import PersistenceConflict
from weather_proxy.domains.weather.models import ForecastRecord


class WeatherRepository:

    async def exists(self, db: AsyncSession, region: str, observed_at: datetime) -> bool:
        """지역 + 예보시각 중복 여부 확인"""
        result = await db.execute(
            select(func.count())
            .select_from(ForecastRecord)
            .where(
                ForecastRecord.region == region,
                ForecastRecord.observed_at == observed_at
            )
        )
        return (result.scalar() or 0) > 0

    async def find_all(self, db: AsyncSession, observed_at: datetime) -> List[ForecastRecord]:
        """특정 예보시각의 모든 지역 데이터 조회"""
        result = await db.execute(
            select(ForecastRecord)
            .where(ForecastRecord.observed_at == observed_at)
            .order_by(ForecastRecord.id)
        )
        return result.scalars().all()

    async def save(self, db: AsyncSession, record: ForecastRecord) -> ForecastRecord:
        """
        레코드 저장. 동시에 같은 슬롯을 저장하려는 경우 UNIQUE 제약에 걸리며
        PersistenceConflict 로 변환됨
        """
        db.add(record)
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise PersistenceConflict(record.region, record.observed_at) from e
        await db.refresh(record)
        return record

    async def find_distinct_observed_hours(self, db: AsyncSession, since: datetime) -> List[int]:
        """since 이후 저장된 예보시각의 고유한 시(hour) 목록"""
        result = await db.execute(
            select(ForecastRecord.observed_at)
            .where(ForecastRecord.observed_at >= since)
            .distinct()
        )
        return sorted({observed_at.hour for observed_at in result.scalars().all()})


weather_repository = WeatherRepository()

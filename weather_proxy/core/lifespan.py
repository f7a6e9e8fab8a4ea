# weather_proxy/core/lifespan.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from weather_proxy.core.config import settings
from weather_proxy.core.database import engine, create_tables
from weather_proxy.core.scheduler import register_jobs

# [중요] 테이블 생성을 위해 모델을 미리 메모리에 로드해야 합니다.
from weather_proxy.domains.weather.models import ForecastRecord  # noqa: F401

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # [Startup] DB 테이블 자동 생성 (테이블이 없을 때만 생성됨)
    await create_tables()
    logger.info("✅ [Database] 테이블 체크 및 생성 완료")

    if settings.SCHEDULER_ENABLED:
        register_jobs(scheduler)
        scheduler.start()
        logger.info(f"🚀 스케줄러 가동: {settings.COLLECT_INTERVAL_MINUTES}분 주기")

    yield

    # [Shutdown]
    if scheduler.running:
        logger.info("🛑 서버 종료: 스케줄러를 정지합니다.")
        scheduler.shutdown()

    await engine.dispose()

# weather_proxy/core/scheduler.py

import logging
from datetime import datetime
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from weather_proxy.core.config import settings

logger = logging.getLogger(__name__)

JOB_ID = "collect_weather"

# ====================================================
# 10분마다 현재 정각 날씨 수집 (요청 여부와 무관)
# ====================================================
async def collect_weather_job(service=None):
    # 지연 임포트 (순환 참조 방지)
    if service is None:
        from weather_proxy.domains.weather.service import weather_service
        service = weather_service

    logger.info(f"⏰ [Weather Job] 자동 수집 시작: {datetime.now():%Y-%m-%d %H:%M}")
    try:
        results = await service.get_weather()
        logger.info(f"🏁 [Weather Job] 수집 완료: {len(results)}개 지역")
    except Exception:
        # 한 번 실패해도 다음 주기는 계속 실행되어야 함
        logger.exception("❌ [Weather Job] 수집 실패")


def register_jobs(scheduler: AsyncIOScheduler, run_now: bool = True):
    """정각 기준 */N 분 cron 등록. run_now 면 시작 직후 1회 실행"""
    options = {}
    if run_now:
        options["next_run_time"] = datetime.now()

    scheduler.add_job(
        collect_weather_job,
        'cron',
        minute=f"*/{settings.COLLECT_INTERVAL_MINUTES}",
        id=JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        **options,
    )

# weather_proxy/domains/weather/fetcher.py

import logging
from datetime import datetime, timedelta
from typing import Optional

from weather_proxy.core.config import settings
from weather_proxy.core.exceptions import ForecastError
from weather_proxy.domains.weather.client import ForecastClient
from weather_proxy.domains.weather.schemas import FallbackResult
from weather_proxy.utils.location import Location

logger = logging.getLogger(__name__)

# 초단기예보는 매시 30분 발표 (API 제공은 45분 이후)
PUBLICATION_MINUTE = 30
PUBLICATION_OFFSET = timedelta(minutes=30)


def issue_time_for(target: datetime, attempt: int) -> datetime:
    """
    attempt 번째 시도에서 요청할 발표시각.
    target 에서 attempt 시간을 빼고, 직전 HH30 발표분으로 맞춘다.
    예) target 14:00 -> 13:30, 12:30, 11:30 ...
    """
    shifted = target - timedelta(hours=attempt) - PUBLICATION_OFFSET
    if shifted.minute < PUBLICATION_MINUTE:
        shifted -= timedelta(hours=1)
    return shifted.replace(minute=PUBLICATION_MINUTE, second=0, microsecond=0)


class FallbackFetcher:
    """발표시각을 한 시간씩 과거로 당겨가며 target 시각의 예보를 찾는다"""

    def __init__(self, client: ForecastClient = None, max_attempts: int = None):
        self.client = client or ForecastClient()
        self.max_attempts = max_attempts if max_attempts is not None else settings.FETCH_MAX_ATTEMPTS

    async def fetch_with_fallback(self, location: Location, target: datetime,
                                  max_attempts: int = None) -> Optional[FallbackResult]:
        """
        기온(T1H)이 포함된 결과를 찾으면 즉시 반환.
        모든 시도가 실패하면 None (데이터 없음은 정상 결과).
        """
        attempts = self.max_attempts if max_attempts is None else max_attempts
        # 원하는 것은 target 시각의 예보이므로 발표시각과 무관하게 고정
        target_hour = target.strftime("%H00")

        for attempt in range(attempts):
            issued_at = issue_time_for(target, attempt)
            try:
                result = await self.client.fetch_forecast(location, issued_at, target_hour)
            except ForecastError as e:
                # 네트워크 오류와 데이터 없음을 구분하지 않고 이전 발표분으로 재시도
                logger.info(f"{location.name} {issued_at:%Y%m%d %H%M} 조회 실패, 재시도: {e}",
                            extra={"region": location.name, "issued_at": issued_at, "attempt": attempt})
                continue

            if result.attributes.temperature is None:
                continue

            return FallbackResult(
                attributes=result.attributes,
                issued_at=issued_at,
                observed_at=result.forecast_at,
            )

        logger.warning(f"⚠️ {location.name} {target:%Y-%m-%d %H시} 예보 없음 ({attempts}회 시도)")
        return None

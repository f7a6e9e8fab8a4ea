# weather_proxy/domains/weather/schemas.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# 기상청 카테고리 코드 -> 속성 이름
CATEGORY_MAP = {
    "T1H": "temperature",
    "REH": "humidity",
    "RN1": "precipitation",
    "WSD": "wind_speed",
}

class ObservationAttributes(BaseModel):
    """예보 한 건에서 뽑아낸 날씨 값. None 은 '아직 모름'을 뜻함"""
    model_config = ConfigDict(populate_by_name=True)

    temperature: Optional[str] = Field(default=None, alias="tmp")
    humidity: Optional[str] = Field(default=None, alias="hum")
    precipitation: Optional[str] = Field(default=None, alias="rain")
    wind_speed: Optional[str] = Field(default=None, alias="wind")

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in CATEGORY_MAP.values())

class RegionWeather(ObservationAttributes):
    # 프론트엔드 표시용 시각 (HHmm)
    base_time: Optional[str] = Field(default=None, alias="baseTime")

@dataclass(frozen=True)
class ForecastResult:
    """API 응답 한 건의 파싱 결과"""
    attributes: ObservationAttributes
    fcst_date: Optional[str] = None  # "20260101"
    fcst_time: Optional[str] = None  # "1400"

    @property
    def forecast_at(self) -> Optional[datetime]:
        if not self.fcst_date or not self.fcst_time:
            return None
        return datetime.strptime(self.fcst_date + self.fcst_time, "%Y%m%d%H%M")

@dataclass(frozen=True)
class FallbackResult:
    """fallback 조회 성공 결과. 어떤 발표시각으로 받았는지 함께 기록"""
    attributes: ObservationAttributes
    issued_at: datetime
    observed_at: Optional[datetime]

# weather_proxy/domains/weather/models.py

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Index, UniqueConstraint
from weather_proxy.core.database import Base

class ForecastRecord(Base):
    __tablename__ = "weather_history"

    id = Column(Integer, primary_key=True, index=True)
    region = Column(String(50), nullable=False)
    nx = Column(Integer, nullable=False)
    ny = Column(Integer, nullable=False)

    # 예보 대상 시각 (발표시각 아님)
    observed_at = Column(DateTime, nullable=False)

    # 값이 없으면 NULL (알 수 없음). "0" 으로 채우지 않음
    temperature = Column(String(20), nullable=True)    # 기온 (T1H)
    humidity = Column(String(20), nullable=True)       # 습도 (REH)
    precipitation = Column(String(20), nullable=True)  # 1시간 강수량 (RN1)
    wind_speed = Column(String(20), nullable=True)     # 풍속 (WSD)

    # 저장 시각. 최초 INSERT 때만 기록
    recorded_at = Column(DateTime, nullable=False, default=datetime.now)

    # [중요] 지역 + 예보시각이 같으면 중복 저장 금지
    __table_args__ = (
        UniqueConstraint("region", "observed_at", name="uix_weather_region_observed"),
        Index("idx_region_observed", "region", "observed_at"),
    )

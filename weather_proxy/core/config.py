# weather_proxy/core/config.py

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Weather Proxy (기상청 초단기예보)"

    # 데이터베이스 연결 (기본값: 로컬 SQLite)
    DATABASE_URL: str = "sqlite+aiosqlite:///./weather.db"

    # 초단기예보 공공데이터 포털 API키 (인코딩된 키도 허용, client에서 디코딩)
    DATA_API_KEY: str = ""
    FORECAST_BASE_URL: str = "http://apis.data.go.kr/1360000/VilageFcstInfoService_2.0/getUltraSrtFcst"
    FORECAST_NUM_OF_ROWS: int = 1000
    FORECAST_TIMEOUT: float = 10.0  # 초 단위, 모든 API 호출에 적용

    # 발표시각을 1시간씩 당겨가며 재시도하는 최대 횟수
    FETCH_MAX_ATTEMPTS: int = 5

    # 스케줄러 (60의 약수여야 정각 기준으로 정렬됨)
    SCHEDULER_ENABLED: bool = True
    COLLECT_INTERVAL_MINUTES: int = 10

    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:8000"]

    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    class Config:
        env_file = ".env"

settings = Settings()

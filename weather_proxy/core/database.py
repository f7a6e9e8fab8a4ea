# weather_proxy/core/database.py

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from weather_proxy.core.config import settings

# 1. 비동기 엔진 생성
engine = create_async_engine(settings.DATABASE_URL, echo=False)

# 2. 비동기 세션 팩토리 (reconciler 와 API 가 같은 팩토리를 공유)
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)

# 3. 모델들이 상속받을 Base 클래스
Base = declarative_base()

async def create_tables(bind=engine):
    async with bind.begin() as conn:
        # create_all은 동기 함수이므로 run_sync로 실행
        await conn.run_sync(Base.metadata.create_all)

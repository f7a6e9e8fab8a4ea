# weather_proxy/main.py
import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware

from weather_proxy.core.config import settings
from weather_proxy.core.logger import setup_logging
from weather_proxy.core.lifespan import lifespan
from weather_proxy.middleware import APIAccessLoggerMiddleware

from weather_proxy.domains.weather.router import router as weather_router

# 로깅 설정 활성화
setup_logging()
logger = logging.getLogger("api_monitor")

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="기상청 초단기예보 캐싱 프록시 API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(APIAccessLoggerMiddleware)

app.include_router(weather_router, prefix="/api/weather", tags=["Weather"])


@app.get("/")
def health_check():
    return {"status": "ok", "message": "Weather Proxy is Running"}


# ==========================================================
# 전역 에러 핸들러
# ==========================================================

# 1. 예상치 못한 시스템 에러 (500)
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"🛑 [System Error] {request.url} : {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "status": "error",
            "message": "서버 내부 오류가 발생했습니다. 관리자에게 문의해주세요.",
            "path": str(request.url)
        },
    )

# 2. 의도한 에러 (HTTPException)
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": "fail",
            "message": exc.detail,
            "code": exc.status_code
        },
        headers=exc.headers,
    )

# 3. 데이터 형식이 틀렸을 때 (예: hour=25)
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    error_details = exc.errors()
    logger.error(f"❌ VALIDATION_ERROR | {request.url} | Details: {error_details}")

    return JSONResponse(
        status_code=422,
        content={
            "status": "fail",
            "message": "입력 값이 올바르지 않습니다.",
            "details": jsonable_encoder(error_details)
        },
    )
# weather_proxy/middleware.py
import time
import logging
import json
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("api_monitor")

class APIAccessLoggerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        path = request.url.path
        method = request.method
        # ?hour=14 등 조회 조건을 함께 남김
        query = dict(request.query_params)

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            critical_log = {
                "event": "SYSTEM_CRITICAL_ERROR",
                "method": method,
                "path": path,
                "query": query,
                "error_type": type(e).__name__,
                "error_message": str(e),
                "duration": f"{duration:.4f}s"
            }
            logger.error(json.dumps(critical_log, ensure_ascii=False), exc_info=True)

            # 예외를 다시 raise하지 않고 500 응답 (Uvicorn 중복 로그 방지)
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "support_id": f"{time.time()}"}
            )

        duration = time.time() - start_time

        # 400번대 이상 에러
        if response.status_code >= 400:
            error_log = {
                "event": "HTTP_ERROR",
                "status": response.status_code,
                "method": method,
                "path": path,
                "query": query,
                "duration": f"{duration:.4f}s"
            }
            logger.warning(json.dumps(error_log, ensure_ascii=False))
        else:
            logger.info(f"SUCCESS | {method} {path} | query={query} | Time: {duration:.4f}s")

        return response

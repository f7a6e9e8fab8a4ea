import logging
import os
import json
from logging.handlers import TimedRotatingFileHandler
from datetime import datetime

from weather_proxy.core.config import settings

# logger.info(..., extra={"region": ...}) 로 넘긴 값은 JSON 필드로 기록
EXTRA_FIELDS = ("region", "observed_at", "issued_at", "attempt")

class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_record[key] = str(value)
        # 에러 발생 시 파일 위치와 상세 스택 정보 추가
        if record.levelno >= logging.ERROR:
            log_record["location"] = f"{record.pathname}:{record.lineno}"
            if record.exc_info:
                log_record["stack_trace"] = self.formatException(record.exc_info)
        return json.dumps(log_record, ensure_ascii=False, default=str)

_configured = False

def setup_logging(log_dir: str = None, to_file: bool = None):
    global _configured
    if _configured:
        return

    log_dir = log_dir or settings.LOG_DIR
    to_file = settings.LOG_TO_FILE if to_file is None else to_file

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    # 노이즈 발생 라이브러리 로그 레벨을 ERROR로 상향
    logging.getLogger("sqlalchemy.engine").setLevel(logging.ERROR)
    logging.getLogger("apscheduler").setLevel(logging.ERROR)
    logging.getLogger("uvicorn.access").setLevel(logging.ERROR)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    # 파일 핸들러 (운영용: 7일 보관)
    if to_file:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=os.path.join(log_dir, "server.log"),
            when="midnight", interval=1, backupCount=7, encoding="utf-8"
        )
        file_handler.setFormatter(JsonFormatter())
        root_logger.addHandler(file_handler)

    # 콘솔 핸들러 (개발용)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(JsonFormatter())
    root_logger.addHandler(console_handler)

    _configured = True

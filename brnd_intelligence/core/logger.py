import logging
import json
import sys

from brnd_intelligence.core.config import settings


class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_obj = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "func": record.funcName,
        }
        # extra 字段
        for key in ("trace_id", "question", "sql", "raw_response"):
            if hasattr(record, key):
                log_obj[key] = getattr(record, key)

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False, default=str)


def setup_logger():
    logger = logging.getLogger("brnd_intelligence")
    logger.setLevel(settings.LOG_LEVEL)

    # 避免重复添加 handler
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)

    return logger


# 全局单例
logger = setup_logger()

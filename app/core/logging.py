"""
로깅 설정

운영 모드에서는 JSON 한 줄 형식, 개발 모드에서는 사람이 읽기 쉬운 형식으로 출력합니다.
"""

import json
import logging
from datetime import datetime, timezone

# 로그 레코드의 extra 중 JSON 출력에 포함할 키
_EXTRA_KEYS = ("resource", "user_id", "product_id", "item_id", "client_ip", "path")


class JSONFormatter(logging.Formatter):
    """로그 레코드를 JSON 한 줄로 변환하는 포매터"""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            value = record.__dict__.get(key)
            if value is not None:
                log[key] = value
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_format: bool = True) -> None:
    """
    루트 로거를 설정합니다.

    여러 번 호출되어도 핸들러는 하나만 등록됩니다 (테스트에서 앱을 반복 생성하는 경우).

    Args:
        level: 로그 레벨 이름 (DEBUG, INFO, ...)
        json_format: True면 JSON 형식, False면 텍스트 형식
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_shop_api_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._shop_api_handler = True
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
        )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

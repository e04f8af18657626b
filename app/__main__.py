"""
서버 실행 진입점

    python -m app

ENABLE_CLUSTERING=true 이면 CPU 코어 수(또는 WORKERS)만큼 워커 프로세스를 띄웁니다.
워커마다 캐시와 요청 제한 기록을 따로 가지므로, 여러 워커를 쓸 때는 LOCK_BACKEND=redis 로
쓰기 락을 공유해야 합니다.
"""

import logging

import uvicorn

from app.core.config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    workers = settings.worker_count

    if workers > 1 and settings.lock_backend != "redis":
        logger.warning(
            "Running %d workers with process-local locks; concurrent writes from "
            "different workers are not serialized",
            workers,
        )

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        workers=workers,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

"""
상품 이미지 정적 파일 서빙

이미지는 하루 동안 클라이언트 캐시를 허용하고, ETag/Last-Modified 헤더는 보내지 않습니다.
"""

import logging
import os

from starlette.staticfiles import StaticFiles

logger = logging.getLogger(__name__)

IMAGE_CACHE_CONTROL = "public, max-age=86400"


class CachedStaticFiles(StaticFiles):
    """고정 Cache-Control 헤더를 붙이는 StaticFiles"""

    async def check_config(self) -> None:
        # 디렉터리가 없으면 설정 오류(500) 대신 모든 요청을 404 로 처리
        if self.directory is not None and not os.path.isdir(self.directory):
            logger.warning("Images directory %s does not exist", self.directory)
            return
        await super().check_config()

    def file_response(self, *args, **kwargs):
        response = super().file_response(*args, **kwargs)
        for header in ("etag", "last-modified"):
            if header in response.headers:
                del response.headers[header]
        response.headers["Cache-Control"] = IMAGE_CACHE_CONTROL
        return response

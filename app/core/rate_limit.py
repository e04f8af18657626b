"""IP별 요청 횟수 제한 (슬라이딩 윈도우)."""

import math
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class RateLimitDecision:
    """
    요청 허용 여부 판단 결과

    Attributes:
        allowed: 요청 허용 여부
        limit: 윈도우당 최대 요청 수
        remaining: 윈도우 내 남은 요청 수
        reset_after: 가장 오래된 요청이 윈도우에서 빠지기까지 남은 초
    """

    allowed: bool
    limit: int
    remaining: int
    reset_after: float

    @property
    def reset_seconds(self) -> int:
        """헤더용 정수 초 (올림)"""
        return max(0, math.ceil(self.reset_after))


class SlidingWindowRateLimiter:
    """
    키(클라이언트 IP)별로 최근 window_seconds 동안의 요청 시각을 보관하고,
    max_requests 를 넘는 요청을 거부합니다.

    거부된 요청은 기록하지 않으므로 윈도우가 지나면 다시 허용됩니다.
    프로세스 메모리에만 보관하므로 워커 프로세스 간에는 공유되지 않습니다.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def hit(self, key: str) -> RateLimitDecision:
        """
        요청 1회를 기록하고 허용 여부를 반환합니다.

        Args:
            key: 클라이언트 식별자 (IP)

        Returns:
            RateLimitDecision
        """
        now = self.clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)

            hits = self._hits.setdefault(key, deque())
            self._evict(hits, now)

            if len(hits) >= self.max_requests:
                reset_after = hits[0] + self.window_seconds - now
                return RateLimitDecision(False, self.max_requests, 0, reset_after)

            hits.append(now)
            reset_after = hits[0] + self.window_seconds - now
            return RateLimitDecision(
                True, self.max_requests, self.max_requests - len(hits), reset_after
            )

    def reset(self, key: str | None = None) -> None:
        """기록 초기화 (key가 없으면 전체)"""
        with self._lock:
            if key is None:
                self._hits.clear()
            else:
                self._hits.pop(key, None)

    def _sweep(self, now: float) -> None:
        # 윈도우 안에 요청이 없는 클라이언트 기록 삭제
        for key in list(self._hits):
            hits = self._hits[key]
            self._evict(hits, now)
            if not hits:
                del self._hits[key]
        self._last_sweep = now

    def _evict(self, hits: deque[float], now: float) -> None:
        # 윈도우 밖으로 벗어난 요청 제거
        while hits and now - hits[0] >= self.window_seconds:
            hits.popleft()

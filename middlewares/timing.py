import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("report_card.access")


class TimingMiddleware(BaseHTTPMiddleware):
    """응답 헤더 X-Latency-Ms 추가 + 요청 1건당 로그 1줄"""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        request.state.started_at = start
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)
        response.headers["X-Latency-Ms"] = str(latency_ms)
        logger.info(f"{request.method} {request.url.path} → {response.status_code} ({latency_ms}ms)")
        return response

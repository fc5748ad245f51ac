import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from utils.exceptions import ReportCardError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, code: str, message: str, request: Request) -> JSONResponse:
    # TimingMiddleware 가 기록한 시작 시각이 있으면 지연 시간 포함
    started_at = getattr(request.state, "started_at", None)
    latency_ms = int((time.perf_counter() - started_at) * 1000) if started_at is not None else None
    body = ErrorResponse(error=ErrorDetail(code=code, message=message), latency_ms=latency_ms)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def add_error_handlers(app: FastAPI):
    @app.exception_handler(ReportCardError)
    async def report_card_exception_handler(request: Request, exc: ReportCardError):
        return _error_response(exc.status_code, exc.code, exc.message, request)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"처리되지 않은 오류: {request.method} {request.url.path} - {exc}", exc_info=True)
        return _error_response(500, "INTERNAL_ERROR", str(exc), request)

"""
utils/exceptions.py

- 성적표 생성/조회 과정에서 발생하는 도메인 예외 모음
- 각 예외는 HTTP 상태 코드와 에러 코드를 함께 가지며,
  middlewares/error_handler.py 에서 ErrorResponse 형식으로 변환됩니다.
"""

import logging

logger = logging.getLogger(__name__)


class ReportCardError(Exception):
    """성적표 도메인 예외의 기본 클래스"""

    status_code = 500
    code = "REPORT_CARD_ERROR"
    default_message = "An error occurred while processing report cards"

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

        logger.warning(f"{type(self).__name__}: {self.message} - Details: {details}")


class ValidationError(ReportCardError):
    """필수 입력값 누락 등 요청 자체가 잘못된 경우"""

    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class NotFound(ReportCardError):
    """성적 기간/반/학생 명단이 존재하지 않는 경우"""

    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


class GenerationInProgress(ReportCardError):
    """같은 (성적 기간, 반) 범위의 생성이 이미 진행 중인 경우"""

    status_code = 409
    code = "GENERATION_IN_PROGRESS"
    default_message = "Report card generation is already running for this scope"


class GenerationTimeout(ReportCardError):
    """생성 제한 시간 초과 (기존 성적표는 그대로 유지됨)"""

    status_code = 504
    code = "GENERATION_TIMEOUT"
    default_message = "Report card generation timed out"


class PersistenceError(ReportCardError):
    """삭제 후 재생성 트랜잭션 실패 (롤백 완료 상태)"""

    status_code = 500
    code = "PERSISTENCE_ERROR"
    default_message = "Failed to save report cards"

    def __init__(self, message=None, details=None):
        super().__init__(message, details)
        logger.error(f"PersistenceError: {self.message} - rolled back to previous state")

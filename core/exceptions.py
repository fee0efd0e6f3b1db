"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    AzhError (베이스)
    ├── AuthError (인증 관련)
    ├── ConfigError (설정 관련)
    ├── APICallError (ARM REST 호출 실패, 200 이외 응답)
    ├── ResolutionError (계층 해석 관련)
    │   ├── ContentTypeError (JSON이 아닌 응답)
    │   ├── UnsupportedTypeError (지원하지 않는 리소스 타입)
    │   ├── UpdateTargetError (update 대상이 단일 리소스가 아님)
    │   └── HierarchyDepthError (상위 체인 순환 / 최대 깊이 초과)
    └── ExportError (IaC 내보내기)

Usage:
    from core.exceptions import APICallError, is_access_denied

    try:
        payload = client.get_json(path)
    except APICallError as e:
        if is_access_denied(e):
            logger.warning("권한 없음: %s", e.path)
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class AzhError(Exception):
    """azure-hierarchy 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 인증 / 설정
# =============================================================================


class AuthError(AzhError):
    """인증 관련 예외 (토큰 발급 실패, 구독 없음 등)"""

    pass


class ConfigError(AzhError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# ARM REST 호출
# =============================================================================


class APICallError(AzhError):
    """ARM REST 호출 실패 예외

    200 이외의 응답을 받았을 때 발생합니다. 백엔드 에러 페이로드
    (``{"error": {"code": ..., "message": ...}}``)의 code/message를 포함합니다.
    전송 계층 예외(연결 실패 등)는 status_code 0으로 표현합니다.
    """

    def __init__(
        self,
        path: str,
        status_code: int,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        message = f"GET {path} 실패 (HTTP {status_code})"
        if error_code:
            message = f"{message} [{error_code}]"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.path = path
        self.status_code = status_code
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "path": path,
                "status_code": status_code,
                "error_code": error_code,
            }
        )


# =============================================================================
# 계층 해석
# =============================================================================


class ResolutionError(AzhError):
    """계층 해석 관련 예외"""

    def __init__(
        self,
        resource_id: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"해석 오류 [{resource_id}]: {message}"
        super().__init__(full_message, cause)
        self.resource_id = resource_id
        self.details["resource_id"] = resource_id


class ContentTypeError(ResolutionError):
    """JSON이 아닌 응답 (처리 불가)"""

    def __init__(self, path: str, content_type: str):
        super().__init__(path, f"알 수 없는 응답 Content-Type: {content_type or '(없음)'}")
        self.content_type = content_type
        self.details["content_type"] = content_type


class UnsupportedTypeError(ResolutionError):
    """지원하지 않는 리소스 타입에 대한 요청"""

    def __init__(self, resource_id: str, resource_type: str, operation: str):
        super().__init__(resource_id, f"{operation}: 지원하지 않는 타입 '{resource_type}'")
        self.resource_type = resource_type
        self.operation = operation
        self.details.update({"resource_type": resource_type, "operation": operation})


class UpdateTargetError(ResolutionError):
    """update 대상 ID가 단일 리소스로 해석되지 않음"""

    def __init__(self, resource_id: str, item_count: int):
        super().__init__(
            resource_id,
            f"update 대상은 단일 리소스여야 합니다 (조회 결과 {item_count}개)",
        )
        self.item_count = item_count
        self.details["item_count"] = item_count


class HierarchyDepthError(ResolutionError):
    """상위 체인에 순환이 있거나 최대 깊이를 초과함"""

    def __init__(self, resource_id: str, chain: list[str], max_depth: int):
        super().__init__(
            resource_id,
            f"상위 체인 탐색 중단 (최대 깊이 {max_depth}, 경로: {' -> '.join(chain)})",
        )
        self.chain = chain
        self.max_depth = max_depth
        self.details.update({"chain": chain, "max_depth": max_depth})


# =============================================================================
# IaC 내보내기
# =============================================================================


class ExportError(AzhError):
    """IaC 내보내기 파일 쓰기 실패"""

    def __init__(self, path: str, message: str, cause: Optional[Exception] = None):
        super().__init__(f"내보내기 오류 [{path}]: {message}", cause)
        self.path = path
        self.details["path"] = path


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

_ACCESS_DENIED_CODES = {
    "AuthorizationFailed",
    "AuthorizationFailure",
    "Forbidden",
    "LinkedAuthorizationFailed",
}

_NOT_FOUND_CODES = {
    "NotFound",
    "ResourceNotFound",
    "ResourceGroupNotFound",
    "SubscriptionNotFound",
}

_THROTTLING_CODES = {
    "TooManyRequests",
    "SubscriptionRequestsThrottled",
    "TenantRequestsThrottled",
}


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        HTTP 401/403 이거나 권한 관련 ARM 에러 코드이면 True
    """
    if isinstance(error, APICallError):
        return error.status_code in (401, 403) or error.error_code in _ACCESS_DENIED_CODES
    return False


def is_not_found(error: Exception) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인"""
    if isinstance(error, APICallError):
        return error.status_code == 404 or error.error_code in _NOT_FOUND_CODES
    return False


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인"""
    if isinstance(error, APICallError):
        return error.status_code == 429 or error.error_code in _THROTTLING_CODES
    return False


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, APICallError):
        if is_access_denied(error):
            return f"권한이 없습니다. RBAC 역할 할당을 확인하세요. ({error.path})"
        if is_throttling(error):
            return "요청이 너무 많습니다. 잠시 후 다시 시도하세요."
        if is_not_found(error):
            return f"리소스를 찾을 수 없습니다: {error.path}"

    if isinstance(error, AzhError):
        # 커스텀 예외는 이미 포맷팅됨
        return str(error)

    return str(error)

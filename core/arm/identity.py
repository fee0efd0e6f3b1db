"""
core/arm/identity.py - 리소스 ID 분류

ARM 리소스 ID 문자열을 ``<namespace>/<resourceType>`` 타입 태그로 분류합니다.
순서가 있는 패턴 테이블을 위에서부터 적용하며 첫 번째 매치가 이깁니다.

    1. 마지막 /providers/<namespace>/<resourceType> 세그먼트
    2. /resources 로 끝남        -> Microsoft.Resources/resources
    3. /resourceGroups 로 끝남   -> Microsoft.Resources/resourceGroups
    4. /subscriptions 로 끝남    -> Microsoft.Resources/subscriptions
    5. 그 외                     -> "" (알 수 없음)

2~4번은 해당 세그먼트가 마지막 경로 요소일 때만 매치합니다. 즉
``/subscriptions/x/resourceGroups`` 는 3번에 매치하지만
``/subscriptions/x/resourceGroups/y`` 는 매치하지 않습니다.
"""

from __future__ import annotations

import re
from enum import Enum

RESOURCES_TYPE = "Microsoft.Resources/resources"
RESOURCE_GROUPS_TYPE = "Microsoft.Resources/resourceGroups"
SUBSCRIPTIONS_TYPE = "Microsoft.Resources/subscriptions"
MANAGEMENT_GROUPS_TYPE = "Microsoft.Management/managementGroups"
POLICY_DEFINITIONS_TYPE = "Microsoft.Authorization/policyDefinitions"
POLICY_SET_DEFINITIONS_TYPE = "Microsoft.Authorization/policySetDefinitions"
POLICY_ASSIGNMENTS_TYPE = "Microsoft.Authorization/policyAssignments"

_PROVIDERS_MARKER = "/providers/"

# (이름, 패턴, 결과 타입) - 순서가 우선순위
_COLLECTION_RULES: list[tuple[str, re.Pattern[str], str]] = [
    ("resources", re.compile(r"/resources$", re.IGNORECASE), RESOURCES_TYPE),
    ("resourceGroups", re.compile(r"/resourceGroups$", re.IGNORECASE), RESOURCE_GROUPS_TYPE),
    ("subscriptions", re.compile(r"/subscriptions$", re.IGNORECASE), SUBSCRIPTIONS_TYPE),
]

_SUBSCRIPTION_ID = re.compile(r"^/subscriptions/[^/]+/?$", re.IGNORECASE)
_SUBSCRIPTION_TYPE = re.compile(r"/subscriptions$", re.IGNORECASE)


def _last_provider_type(resource_id: str) -> str:
    """마지막 /providers/ 뒤의 <namespace>/<resourceType> (두 요소가 없으면 "")

    앞쪽 /providers/ 세그먼트로 되돌아가지 않습니다.
    """
    index = resource_id.lower().rfind(_PROVIDERS_MARKER)
    if index < 0:
        return ""

    segments = resource_id[index + len(_PROVIDERS_MARKER) :].split("/")
    if len(segments) < 2 or not segments[0] or not segments[1]:
        return ""
    return f"{segments[0]}/{segments[1]}"


def classify_from_id(resource_id: str) -> str:
    """리소스 ID를 타입 태그로 분류

    Args:
        resource_id: ARM 리소스 ID 또는 컬렉션 경로

    Returns:
        ``<namespace>/<resourceType>`` 또는 빈 문자열
    """
    if not resource_id:
        return ""

    provider_type = _last_provider_type(resource_id)
    if provider_type:
        return provider_type

    for _name, pattern, resource_type in _COLLECTION_RULES:
        if pattern.search(resource_id):
            return resource_type

    return ""


def strip_last_segment(resource_id: str) -> str:
    """마지막 경로 요소를 제거한 부모 컬렉션 경로"""
    trimmed = resource_id.rstrip("/")
    index = trimmed.rfind("/")
    return trimmed[:index] if index > 0 else ""


def resource_type_of(resource_id: str) -> str:
    """리소스 ID 자신의 타입 (API 버전 선택용)

    ID 자체가 분류되지 않으면 부모 컬렉션 경로로 다시 분류합니다.
    ``/subscriptions/x`` -> ``Microsoft.Resources/subscriptions``,
    ``/subscriptions/x/resourceGroups/y`` -> ``Microsoft.Resources/resourceGroups``.
    """
    resource_type = classify_from_id(resource_id)
    if resource_type:
        return resource_type
    return classify_from_id(strip_last_segment(resource_id))


def is_subscription_id(resource_id: str) -> bool:
    """구독 수준 ID(/subscriptions/{id})인지 확인"""
    return bool(_SUBSCRIPTION_ID.match(resource_id or ""))


def is_subscription_type(resource_type: str) -> bool:
    """타입 문자열이 구독을 나타내는지 (관리 그룹 하위 구독 타입 포함)"""
    return bool(_SUBSCRIPTION_TYPE.search(resource_type or ""))


def last_segment(resource_id: str) -> str:
    """마지막 ``/`` 부터의 꼬리 세그먼트 (앞의 ``/`` 포함)"""
    trimmed = resource_id.rstrip("/")
    index = trimmed.rfind("/")
    if index < 0:
        return f"/{trimmed}" if trimmed else ""
    return trimmed[index:]


def normalize_type(resource_type: str) -> str:
    """일부 API 버전이 돌려주는 ``/providers/`` 접두어 제거"""
    value = (resource_type or "").strip("/")
    if value.lower().startswith("providers/"):
        value = value[len("providers/") :]
    return value


def same_id(left: str, right: str) -> bool:
    """ARM ID 비교 (대소문자 무시, 후행 ``/`` 무시)"""
    return (left or "").rstrip("/").lower() == (right or "").rstrip("/").lower()


class ResourceKind(Enum):
    """해석 전략 선택에 쓰이는 리소스 종류"""

    MANAGEMENT_GROUP = MANAGEMENT_GROUPS_TYPE
    SUBSCRIPTION = SUBSCRIPTIONS_TYPE
    RESOURCE_GROUP = RESOURCE_GROUPS_TYPE
    POLICY_DEFINITION = POLICY_DEFINITIONS_TYPE
    POLICY_SET_DEFINITION = POLICY_SET_DEFINITIONS_TYPE
    POLICY_ASSIGNMENT = POLICY_ASSIGNMENTS_TYPE
    GENERIC = ""

    @classmethod
    def from_type(cls, resource_type: str) -> ResourceKind:
        """타입 문자열 -> ResourceKind (알 수 없으면 GENERIC)"""
        return _KIND_BY_TYPE.get(normalize_type(resource_type).lower(), cls.GENERIC)


_KIND_BY_TYPE = {kind.value.lower(): kind for kind in ResourceKind if kind.value}

# 관리 그룹 하위에서 추가로 조회하는 정책 관련 자식 타입
POLICY_CHILD_KINDS = (
    ResourceKind.POLICY_DEFINITION,
    ResourceKind.POLICY_SET_DEFINITION,
    ResourceKind.POLICY_ASSIGNMENT,
)

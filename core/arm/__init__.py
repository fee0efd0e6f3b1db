"""
core/arm - Azure 리소스 계층 해석 엔진

관리 그룹 -> 구독 -> 리소스 그룹 -> 리소스 계층을 ARM REST API로 탐색하여
메모리 모델로 만듭니다.

구성 요소:
    - RestClient: ARM GET 전송 계층 (requests)
    - ProviderVersionCache: 리소스 타입별 stable / latest API 버전 캐시
    - classify_from_id: 리소스 ID -> 타입 태그 분류
    - NodeCache: 해석된 노드의 ID 키 캐시
    - HierarchyResolver: 캐시 조회, 조회, 자식/상위 해석, 경로 계산

Example:
    >>> from core.arm import HierarchyResolver
    >>> resolver = HierarchyResolver.create()
    >>> node = resolver.resolve("/subscriptions/xxx/resourceGroups/rg-app")
    >>> [child.name for child in node.children]
"""

from .client import ArmResponse, RestClient
from .identity import ResourceKind, classify_from_id, is_subscription_id, resource_type_of
from .nodes import NodeCache, RebuildResult
from .resolver import HierarchyResolver
from .types import ChildSummary, ProviderVersionEntry, Release, ResourceNode
from .versions import ProviderVersionCache

__all__ = [
    "ArmResponse",
    "ChildSummary",
    "HierarchyResolver",
    "NodeCache",
    "ProviderVersionCache",
    "ProviderVersionEntry",
    "RebuildResult",
    "Release",
    "ResourceKind",
    "ResourceNode",
    "RestClient",
    "classify_from_id",
    "is_subscription_id",
    "resource_type_of",
]

"""
core/arm/strategies.py - 리소스 종류별 자식 / 상위 해석 전략

ResourceKind -> 전략 함수 테이블입니다. 테이블에 없는 종류는 no-op 기본 전략을 사용합니다.

자식 전략:
    MANAGEMENT_GROUP  {id}/descendants + 정책 자식 타입 3종
    SUBSCRIPTION      {id}/resourceGroups
    RESOURCE_GROUP    {id}/resources
    그 외             자식 없음

상위 전략:
    MANAGEMENT_GROUP  properties.details.parent.id
    그 외             상위 없음
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from core.exceptions import APICallError

from .identity import POLICY_CHILD_KINDS, ResourceKind, same_id
from .types import ChildSummary, ResourceNode

if TYPE_CHECKING:
    from .resolver import HierarchyResolver

logger = logging.getLogger(__name__)

ChildrenStrategy = Callable[["HierarchyResolver", ResourceNode], None]
ParentStrategy = Callable[[dict[str, Any]], str]


# =============================================================================
# 자식 전략
# =============================================================================


def management_group_children(resolver: HierarchyResolver, node: ResourceNode) -> None:
    """관리 그룹: 직계 자식 + 전체 하위 목록 + 정책 자식"""
    descendants = [ChildSummary.from_payload(item) for item in resolver.list_collection(node.id, "descendants")]
    node.children = [item for item in descendants if same_id(item.parent_id, node.id)]
    node.linked_resources = descendants

    for kind in POLICY_CHILD_KINDS:
        try:
            resolver.augment_children(node, kind.value)
        except APICallError as e:
            # 해당 타입 추가만 중단
            logger.warning("%s 자식 조회 실패 (%s): %s", kind.value, node.id, e)


def subscription_children(resolver: HierarchyResolver, node: ResourceNode) -> None:
    """구독: 리소스 그룹 목록"""
    node.children = [ChildSummary.from_payload(item) for item in resolver.list_collection(node.id, "resourceGroups")]
    node.linked_resources = []


def resource_group_children(resolver: HierarchyResolver, node: ResourceNode) -> None:
    """리소스 그룹: 리소스 목록"""
    node.children = [ChildSummary.from_payload(item) for item in resolver.list_collection(node.id, "resources")]
    node.linked_resources = []


def no_children(resolver: HierarchyResolver, node: ResourceNode) -> None:
    node.children = []
    node.linked_resources = []


CHILDREN_STRATEGIES: dict[ResourceKind, ChildrenStrategy] = {
    ResourceKind.MANAGEMENT_GROUP: management_group_children,
    ResourceKind.SUBSCRIPTION: subscription_children,
    ResourceKind.RESOURCE_GROUP: resource_group_children,
}


# =============================================================================
# 상위 전략
# =============================================================================


def management_group_parent(payload: dict[str, Any]) -> str:
    """관리 그룹 페이로드의 ``properties.details.parent.id``"""
    properties = payload.get("properties") or {}
    details = properties.get("details") or {}
    parent = details.get("parent") or {}
    return parent.get("id") or ""


def no_parent(payload: dict[str, Any]) -> str:
    return ""


PARENT_STRATEGIES: dict[ResourceKind, ParentStrategy] = {
    ResourceKind.MANAGEMENT_GROUP: management_group_parent,
}


def children_strategy(kind: ResourceKind) -> ChildrenStrategy:
    return CHILDREN_STRATEGIES.get(kind, no_children)


def parent_strategy(kind: ResourceKind) -> ParentStrategy:
    return PARENT_STRATEGIES.get(kind, no_parent)

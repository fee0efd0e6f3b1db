"""
core/arm/resolver.py - 리소스 계층 해석기

리소스 ID 하나를 받아 완전히 해석된 ResourceNode를 만듭니다.

단계 (각 단계는 독립적으로 실패할 수 있음):
    1. Lookup     NodeCache에 있으면 사본 반환 (종료)
    2. Fetch      {id}?api-version=<stable> 조회, 200 이외는 APICallError
    3. Default    id/type/name/properties 복사, 나머지는 extended_properties
    4. Provider   ProviderVersionCache에서 프로바이더 조회
    5. Children   종류별 자식 전략
    6. Parent     종류별 상위 전략 (관리 그룹만)
    7. Ancestors  상위 체인 탐색 (상위 노드마다 전체 해석, 실패 시 상위 없음)
    8. Paths      parent_path / resource_path 계산
    9. Register   같은 ID가 없을 때만 NodeCache에 등록

단일 스레드, 깊이 우선, 재시도 없음. 상위 체인 순환이나 최대 깊이 초과는
HierarchyDepthError로 보고됩니다.

Example:
    >>> resolver = HierarchyResolver.create()
    >>> node = resolver.resolve("/providers/Microsoft.Management/managementGroups/mg-b")
    >>> node.parents
    ['/providers/Microsoft.Management/managementGroups/root', '/providers/Microsoft.Management/managementGroups/mg-a']
    >>> node.resource_path
    '/root/mg-a/mg-b'
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from core.config import get_max_parent_depth
from core.exceptions import AzhError, HierarchyDepthError, UnsupportedTypeError, UpdateTargetError

from .client import RestClient
from .identity import (
    POLICY_CHILD_KINDS,
    ResourceKind,
    classify_from_id,
    is_subscription_id,
    last_segment,
    normalize_type,
    resource_type_of,
    same_id,
)
from .nodes import NodeCache, RebuildResult
from .strategies import children_strategy, parent_strategy
from .types import ChildSummary, ResourceNode
from .versions import ProviderVersionCache

logger = logging.getLogger(__name__)

DEFAULT_FIELDS = ("id", "type", "name", "properties")


class HierarchyResolver:
    """리소스 계층 해석기

    REST 클라이언트와 두 캐시를 명시적으로 소유합니다.

    Args:
        client: ARM REST 클라이언트
        versions: API 버전 캐시
        nodes: 노드 캐시 (None이면 새로 생성)
        max_depth: 상위 체인 / 재귀 해석 최대 깊이
    """

    def __init__(
        self,
        client: RestClient,
        versions: ProviderVersionCache,
        nodes: NodeCache | None = None,
        max_depth: int | None = None,
    ):
        self.client = client
        self.versions = versions
        self.nodes = nodes if nodes is not None else NodeCache()
        self.max_depth = max_depth if max_depth is not None else get_max_parent_depth()
        self._in_progress: list[str] = []

    @classmethod
    def create(cls, subscription_id: str | None = None, credential: Any = None) -> HierarchyResolver:
        """기본 구성 요소로 해석기 생성

        Args:
            subscription_id: 기본 구독 (None이면 환경변수/설정/첫 구독)
            credential: azure-identity 자격증명 (None이면 DefaultAzureCredential)
        """
        from core.auth import SubscriptionResolver, TokenProvider

        client = RestClient(token_provider=TokenProvider(credential))
        subscriptions = SubscriptionResolver(client, subscription_id)
        return cls(client, ProviderVersionCache(client, subscriptions))

    # =========================================================================
    # 공개 API
    # =========================================================================

    def resolve(self, resource_id: str, use_cache: bool = True) -> ResourceNode:
        """리소스 ID를 해석하여 노드 사본 반환

        Args:
            resource_id: ARM 리소스 ID
            use_cache: False면 캐시 조회를 건너뛰고 새로 해석한 노드를 반환
                (캐시 등록은 insert-if-absent, 기존 항목은 그대로)

        Raises:
            APICallError: 노드 자체 조회 실패
            HierarchyDepthError: 상위 체인 순환 / 최대 깊이 초과
        """
        if use_cache:
            cached = self.nodes.search(resource_id)
            if cached is not None:
                logger.debug("캐시 적중: %s", resource_id)
                return cached

        node = self._resolve_fresh(resource_id)
        if not self.nodes.add(node):
            logger.debug("캐시 항목 유지, 새로 해석한 노드만 반환: %s", node.id)
        return copy.deepcopy(node)

    def update(self, resource_id: str) -> ResourceNode:
        """캐시를 무시하고 다시 해석하여 캐시 항목 교체

        Raises:
            UpdateTargetError: 조회 결과가 단일 리소스가 아닌 경우
        """
        payload = self.fetch(resource_id)
        values = payload.get("value")
        if isinstance(values, list):
            if len(values) != 1:
                logger.error("update 대상이 단일 리소스가 아님: %s (%d개)", resource_id, len(values))
                raise UpdateTargetError(resource_id, len(values))
            payload = values[0]

        node = self._resolve_fresh(resource_id, payload)
        self.nodes.replace(node)
        logger.info("노드 갱신: %s", node.id)
        return self.nodes.search(node.id) or node

    def rebuild_all(self) -> RebuildResult:
        """노드 캐시 전체 재구성"""
        return self.nodes.rebuild_all(self.resolve)

    def add_children_by_type(self, resource_id: str, child_type: str) -> ResourceNode:
        """노드에 특정 타입의 자식을 추가 (추가만, 제거 없음)

        Args:
            resource_id: 대상 노드 ID
            child_type: 정책 자식 타입 (policyDefinitions / policySetDefinitions / policyAssignments)

        Raises:
            UnsupportedTypeError: 지원하지 않는 자식 타입
            APICallError: 자식 목록 조회 실패
        """
        self._check_child_type(resource_id, child_type)
        self.resolve(resource_id)

        entry = self.nodes.get_entry(resource_id)
        if entry is None:
            # resolve 직후이므로 도달하지 않음
            raise AzhError(f"캐시에 노드가 없습니다: {resource_id}")

        self.augment_children(entry, child_type)
        return self.nodes.search(resource_id) or entry

    def get_parent(self, resource_id: str) -> str:
        """상위 노드 ID (해당 노드를 먼저 완전히 해석)

        해석 실패(권한 없음 등)는 경고 후 "" 로 처리합니다.
        순환 / 깊이 초과는 그대로 전파합니다.
        """
        try:
            ancestor = self.resolve(resource_id)
        except HierarchyDepthError:
            raise
        except AzhError as e:
            logger.warning("상위 노드 해석 실패, 상위 없음으로 처리: %s (%s)", resource_id, e)
            return ""
        return ancestor.parent

    # =========================================================================
    # REST 헬퍼 (전략에서 사용)
    # =========================================================================

    def fetch(self, resource_id: str) -> dict[str, Any]:
        """리소스 원본 페이로드 조회"""
        version = self.versions.get_version(resource_type_of(resource_id))
        return self.client.get_json(f"{resource_id}?api-version={version}")

    def list_collection(self, resource_id: str, collection: str) -> list[dict[str, Any]]:
        """``{id}/{collection}`` 목록 조회"""
        path = f"{resource_id.rstrip('/')}/{collection}"
        version = self.versions.get_version(classify_from_id(path))
        return self.client.list_values(f"{path}?api-version={version}")

    def augment_children(self, node: ResourceNode, child_type: str) -> int:
        """``{id}/providers/{type}`` 결과를 children / linked_resources에 추가

        children에는 아직 없고 ``{node.id}/providers/{type}/`` 범위 안에 있는 항목만,
        linked_resources에는 아직 없는 항목을 추가합니다.

        Returns:
            children에 추가된 항목 수
        """
        self._check_child_type(node.id, child_type)

        path = f"{node.id.rstrip('/')}/providers/{child_type}"
        items = self.client.list_values(f"{path}{self.versions.get_version_params(child_type)}")
        scope = f"{path}/".lower()

        added = 0
        for item in items:
            summary = ChildSummary.from_payload(item)
            if not summary.id:
                continue
            if not node.has_child(summary.id) and summary.id.lower().startswith(scope):
                node.children.append(summary)
                added += 1
            if not node.has_linked(summary.id):
                node.linked_resources.append(summary)

        logger.debug("%s 자식 %d개 추가: %s", child_type, added, node.id)
        return added

    # =========================================================================
    # 내부 단계
    # =========================================================================

    def _check_child_type(self, resource_id: str, child_type: str) -> None:
        if ResourceKind.from_type(child_type) not in POLICY_CHILD_KINDS:
            logger.error("지원하지 않는 자식 타입: %s (%s)", child_type, resource_id)
            raise UnsupportedTypeError(resource_id, child_type, "add_children_by_type")

    def _resolve_fresh(self, resource_id: str, payload: dict[str, Any] | None = None) -> ResourceNode:
        """캐시를 보지 않고 2~8단계 수행 (재귀 깊이 / 순환 감시)"""
        if any(same_id(resource_id, other) for other in self._in_progress):
            raise HierarchyDepthError(resource_id, [*self._in_progress, resource_id], self.max_depth)
        # 진행 중 스택 길이 = 현재 노드까지의 상위 수 (_walk_parents와 같은 기준)
        if len(self._in_progress) > self.max_depth:
            raise HierarchyDepthError(resource_id, [*self._in_progress, resource_id], self.max_depth)

        self._in_progress.append(resource_id)
        try:
            if payload is None:
                payload = self.fetch(resource_id)
            node = self._build(resource_id, payload)
        finally:
            self._in_progress.pop()

        logger.info("노드 해석 완료: %s (%s)", node.resource_path, node.type)
        return node

    def _build(self, requested_id: str, payload: dict[str, Any]) -> ResourceNode:
        resource_id = payload.get("id") or requested_id
        resource_type = payload.get("type") or resource_type_of(resource_id)

        if is_subscription_id(resource_id):
            name = payload.get("displayName") or payload.get("name") or ""
        else:
            name = payload.get("name") or ""
        if not name:
            name = last_segment(resource_id).lstrip("/")

        node = ResourceNode(
            id=resource_id,
            type=resource_type,
            name=name,
            properties=payload.get("properties") or {},
            extended_properties={k: v for k, v in payload.items() if k not in DEFAULT_FIELDS},
        )
        node.provider = self._resolve_provider(resource_type)

        kind = ResourceKind.from_type(resource_type)
        children_strategy(kind)(self, node)

        node.parent = parent_strategy(kind)(payload)
        node.parents = self._walk_parents(node)
        node.parent_path = "".join(last_segment(parent_id) for parent_id in node.parents)
        node.resource_path = f"{node.parent_path}/{node.name}"
        return node

    def _resolve_provider(self, resource_type: str) -> str:
        entries = self.versions.search(normalize_type(resource_type))
        if not entries:
            logger.debug("프로바이더 정보 없음: %s", resource_type)
            return ""
        return entries[0].provider

    def _walk_parents(self, node: ResourceNode) -> list[str]:
        """상위 체인 수집 (루트가 먼저 오도록 뒤집어 반환)"""
        parents: list[str] = []
        current = node.parent

        while current:
            if same_id(current, node.id) or any(same_id(current, seen) for seen in parents):
                raise HierarchyDepthError(node.id, [node.id, *parents, current], self.max_depth)
            if len(parents) >= self.max_depth:
                raise HierarchyDepthError(node.id, [node.id, *parents, current], self.max_depth)
            parents.append(current)
            current = self.get_parent(current)

        parents.reverse()
        return parents

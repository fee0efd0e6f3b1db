"""
core/arm/nodes.py - 리소스 노드 캐시 (ID 키 arena)

해석이 끝난 ResourceNode를 ID로 보관합니다. 노드는 서로를 ID로만 참조하므로
clear / rebuild 이후에도 끊어진 객체 참조가 남지 않습니다.

- add: 같은 ID가 없을 때만 삽입 (재귀 해석 중 이미 등록된 경우 보호)
- search / show_all: 저장된 노드의 사본을 반환
- rebuild_all: 현재 ID 스냅샷 -> clear -> ID별 재해석
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from core.exceptions import AzhError

from .types import ResourceNode

logger = logging.getLogger(__name__)


@dataclass
class RebuildResult:
    """rebuild_all 결과

    Attributes:
        rebuilt: 재해석에 성공한 ID 목록
        failed: 실패한 ID -> 예외
    """

    rebuilt: list[str] = field(default_factory=list)
    failed: dict[str, AzhError] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return bool(self.failed)

    def get_summary(self) -> str:
        return f"재구성 {len(self.rebuilt)}개, 실패 {len(self.failed)}개"


class NodeCache:
    """리소스 노드 캐시"""

    def __init__(self) -> None:
        self._nodes: dict[str, ResourceNode] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _key(resource_id: str) -> str:
        return resource_id.rstrip("/").lower()

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, resource_id: object) -> bool:
        return isinstance(resource_id, str) and self.in_cache(resource_id)

    def in_cache(self, resource_id: str) -> bool:
        with self._lock:
            return self._key(resource_id) in self._nodes

    def search(self, resource_id: str) -> ResourceNode | None:
        """노드 사본 반환 (없으면 None)"""
        with self._lock:
            node = self._nodes.get(self._key(resource_id))
            return copy.deepcopy(node) if node is not None else None

    def get_entry(self, resource_id: str) -> ResourceNode | None:
        """저장된 노드 자체 반환 (자식 추가용, 외부 노출 금지)"""
        with self._lock:
            return self._nodes.get(self._key(resource_id))

    def show_all(self) -> list[ResourceNode]:
        """전체 노드 사본 목록 (등록 순서)"""
        with self._lock:
            return [copy.deepcopy(node) for node in self._nodes.values()]

    def ids(self) -> list[str]:
        with self._lock:
            return [node.id for node in self._nodes.values()]

    def add(self, node: ResourceNode) -> bool:
        """같은 ID가 없을 때만 삽입

        Returns:
            삽입했으면 True, 이미 있으면 False
        """
        key = self._key(node.id)
        with self._lock:
            if key in self._nodes:
                logger.debug("이미 캐시된 노드, 등록 생략: %s", node.id)
                return False
            self._nodes[key] = node
            return True

    def replace(self, node: ResourceNode) -> None:
        """노드 교체 (update 전용)"""
        with self._lock:
            self._nodes[self._key(node.id)] = node

    def clear(self) -> None:
        with self._lock:
            self._nodes.clear()

    def rebuild_all(self, resolve: Callable[[str], ResourceNode]) -> RebuildResult:
        """캐시된 모든 ID를 새로 해석

        ID 스냅샷을 뜬 뒤 캐시를 비우고 ID마다 ``resolve``를 호출합니다.
        재귀 해석으로 이미 등록된 ID는 그대로 둡니다. 개별 실패는
        수집만 하고 나머지 ID는 계속 진행합니다.
        """
        snapshot = self.ids()
        self.clear()
        result = RebuildResult()

        for resource_id in snapshot:
            try:
                resolve(resource_id)
            except AzhError as e:
                logger.warning("노드 재구성 실패: %s (%s)", resource_id, e)
                result.failed[resource_id] = e
                continue
            result.rebuilt.append(resource_id)

        logger.info("노드 캐시 재구성: %s", result.get_summary())
        return result

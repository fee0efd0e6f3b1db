"""
core/arm/types.py - 계층 모델 타입 정의

- Release: API 버전 릴리스 구분 (stable / latest)
- ProviderVersionEntry: 프로바이더/리소스 타입별 API 버전 행 (불변)
- ChildSummary: 자식 리소스 요약 (name/id/type/properties)
- ResourceNode: 해석이 끝난 리소스 노드
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Release(Enum):
    """API 버전 릴리스 구분

    - STABLE: YYYY-MM-DD 형식 중 가장 최신
    - LATEST: 형식과 무관하게 가장 큰 문자열 (preview 포함 가능)
    """

    STABLE = "stable"
    LATEST = "latest"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ProviderVersionEntry:
    """프로바이더 API 버전 캐시 행

    Attributes:
        provider: 프로바이더 네임스페이스 (예: Microsoft.Storage)
        resource_type: 리소스 타입 (예: storageAccounts)
        api_version: API 버전 문자열
        release: stable / latest
    """

    provider: str
    resource_type: str
    api_version: str
    release: Release

    @property
    def type(self) -> str:
        """``provider/resource_type``"""
        return f"{self.provider}/{self.resource_type}"


@dataclass
class ChildSummary:
    """자식 리소스 요약"""

    id: str
    name: str
    type: str
    properties: dict[str, Any] = field(default_factory=dict)

    @property
    def parent_id(self) -> str:
        """``properties.parent.id`` (관리 그룹 하위 항목에만 존재)"""
        parent = self.properties.get("parent") or {}
        return parent.get("id") or ""

    @classmethod
    def from_payload(cls, item: dict[str, Any]) -> ChildSummary:
        return cls(
            id=item.get("id", ""),
            name=item.get("name", ""),
            type=item.get("type", ""),
            properties=item.get("properties") or {},
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "type": self.type, "properties": self.properties}


@dataclass
class ResourceNode:
    """해석이 끝난 리소스 노드

    노드 간 관계(parent, parents, children)는 ID 참조로만 표현합니다.
    파생 필드는 최초 해석 시 한 번 계산되며, 이후에는 자식 타입별
    추가(append-only) 외에는 변경되지 않습니다.

    Attributes:
        id: ARM 리소스 ID (기본 키)
        type: 리소스 타입
        name: 이름 (구독은 displayName)
        properties: 원본 properties 페이로드
        extended_properties: 기본 필드 외 나머지 페이로드 필드
        provider: 프로바이더 네임스페이스
        children: 직계 자식 요약 목록
        linked_resources: 전체 하위 리소스 목록 (관리 그룹만)
        parent: 직계 상위 ID (없으면 "")
        parents: 상위 ID 목록 (루트가 먼저)
        parent_path: 상위 이름 경로 (예: /root/mg-a)
        resource_path: parent_path + "/" + name
    """

    id: str
    type: str = ""
    name: str = ""
    properties: dict[str, Any] = field(default_factory=dict)
    extended_properties: dict[str, Any] = field(default_factory=dict)
    provider: str = ""
    children: list[ChildSummary] = field(default_factory=list)
    linked_resources: list[ChildSummary] = field(default_factory=list)
    parent: str = ""
    parents: list[str] = field(default_factory=list)
    parent_path: str = ""
    resource_path: str = ""

    def has_child(self, child_id: str) -> bool:
        key = child_id.lower()
        return any(child.id.lower() == key for child in self.children)

    def has_linked(self, resource_id: str) -> bool:
        key = resource_id.lower()
        return any(item.id.lower() == key for item in self.linked_resources)

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (JSON 출력용)"""
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "provider": self.provider,
            "parent": self.parent,
            "parents": list(self.parents),
            "parent_path": self.parent_path,
            "resource_path": self.resource_path,
            "properties": self.properties,
            "extended_properties": self.extended_properties,
            "children": [child.to_dict() for child in self.children],
            "linked_resources": [item.to_dict() for item in self.linked_resources],
        }

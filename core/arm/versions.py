"""
core/arm/versions.py - 프로바이더 API 버전 캐시

구독의 프로바이더 목록(``GET /subscriptions/{id}/providers``)을 한 번 조회하여
리소스 타입별 "latest" / "stable" API 버전을 메모리에 보관합니다.

정책:
    - refresh는 병합하지 않음: 전체 clear 후 재구성
    - stable: ``YYYY-MM-DD`` 형식 버전 중 가장 큰 값 (없으면 행 없음)
    - latest: 형식과 무관하게 가장 큰 값
    - get_version 캐시 미스 시 기본 구독으로 refresh 1회, 재시도 없음

Example:
    >>> versions = ProviderVersionCache(client, SubscriptionResolver(client))
    >>> versions.get_version("Microsoft.Storage/storageAccounts")
    '2023-05-01'
    >>> versions.get_version_params("Microsoft.Resources/resourceGroups")
    '?api-version=2021-04-01'
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from core.config import settings

from .types import ProviderVersionEntry, Release

if TYPE_CHECKING:
    from .client import RestClient

logger = logging.getLogger(__name__)

STABLE_VERSION_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def pick_versions(api_versions: Iterable[str]) -> dict[Release, str]:
    """API 버전 목록에서 latest / stable 선택

    Args:
        api_versions: 리소스 타입이 지원하는 API 버전 문자열 목록

    Returns:
        {Release: version} (stable 형식이 없으면 STABLE 키 없음)
    """
    ordered = sorted((v for v in api_versions if v), reverse=True)
    picked: dict[Release, str] = {}
    if not ordered:
        return picked

    picked[Release.LATEST] = ordered[0]
    for version in ordered:
        if STABLE_VERSION_PATTERN.match(version):
            picked[Release.STABLE] = version
            break
    return picked


class ProviderVersionCache:
    """프로바이더/리소스 타입 -> API 버전 캐시

    Args:
        client: ARM REST 클라이언트
        default_subscription: 기본 구독 ID를 반환하는 콜러블 (예: SubscriptionResolver)
    """

    def __init__(self, client: RestClient, default_subscription: Callable[[], str]):
        self._client = client
        self._default_subscription = default_subscription
        self._entries: dict[tuple[str, Release], ProviderVersionEntry] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._entries)

    # =========================================================================
    # 조회 (캐시만 읽음)
    # =========================================================================

    def search(self, resource_type: str, release: Release | None = None) -> list[ProviderVersionEntry]:
        """타입(대소문자 무시)으로 캐시 검색, refresh 하지 않음

        Args:
            resource_type: ``provider/resourceType``
            release: 지정 시 해당 릴리스 행만
        """
        key = (resource_type or "").lower()
        with self._lock:
            if release is not None:
                entry = self._entries.get((key, release))
                return [entry] if entry else []
            entries = [self._entries.get((key, release_)) for release_ in (Release.STABLE, Release.LATEST)]
            return [entry for entry in entries if entry is not None]

    def search_all(self) -> list[ProviderVersionEntry]:
        """캐시 전체 행"""
        with self._lock:
            return list(self._entries.values())

    # =========================================================================
    # 갱신
    # =========================================================================

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def refresh(self, subscription_id: str | None = None) -> int:
        """프로바이더 목록을 조회하여 캐시 재구성

        Args:
            subscription_id: 조회 대상 구독 (None이면 기본 구독)

        Returns:
            삽입된 행 수

        Raises:
            APICallError: 프로바이더 목록 조회 실패 (캐시는 변경되지 않음)
        """
        subscription_id = subscription_id or self._default_subscription()
        path = f"/subscriptions/{subscription_id}/providers?api-version={settings.PROVIDERS_API_VERSION}"
        providers = self._client.list_values(path)

        with self._lock:
            self._entries.clear()
            for provider in providers:
                self._insert_provider(provider)
            count = len(self._entries)

        logger.info("API 버전 캐시 갱신: 구독 %s, %d행", subscription_id, count)
        return count

    def _insert_provider(self, provider: dict[str, Any]) -> None:
        namespace = provider.get("namespace", "")
        if not namespace:
            return

        for resource_type in provider.get("resourceTypes", []):
            type_name = resource_type.get("resourceType", "")
            if not type_name:
                continue
            for release, version in pick_versions(resource_type.get("apiVersions", [])).items():
                key = (f"{namespace}/{type_name}".lower(), release)
                # 같은 (type, release)는 처음 행만 유지
                if key not in self._entries:
                    self._entries[key] = ProviderVersionEntry(
                        provider=namespace,
                        resource_type=type_name,
                        api_version=version,
                        release=release,
                    )

    # =========================================================================
    # 버전 결정
    # =========================================================================

    def get_version(self, resource_type: str, release: Release = Release.STABLE) -> str:
        """타입의 API 버전 반환 (캐시 미스 시 refresh 1회)

        Returns:
            API 버전 문자열, 끝내 없으면 ""
        """
        found = self.search(resource_type, release)
        if not found:
            self.refresh()
            found = self.search(resource_type, release)

        if not found:
            logger.warning("API 버전을 찾을 수 없음: %s (%s)", resource_type, release)
            return ""
        return found[0].api_version

    def get_version_params(self, resource_type: str) -> str:
        """``?api-version=<stable>`` 쿼리 문자열"""
        return f"?api-version={self.get_version(resource_type, Release.STABLE)}"

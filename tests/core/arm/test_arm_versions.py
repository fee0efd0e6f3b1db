"""
tests/core/arm/test_arm_versions.py - ProviderVersionCache 테스트
"""

import pytest
from fake_arm import PROVIDERS_PATH, PROVIDERS_PAYLOAD, SUB

from core.arm.types import Release
from core.arm.versions import ProviderVersionCache, pick_versions
from core.exceptions import APICallError


def provider(namespace, resource_type, *api_versions):
    resource_types = [{"resourceType": resource_type, "apiVersions": list(api_versions)}]
    return {"namespace": namespace, "resourceTypes": resource_types}


# =============================================================================
# pick_versions 테스트
# =============================================================================


class TestPickVersions:
    """latest / stable 선택 규칙"""

    def test_stable_and_latest(self):
        picked = pick_versions(["2023-01-01", "2023-05-01", "2024-01-01-preview"])
        assert picked[Release.STABLE] == "2023-05-01"
        assert picked[Release.LATEST] == "2024-01-01-preview"

    def test_no_stable_format(self):
        """YYYY-MM-DD 형식이 없으면 stable 없음"""
        picked = pick_versions(["2024-01-01-preview", "beta"])
        assert Release.STABLE not in picked
        assert picked[Release.LATEST] == "beta"

    def test_empty(self):
        assert pick_versions([]) == {}
        assert pick_versions(["", ""]) == {}

    def test_single_stable(self):
        picked = pick_versions(["2021-04-01"])
        assert picked == {Release.STABLE: "2021-04-01", Release.LATEST: "2021-04-01"}


# =============================================================================
# ProviderVersionCache 테스트
# =============================================================================


class TestRefresh:
    """refresh 테스트"""

    def test_refresh_populates_rows(self, versions, arm):
        """프로바이더 목록 한 번 조회로 전체 행 구성"""
        count = versions.refresh()

        assert count == len(versions) > 0
        assert arm.call_count(PROVIDERS_PATH) == 1

    def test_refresh_uses_given_subscription(self, versions, arm):
        other = "00000000-0000-0000-0000-000000000009"
        arm.add(f"/subscriptions/{other}/providers?api-version=2021-04-01", {"value": []})

        assert versions.refresh(other) == 0
        assert arm.call_count(PROVIDERS_PATH) == 0

    def test_refresh_replaces_not_merges(self, versions, arm):
        """refresh는 병합하지 않고 전체 재구성"""
        versions.refresh()
        assert versions.search("Microsoft.Storage/storageAccounts")

        arm.add(PROVIDERS_PATH, {"value": [provider("Microsoft.Web", "sites", "2022-03-01")]})
        versions.refresh()

        assert versions.search("Microsoft.Storage/storageAccounts") == []
        assert versions.search("Microsoft.Web/sites")[0].api_version == "2022-03-01"

    def test_refresh_failure_keeps_cache(self, versions, arm):
        """조회 실패 시 기존 캐시 유지"""
        versions.refresh()
        before = len(versions)

        arm.add_error(PROVIDERS_PATH, 403, "AuthorizationFailed")
        with pytest.raises(APICallError):
            versions.refresh()

        assert len(versions) == before

    def test_first_row_wins_for_duplicate_type(self, client, arm):
        payload = {
            "value": [
                provider("Microsoft.Web", "sites", "2022-03-01"),
                provider("microsoft.web", "Sites", "2023-01-01"),
            ]
        }
        arm.add(PROVIDERS_PATH, payload)
        cache = ProviderVersionCache(client, lambda: SUB)
        cache.refresh()

        assert cache.search("Microsoft.Web/sites", Release.STABLE)[0].api_version == "2022-03-01"


class TestSearch:
    """search 테스트 (refresh 하지 않음)"""

    def test_search_empty_cache_no_call(self, versions, arm):
        assert versions.search("Microsoft.Storage/storageAccounts") == []
        assert arm.call_count() == 0

    def test_search_case_insensitive(self, versions):
        versions.refresh()
        entries = versions.search("microsoft.storage/STORAGEACCOUNTS")

        assert [entry.release for entry in entries] == [Release.STABLE, Release.LATEST]
        assert entries[0].provider == "Microsoft.Storage"
        assert entries[0].type == "Microsoft.Storage/storageAccounts"

    def test_search_by_release(self, versions):
        versions.refresh()
        latest = versions.search("Microsoft.Storage/storageAccounts", Release.LATEST)

        assert len(latest) == 1
        assert latest[0].api_version == "2024-01-01-preview"

    def test_search_all(self, versions):
        versions.refresh()
        assert len(versions.search_all()) == len(versions)

    def test_clear(self, versions):
        versions.refresh()
        versions.clear()
        assert len(versions) == 0


class TestGetVersion:
    """get_version 테스트"""

    def test_stable_format(self, versions):
        version = versions.get_version("Microsoft.Storage/storageAccounts")
        assert version == "2023-05-01"

    def test_latest(self, versions):
        assert versions.get_version("Microsoft.Resources/subscriptions", Release.LATEST) == "2023-07-01-preview"

    def test_miss_triggers_single_refresh(self, versions, arm):
        """캐시 미스 시 refresh 1회 후 재조회"""
        versions.get_version("Microsoft.Storage/storageAccounts")
        versions.get_version("Microsoft.Management/managementGroups")

        assert arm.call_count(PROVIDERS_PATH) == 1

    def test_unknown_type_returns_empty(self, versions, arm, caplog):
        """끝내 없으면 경고 후 빈 문자열 (재시도 없음)"""
        with caplog.at_level("WARNING"):
            assert versions.get_version("Microsoft.Nope/widgets") == ""

        assert arm.call_count(PROVIDERS_PATH) == 1
        assert "Microsoft.Nope/widgets" in caplog.text

    def test_preview_only_type_has_no_stable(self, versions):
        assert versions.get_version("Microsoft.Storage/storageAccounts/previewOnly") == ""
        assert versions.get_version("Microsoft.Storage/storageAccounts/previewOnly", Release.LATEST) == "beta"

    def test_get_version_params(self, versions):
        assert versions.get_version_params("Microsoft.Resources/resourceGroups") == "?api-version=2022-09-01"

    def test_default_subscription_called_lazily(self, client):
        calls = []

        def default_subscription():
            calls.append(1)
            return SUB

        cache = ProviderVersionCache(client, default_subscription)
        assert calls == []

        cache.get_version("Microsoft.Storage/storageAccounts")
        assert calls == [1]

    def test_payload_rows(self, versions):
        """모든 타입이 latest 행을 가짐"""
        versions.refresh()
        type_count = sum(len(p["resourceTypes"]) for p in PROVIDERS_PAYLOAD["value"])
        latest_rows = [entry for entry in versions.search_all() if entry.release is Release.LATEST]

        assert len(latest_rows) == type_count

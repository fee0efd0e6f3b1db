"""
tests/conftest.py - pytest 공통 픽스처

ARM REST API 모킹과 테스트 헬퍼를 제공합니다.

실제 ``RestClient``에 가짜 ``requests.Session``(tests/fake_arm.py의 FakeArmSession)을
꽂아 경로별로 미리 등록한 응답을 돌려줍니다. 등록되지 않은 경로는 404입니다.

Usage:
    def test_something(resolver, arm):
        node = resolver.resolve(MG_B)
        assert arm.call_count(f"{MG_B}?api-version=2023-04-01") == 1
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# 프로젝트 루트와 tests/ 를 sys.path에 추가
project_root = Path(__file__).parent.parent
for path in (project_root, Path(__file__).parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from fake_arm import SUB, build_standard_backend  # noqa: E402

from core.arm.client import RestClient  # noqa: E402
from core.arm.nodes import NodeCache  # noqa: E402
from core.arm.resolver import HierarchyResolver  # noqa: E402
from core.arm.versions import ProviderVersionCache  # noqa: E402

# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(tmp_path, monkeypatch):
    """테스트 환경 설정 (사용자 설정 파일 / 환경변수 격리)"""
    from core.config import load_config_file

    monkeypatch.setenv("AZH_CONFIG", str(tmp_path / "no-config.yaml"))
    monkeypatch.delenv("AZURE_SUBSCRIPTION_ID", raising=False)
    monkeypatch.delenv("AZH_MAX_PARENT_DEPTH", raising=False)
    load_config_file.cache_clear()

    yield

    load_config_file.cache_clear()


# =============================================================================
# ARM 픽스처
# =============================================================================


@pytest.fixture
def token_provider():
    """고정 토큰을 돌려주는 TokenProvider 대역"""
    provider = MagicMock()
    provider.get_token.return_value = "test-token"
    return provider


@pytest.fixture
def arm():
    """표준 계층이 등록된 가짜 ARM 세션"""
    return build_standard_backend()


@pytest.fixture
def client(arm, token_provider):
    """가짜 세션을 사용하는 실제 RestClient"""
    return RestClient(token_provider=token_provider, session=arm)


@pytest.fixture
def versions(client):
    """기본 구독이 SUB로 고정된 ProviderVersionCache"""
    return ProviderVersionCache(client, lambda: SUB)


@pytest.fixture
def resolver(client, versions):
    """HierarchyResolver"""
    return HierarchyResolver(client, versions, NodeCache())

"""
core/config.py - 중앙 설정 관리

애플리케이션 전체에서 사용하는 상수와 환경변수 헬퍼를 정의합니다.

구성 요소:
    - Settings: 불변 설정 데이터클래스 (ARM 엔드포인트, API 버전, 타임아웃 등)
    - LogConfig: 로깅 기본값
    - get_env_bool / get_env_int: 환경변수 파싱 헬퍼
    - get_default_subscription: 기본(ambient) 구독 ID 조회
    - load_config_file: YAML 설정 파일 로드

Usage:
    from core.config import settings, get_default_subscription

    timeout = settings.API_TIMEOUT
    subscription_id = get_default_subscription()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "0.3.0"


@dataclass(frozen=True)
class Settings:
    """애플리케이션 설정 (불변)"""

    # Azure Resource Manager
    ARM_ENDPOINT: str = "https://management.azure.com"
    ARM_SCOPE: str = "https://management.azure.com/.default"

    # 프로바이더 목록 / 구독 목록 조회에 고정 사용하는 API 버전
    PROVIDERS_API_VERSION: str = "2021-04-01"
    SUBSCRIPTIONS_API_VERSION: str = "2020-01-01"

    # HTTP
    API_TIMEOUT: int = 30

    # 상위 체인 탐색 최대 깊이 (관리 그룹은 루트 제외 최대 6단계)
    MAX_PARENT_DEPTH: int = 16

    # 토큰 만료 전 갱신 버퍼 (초)
    TOKEN_REFRESH_BUFFER_SECONDS: int = 300


settings = Settings()


@dataclass(frozen=True)
class LogConfig:
    """로깅 기본값"""

    LEVEL: str = "WARNING"
    FORMAT: str = "%(asctime)s - %(levelname)s - %(message)s"
    DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"


# =============================================================================
# 프로젝트 경로
# =============================================================================


def get_project_root() -> Path:
    """프로젝트 루트 디렉토리 (core/의 상위)"""
    return Path(__file__).resolve().parent.parent


def get_version() -> str:
    """버전 문자열 반환

    프로젝트 루트의 version.txt가 있으면 그 값을, 없으면 기본 버전을 반환합니다.
    """
    version_file = get_project_root() / "version.txt"
    if version_file.exists():
        version = version_file.read_text(encoding="utf-8").strip()
        if version:
            return version
    return DEFAULT_VERSION


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경변수를 bool로 파싱

    "1", "true", "yes", "on" (대소문자 무시)을 True로 간주합니다.
    """
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_env_int(name: str, default: int) -> int:
    """환경변수를 int로 파싱 (실패 시 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("환경변수 %s 값이 정수가 아님: %r (기본값 %d 사용)", name, value, default)
        return default


# =============================================================================
# 설정 파일
# =============================================================================


def get_config_path() -> Path:
    """설정 파일 경로 (AZH_CONFIG 환경변수 우선)"""
    override = os.environ.get("AZH_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".azh" / "config.yaml"


@lru_cache(maxsize=4)
def load_config_file(path: str | None = None) -> dict[str, Any]:
    """YAML 설정 파일 로드

    Args:
        path: 설정 파일 경로 (None이면 get_config_path())

    Returns:
        설정 딕셔너리 (파일이 없으면 빈 딕셔너리)

    Raises:
        ConfigError: YAML 파싱 실패 또는 최상위가 매핑이 아닌 경우
    """
    from core.exceptions import ConfigError

    config_file = Path(path) if path else get_config_path()
    if not config_file.exists():
        return {}

    try:
        with config_file.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(str(config_file), "YAML 파싱 실패", cause=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(str(config_file), "최상위 항목은 매핑이어야 합니다")
    return data


def get_default_subscription() -> str | None:
    """기본 구독 ID 반환

    우선순위: AZURE_SUBSCRIPTION_ID 환경변수 > 설정 파일의 default_subscription
    """
    subscription_id = os.environ.get("AZURE_SUBSCRIPTION_ID")
    if subscription_id:
        return subscription_id

    value = load_config_file().get("default_subscription")
    return str(value) if value else None


def get_max_parent_depth() -> int:
    """상위 체인 최대 깊이 (AZH_MAX_PARENT_DEPTH로 재정의 가능)"""
    return get_env_int("AZH_MAX_PARENT_DEPTH", settings.MAX_PARENT_DEPTH)

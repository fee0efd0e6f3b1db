"""
core/auth/token.py - ARM 액세스 토큰 발급 및 캐시

- CacheEntry: 만료 시각을 가진 제네릭 캐시 항목
- TokenProvider: azure-identity 자격증명으로 Bearer 토큰을 발급하고 만료 전까지 재사용

설계 원칙:
- 토큰은 메모리에만 보관 (파일 캐시는 azure-identity/Azure CLI에 위임)
- 만료 버퍼(settings.TOKEN_REFRESH_BUFFER_SECONDS) 이내면 새로 발급
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Generic, Optional, TypeVar

from core.config import settings
from core.exceptions import AuthError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """캐시 항목을 나타내는 제네릭 데이터 클래스

    Attributes:
        value: 캐시된 값
        created_at: 생성 시간 (UTC)
        expires_at: 만료 시간 (UTC, None이면 만료되지 않음)
    """

    value: T
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: Optional[datetime] = None

    def is_expired(self, buffer_seconds: int = 60) -> bool:
        """캐시 항목이 만료되었는지 확인

        Args:
            buffer_seconds: 만료 전 버퍼 시간 (초)

        Returns:
            True if 만료됨, False otherwise
        """
        if self.expires_at is None:
            return False

        buffer = timedelta(seconds=buffer_seconds)
        return datetime.now(timezone.utc) >= (self.expires_at - buffer)

    def remaining_seconds(self) -> Optional[int]:
        """남은 시간을 초 단위로 반환 (만료 없음이면 None)"""
        if self.expires_at is None:
            return None

        remaining = self.expires_at - datetime.now(timezone.utc)
        return max(0, int(remaining.total_seconds()))


class TokenProvider:
    """ARM Bearer 토큰 공급자

    azure-identity 자격증명(``get_token(scope)``를 구현하는 객체)을 감싸서
    토큰을 만료 직전까지 캐시합니다. 자격증명을 지정하지 않으면
    ``DefaultAzureCredential``을 지연 생성합니다.

    Example:
        >>> provider = TokenProvider()
        >>> headers = {"Authorization": f"Bearer {provider.get_token()}"}
    """

    def __init__(
        self,
        credential: Any = None,
        scope: str = settings.ARM_SCOPE,
        buffer_seconds: int = settings.TOKEN_REFRESH_BUFFER_SECONDS,
    ):
        self._credential = credential
        self.scope = scope
        self.buffer_seconds = buffer_seconds
        self._entry: Optional[CacheEntry[str]] = None
        self._lock = threading.RLock()

    @property
    def credential(self) -> Any:
        """자격증명 객체 (없으면 DefaultAzureCredential 생성)"""
        if self._credential is None:
            from azure.identity import DefaultAzureCredential

            self._credential = DefaultAzureCredential()
        return self._credential

    def get_token(self) -> str:
        """유효한 액세스 토큰 문자열 반환

        Raises:
            AuthError: 자격증명에서 토큰 발급 실패
        """
        with self._lock:
            if self._entry is not None and not self._entry.is_expired(self.buffer_seconds):
                return self._entry.value

            from azure.core.exceptions import ClientAuthenticationError

            try:
                access_token = self.credential.get_token(self.scope)
            except ClientAuthenticationError as e:
                raise AuthError("ARM 액세스 토큰 발급 실패", cause=e) from e

            expires_at = datetime.fromtimestamp(access_token.expires_on, tz=timezone.utc)
            self._entry = CacheEntry(value=access_token.token, expires_at=expires_at)
            logger.debug("ARM 토큰 발급 완료 (만료: %s)", expires_at.isoformat())
            return access_token.token

    def invalidate(self) -> None:
        """캐시된 토큰 폐기"""
        with self._lock:
            self._entry = None

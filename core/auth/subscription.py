"""
core/auth/subscription.py - 기본(ambient) 구독 결정

명시적인 구독 ID가 없을 때 사용할 기본 구독을 결정합니다.

우선순위:
    1. 생성자에 전달된 subscription_id (CLI --subscription)
    2. AZURE_SUBSCRIPTION_ID 환경변수 / 설정 파일 default_subscription
    3. GET /subscriptions 결과 중 첫 번째 Enabled 구독
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.config import get_default_subscription, settings
from core.exceptions import AuthError

if TYPE_CHECKING:
    from core.arm.client import RestClient

logger = logging.getLogger(__name__)


class SubscriptionResolver:
    """기본 구독 ID 공급자

    결정된 값은 인스턴스에 메모이즈됩니다. ``ProviderVersionCache``가
    캐시 미스 시 이 객체를 호출하여 refresh 대상 구독을 얻습니다.
    """

    def __init__(self, client: RestClient | None = None, subscription_id: str | None = None):
        self._client = client
        self._subscription_id = subscription_id

    def __call__(self) -> str:
        return self.resolve()

    def resolve(self) -> str:
        """기본 구독 ID 반환

        Raises:
            AuthError: 구독을 결정할 수 없는 경우
        """
        if self._subscription_id:
            return self._subscription_id

        configured = get_default_subscription()
        if configured:
            self._subscription_id = configured
            return configured

        if self._client is None:
            raise AuthError("기본 구독을 결정할 수 없습니다 (AZURE_SUBSCRIPTION_ID 미설정)")

        path = f"/subscriptions?api-version={settings.SUBSCRIPTIONS_API_VERSION}"
        for subscription in self._client.list_values(path):
            if subscription.get("state", "Enabled") == "Enabled":
                self._subscription_id = subscription["subscriptionId"]
                logger.info(
                    "기본 구독 선택: %s (%s)",
                    subscription.get("displayName", ""),
                    self._subscription_id,
                )
                return self._subscription_id

        raise AuthError("사용 가능한 구독이 없습니다")

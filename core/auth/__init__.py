# core/auth/__init__.py
"""
Azure 인증 모듈 (core/auth)

- TokenProvider: azure-identity 자격증명 기반 ARM Bearer 토큰 공급 (메모리 캐시)
- SubscriptionResolver: 명시되지 않은 경우 사용할 기본 구독 결정
- CacheEntry: 만료 시각을 가진 캐시 항목

사용 예시:
    from core.auth import TokenProvider, SubscriptionResolver
    from core.arm import RestClient

    client = RestClient(token_provider=TokenProvider())
    subscription_id = SubscriptionResolver(client).resolve()
"""

from .subscription import SubscriptionResolver
from .token import CacheEntry, TokenProvider

__all__ = [
    "CacheEntry",
    "SubscriptionResolver",
    "TokenProvider",
]

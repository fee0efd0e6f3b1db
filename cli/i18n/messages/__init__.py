"""
cli/i18n/messages - 메시지 레지스트리

네임스페이스별 메시지 모듈을 모아 ``MESSAGES``에 등록합니다.

    MESSAGES["common.error"] == {"ko": "오류: {message}", "en": "Error: {message}"}
"""

from __future__ import annotations

from typing import TypedDict


class MessageDict(TypedDict):
    """언어 코드 -> 템플릿"""

    ko: str
    en: str


MESSAGES: dict[str, MessageDict] = {}


def register_messages(namespace: str, messages: dict[str, MessageDict]) -> None:
    """``namespace.key`` 형식으로 메시지 등록 (같은 키는 덮어씀)"""
    MESSAGES.update({f"{namespace}.{key}": value for key, value in messages.items()})


# register_messages 정의 이후에 import
from cli.i18n.messages.cli_commands import CLI_MESSAGES  # noqa: E402
from cli.i18n.messages.common import COMMON_MESSAGES  # noqa: E402

register_messages("common", COMMON_MESSAGES)
register_messages("cli", CLI_MESSAGES)

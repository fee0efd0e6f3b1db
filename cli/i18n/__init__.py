"""
cli/i18n - CLI 출력 다국어 처리

기본 언어는 한국어(ko)이며 ``--lang en``으로 영어를 선택합니다.
메시지 키는 ``namespace.key`` 형식입니다 (예: ``cli.export_saved``).

Usage:
    from cli.i18n import t, set_lang

    t("cli.export_saved", path="mg.tf")   # "저장 완료: mg.tf"
    set_lang("en")
    t("cli.export_saved", path="mg.tf")   # "Saved: mg.tf"
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any

SUPPORTED_LANGS = ("ko", "en")
DEFAULT_LANG = "ko"

# CLI 호출마다 --lang 으로 한 번 설정
_lang_var: ContextVar[str] = ContextVar("azh_lang", default=DEFAULT_LANG)


def _normalize(lang: str | None) -> str:
    return lang if lang in SUPPORTED_LANGS else DEFAULT_LANG


def get_lang() -> str:
    """현재 출력 언어"""
    return _lang_var.get()


def set_lang(lang: str) -> None:
    """출력 언어 설정 (지원하지 않는 코드는 ko)"""
    _lang_var.set(_normalize(lang))


def t(key: str, lang: str | None = None, **kwargs: Any) -> str:
    """메시지 키를 현재 언어 문자열로 변환

    Args:
        key: ``namespace.key`` 형식의 메시지 키
        lang: 언어 강제 지정 (None이면 현재 언어)
        **kwargs: ``str.format`` 치환 값

    Returns:
        번역 문자열. 키가 없으면 키 자체, 치환 값이 맞지 않으면 템플릿 그대로.
    """
    from cli.i18n.messages import MESSAGES

    entry = MESSAGES.get(key)
    if entry is None:
        return key

    template = entry.get(_normalize(lang or get_lang())) or entry.get(DEFAULT_LANG) or key
    if not kwargs:
        return template

    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return template


__all__ = [
    "DEFAULT_LANG",
    "SUPPORTED_LANGS",
    "get_lang",
    "set_lang",
    "t",
]

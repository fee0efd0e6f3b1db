"""
cli/i18n/messages/common.py - Common Messages

Contains translations for authentication, errors, and general output.
"""

from __future__ import annotations

COMMON_MESSAGES = {
    # =========================================================================
    # Authentication
    # =========================================================================
    "auth_failed": {
        "ko": "인증에 실패했습니다: {message}",
        "en": "Authentication failed: {message}",
    },
    # =========================================================================
    # Errors
    # =========================================================================
    "error": {
        "ko": "오류: {message}",
        "en": "Error: {message}",
    },
    "api_error": {
        "ko": "API 호출 실패 (HTTP {status}, {code}): {message}",
        "en": "API call failed (HTTP {status}, {code}): {message}",
    },
    # =========================================================================
    # General
    # =========================================================================
    "none": {
        "ko": "(없음)",
        "en": "(none)",
    },
}

"""
cli/i18n/messages/cli_commands.py - CLI Command Messages

Contains translations for Click CLI commands, help text, and result output.
"""

from __future__ import annotations

CLI_MESSAGES = {
    # =========================================================================
    # CLI Help Text
    # =========================================================================
    "help_intro": {
        "ko": "Azure 관리 그룹 / 구독 / 리소스 그룹 / 리소스 계층을\nARM API로 탐색하는 CLI 도구입니다.",
        "en": "A CLI tool that walks the Azure management group / subscription /\nresource group / resource hierarchy through the ARM API.",
    },
    "help_show": {
        "ko": "리소스 노드 해석 결과 출력",
        "en": "Show a resolved resource node",
    },
    "help_tree": {
        "ko": "상위 체인과 자식 목록을 트리로 출력",
        "en": "Show ancestors and children as a tree",
    },
    "help_export": {
        "ko": "관리 그룹을 Terraform 블록으로 내보내기",
        "en": "Export a management group as a Terraform block",
    },
    "help_versions": {
        "ko": "리소스 타입의 API 버전 조회",
        "en": "Look up the API version of a resource type",
    },
    # =========================================================================
    # show
    # =========================================================================
    "node_title": {
        "ko": "리소스 노드",
        "en": "Resource node",
    },
    "field": {
        "ko": "필드",
        "en": "Field",
    },
    "value": {
        "ko": "값",
        "en": "Value",
    },
    "children_title": {
        "ko": "자식 ({count}개)",
        "en": "Children ({count})",
    },
    "name": {
        "ko": "이름",
        "en": "Name",
    },
    "type": {
        "ko": "타입",
        "en": "Type",
    },
    # =========================================================================
    # export
    # =========================================================================
    "export_unsupported": {
        "ko": "Terraform 내보내기를 지원하지 않는 타입입니다: {type}",
        "en": "Terraform export is not supported for type: {type}",
    },
    "export_saved": {
        "ko": "저장 완료: {path}",
        "en": "Saved: {path}",
    },
    "export_exists": {
        "ko": "파일이 이미 존재하여 쓰지 않았습니다: {path}",
        "en": "File already exists, nothing written: {path}",
    },
    # =========================================================================
    # versions
    # =========================================================================
    "version_not_found": {
        "ko": "API 버전을 찾을 수 없습니다: {type} ({release})",
        "en": "No API version found: {type} ({release})",
    },
}

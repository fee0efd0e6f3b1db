"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    azh --version                     # 버전 표시
    azh show <id> [--json]            # 노드 해석 결과
    azh tree <id>                     # 상위 체인 + 자식 트리
    azh export <id> [-o PATH]         # 관리 그룹 Terraform 내보내기
    azh versions <type> [--release]   # API 버전 조회

공통 옵션:
    --subscription   기본 구독 ID (API 버전 캐시 refresh 대상)
    --lang ko|en     출력 언어
    -v, --verbose    디버그 로그 (AZH_VERBOSE=1 과 같음)

Usage:
    $ azh show /providers/Microsoft.Management/managementGroups/platform
    $ azh export /providers/Microsoft.Management/managementGroups/platform -o platform.tf
    $ python -m cli.app versions Microsoft.Storage/storageAccounts --release latest
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from cli.i18n import set_lang, t
from cli.ui.console import (
    console,
    get_logger,
    print_error,
    print_hierarchy_tree,
    print_info,
    print_results_json,
    print_success,
    print_table,
    print_warning,
)
from core.arm import HierarchyResolver, Release
from core.arm.identity import last_segment
from core.config import LogConfig, get_env_bool, get_version
from core.exceptions import APICallError, AuthError, AzhError, format_error_for_user
from core.iac import TerraformExporter

# Keep lightweight, centralized logging config
# WARNING 레벨로 설정하여 INFO 로그가 명령 출력에 섞이지 않도록 함
logging.basicConfig(
    level=getattr(logging, LogConfig.LEVEL),
    format=LogConfig.FORMAT,
    datefmt=LogConfig.DATE_FORMAT,
)

VERSION = get_version()


def _get_resolver(ctx: click.Context) -> HierarchyResolver:
    """컨텍스트의 해석기 (없으면 생성하여 보관)"""
    obj = ctx.ensure_object(dict)
    resolver = obj.get("resolver")
    if resolver is None:
        resolver = HierarchyResolver.create(subscription_id=obj.get("subscription"))
        obj["resolver"] = resolver
    return resolver


def _fail(error: AzhError) -> None:
    """에러 출력 후 종료 코드 1"""
    if isinstance(error, AuthError):
        print_error(t("common.auth_failed", message=str(error)))
    elif isinstance(error, APICallError):
        print_error(
            t(
                "common.api_error",
                status=error.status_code,
                code=error.error_code or "-",
                message=format_error_for_user(error),
            )
        )
    else:
        print_error(t("common.error", message=format_error_for_user(error)))
    raise SystemExit(1)


@click.group(help=t("cli.help_intro"))
@click.version_option(version=VERSION, prog_name="azh")
@click.option("--subscription", "subscription", default=None, help="기본 구독 ID")
@click.option("--lang", type=click.Choice(["ko", "en"]), default="ko", help="출력 언어")
@click.option("-v", "--verbose", is_flag=True, help="디버그 로그 출력")
@click.pass_context
def cli(ctx: click.Context, subscription: str | None, lang: str, verbose: bool) -> None:
    """azh - Azure 리소스 계층 탐색"""
    set_lang(lang)
    obj = ctx.ensure_object(dict)
    if subscription:
        obj["subscription"] = subscription
    if verbose or get_env_bool("AZH_VERBOSE"):
        # core.* 로그만 Rich 핸들러로 (basicConfig 핸들러와 중복 출력 방지)
        get_logger("core", logging.DEBUG).propagate = False


@cli.command("show", help=t("cli.help_show"))
@click.argument("resource_id")
@click.option("--json", "as_json", is_flag=True, help="JSON으로 출력")
@click.pass_context
def show_cmd(ctx: click.Context, resource_id: str, as_json: bool) -> None:
    """리소스 노드 해석 결과 출력"""
    try:
        node = _get_resolver(ctx).resolve(resource_id)
    except AzhError as e:
        _fail(e)
        return

    if as_json:
        print_results_json(node.to_dict())
        return

    none = t("common.none")
    rows = [
        ["id", node.id],
        ["type", node.type],
        ["name", node.name],
        ["provider", node.provider or none],
        ["parent", node.parent or none],
        ["parents", ", ".join(node.parents) or none],
        ["resource_path", node.resource_path],
        ["linked_resources", len(node.linked_resources)],
    ]
    print_table(t("cli.node_title"), [t("cli.field"), t("cli.value")], rows)

    if node.children:
        print_table(
            t("cli.children_title", count=len(node.children)),
            [t("cli.name"), t("cli.type"), "id"],
            [[child.name, child.type, child.id] for child in node.children],
        )


@cli.command("tree", help=t("cli.help_tree"))
@click.argument("resource_id")
@click.pass_context
def tree_cmd(ctx: click.Context, resource_id: str) -> None:
    """상위 체인과 자식 목록을 트리로 출력"""
    try:
        node = _get_resolver(ctx).resolve(resource_id)
    except AzhError as e:
        _fail(e)
        return

    ancestors = [last_segment(parent_id).lstrip("/") for parent_id in node.parents]
    print_hierarchy_tree(node.name, ancestors, [(child.name, child.type) for child in node.children])


@cli.command("export", help=t("cli.help_export"))
@click.argument("resource_id")
@click.option("-o", "--output", "output", default=None, help="출력 파일 경로 (기존 파일은 덮어쓰지 않음)")
@click.pass_context
def export_cmd(ctx: click.Context, resource_id: str, output: str | None) -> None:
    """관리 그룹을 Terraform 블록으로 내보내기"""
    try:
        node = _get_resolver(ctx).resolve(resource_id)
    except AzhError as e:
        _fail(e)
        return

    exporter = TerraformExporter()
    result = exporter.export(node)
    if not result.supported:
        print_warning(t("cli.export_unsupported", type=node.type))
        return

    if output is None:
        console.print(result.text, markup=False, highlight=False)
        return

    try:
        written = exporter.save_to_path(node, output)
    except AzhError as e:
        _fail(e)
        return

    if written:
        print_success(t("cli.export_saved", path=str(Path(output))))
    else:
        print_warning(t("cli.export_exists", path=str(Path(output))))


@cli.command("versions", help=t("cli.help_versions"))
@click.argument("resource_type")
@click.option(
    "--release",
    type=click.Choice([release.value for release in Release]),
    default=Release.STABLE.value,
    help="stable(YYYY-MM-DD) 또는 latest",
)
@click.pass_context
def versions_cmd(ctx: click.Context, resource_type: str, release: str) -> None:
    """리소스 타입의 API 버전 조회"""
    try:
        version = _get_resolver(ctx).versions.get_version(resource_type, Release(release))
    except AzhError as e:
        _fail(e)
        return

    if not version:
        print_warning(t("cli.version_not_found", type=resource_type, release=release))
        raise SystemExit(1)
    print_info(f"{resource_type} ({release}): {version}")


if __name__ == "__main__":
    cli()

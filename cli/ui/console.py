"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들
"""

from __future__ import annotations

import json
import logging
import platform
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

# HTTP 라이브러리 노이즈 로그 제한
logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)
logging.getLogger("azure.identity").setLevel(logging.WARNING)
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)


def get_console(stderr: bool = False) -> Console:
    """CLI 출력용 Console 생성

    ARM ID가 길어 줄바꿈되지 않도록 soft_wrap을 켭니다.
    """
    return Console(
        stderr=stderr,
        soft_wrap=True,
        emoji=platform.system().lower() != "windows",
    )


console = get_console()


def get_logger(name: str = "rich", level: int = logging.INFO) -> logging.Logger:
    """Rich 핸들러가 설정된 logger를 반환합니다.

    Args:
        name: logger 이름 (기본값: "rich")
        level: 로그 레벨

    Returns:
        logging.Logger: 설정된 logger 인스턴스
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 이미 Rich 핸들러가 설정되어 있으면 반환
    if any(isinstance(handler, RichHandler) for handler in logger.handlers):
        return logger

    handler = RichHandler(console=get_console(stderr=True), rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    return logger


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

# 상태 심볼
SYMBOL_SUCCESS = "✓"  # 완료
SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고
SYMBOL_INFO = "•"  # 정보


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)"""
    console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)"""
    console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """정보 메시지 출력 (파란색 정보)"""
    console.print(f"[blue]{SYMBOL_INFO} {escape(message)}[/blue]")


def print_table(title: str, columns: list[str], rows: list[list[Any]]) -> None:
    """제목 + 헤더 + 행 테이블 출력 (셀은 문자열로 변환, markup 이스케이프)"""
    table = Table(*columns, title=title, header_style="bold magenta")
    for row in rows:
        table.add_row(*(escape(str(cell)) for cell in row))
    console.print(table)


def print_hierarchy_tree(title: str, ancestors: list[str], children: list[tuple[str, str]]) -> None:
    """상위 체인 아래에 자식 목록을 매단 트리 출력

    Args:
        title: 대상 노드 라벨
        ancestors: 루트부터의 상위 라벨 목록
        children: (이름, 타입) 튜플 리스트

    Example:
        print_hierarchy_tree("mg-b", ["root", "mg-a"], [("sub-1", "subscriptions")])
    """
    root_label = ancestors[0] if ancestors else title
    tree = Tree(f"[dim]{escape(root_label)}[/dim]" if ancestors else f"[bold]{escape(title)}[/bold]")
    branch = tree

    if ancestors:
        for label in ancestors[1:]:
            branch = branch.add(f"[dim]{escape(label)}[/dim]")
        branch = branch.add(f"[bold]{escape(title)}[/bold]")

    for name, child_type in children:
        branch.add(f"[cyan]{escape(name)}[/cyan] [dim]{escape(child_type)}[/dim]")

    console.print(tree)


def print_results_json(data: Any, pretty: bool = True) -> None:
    """결과를 JSON으로 출력 (markup 해석 없음)"""
    indent = 2 if pretty else None
    console.print_json(json.dumps(data, ensure_ascii=False, indent=indent, default=str))

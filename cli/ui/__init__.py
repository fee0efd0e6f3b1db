# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 UI 모듈

CLI 전용 출력 헬퍼 (메시지, 테이블, 트리, JSON)
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    console,
    get_console,
    get_logger,
    print_error,
    print_hierarchy_tree,
    print_info,
    print_results_json,
    print_success,
    print_table,
    print_warning,
)

__all__ = [
    "SYMBOL_ERROR",
    "SYMBOL_INFO",
    "SYMBOL_SUCCESS",
    "SYMBOL_WARNING",
    "console",
    "get_console",
    "get_logger",
    "print_error",
    "print_hierarchy_tree",
    "print_info",
    "print_results_json",
    "print_success",
    "print_table",
    "print_warning",
]

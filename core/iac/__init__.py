"""
core/iac - IaC 내보내기

- TerraformExporter: 관리 그룹 노드 -> azurerm_management_group 블록
"""

from .terraform import ExportResult, TerraformExporter

__all__ = ["ExportResult", "TerraformExporter"]

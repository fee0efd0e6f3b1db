"""
core/iac/terraform.py - Terraform 내보내기

해석된 ResourceNode를 Terraform 리소스 블록 텍스트로 변환합니다.
관리 그룹(azurerm_management_group)만 지원하며, 그 외 타입은 예외 없이
``ExportResult(supported=False)``를 반환합니다.

출력 예:
    resource "azurerm_management_group" "mg-b" {
      display_name               = "MG B"
      parent_management_group_id = "/providers/Microsoft.Management/managementGroups/mg-a"
      subscription_ids = [
        "/subscriptions/0000-1111",
      ]
    }
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from core.arm.identity import ResourceKind, is_subscription_type, same_id
from core.arm.types import ResourceNode
from core.exceptions import ExportError

logger = logging.getLogger(__name__)

MANAGEMENT_GROUP_RESOURCE = "azurerm_management_group"


@dataclass
class ExportResult:
    """내보내기 결과

    Attributes:
        supported: 지원 타입 여부
        text: Terraform 텍스트 (미지원이면 "")
        resource_type: 입력 노드 타입
    """

    supported: bool
    text: str = ""
    resource_type: str = ""

    def __bool__(self) -> bool:
        return self.supported


def _hcl_str(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _render_management_group(node: ResourceNode) -> str:
    display_name = node.properties.get("displayName") or node.name
    subscription_ids = [
        child.id for child in node.children if is_subscription_type(child.type) and same_id(child.parent_id, node.id)
    ]

    lines = [
        f'resource "{MANAGEMENT_GROUP_RESOURCE}" {_hcl_str(node.name)} {{',
        f"  display_name               = {_hcl_str(display_name)}",
    ]
    if node.parent:
        lines.append(f"  parent_management_group_id = {_hcl_str(node.parent)}")

    lines.append("  subscription_ids = [")
    lines += [f"    {_hcl_str(subscription_id)}," for subscription_id in subscription_ids]
    lines.append("  ]")
    lines.append("}")
    return "\n".join(lines) + "\n"


class TerraformExporter:
    """ResourceNode -> Terraform 텍스트"""

    def export(self, node: ResourceNode) -> ExportResult:
        """노드를 Terraform 블록으로 변환 (미지원 타입은 supported=False)"""
        if ResourceKind.from_type(node.type) is not ResourceKind.MANAGEMENT_GROUP:
            logger.info("Terraform 내보내기 미지원 타입: %s (%s)", node.type, node.id)
            return ExportResult(supported=False, resource_type=node.type)

        return ExportResult(supported=True, text=_render_management_group(node), resource_type=node.type)

    def save_to_path(self, node: ResourceNode, path: str | Path) -> bool:
        """내보내기 결과를 파일로 저장 (기존 파일은 덮어쓰지 않음)

        Returns:
            파일을 새로 썼으면 True, 이미 있거나 미지원 타입이면 False

        Raises:
            ExportError: 디렉토리 없음 등 파일 쓰기 실패
        """
        target = Path(path)
        if target.exists():
            logger.warning("파일이 이미 존재하여 쓰지 않음: %s", target)
            return False

        result = self.export(node)
        if not result.supported:
            return False

        try:
            with target.open("x", encoding="utf-8") as f:
                f.write(result.text)
        except FileExistsError:
            logger.warning("파일이 이미 존재하여 쓰지 않음: %s", target)
            return False
        except OSError as e:
            raise ExportError(str(target), "파일 쓰기 실패", cause=e) from e

        logger.info("Terraform 내보내기 저장: %s", target)
        return True

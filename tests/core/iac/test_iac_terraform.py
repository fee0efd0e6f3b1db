"""
tests/core/iac/test_iac_terraform.py - Terraform 내보내기 테스트
"""

import pytest
from fake_arm import MG_A, MG_B, RG_ID, ROOT

from core.arm.types import ChildSummary, ResourceNode
from core.exceptions import ExportError
from core.iac import ExportResult, TerraformExporter
from core.iac.terraform import _hcl_str


@pytest.fixture
def exporter():
    return TerraformExporter()


class TestExport:
    """export 테스트"""

    def test_management_group_block(self, exporter, resolver):
        node = resolver.resolve(MG_B)

        result = exporter.export(node)

        assert result.supported is True
        assert result.text.startswith('resource "azurerm_management_group" "mg-b" {')
        assert 'display_name               = "Landing Zones"' in result.text
        assert f'parent_management_group_id = "{MG_A}"' in result.text
        assert '"/subscriptions/sub-1",' in result.text
        assert '"/subscriptions/sub-2",' in result.text
        assert result.text.rstrip().endswith("}")

    def test_only_direct_subscriptions(self, exporter, resolver):
        """손자 구독(mg-c 하위)과 정책 항목은 제외"""
        text = exporter.export(resolver.resolve(MG_B)).text

        assert "sub-3" not in text
        assert "policy" not in text

    def test_root_has_no_parent_line(self, exporter, resolver):
        text = exporter.export(resolver.resolve(ROOT)).text

        assert "parent_management_group_id" not in text
        assert "subscription_ids = [\n  ]" in text

    def test_unsupported_type(self, exporter, resolver):
        node = resolver.resolve(RG_ID)

        result = exporter.export(node)

        assert result == ExportResult(supported=False, resource_type="Microsoft.Resources/resourceGroups")
        assert not result
        assert result.text == ""

    def test_display_name_fallback_and_escaping(self, exporter):
        node = ResourceNode(
            id="/providers/Microsoft.Management/managementGroups/quoted",
            type="Microsoft.Management/managementGroups",
            name="quoted",
            properties={"displayName": 'Team "A"'},
            children=[
                ChildSummary(
                    id="/subscriptions/s1",
                    name="s1",
                    type="Microsoft.Management/managementGroups/subscriptions",
                    properties={"parent": {"id": "/providers/Microsoft.Management/managementGroups/quoted"}},
                )
            ],
        )

        text = exporter.export(node).text

        assert 'display_name               = "Team \\"A\\""' in text
        assert '"/subscriptions/s1",' in text

    def test_hcl_str(self):
        assert _hcl_str("a\\b") == '"a\\\\b"'


class TestSaveToPath:
    """save_to_path 테스트"""

    def test_writes_new_file(self, exporter, resolver, tmp_path):
        target = tmp_path / "mg-b.tf"
        node = resolver.resolve(MG_B)

        assert exporter.save_to_path(node, target) is True
        assert target.read_text(encoding="utf-8") == exporter.export(node).text

    def test_existing_file_untouched(self, exporter, resolver, tmp_path):
        target = tmp_path / "mg-b.tf"
        target.write_text("keep me", encoding="utf-8")

        assert exporter.save_to_path(resolver.resolve(MG_B), str(target)) is False
        assert target.read_text(encoding="utf-8") == "keep me"

    def test_unsupported_writes_nothing(self, exporter, resolver, tmp_path):
        target = tmp_path / "rg.tf"

        assert exporter.save_to_path(resolver.resolve(RG_ID), target) is False
        assert not target.exists()

    def test_missing_directory(self, exporter, resolver, tmp_path):
        target = tmp_path / "missing" / "mg-b.tf"

        with pytest.raises(ExportError) as exc_info:
            exporter.save_to_path(resolver.resolve(MG_B), target)

        assert exc_info.value.path == str(target)

"""
tests/core/arm/test_arm_identity.py - 리소스 ID 분류 테스트
"""

import pytest

from core.arm.identity import (
    MANAGEMENT_GROUPS_TYPE,
    RESOURCE_GROUPS_TYPE,
    RESOURCES_TYPE,
    SUBSCRIPTIONS_TYPE,
    ResourceKind,
    classify_from_id,
    is_subscription_id,
    is_subscription_type,
    last_segment,
    normalize_type,
    resource_type_of,
    same_id,
    strip_last_segment,
)

SUB = "/subscriptions/0000"
RG = f"{SUB}/resourceGroups/rg-app"
MG = "/providers/Microsoft.Management/managementGroups/mg-a"


# =============================================================================
# classify_from_id 테스트
# =============================================================================


class TestClassifyFromId:
    """classify_from_id 규칙 순서 테스트"""

    def test_provider_segment(self):
        """/providers/<ns>/<type> 규칙"""
        assert classify_from_id(f"{RG}/providers/Microsoft.Storage/storageAccounts/st1") == (
            "Microsoft.Storage/storageAccounts"
        )

    def test_management_group(self):
        """관리 그룹 ID"""
        assert classify_from_id(MG) == MANAGEMENT_GROUPS_TYPE

    def test_last_provider_segment_wins(self):
        """중첩 /providers/는 마지막 것이 이김"""
        resource_id = f"{MG}/providers/Microsoft.Authorization/policyDefinitions/p1"
        assert classify_from_id(resource_id) == "Microsoft.Authorization/policyDefinitions"

    def test_last_provider_without_type_does_not_fall_back(self):
        """마지막 /providers/ 뒤에 네임스페이스만 있으면 앞쪽 세그먼트로 되돌아가지 않음"""
        assert classify_from_id(f"{MG}/providers/Microsoft.Authorization") == ""
        assert classify_from_id(f"{MG}/providers/Microsoft.Authorization/") == ""

    def test_provider_rule_beats_collection_rule(self):
        """/providers/ 규칙이 컬렉션 규칙보다 우선"""
        assert classify_from_id(f"{MG}/resources") == MANAGEMENT_GROUPS_TYPE

    def test_descendants_path(self):
        """관리 그룹 하위 컬렉션 경로"""
        assert classify_from_id(f"{MG}/descendants") == MANAGEMENT_GROUPS_TYPE

    @pytest.mark.parametrize(
        "resource_id,expected",
        [
            (f"{RG}/resources", RESOURCES_TYPE),
            (f"{SUB}/resourceGroups", RESOURCE_GROUPS_TYPE),
            ("/subscriptions", SUBSCRIPTIONS_TYPE),
        ],
    )
    def test_trailing_collection(self, resource_id, expected):
        """마지막 요소가 컬렉션 이름이면 매치"""
        assert classify_from_id(resource_id) == expected

    def test_full_resource_group_id_not_collection(self):
        """리소스 그룹 이름이 붙은 ID는 컬렉션 규칙에 매치하지 않음"""
        assert classify_from_id(RG) == ""

    def test_full_subscription_id_not_collection(self):
        """구독 ID도 마찬가지"""
        assert classify_from_id(SUB) == ""

    def test_unknown_and_empty(self):
        """분류 불가"""
        assert classify_from_id("/foo/bar") == ""
        assert classify_from_id("") == ""

    def test_case_insensitive_keywords(self):
        """세그먼트 키워드 대소문자 무시"""
        assert classify_from_id("/subscriptions/x/resourcegroups") == RESOURCE_GROUPS_TYPE
        assert classify_from_id("/Providers/Microsoft.Web/sites") == "Microsoft.Web/sites"

    def test_deterministic(self):
        """같은 입력은 항상 같은 결과"""
        resource_id = f"{RG}/providers/Microsoft.Network/virtualNetworks/vnet/subnets/default"
        first = classify_from_id(resource_id)
        assert first == "Microsoft.Network/virtualNetworks"
        assert all(classify_from_id(resource_id) == first for _ in range(3))


# =============================================================================
# 보조 함수 테스트
# =============================================================================


class TestResourceTypeOf:
    """resource_type_of 테스트 (부모 컬렉션 폴백)"""

    def test_subscription(self):
        assert resource_type_of(SUB) == SUBSCRIPTIONS_TYPE

    def test_resource_group(self):
        assert resource_type_of(RG) == RESOURCE_GROUPS_TYPE

    def test_provider_resource(self):
        assert resource_type_of(MG) == MANAGEMENT_GROUPS_TYPE

    def test_unknown(self):
        assert resource_type_of("/foo/bar") == ""


class TestIdHelpers:
    """ID 문자열 헬퍼 테스트"""

    def test_is_subscription_id(self):
        assert is_subscription_id(SUB) is True
        assert is_subscription_id(f"{SUB}/") is True
        assert is_subscription_id(RG) is False
        assert is_subscription_id("/subscriptions") is False

    def test_is_subscription_type(self):
        assert is_subscription_type("Microsoft.Management/managementGroups/subscriptions") is True
        assert is_subscription_type("/subscriptions") is True
        assert is_subscription_type(MANAGEMENT_GROUPS_TYPE) is False

    def test_last_segment(self):
        assert last_segment(MG) == "/mg-a"
        assert last_segment(f"{MG}/") == "/mg-a"
        assert last_segment("root") == "/root"

    def test_strip_last_segment(self):
        assert strip_last_segment(RG) == f"{SUB}/resourceGroups"
        assert strip_last_segment("/subscriptions") == ""

    def test_same_id(self):
        assert same_id(MG.upper(), MG) is True
        assert same_id(f"{MG}/", MG) is True
        assert same_id(MG, RG) is False

    def test_normalize_type(self):
        assert normalize_type("/providers/Microsoft.Management/managementGroups") == MANAGEMENT_GROUPS_TYPE
        assert normalize_type(MANAGEMENT_GROUPS_TYPE) == MANAGEMENT_GROUPS_TYPE


class TestResourceKind:
    """ResourceKind.from_type 테스트"""

    def test_known_types(self):
        assert ResourceKind.from_type(MANAGEMENT_GROUPS_TYPE) is ResourceKind.MANAGEMENT_GROUP
        assert ResourceKind.from_type("microsoft.resources/resourcegroups") is ResourceKind.RESOURCE_GROUP
        assert ResourceKind.from_type(SUBSCRIPTIONS_TYPE) is ResourceKind.SUBSCRIPTION
        assert (
            ResourceKind.from_type("Microsoft.Authorization/policyAssignments") is ResourceKind.POLICY_ASSIGNMENT
        )

    def test_legacy_prefixed_type(self):
        """/providers/ 접두어가 붙은 관리 그룹 타입"""
        assert (
            ResourceKind.from_type("/providers/Microsoft.Management/managementGroups")
            is ResourceKind.MANAGEMENT_GROUP
        )

    def test_unknown_is_generic(self):
        assert ResourceKind.from_type("Microsoft.Storage/storageAccounts") is ResourceKind.GENERIC
        assert ResourceKind.from_type("") is ResourceKind.GENERIC

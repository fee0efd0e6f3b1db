# core/__init__.py
"""
core - Azure 리소스 계층 탐색 인프라

아키텍처:
    core/
    ├── auth/           # ARM 토큰, 기본 구독 결정
    ├── arm/            # 계층 해석 엔진 (REST 클라이언트, 버전/노드 캐시, 해석기)
    ├── iac/            # Terraform 내보내기
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.arm import HierarchyResolver
    from core.iac import TerraformExporter

    resolver = HierarchyResolver.create()
    node = resolver.resolve("/providers/Microsoft.Management/managementGroups/platform")
    print(TerraformExporter().export(node).text)
"""

from core import arm, auth, config, exceptions, iac

__all__: list[str] = [
    # 서브패키지
    "arm",
    "auth",
    "iac",
    # 모듈
    "config",
    "exceptions",
]

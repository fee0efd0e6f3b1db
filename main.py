"""
main.py - azh 콘솔 스크립트 진입점

``pyproject.toml``의 ``[project.scripts] azh = "main:main"``이 이 함수를 호출합니다.
``python main.py show <resource-id>``로 직접 실행할 수도 있습니다.
"""

from cli.app import cli


def main() -> None:
    """빈 컨텍스트 객체로 CLI 그룹 실행 (해석기는 첫 명령에서 생성)"""
    cli(obj={})


if __name__ == "__main__":
    main()

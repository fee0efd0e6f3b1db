# tests/test_main.py
"""
main.py 진입점 테스트
"""

from unittest.mock import patch

import main


class TestMain:
    """콘솔 스크립트 진입점"""

    def test_delegates_to_cli_group(self):
        """빈 컨텍스트 객체로 CLI 그룹 호출"""
        with patch("main.cli") as mock_cli:
            main.main()

        mock_cli.assert_called_once_with(obj={})

    def test_entry_point_is_click_group(self):
        from cli.app import cli

        assert main.cli is cli

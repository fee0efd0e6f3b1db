"""
core/arm/client.py - Azure Resource Manager REST 클라이언트

ARM 엔드포인트에 인증된 GET 요청을 보내는 얇은 전송 계층입니다.
재시도는 하지 않습니다. 200 이외의 응답은 ``APICallError``로 보고됩니다.

경로 규칙:
    /subscriptions/{id}/providers?api-version=X
    {resourceId}/{collection}?api-version=Y
    {resourceId}/providers/{providerType}?api-version=Z

Example:
    >>> client = RestClient(token_provider=TokenProvider())
    >>> payload = client.get_json("/subscriptions/xxx?api-version=2020-01-01")
    >>> groups = client.list_values("/subscriptions/xxx/resourceGroups?api-version=2021-04-01")
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import requests

from core.auth.token import TokenProvider
from core.config import settings
from core.exceptions import APICallError, ContentTypeError

logger = logging.getLogger(__name__)

# nextLink 무한 루프 방지용 최대 페이지 수
MAX_PAGES = 500


@dataclass
class ArmResponse:
    """ARM GET 응답

    Attributes:
        status_code: HTTP 상태 코드
        body: 응답 본문 (bytes)
        content_type: Content-Type 헤더 값
    """

    status_code: int
    body: bytes
    content_type: str = "application/json"

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def json(self) -> Any:
        if not self.body:
            return {}
        return json.loads(self.body)


def parse_error_payload(body: bytes) -> tuple[str | None, str | None]:
    """ARM 에러 페이로드에서 (code, message) 추출

    ``{"error": {"code": ..., "message": ...}}`` 형식이 아니면 (None, 본문 일부)를 반환합니다.
    """
    try:
        data = json.loads(body) if body else {}
    except ValueError:
        text = body.decode("utf-8", errors="replace").strip()
        return None, text[:500] or None

    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        return error.get("code"), error.get("message")
    return None, None


class RestClient:
    """ARM REST 클라이언트

    ``requests.Session``을 재사용하며 요청마다 ``TokenProvider``에서
    Bearer 토큰을 받아 헤더에 넣습니다.
    """

    def __init__(
        self,
        token_provider: TokenProvider | None = None,
        endpoint: str = settings.ARM_ENDPOINT,
        timeout: int = settings.API_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.token_provider = token_provider or TokenProvider()
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self.call_count = 0

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.endpoint}{path}"

    def get(self, path: str) -> ArmResponse:
        """GET 요청 1회 수행

        Args:
            path: ARM 상대 경로 또는 절대 URL (nextLink)

        Returns:
            ArmResponse (상태 코드와 무관하게 반환)

        Raises:
            APICallError: 전송 계층 실패 (status_code=0)
        """
        url = self._url(path)
        headers = {
            "Authorization": f"Bearer {self.token_provider.get_token()}",
            "Accept": "application/json",
        }
        self.call_count += 1
        logger.debug("GET %s", url)

        try:
            response = self._session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("GET %s 전송 실패: %s", path, e)
            raise APICallError(path, 0, error_message=str(e), cause=e) from e

        return ArmResponse(
            status_code=response.status_code,
            body=response.content,
            content_type=response.headers.get("Content-Type", ""),
        )

    def get_json(self, path: str) -> dict[str, Any]:
        """GET 후 JSON 본문 반환

        Raises:
            APICallError: 200 이외의 응답
            ContentTypeError: 200이지만 JSON이 아닌 응답
        """
        response = self.get(path)
        if not response.ok:
            code, message = parse_error_payload(response.body)
            logger.error(
                "GET %s 실패: status=%d code=%s message=%s",
                path,
                response.status_code,
                code,
                message,
            )
            raise APICallError(path, response.status_code, code, message)

        if response.body and "json" not in response.content_type.lower():
            raise ContentTypeError(path, response.content_type)

        try:
            data = response.json()
        except ValueError as e:
            raise ContentTypeError(path, response.content_type) from e

        if not isinstance(data, dict):
            raise ContentTypeError(path, response.content_type)
        return data

    def list_values(self, path: str) -> list[dict[str, Any]]:
        """컬렉션 응답의 ``value``를 nextLink를 따라가며 모두 반환"""
        items: list[dict[str, Any]] = []
        next_path: str | None = path
        pages = 0

        while next_path and pages < MAX_PAGES:
            data = self.get_json(next_path)
            items.extend(data.get("value", []))
            next_path = data.get("nextLink")
            pages += 1

        if next_path:
            logger.warning("페이지 수 상한(%d) 도달, 나머지 결과 생략: %s", MAX_PAGES, path)
        return items

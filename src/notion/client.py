"""Base client for Notion API interactions."""

import os
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from .types import PaginatedResults


class NotionAPIError(RuntimeError):
    """A non-2xx response from the Notion API."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"Notion API error ({status_code}): {detail}")
        self.status_code = status_code
        self.detail = detail


class NotionClient:
    """Async client for the read-only Notion endpoints the sync needs.

    Used as `async with NotionClient() as client:` one connection pool is kept
    for every request in the block; otherwise each request opens its own.
    """

    API_BASE = "https://api.notion.com/v1"
    API_VERSION = "2022-06-28"  # stable version
    PAGE_SIZE = 100

    def __init__(
        self,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30,
    ) -> None:
        """Initialize the client.

        Args:
            token: Notion API token. If not provided, will look for NOTION_TOKEN env var.
            transport: Optional httpx transport, used by tests to stub the API.
            timeout: Per-request timeout in seconds.
        """
        self.token = token or os.getenv("NOTION_TOKEN")
        if not self.token:
            raise RuntimeError("NOTION_TOKEN not set")
        self._transport = transport
        self._timeout = timeout
        self._http: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "NotionClient":
        self._http = self._new_http()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _new_http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def _headers(self) -> Dict[str, str]:
        """Get the headers required for Notion API requests."""
        return {
            "Authorization": f"Bearer {self.token}",
            "Notion-Version": self.API_VERSION,
            "Content-Type": "application/json",
        }

    def _url(self, path: str) -> str:
        """Construct a full URL from a path."""
        return f"{self.API_BASE}/{path.lstrip('/')}"

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if self._http is not None:
            return await self._send(self._http, method, path, params, json)
        async with self._new_http() as client:
            return await self._send(client, method, path, params, json)

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]],
        json: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        r = await client.request(
            method, self._url(path), headers=self._headers(), params=params, json=json
        )
        try:
            r.raise_for_status()
            return r.json()
        except httpx.HTTPStatusError as e:
            detail = self._extract_error_detail(r)
            raise NotionAPIError(r.status_code, detail) from e

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a GET request to the Notion API."""
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json: Dict[str, Any]) -> Dict[str, Any]:
        """Make a POST request to the Notion API."""
        return await self._request("POST", path, json=json)

    async def list_block_children(
        self, block_id: str, cursor: Optional[str] = None
    ) -> PaginatedResults:
        """List one page of children under a block or page."""
        params: Dict[str, Any] = {"page_size": self.PAGE_SIZE}
        if cursor:
            params["start_cursor"] = cursor
        data = await self.get(f"blocks/{block_id}/children", params=params)
        logger.debug(f"[notion] listed {len(data.get('results', []))} children of {block_id}")
        return self._paginated(data)

    async def query_database(
        self, database_id: str, cursor: Optional[str] = None
    ) -> PaginatedResults:
        """Query one page of entries from a database."""
        payload: Dict[str, Any] = {"page_size": self.PAGE_SIZE}
        if cursor:
            payload["start_cursor"] = cursor
        data = await self.post(f"databases/{database_id}/query", payload)
        logger.debug(f"[notion] queried {len(data.get('results', []))} pages of {database_id}")
        return self._paginated(data)

    @staticmethod
    def _paginated(data: Dict[str, Any]) -> PaginatedResults:
        next_cursor = data.get("next_cursor") if data.get("has_more") else None
        return PaginatedResults(items=data.get("results", []), next_cursor=next_cursor)

    @staticmethod
    def _extract_error_detail(response: httpx.Response) -> str:
        """Extract error detail from a Notion API response."""
        try:
            return response.json().get("message", "")
        except Exception:
            return "No details available"

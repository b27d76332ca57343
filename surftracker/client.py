"""
HTTP client for the Surf Tracker API.

Every method is a straight pass-through: one request, raise on an error
status, return the decoded body. Nothing is retried or cached.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS: float = 10.0


async def _log_request(request: httpx.Request) -> None:
    logger.debug("API Request: %s %s", request.method, request.url)


async def _log_response(response: httpx.Response) -> None:
    if response.is_error:
        logger.warning("API Response Error: %s %s", response.status_code, response.url)
    else:
        logger.debug("API Response: %s %s", response.status_code, response.url)


class SurfTrackerClient:
    """Async client with one method per REST endpoint."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.api_url = (api_url or settings.API_URL).rstrip("/")
        event_hooks = {}
        if not settings.is_production:
            event_hooks = {"request": [_log_request], "response": [_log_response]}
        self._http = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            event_hooks=event_hooks,
            transport=transport,
        )

    async def __aenter__(self) -> "SurfTrackerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, url: str, json: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._http.request(method, url, json=json)
        response.raise_for_status()
        if response.status_code == 204:
            return None
        return response.json()

    # ---------- Surf spots ----------
    async def list_spots(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/surf-spots")

    async def create_spot(self, spot: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/surf-spots", json=spot)

    async def get_spot(self, spot_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/surf-spots/{spot_id}")

    async def update_spot(self, spot_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/surf-spots/{spot_id}", json=changes)

    async def delete_spot(self, spot_id: int) -> None:
        await self._request("DELETE", f"/surf-spots/{spot_id}")

    # ---------- Surf sessions ----------
    async def list_sessions(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/surf-sessions")

    async def list_sessions_for_spot(self, spot_id: int) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/surf-sessions/spot/{spot_id}")

    async def create_session(self, session: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/surf-sessions", json=session)

    async def get_session(self, session_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/surf-sessions/{session_id}")

    async def update_session(self, session_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/surf-sessions/{session_id}", json=changes)

    async def delete_session(self, session_id: int) -> None:
        await self._request("DELETE", f"/surf-sessions/{session_id}")

    # ---------- Dashboard & health ----------
    async def get_dashboard(self) -> Dict[str, Any]:
        return await self._request("GET", "/dashboard")

    async def health(self) -> Dict[str, Any]:
        # /health lives at the server root, outside the /api prefix
        return await self._request("GET", str(httpx.URL(self.api_url).join("/health")))


def describe_error(exc: Exception) -> str:
    """Best human-readable message for a failed API call."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in ("error", "message"):
                if body.get(key):
                    return str(body[key])
    return str(exc) or "An unexpected error occurred"

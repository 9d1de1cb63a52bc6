"""
Workspace API Client

aiohttp client for the file-system server's REST API. Every response is
JSON; non-2xx answers carry ``{"error": "..."}``.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp

from codearchitect.core.errors import WorkspaceError
from codearchitect.services.workspace import WorkspaceBackend

logger = logging.getLogger("CodeArchitect.WorkspaceAPIClient")

DEFAULT_WORKSPACE_URL = "http://localhost:3002"


class WorkspaceAPIClient(WorkspaceBackend):
    """Talks to the file server at ``base_url``."""

    def __init__(self, base_url: str = DEFAULT_WORKSPACE_URL, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    @staticmethod
    def _file_endpoint(prefix: str, path: str) -> str:
        return f"{prefix}/{quote(path, safe='')}"

    async def _request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        url = f"{self.base_url}{endpoint}"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(method, url, json=payload, params=params) as resp:
                    try:
                        data = await resp.json(content_type=None)
                    except ValueError:
                        data = None
                    if resp.status >= 400:
                        message = data.get("error") if isinstance(data, dict) else None
                        raise WorkspaceError(message or f"HTTP {resp.status}")
                    return data
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise WorkspaceError(f"File server not reachable at {self.base_url}: {e}") from e

    # ------------------------------------------------------------------
    # Workspace management
    # ------------------------------------------------------------------
    async def set_workspace(self, path: str) -> bool:
        try:
            data = await self._request("POST", "/api/workspace/set", {"path": path})
        except WorkspaceError as e:
            logger.error(f"Failed to set workspace: {e}")
            return False
        return bool((data or {}).get("success"))

    async def get_current_workspace(self) -> Optional[str]:
        data = await self._request("GET", "/api/workspace/current")
        return (data or {}).get("workspace")

    # ------------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------------
    async def list_directory(self, path: str = ".") -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/files", params={"path": path}) or []

    async def read_file(self, path: str) -> str:
        data = await self._request("GET", self._file_endpoint("/api/files", path))
        return (data or {}).get("content", "")

    async def write_file(self, path: str, content: str) -> None:
        await self._request("POST", self._file_endpoint("/api/files", path), {"content": content})

    async def create_file(self, path: str, content: str = "") -> None:
        await self._request("PUT", self._file_endpoint("/api/files", path), {"content": content})

    async def delete_file(self, path: str) -> None:
        await self._request("DELETE", self._file_endpoint("/api/files", path))

    async def create_directory(self, path: str) -> None:
        await self._request("POST", self._file_endpoint("/api/directories", path))

    # ------------------------------------------------------------------
    # AI context and operations
    # ------------------------------------------------------------------
    async def get_workspace_context(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/context/files")

    async def execute_ai_operation(
        self,
        operation: str,
        path: str,
        content: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Run a create/write/read/delete through the server's logged AI endpoint."""
        return await self._request("POST", "/api/ai/execute", {
            "operation": operation,
            "filePath": path,
            "content": content,
            "description": description,
        })

    async def check_health(self) -> bool:
        try:
            data = await self._request("GET", "/api/health")
        except WorkspaceError:
            return False
        return isinstance(data, dict) and data.get("status") == "healthy"

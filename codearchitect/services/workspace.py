"""
Workspace collaborator interface.

The orchestrator and the context distiller only talk to this capability
set; it is implemented by the file-server HTTP client and by a direct
local-directory backend.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class WorkspaceBackend(ABC):
    """
    File operations on a user's workspace. Paths are workspace-relative.

    Every method raises WorkspaceError on failure, except
    ``set_workspace`` which reports success as a bool.
    """

    @abstractmethod
    async def set_workspace(self, path: str) -> bool:
        pass

    @abstractmethod
    async def list_directory(self, path: str = ".") -> List[Dict[str, Any]]:
        """Entries ``{name, path, type, size, extension?}``, directories first."""
        pass

    @abstractmethod
    async def read_file(self, path: str) -> str:
        pass

    @abstractmethod
    async def write_file(self, path: str, content: str) -> None:
        pass

    @abstractmethod
    async def create_file(self, path: str, content: str = "") -> None:
        pass

    @abstractmethod
    async def delete_file(self, path: str) -> None:
        pass

    @abstractmethod
    async def create_directory(self, path: str) -> None:
        pass

    @abstractmethod
    async def get_workspace_context(self) -> Dict[str, Any]:
        """``{workspace, files: {path: {content, size, extension}}, totalFiles}``"""
        pass

"""
Local Workspace

Workspace backend that works directly on a local directory with pathlib.
Used by the CLI when no file server is running, and by tests.
"""

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

from codearchitect.core.errors import WorkspaceError
from codearchitect.services.workspace import WorkspaceBackend
from codearchitect.utils.path_utils import is_safe_path, to_posix_relative

logger = logging.getLogger("CodeArchitect.LocalWorkspace")

SKIPPED_DIRS = frozenset({"node_modules", ".git", ".next", "dist", "build", "__pycache__", ".venv"})
CONTEXT_EXTENSIONS = frozenset({
    ".js", ".jsx", ".ts", ".tsx", ".py", ".html", ".css", ".scss", ".json", ".md",
    ".yml", ".yaml",
})
MAX_CONTEXT_FILE_BYTES = 200_000


class LocalWorkspace(WorkspaceBackend):
    """
    Workspace rooted at ``base_dir``.

    Provides:
    - Path containment (no escaping the root)
    - Parent directory creation on write
    - A context snapshot that skips vendored, large and binary files
    """

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir: Optional[Path] = Path(base_dir).resolve() if base_dir else None
        logger.info(f"LocalWorkspace initialized (base_dir: {self.base_dir})")

    def _resolve_path(self, path: str) -> Path:
        """
        Resolve a workspace-relative path.

        Raises:
            WorkspaceError: No workspace selected, or the path escapes it
        """
        if self.base_dir is None:
            raise WorkspaceError("No workspace selected")
        target = (self.base_dir / path).resolve()
        if not is_safe_path(self.base_dir, target):
            raise WorkspaceError(f"Path escapes workspace: {path}")
        return target

    async def set_workspace(self, path: str) -> bool:
        candidate = Path(path).expanduser().resolve()
        if not candidate.is_dir():
            logger.error(f"Failed to set workspace, not a directory: {path}")
            return False
        self.base_dir = candidate
        logger.info(f"Workspace set to: {candidate}")
        return True

    async def list_directory(self, path: str = ".") -> List[Dict[str, Any]]:
        directory = self._resolve_path(path)
        if not directory.is_dir():
            raise WorkspaceError(f"Not a directory: {path}")

        entries = []
        for child in directory.iterdir():
            is_dir = child.is_dir()
            entry: Dict[str, Any] = {
                "name": child.name,
                "path": to_posix_relative(self.base_dir, child),
                "type": "directory" if is_dir else "file",
                "size": child.stat().st_size,
            }
            if not is_dir:
                entry["extension"] = child.suffix
            entries.append(entry)

        # Directories first, then files, each alphabetically
        entries.sort(key=lambda e: (e["type"] != "directory", e["name"].lower()))
        return entries

    async def read_file(self, path: str) -> str:
        target = self._resolve_path(path)
        try:
            return target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise WorkspaceError(f"Failed to read {path}: {e}") from e

    async def write_file(self, path: str, content: str) -> None:
        target = self._resolve_path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise WorkspaceError(f"Failed to write {path}: {e}") from e
        logger.debug(f"File written: {path}")

    async def create_file(self, path: str, content: str = "") -> None:
        await self.write_file(path, content)
        logger.debug(f"File created: {path}")

    async def delete_file(self, path: str) -> None:
        target = self._resolve_path(path)
        if target == self.base_dir:
            raise WorkspaceError("Refusing to delete the workspace root")
        try:
            if target.is_dir():
                shutil.rmtree(target)
            elif target.is_file():
                target.unlink()
            else:
                raise WorkspaceError(f"Path does not exist: {path}")
        except OSError as e:
            raise WorkspaceError(f"Failed to delete {path}: {e}") from e
        logger.debug(f"Deleted: {path}")

    async def create_directory(self, path: str) -> None:
        target = self._resolve_path(path)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorkspaceError(f"Failed to create directory {path}: {e}") from e

    # ------------------------------------------------------------------
    # Context snapshot
    # ------------------------------------------------------------------
    def _iter_context_files(self):
        for path in sorted(self.base_dir.rglob("*")):
            relative_parts = path.relative_to(self.base_dir).parts
            if any(part in SKIPPED_DIRS for part in relative_parts[:-1]):
                continue
            if not path.is_file() or path.suffix.lower() not in CONTEXT_EXTENSIONS:
                continue
            if path.stat().st_size > MAX_CONTEXT_FILE_BYTES:
                logger.debug(f"Skipping large file: {path}")
                continue
            yield path

    async def get_workspace_context(self) -> Dict[str, Any]:
        if self.base_dir is None:
            raise WorkspaceError("No workspace selected")

        files: Dict[str, Dict[str, Any]] = {}
        for path in self._iter_context_files():
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Could not read file {path}: {e}")
                continue
            files[to_posix_relative(self.base_dir, path)] = {
                "content": content,
                "size": len(content),
                "extension": path.suffix,
            }

        return {"workspace": str(self.base_dir), "files": files, "totalFiles": len(files)}

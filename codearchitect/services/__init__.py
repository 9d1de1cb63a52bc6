"""
Service Layer

Configuration storage and workspace collaborators.
"""

from codearchitect.services.config_service import ConfigService
from codearchitect.services.file_service import LocalWorkspace
from codearchitect.services.workspace import WorkspaceBackend
from codearchitect.services.workspace_client import WorkspaceAPIClient

__all__ = [
    "ConfigService",
    "LocalWorkspace",
    "WorkspaceBackend",
    "WorkspaceAPIClient",
]

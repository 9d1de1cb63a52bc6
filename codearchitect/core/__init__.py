# Core modules
from .session import ChatMessage, ChatMode, Session
from .orchestrator import Orchestrator, OrchestratorState
from .file_actions import extract_files

__all__ = [
    "ChatMessage",
    "ChatMode",
    "Session",
    "Orchestrator",
    "OrchestratorState",
    "extract_files",
]

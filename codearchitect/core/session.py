# codearchitect/core/session.py
"""
Session state: the file map, editor selection, chat log and progress log.

One Session per user workspace. Paths seeded from the workspace are kept
as they are; merged paths get an extension appended when they lack one.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional

from codearchitect.core.content_types import add_missing_extension
from codearchitect.core.starter import STARTER_ACTIVE_FILE, STARTER_PROJECT

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
# Chat model
# ----------------------------------------------------------------------


class ChatMode(str, Enum):
    ASK = "ask"
    PLAN = "plan"
    AGENT = "agent"
    DEBUG = "debug"


ROLES = ("user", "assistant", "system")


@dataclass
class ChatMessage:
    role: str
    content: str
    mode: Optional[ChatMode] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: float = field(default_factory=time.time)


# ----------------------------------------------------------------------
# Session
# ----------------------------------------------------------------------


@dataclass
class Session:
    """
    Everything an orchestration reads and mutates.

    ``messages`` is append-only; only ``clear_chat`` empties it.
    """
    files: Dict[str, str] = field(default_factory=dict)
    active_file: str = ""
    messages: List[ChatMessage] = field(default_factory=list)
    status_log: List[str] = field(default_factory=list)
    live_writing_file: Optional[str] = None
    selected_model: Optional[str] = None

    def __post_init__(self) -> None:
        self.files = dict(self.files)
        if self.active_file not in self.files and self.files:
            self.active_file = next(iter(self.files))

    @classmethod
    def with_starter_project(cls, selected_model: Optional[str] = None) -> "Session":
        return cls(
            files=dict(STARTER_PROJECT),
            active_file=STARTER_ACTIVE_FILE,
            selected_model=selected_model,
        )

    @staticmethod
    def _normalized(files: Mapping[str, str]) -> Dict[str, str]:
        return {add_missing_extension(path, content): content for path, content in files.items()}

    # --- chat ---------------------------------------------------------

    def add_message(self, role: str, content: str, mode: Optional[ChatMode] = None) -> ChatMessage:
        if role not in ROLES:
            raise ValueError(f"Unknown message role: {role}")
        message = ChatMessage(role=role, content=content, mode=mode)
        self.messages.append(message)
        logger.debug(f"Added message: role={role}, content_len={len(content)}")
        return message

    def clear_chat(self) -> None:
        self.messages = []

    # --- progress log -------------------------------------------------

    def log(self, line: str) -> None:
        self.status_log.append(line)
        logger.info(line)

    def reset_log(self, first_line: str) -> None:
        self.status_log = []
        self.log(first_line)

    # --- files --------------------------------------------------------

    def set_files(self, files: Mapping[str, str]) -> None:
        """Replace the whole file map."""
        self.files = dict(files)
        if self.active_file not in self.files:
            self.active_file = next(iter(self.files), "")

    def merge_files(self, files: Mapping[str, str]) -> List[str]:
        """
        Merge ``files`` into the map, last write wins per path.

        Returns:
            The paths that were written, in input order
        """
        written = []
        for path, content in self._normalized(files).items():
            self.files[path] = content
            written.append(path)
        return written

    def write_file(self, path: str, content: str) -> None:
        """Overwrite the content of a path already in the map."""
        self.files[path] = content

    def delete_file(self, path: str) -> bool:
        """
        Remove ``path``. The last remaining file is never deleted.

        Returns:
            True if the file was removed
        """
        if path not in self.files or len(self.files) <= 1:
            return False
        del self.files[path]
        if self.active_file == path:
            self.active_file = next(iter(self.files))
        return True

    def set_active_file(self, path: str) -> None:
        self.active_file = path

    def set_selected_model(self, model_id: Optional[str]) -> None:
        self.selected_model = model_id

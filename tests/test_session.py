"""
Tests for session state: file map rules, chat log and progress log.
"""

import pytest

from codearchitect.core.session import ChatMode, Session
from codearchitect.core.starter import STARTER_PROJECT


def test_starter_project():
    session = Session.with_starter_project(selected_model="qwen2.5:0.5b")
    assert list(session.files) == ["index.html", "styles.css", "script.js", "README.md"]
    assert session.active_file == "index.html"
    assert session.selected_model == "qwen2.5:0.5b"
    assert session.files == STARTER_PROJECT
    assert session.messages == []


def test_initial_files_keep_their_names_and_active_defaults_to_first():
    readme = "# App\n\nconst app = createApp()\n"
    session = Session(files={"README.md": readme, "Makefile": "all:\n\tpython app.py\n"})
    assert list(session.files) == ["README.md", "Makefile"]
    assert session.files["README.md"] == readme
    assert session.active_file == "README.md"


def test_last_file_cannot_be_deleted():
    session = Session(files={"index.html": "<div>x</div>"})
    assert session.delete_file("index.html") is False
    assert list(session.files) == ["index.html"]


def test_deleting_active_file_moves_selection():
    session = Session.with_starter_project()
    assert session.delete_file("index.html") is True
    assert session.active_file == "styles.css"
    assert session.delete_file("missing.txt") is False


def test_merge_fills_missing_extensions_and_reports_written_paths():
    session = Session.with_starter_project()
    written = session.merge_files({
        "helpers": "def helper():\n    pass",
        "styles.css": "body { margin: 0; }",
        "NOTES.md": "const x = 1;",
    })

    assert written == ["helpers.py", "styles.css", "NOTES.md"]
    assert session.files["styles.css"] == "body { margin: 0; }"
    assert "helpers" not in session.files


def test_set_files_replaces_map_and_fixes_active():
    session = Session.with_starter_project()
    session.set_files({"main.py": "print('x')"})
    assert session.files == {"main.py": "print('x')"}
    assert session.active_file == "main.py"


def test_messages_and_clear_chat():
    session = Session()
    first = session.add_message("user", "hello", ChatMode.ASK)
    session.add_message("assistant", "hi")

    assert first.mode == ChatMode.ASK
    assert [m.role for m in session.messages] == ["user", "assistant"]
    assert first.id != session.messages[1].id

    session.clear_chat()
    assert session.messages == []


def test_unknown_role_is_rejected():
    with pytest.raises(ValueError):
        Session().add_message("robot", "beep")


def test_reset_log_starts_fresh():
    session = Session()
    session.log("one")
    session.reset_log("Initializing ASK mode...")
    session.log("two")
    assert session.status_log == ["Initializing ASK mode...", "two"]


def test_chat_mode_values():
    assert ChatMode("plan") is ChatMode.PLAN
    assert [m.value for m in ChatMode] == ["ask", "plan", "agent", "debug"]

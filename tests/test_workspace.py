"""
Tests for the workspace collaborators: the local directory backend and
the file-server API client (against an in-process aiohttp app).
"""

import asyncio

import pytest
from aiohttp import web
from aiohttp import test_utils

from codearchitect.core.errors import WorkspaceError
from codearchitect.services.file_service import LocalWorkspace
from codearchitect.services.workspace_client import WorkspaceAPIClient
from codearchitect.utils.path_utils import is_safe_path, resolve_base_dir


def run_async(coro):
    """Helper to run async coroutines inside plain pytest tests."""
    return asyncio.run(coro)


# ---------------------------------------------------------------------------
# LocalWorkspace
# ---------------------------------------------------------------------------

def test_write_creates_parents_and_reads_back(tmp_path):
    ws = LocalWorkspace(tmp_path)
    run_async(ws.write_file("src/app.js", "const a = 1;"))

    assert (tmp_path / "src" / "app.js").read_text(encoding="utf-8") == "const a = 1;"
    assert run_async(ws.read_file("src/app.js")) == "const a = 1;"


def test_paths_outside_workspace_are_rejected(tmp_path):
    ws = LocalWorkspace(tmp_path / "project")
    (tmp_path / "project").mkdir()
    (tmp_path / "project-evil").mkdir()

    with pytest.raises(WorkspaceError):
        run_async(ws.write_file("../escape.txt", "x"))
    with pytest.raises(WorkspaceError):
        run_async(ws.read_file("../project-evil/secret.txt"))


def test_no_workspace_selected():
    with pytest.raises(WorkspaceError, match="No workspace selected"):
        run_async(LocalWorkspace().read_file("a.txt"))


def test_set_workspace_requires_directory(tmp_path):
    ws = LocalWorkspace()
    assert run_async(ws.set_workspace(str(tmp_path / "missing"))) is False
    assert run_async(ws.set_workspace(str(tmp_path))) is True
    assert ws.base_dir == tmp_path.resolve()


def test_list_directory_directories_first(tmp_path):
    (tmp_path / "b.txt").write_text("b")
    (tmp_path / "A.md").write_text("a")
    (tmp_path / "zdir").mkdir()

    entries = run_async(LocalWorkspace(tmp_path).list_directory())

    assert [e["name"] for e in entries] == ["zdir", "A.md", "b.txt"]
    assert entries[0]["type"] == "directory"
    assert entries[1]["extension"] == ".md"


def test_delete_file_and_directory(tmp_path):
    ws = LocalWorkspace(tmp_path)
    run_async(ws.create_file("a/b.txt", "hi"))

    run_async(ws.delete_file("a/b.txt"))
    assert not (tmp_path / "a" / "b.txt").exists()
    run_async(ws.delete_file("a"))
    assert not (tmp_path / "a").exists()

    with pytest.raises(WorkspaceError):
        run_async(ws.delete_file("a"))
    with pytest.raises(WorkspaceError):
        run_async(ws.delete_file("."))


def test_context_snapshot_skips_vendored_binary_and_unknown_files(tmp_path):
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib" / "index.js").write_text("module.exports = 1;")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("print('hi')")
    (tmp_path / "logo.png").write_bytes(b"\x89PNG")
    (tmp_path / "broken.js").write_bytes(b"\xff\xfe\xfa")
    (tmp_path / "package.json").write_text("{}")

    snapshot = run_async(LocalWorkspace(tmp_path).get_workspace_context())

    assert sorted(snapshot["files"]) == ["package.json", "src/app.py"]
    assert snapshot["totalFiles"] == 2
    assert snapshot["files"]["src/app.py"]["content"] == "print('hi')"
    assert snapshot["files"]["src/app.py"]["extension"] == ".py"


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def test_is_safe_path_rejects_prefix_siblings(tmp_path):
    base = tmp_path / "app"
    assert is_safe_path(base, base / "src" / "x.js")
    assert is_safe_path(base, base)
    assert not is_safe_path(base, tmp_path / "app2" / "x.js")


def test_resolve_base_dir_priority(tmp_path):
    assert resolve_base_dir(str(tmp_path / "cli"), str(tmp_path / "cfg")) == (tmp_path / "cli").resolve()
    assert resolve_base_dir(None, str(tmp_path / "cfg")) == (tmp_path / "cfg").resolve()
    assert resolve_base_dir(None, None, cwd=tmp_path) == tmp_path.resolve()


# ---------------------------------------------------------------------------
# WorkspaceAPIClient
# ---------------------------------------------------------------------------

def _file_server_app(store):
    async def read(request):
        name = request.match_info["name"]
        if name not in store:
            return web.json_response({"error": "File not found"}, status=404)
        return web.json_response({"content": store[name]})

    async def write(request):
        body = await request.json()
        store[request.match_info["name"]] = body["content"]
        return web.json_response({"success": True})

    async def context(request):
        files = {name: {"content": c, "size": len(c), "extension": ""} for name, c in store.items()}
        return web.json_response({"workspace": "/srv", "files": files, "totalFiles": len(files)})

    async def health(request):
        return web.json_response({"status": "healthy"})

    app = web.Application()
    app.router.add_get("/api/files/{name}", read)
    app.router.add_post("/api/files/{name}", write)
    app.router.add_put("/api/files/{name}", write)
    app.router.add_get("/api/context/files", context)
    app.router.add_get("/api/health", health)
    return app


def test_api_client_round_trip_against_file_server():
    store = {"index.html": "<div>hi</div>"}

    async def scenario():
        server = test_utils.TestServer(_file_server_app(store))
        await server.start_server()
        try:
            client = WorkspaceAPIClient(f"http://{server.host}:{server.port}")
            assert await client.check_health() is True
            assert await client.read_file("index.html") == "<div>hi</div>"

            await client.create_file("notes.md", "# Notes")
            await client.write_file("index.html", "<div>bye</div>")
            snapshot = await client.get_workspace_context()

            with pytest.raises(WorkspaceError, match="File not found"):
                await client.read_file("missing.js")
            return snapshot
        finally:
            await server.close()

    snapshot = run_async(scenario())

    assert store == {"index.html": "<div>bye</div>", "notes.md": "# Notes"}
    assert snapshot["totalFiles"] == 2


def test_api_client_unreachable_server():
    client = WorkspaceAPIClient("http://127.0.0.1:9", timeout=2)
    assert run_async(client.check_health()) is False
    with pytest.raises(WorkspaceError, match="not reachable"):
        run_async(client.read_file("a.txt"))

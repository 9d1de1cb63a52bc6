"""
Tests for the context distiller: document layout, truncation rules,
configuration parsing and backend fallback.
"""

import asyncio
import json
import logging

from codearchitect.core.context.distiller import (
    ContextDistiller,
    distill_project,
    extract_rich_context,
    get_relevant_file_contents,
    render_context,
)


def run_async(coro):
    """Helper to run async coroutines inside plain pytest tests."""
    return asyncio.run(coro)


REACT_FILES = {
    "package.json": json.dumps({"dependencies": {"react": "^18.2.0"}}),
    "src/App.jsx": "import React from 'react';\nexport default function App() { return null; }\n",
    "src/App.css": ".app {\n  color: red;\n}",
}


class FakeWorkspace:
    def __init__(self, files=None, fail=False):
        self.files = files or {}
        self.fail = fail
        self.calls = 0

    async def get_workspace_context(self):
        self.calls += 1
        if self.fail:
            raise ConnectionError("file server down")
        return {
            "workspace": "/tmp/ws",
            "files": {
                path: {"content": content, "size": len(content), "extension": ""}
                for path, content in self.files.items()
            },
            "totalFiles": len(self.files),
        }


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def test_document_sections_in_order():
    text = run_async(distill_project(REACT_FILES, "src/App.jsx"))

    headers = [
        "=== PROJECT CODE CONTEXT ===",
        "FRAMEWORK: REACT (^18.2.0)",
        "PROJECT SIZE: 3 files",
        "ACTIVE FILE: src/App.jsx",
        "=== SYMBOLS IN CODEBASE ===",
        "=== IMPORTS/EXPORTS ===",
        "=== DEPENDENCIES ===",
        "=== ACTIVE FILE CONTENT ===",
        "=== FRAMEWORK FEATURES ===",
        "=== CONFIGURATION ===",
        "=== ADDITIONAL CONTEXT FILES ===",
    ]
    positions = [text.index(h) for h in headers]
    assert positions == sorted(positions)

    assert "FUNCTION: App (src/App.jsx:2)" in text
    assert "IMPORTS: react" in text
    assert "EXPORTS: App, default" not in text  # default-exported function is not a named export
    assert "EXPORTS: default" in text
    assert "react@^18.2.0" in text
    assert "JSX, Hooks, Components" in text


def test_vanilla_framework_line_has_no_version():
    text = run_async(distill_project({"index.html": "<html></html>"}, "index.html"))
    assert "FRAMEWORK: VANILLA\n" in text


def test_imports_are_deduplicated_and_truncated():
    files = {
        f"m{i}.js": f"import a from 'pkg{i}';\nimport b from 'shared';\n" for i in range(12)
    }
    rich = extract_rich_context(files)
    assert rich.imports.count("shared") == 1
    assert len(rich.imports) == 13

    text = render_context(files, "m0.js", rich)
    imports_line = next(line for line in text.splitlines() if line.startswith("IMPORTS: "))
    assert imports_line.endswith("...")
    assert len(imports_line[len("IMPORTS: "):-3].split(", ")) == 10


def test_dependencies_truncated_after_fifteen():
    deps = {f"dep{i}": f"1.{i}.0" for i in range(20)}
    files = {"package.json": json.dumps({"dependencies": deps})}
    text = run_async(distill_project(files, "package.json"))
    deps_line = text.split("=== DEPENDENCIES ===\n", 1)[1].splitlines()[0]
    assert deps_line.count("@") == 15
    assert deps_line.endswith("...")


def test_long_configuration_is_truncated():
    pkg = {"name": "x" * 300, "dependencies": {"react": "18"}}
    files = {"package.json": json.dumps(pkg)}
    text = run_async(distill_project(files, "package.json"))
    config_line = next(
        line for line in text.split("=== CONFIGURATION ===\n", 1)[1].splitlines()
        if line.startswith("package.json: ")
    )
    assert config_line.endswith("...")
    assert len(config_line) == len("package.json: ") + 200 + 3


def test_yaml_and_broken_json_configs():
    files = {
        "docker-compose.yml": "services:\n  web:\n    image: nginx\n",
        ".github/workflows/ci.yml": "on: push\n",
        "tsconfig.json": "{ broken",
    }
    rich = extract_rich_context(files)
    assert rich.config_files["docker-compose.yml"] == {"services": {"web": {"image": "nginx"}}}
    assert ".github/workflows/ci.yml" in rich.config_files
    assert rich.config_files["tsconfig.json"] == "{ broken"


def test_additional_context_lists_manifest_first_then_small_related_files():
    files = {
        "index.html": "<html><body></body></html>",
        "styles.css": "body {\n  margin: 0;\n}",
        "big.js": "const x = 1;\n" * 200,
        "notes.md": "# notes",
        "package.json": '{"name": "site"}',
    }
    section = get_relevant_file_contents(files, "index.html")

    assert section.startswith('package.json: {"name": "site"}')
    assert "styles.css:\nbody {" in section
    assert "big.js" not in section
    assert "notes.md" not in section
    assert "index.html:" not in section


# ---------------------------------------------------------------------------
# Backend vs local
# ---------------------------------------------------------------------------

def test_backend_snapshot_is_used_when_available():
    workspace = FakeWorkspace({"server.js": "const express = require('express');"})
    distilled = run_async(
        ContextDistiller(workspace).distill({"local.py": "x = 1"}, "server.js", use_backend=True)
    )
    assert distilled.source == "backend"
    assert list(distilled.files) == ["server.js"]
    assert "express" in distilled.rich.imports


def test_backend_failure_falls_back_to_local_with_warning(caplog):
    workspace = FakeWorkspace(fail=True)
    with caplog.at_level(logging.WARNING):
        distilled = run_async(
            ContextDistiller(workspace).distill(REACT_FILES, "src/App.jsx", use_backend=True)
        )
    assert distilled.source == "local"
    assert distilled.files == REACT_FILES
    assert "FRAMEWORK: REACT" in distilled.text
    assert any("falling back to local" in r.message for r in caplog.records)


def test_backend_flag_without_workspace_falls_back():
    distilled = run_async(ContextDistiller().distill(REACT_FILES, "src/App.jsx", use_backend=True))
    assert distilled.source == "local"


def test_local_mode_does_not_touch_workspace():
    workspace = FakeWorkspace({"a.js": "const a = 1;"})
    run_async(ContextDistiller(workspace).distill(REACT_FILES, "src/App.jsx"))
    assert workspace.calls == 0

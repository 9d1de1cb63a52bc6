# codearchitect/core/context/distiller.py
"""
Project context distiller.

Turns a file map into the "rich context" document that grounds every
prompt: framework, symbols, imports/exports, dependencies, the active
file, configuration and a handful of small related files.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import yaml

from codearchitect.core.content_types import get_extension
from codearchitect.core.context.extractors import Symbol, analyze_file
from codearchitect.core.context.framework import (
    FrameworkInfo,
    MANIFEST_FILE,
    detect_framework,
    extract_dependencies,
)

logger = logging.getLogger(__name__)

MAX_IMPORTS_SHOWN = 10
MAX_EXPORTS_SHOWN = 10
MAX_DEPENDENCIES_SHOWN = 15
MAX_CONFIG_CHARS = 200
MAX_RELATED_FILE_CHARS = 1000

JSON_CONFIG_FILES = ("package.json", "tsconfig.json", "next.config.js", "nuxt.config.js")
YAML_CONFIG_FILES = ("docker-compose.yml", "docker-compose.yaml", "pnpm-workspace.yaml")
WORKFLOW_DIR = ".github/workflows/"

# Active file extension -> extensions of files worth showing alongside it
RELATED_EXTENSIONS: Dict[str, List[str]] = {
    "html": ["css", "js"],
    "css": ["html", "js", "scss"],
    "js": ["html", "css", "json", "ts"],
    "jsx": ["css", "js", "json", "ts", "tsx"],
    "ts": ["js", "json", "tsx"],
    "tsx": ["css", "ts", "js", "json"],
    "py": ["txt", "md", "json", "yml"],
    "json": ["js", "ts", "py", "md"],
}


@dataclass
class RichContext:
    symbols: List[Symbol] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)
    dependencies: Dict[str, str] = field(default_factory=dict)
    framework: FrameworkInfo = field(default_factory=lambda: FrameworkInfo(type="vanilla"))
    config_files: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DistilledContext:
    """Rendered context document plus the data it was built from."""
    text: str
    rich: RichContext
    files: Dict[str, str]
    source: str = "local"


def _is_yaml_config(path: str) -> bool:
    if path in YAML_CONFIG_FILES:
        return True
    return path.startswith(WORKFLOW_DIR) and get_extension(path) in ("yml", "yaml")


def _parse_config(path: str, content: str) -> Any:
    """Parsed config data, or the raw text if it does not parse."""
    try:
        if _is_yaml_config(path):
            return yaml.safe_load(content)
        return json.loads(content)
    except (ValueError, yaml.YAMLError):
        return content


def extract_rich_context(files: Mapping[str, str]) -> RichContext:
    symbols: List[Symbol] = []
    imports: List[str] = []
    exports: List[str] = []
    config_files: Dict[str, Any] = {}

    for path, content in files.items():
        analysis = analyze_file(path, content)
        symbols.extend(analysis.symbols)
        imports.extend(analysis.imports)
        exports.extend(analysis.exports)

        if path in JSON_CONFIG_FILES or _is_yaml_config(path):
            config_files[path] = _parse_config(path, content)

    return RichContext(
        symbols=symbols,
        imports=list(dict.fromkeys(imports)),
        exports=list(dict.fromkeys(exports)),
        dependencies=extract_dependencies(files),
        framework=detect_framework(files),
        config_files=config_files,
    )


def get_related_extensions(active_file: str) -> List[str]:
    return RELATED_EXTENSIONS.get(get_extension(active_file), [])


# ----------------------------------------------------------------------
# Rendering helpers
# ----------------------------------------------------------------------

def _truncated_list(items: List[str], limit: int) -> str:
    text = ", ".join(items[:limit])
    return text + ("..." if len(items) > limit else "")


def _format_symbol(symbol: Symbol) -> str:
    location = symbol.file + (f":{symbol.line}" if symbol.line else "")
    return f"{symbol.kind.value.upper()}: {symbol.name} ({location})"


def _format_dependencies(deps: Dict[str, str]) -> str:
    pairs = [f"{name}@{version}" for name, version in list(deps.items())[:MAX_DEPENDENCIES_SHOWN]]
    return ", ".join(pairs) + ("..." if len(deps) > MAX_DEPENDENCIES_SHOWN else "")


def _format_config(path: str, config: Any) -> str:
    if isinstance(config, (dict, list)):
        serialized = json.dumps(config)
    else:
        serialized = str(config)
    if len(serialized) > MAX_CONFIG_CHARS:
        serialized = serialized[:MAX_CONFIG_CHARS] + "..."
    return f"{path}: {serialized}"


def get_relevant_file_contents(files: Mapping[str, str], active_file: str) -> str:
    """Manifest first, then small files related to the active one."""
    sections: List[str] = []

    if files.get(MANIFEST_FILE):
        sections.append(f"{MANIFEST_FILE}: {files[MANIFEST_FILE]}")

    related = get_related_extensions(active_file)
    for path, content in files.items():
        if path in (active_file, MANIFEST_FILE):
            continue
        if get_extension(path) in related and len(content) < MAX_RELATED_FILE_CHARS:
            sections.append(f"{path}:\n{content}")

    return "\n\n".join(sections)


def render_context(
    files: Mapping[str, str],
    active_file: str,
    rich: RichContext,
) -> str:
    framework = rich.framework
    version = f" ({framework.version})" if framework.version else ""
    active_content = files.get(active_file, "")

    symbols = "\n".join(_format_symbol(s) for s in rich.symbols)
    configs = "\n".join(_format_config(p, c) for p, c in rich.config_files.items())

    return (
        "=== PROJECT CODE CONTEXT ===\n\n"
        f"FRAMEWORK: {framework.type.upper()}{version}\n"
        f"PROJECT SIZE: {len(files)} files\n"
        f"ACTIVE FILE: {active_file}\n\n"
        "=== SYMBOLS IN CODEBASE ===\n"
        f"{symbols}\n\n"
        "=== IMPORTS/EXPORTS ===\n"
        f"IMPORTS: {_truncated_list(rich.imports, MAX_IMPORTS_SHOWN)}\n"
        f"EXPORTS: {_truncated_list(rich.exports, MAX_EXPORTS_SHOWN)}\n\n"
        "=== DEPENDENCIES ===\n"
        f"{_format_dependencies(rich.dependencies)}\n\n"
        "=== ACTIVE FILE CONTENT ===\n"
        f"{active_content}\n\n"
        "=== FRAMEWORK FEATURES ===\n"
        f"{', '.join(framework.features)}\n\n"
        "=== CONFIGURATION ===\n"
        f"{configs}\n\n"
        "=== ADDITIONAL CONTEXT FILES ===\n"
        f"{get_relevant_file_contents(files, active_file)}"
    )


# ----------------------------------------------------------------------
# Distiller
# ----------------------------------------------------------------------

class ContextDistiller:
    """
    Builds distilled context from either the local file map or a
    workspace snapshot.

    The workspace is any object with an async ``get_workspace_context()``
    returning ``{"workspace", "files": {path: {"content", ...}}, "totalFiles"}``.
    """

    def __init__(self, workspace: Optional[Any] = None):
        self.workspace = workspace

    async def _load_backend_files(self) -> Dict[str, str]:
        if self.workspace is None:
            raise RuntimeError("no workspace collaborator attached")
        snapshot = await self.workspace.get_workspace_context()
        entries = snapshot.get("files") or {}
        return {
            path: (info.get("content") or "") if isinstance(info, dict) else str(info)
            for path, info in entries.items()
        }

    async def distill(
        self,
        files: Mapping[str, str],
        active_file: str,
        use_backend: bool = False,
    ) -> DistilledContext:
        source_files: Dict[str, str] = dict(files)
        source = "local"

        if use_backend:
            try:
                source_files = await self._load_backend_files()
                source = "backend"
            except Exception as e:
                logger.warning(f"Backend context unavailable, falling back to local files: {e}")
                source_files = dict(files)

        rich = extract_rich_context(source_files)
        text = render_context(source_files, active_file, rich)
        logger.debug(
            f"Distilled context from {source}: {len(source_files)} files, "
            f"{len(rich.symbols)} symbols, framework={rich.framework.type}"
        )
        return DistilledContext(text=text, rich=rich, files=source_files, source=source)


async def distill_project(
    files: Mapping[str, str],
    active_file: str,
    use_backend: bool = False,
    workspace: Optional[Any] = None,
) -> str:
    """Convenience wrapper returning only the context document."""
    distilled = await ContextDistiller(workspace).distill(files, active_file, use_backend)
    return distilled.text

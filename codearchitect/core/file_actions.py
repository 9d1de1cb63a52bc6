# codearchitect/core/file_actions.py
"""
File-action extraction.

Model output is turned into an ordered ``path -> content`` mapping in
three tiers:

1. Explicit directives: ``[CREATE: p]...[/CREATE]``, ``[MODIFY: p]...[/MODIFY]``
   and the legacy ``[FILE: p]`` form.
2. When there are no directives, fenced code blocks longer than ten
   characters become files, named by an embedded filename comment or
   by language.
3. Paths get a content-appropriate extension when they have none.
   Names generated for code blocks are also corrected when their
   extension contradicts the content.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List

from codearchitect.core.content_types import add_missing_extension, ensure_proper_extension

logger = logging.getLogger(__name__)

MIN_BLOCK_CHARS = 10

_DIRECTIVE_RE = re.compile(r"\[(CREATE|MODIFY):\s*([^\]]+)\]\s*\n([\s\S]*?)\n\[/\1\]")

_LEGACY_FILE_RE = re.compile(
    r"\[FILE:\s*([a-zA-Z0-9/._-]+)\]\s*(?:```[a-z]*\n)?([\s\S]*?)(?:\n?```|\n?\[/FILE\]|\Z)",
    re.IGNORECASE,
)

_CODE_BLOCK_RE = re.compile(r"```(\w+)?\s*\n([\s\S]*?)```")

_FILENAME_HINT_RE = re.compile(
    r"(?://|#|<!--|--)\s*(?:file|filename|name):\s*([^\n\r]+)", re.IGNORECASE
)

LANGUAGE_EXTENSIONS: Dict[str, str] = {
    "javascript": "js",
    "js": "js",
    "jsx": "jsx",
    "typescript": "ts",
    "ts": "ts",
    "tsx": "tsx",
    "python": "py",
    "py": "py",
    "html": "html",
    "htm": "html",
    "css": "css",
    "scss": "scss",
    "sass": "sass",
    "less": "less",
    "json": "json",
    "xml": "xml",
    "yaml": "yaml",
    "yml": "yml",
    "markdown": "md",
    "md": "md",
    "sql": "sql",
    "bash": "sh",
    "shell": "sh",
    "sh": "sh",
    "java": "java",
    "cpp": "cpp",
    "c": "c",
    "csharp": "cs",
    "cs": "cs",
    "php": "php",
    "ruby": "rb",
    "rb": "rb",
    "go": "go",
    "rust": "rs",
    "rs": "rs",
}


@dataclass
class FileDirective:
    """One ``[CREATE]`` or ``[MODIFY]`` block."""
    operation: str  # "create" | "modify"
    path: str
    content: str


def parse_directives(text: str) -> List[FileDirective]:
    """CREATE/MODIFY directives in order of appearance; only a missing extension is filled in."""
    directives = []
    for match in _DIRECTIVE_RE.finditer(text):
        tag, raw_path, body = match.groups()
        content = body.strip()
        path = add_missing_extension(raw_path.strip(), content)
        directives.append(FileDirective(tag.lower(), path, content))
    return directives


def _legacy_files(text: str) -> Dict[str, str]:
    files: Dict[str, str] = {}
    for match in _LEGACY_FILE_RE.finditer(text):
        content = match.group(2).strip()
        files[add_missing_extension(match.group(1).strip(), content)] = content
    return files


def generate_filename(language: str, index: int, content: str) -> str:
    """
    Name for the ``index``-th (0-based) accepted code block.

    An embedded ``// file: x`` style comment wins; otherwise the name is
    derived from the language and a few content hints.
    """
    hint = _FILENAME_HINT_RE.search(content)
    if hint:
        name = hint.group(1).strip()
        if name.endswith("-->"):
            name = name[:-3].rstrip()
        return name

    ext = LANGUAGE_EXTENSIONS.get(language, "txt")

    if language == "html" and index == 0:
        return "index.html"
    if language == "css" and index == 0:
        return "styles.css"
    if language in ("javascript", "js"):
        if "React" in content:
            return f"component{index + 1}.jsx"
        if "function" in content or "const" in content or "let" in content:
            return f"script{index + 1}.js"

    return f"{language}{index + 1}.{ext}"


def extract_code_blocks(text: str) -> Dict[str, str]:
    files: Dict[str, str] = {}
    index = 0
    for match in _CODE_BLOCK_RE.finditer(text):
        language = (match.group(1) or "text").lower()
        content = match.group(2).strip()
        if len(content) <= MIN_BLOCK_CHARS:
            continue
        files[generate_filename(language, index, content)] = content
        index += 1
    return files


def extract_files(text: str) -> Dict[str, str]:
    """
    Parse model output into ``path -> content``.

    Later entries for the same path overwrite earlier ones. Named paths
    keep their extension (one is appended if missing); names invented for
    bare code blocks are corrected to match their content.
    """
    files: Dict[str, str] = {}
    for directive in parse_directives(text):
        files[directive.path] = directive.content
    files.update(_legacy_files(text))
    if files:
        return files

    blocks = extract_code_blocks(text)
    if blocks:
        logger.debug(f"No file directives found, using {len(blocks)} fenced code block(s)")
    return {ensure_proper_extension(path, content): content for path, content in blocks.items()}

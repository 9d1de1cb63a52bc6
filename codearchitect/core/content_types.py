# codearchitect/core/content_types.py
"""
Content-type heuristics for generated files.

Detection checks signatures in a fixed priority order:
HTML, CSS, JS/JSX, Python, JSON, Markdown, SQL, falling back to "txt".
These are pattern heuristics, not parsers. They only need to be good
enough to give model-produced files a sensible extension.
"""

import json
import logging
import re
from pathlib import PurePosixPath
from typing import Dict, List

logger = logging.getLogger(__name__)

_HTML_RE = re.compile(r"<html|<body|<div|<!doctype\s+html", re.IGNORECASE)

# A selector line followed by a block holding at least one `prop: value;`
_CSS_RE = re.compile(
    r"^(?![ \t]*(?:interface|type|class|function|const|let|var|if|else|for|while"
    r"|switch|return|export|import|enum|def)\b)"
    r"[ \t]*[@#.:*\w\[\]\-=\"' ,>+~()%]+\{"
    r"(?:[^{}]*?[;\n])?[ \t\n]*[\w-]+[ \t]*:[ \t]*[^;{}\n]+;",
    re.MULTILINE,
)

_JS_PATTERNS = [
    re.compile(r"\bfunction\s*[\w$]*\s*\("),
    re.compile(r"\b(?:const|let|var)\s+(?:[\w$]+\s*=|[{\[])"),
    re.compile(r"^\s*import\s+(?:[\w*{][^;\n]*\s+from\s+)?['\"]", re.MULTILINE),
    re.compile(r"^\s*export\s+", re.MULTILINE),
    re.compile(r"\bclass\s+\w+(?:\s+extends\s+[\w.]+)?\s*\{"),
    re.compile(r"\brequire\s*\(\s*['\"]"),
    re.compile(r"\bReact\b"),
    re.compile(r"=>"),
]

_JSX_RE = re.compile(r"\bReact\b|<[A-Za-z][^<>]*/>|return\s*\(\s*<")

_PY_PATTERNS = [
    re.compile(r"^\s*def\s+\w+\s*\(", re.MULTILINE),
    re.compile(r"^\s*class\s+\w+\s*[:(]", re.MULTILINE),
    re.compile(r"^\s*import\s+\w", re.MULTILINE),
    re.compile(r"^\s*from\s+[\w.]+\s+import\s", re.MULTILINE),
    re.compile(r"\bprint\("),
    re.compile(r"if\s+__name__\s*==\s*['\"]__main__['\"]"),
]

_MD_PATTERNS = [
    re.compile(r"^#{1,6}\s+\S", re.MULTILINE),
    re.compile(r"```"),
    re.compile(r"\[[^\]\n]+\]\([^)\n]+\)"),
]

_SQL_RE = re.compile(
    r"\b(?:SELECT\s+[\s\S]+?\s+FROM|INSERT\s+INTO|UPDATE\s+\w+\s+SET"
    r"|DELETE\s+FROM|CREATE\s+(?:TABLE|INDEX|VIEW|DATABASE)|DROP\s+TABLE)\b",
    re.IGNORECASE,
)

# Detected type -> extensions accepted as consistent with it
COMPATIBLE_EXTENSIONS: Dict[str, List[str]] = {
    "js": ["js", "jsx", "ts", "tsx"],
    "jsx": ["js", "jsx", "ts", "tsx"],
    "py": ["py"],
    "html": ["html", "htm"],
    "css": ["css", "scss", "sass", "less"],
    "json": ["json"],
    "md": ["md", "markdown"],
    "sql": ["sql"],
    "txt": ["txt"],
}

# Extensions the heuristics know about. Anything else (yaml, go, sh...) is
# never rewritten because the detector cannot judge it.
KNOWN_EXTENSIONS = frozenset(
    ext for exts in COMPATIBLE_EXTENSIONS.values() for ext in exts
)


def _looks_like_json(content: str) -> bool:
    stripped = content.strip()
    if not stripped or stripped[0] not in "{[":
        return False
    try:
        json.loads(stripped)
    except ValueError:
        return False
    return True


def detect_content_type(content: str) -> str:
    """Return the extension (without dot) that best matches ``content``."""
    if not content:
        return "txt"

    if _HTML_RE.search(content):
        return "html"

    if _CSS_RE.search(content):
        return "css"

    if any(p.search(content) for p in _JS_PATTERNS):
        if _JSX_RE.search(content):
            return "jsx"
        return "js"

    if any(p.search(content) for p in _PY_PATTERNS):
        return "py"

    if _looks_like_json(content):
        return "json"

    if any(p.search(content) for p in _MD_PATTERNS):
        return "md"

    if _SQL_RE.search(content):
        return "sql"

    return "txt"


def get_extension(path: str) -> str:
    """Lower-case extension of ``path`` without the dot ('' if none)."""
    return PurePosixPath(path).suffix.lstrip(".").lower()


def ensure_proper_extension(path: str, content: str) -> str:
    """
    Make sure ``path`` carries an extension consistent with ``content``.

    - No extension: the detected one is appended.
    - Known but inconsistent extension: it is replaced.
    - Unknown extension, dotfiles, or content without any signal: kept.

    Applying this twice gives the same result as applying it once.
    """
    pure = PurePosixPath(path)
    name = pure.name
    if not name:
        return path

    if name.startswith(".") and name.count(".") == 1:
        return path

    ext = get_extension(path)
    if not ext:
        return f"{path}.{detect_content_type(content)}"

    if ext not in KNOWN_EXTENSIONS:
        return path

    detected = detect_content_type(content)
    if detected == "txt" or ext in COMPATIBLE_EXTENSIONS[detected]:
        return path

    fixed = path[: -len(pure.suffix)] + f".{detected}"
    logger.debug(f"Corrected extension: {path} -> {fixed}")
    return fixed


def add_missing_extension(path: str, content: str) -> str:
    """
    Append the detected extension when ``path`` has none.

    Paths that already carry an extension are returned untouched; a
    README.md full of code samples stays README.md.
    """
    if get_extension(path):
        return path
    return ensure_proper_extension(path, content)

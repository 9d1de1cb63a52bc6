# codearchitect/core/context/extractors.py
"""
Regex-based symbol, import and export extraction.

This is a best-effort heuristic layer, not a parser. The prompts built
from it only need an approximate picture of the codebase, so unmatched
or malformed constructs are simply skipped and nothing here raises.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from codearchitect.core.content_types import get_extension

logger = logging.getLogger(__name__)

JS_EXTENSIONS = ("js", "jsx", "ts", "tsx")
PY_EXTENSIONS = ("py",)


class SymbolKind(Enum):
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE = "type"
    CONSTANT = "constant"
    VARIABLE = "variable"


@dataclass
class Symbol:
    """A named declaration found in a source file."""
    name: str
    kind: SymbolKind
    file: str
    line: Optional[int] = None
    signature: Optional[str] = None
    exported: bool = False


@dataclass
class FileAnalysis:
    """Everything the extractor found in one file."""
    symbols: List[Symbol] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)


# ----------------------------------------------------------------------
# Patterns
# ----------------------------------------------------------------------

_JS_FUNCTION_RE = re.compile(
    r"(?:export\s+(?:default\s+)?)?(?:async\s+)?\bfunction\s*\*?\s*(\w+)\s*\([^)]*\)"
)
_JS_CLASS_RE = re.compile(r"(?:export\s+(?:default\s+)?)?\bclass\s+(\w+)")
_JS_INTERFACE_RE = re.compile(r"(?:export\s+)?\binterface\s+(\w+)")
_JS_TYPE_RE = re.compile(r"(?:export\s+)?\btype\s+(\w+)\s*(?:<[^>]*>)?\s*=")

_JS_STATIC_IMPORT_RE = re.compile(r"\bfrom\s+['\"]([^'\"]+)['\"]")
_JS_DYNAMIC_IMPORT_RE = re.compile(r"\bimport\s*\(\s*['\"]([^'\"]+)['\"]\s*\)")
_JS_REQUIRE_RE = re.compile(r"\brequire\s*\(\s*['\"]([^'\"]+)['\"]\s*\)")

_JS_NAMED_EXPORT_RE = re.compile(
    r"\bexport\s+(?:async\s+)?(?:const|let|var|function\*?|class)\s+(\w+)"
)
_JS_DEFAULT_EXPORT_RE = re.compile(
    r"\bexport\s+default\s+(?:\w+|\{[^}]*\}|\([^)]*\)\s*=>)"
)
_EXPORT_PREFIX_RE = re.compile(r"\s*export\b")

_PY_FUNCTION_RE = re.compile(
    r"(?:async\s+)?def\s+(\w+)\s*\([^)]*\)\s*(?:->\s*[^:\n]+)?:"
)
_PY_CLASS_RE = re.compile(r"\bclass\s+(\w+)")
_PY_IMPORT_RE = re.compile(r"^(?:import\s+(\w+)|from\s+(\w+)\s+import)", re.MULTILINE)


def line_number(content: str, index: int) -> int:
    """1-indexed line of the character at ``index``."""
    return content.count("\n", 0, index) + 1


def _collect(
    pattern: "re.Pattern[str]",
    kind: SymbolKind,
    content: str,
    path: str,
    with_signature: bool = False,
    exportable: bool = True,
) -> List[Symbol]:
    symbols: List[Symbol] = []
    for match in pattern.finditer(content):
        text = match.group(0)
        symbols.append(
            Symbol(
                name=match.group(1),
                kind=kind,
                file=path,
                line=line_number(content, match.start()),
                signature=text if with_signature else None,
                exported=exportable and bool(_EXPORT_PREFIX_RE.match(text)),
            )
        )
    return symbols


# ----------------------------------------------------------------------
# JavaScript / TypeScript
# ----------------------------------------------------------------------

def extract_js_symbols(content: str, path: str) -> List[Symbol]:
    symbols = _collect(_JS_FUNCTION_RE, SymbolKind.FUNCTION, content, path, with_signature=True)
    symbols += _collect(_JS_CLASS_RE, SymbolKind.CLASS, content, path)
    symbols += _collect(_JS_INTERFACE_RE, SymbolKind.INTERFACE, content, path)
    symbols += _collect(_JS_TYPE_RE, SymbolKind.TYPE, content, path)
    return symbols


def extract_js_imports(content: str) -> List[str]:
    imports: List[str] = []
    for pattern in (_JS_STATIC_IMPORT_RE, _JS_DYNAMIC_IMPORT_RE, _JS_REQUIRE_RE):
        imports.extend(m.group(1) for m in pattern.finditer(content))
    return imports


def extract_js_exports(content: str) -> List[str]:
    exports = [m.group(1) for m in _JS_NAMED_EXPORT_RE.finditer(content)]
    if _JS_DEFAULT_EXPORT_RE.search(content):
        exports.append("default")
    return exports


# ----------------------------------------------------------------------
# Python
# ----------------------------------------------------------------------

def extract_py_symbols(content: str, path: str) -> List[Symbol]:
    symbols = _collect(
        _PY_FUNCTION_RE, SymbolKind.FUNCTION, content, path,
        with_signature=True, exportable=False,
    )
    symbols += _collect(_PY_CLASS_RE, SymbolKind.CLASS, content, path, exportable=False)
    return symbols


def extract_py_imports(content: str) -> List[str]:
    return [m.group(1) or m.group(2) for m in _PY_IMPORT_RE.finditer(content)]


# ----------------------------------------------------------------------
# Entry point
# ----------------------------------------------------------------------

def analyze_file(path: str, content: str) -> FileAnalysis:
    """
    Extract symbols, imports and exports from one file.

    The language family is chosen by extension; files outside the
    supported families produce an empty analysis.
    """
    ext = get_extension(path)
    content = content or ""

    if ext in JS_EXTENSIONS:
        return FileAnalysis(
            symbols=extract_js_symbols(content, path),
            imports=extract_js_imports(content),
            exports=extract_js_exports(content),
        )

    if ext in PY_EXTENSIONS:
        return FileAnalysis(
            symbols=extract_py_symbols(content, path),
            imports=extract_py_imports(content),
        )

    return FileAnalysis()

"""
Project context: static extraction, framework detection and distillation.
"""

from codearchitect.core.context.extractors import (
    FileAnalysis,
    Symbol,
    SymbolKind,
    analyze_file,
)
from codearchitect.core.context.framework import FrameworkInfo, detect_framework
from codearchitect.core.context.distiller import (
    ContextDistiller,
    DistilledContext,
    RichContext,
    distill_project,
    extract_rich_context,
)

__all__ = [
    "FileAnalysis",
    "Symbol",
    "SymbolKind",
    "analyze_file",
    "FrameworkInfo",
    "detect_framework",
    "ContextDistiller",
    "DistilledContext",
    "RichContext",
    "distill_project",
    "extract_rich_context",
]

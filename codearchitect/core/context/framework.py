# codearchitect/core/context/framework.py
"""
Framework detection from the project's package manifest.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"


@dataclass
class FrameworkInfo:
    type: str
    version: Optional[str] = None
    features: List[str] = field(default_factory=list)


def _parse_manifest(files: Mapping[str, str]) -> Optional[dict]:
    raw = files.get(MANIFEST_FILE)
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except ValueError as e:
        logger.warning(f"Failed to parse {MANIFEST_FILE}: {e}")
        return None
    return data if isinstance(data, dict) else None


def extract_dependencies(files: Mapping[str, str]) -> Dict[str, str]:
    """
    Merge ``dependencies`` and ``devDependencies`` from the manifest.
    Dev entries win on conflicts. Missing or broken manifest -> {}.
    """
    pkg = _parse_manifest(files)
    if pkg is None:
        return {}

    deps: Dict[str, str] = {}
    for section in ("dependencies", "devDependencies"):
        value = pkg.get(section)
        if isinstance(value, dict):
            deps.update({str(k): str(v) for k, v in value.items()})
    return deps


# ----------------------------------------------------------------------
# Classification table
#
# Order matters: the first matching rule wins, which decides the outcome
# when a manifest pulls in several frameworks at once.
# Each entry: (dependency, type, features, refinement)
# where refinement is (dependency, type, extra features) or None.
# ----------------------------------------------------------------------

_Refinement = Optional[Tuple[str, str, List[str]]]

FRAMEWORK_RULES: List[Tuple[str, str, List[str], _Refinement]] = [
    ("react", "react", ["JSX", "Hooks", "Components"],
     ("next", "nextjs", ["SSR", "API Routes", "App Router"])),
    ("vue", "vue", ["Vue Components", "Reactivity", "Templates"],
     ("nuxt", "nuxt", ["SSR", "Auto-imports", "Modules"])),
    ("svelte", "svelte", ["Components", "Reactivity", "Stores"], None),
    ("@angular/core", "angular",
     ["Components", "Services", "Modules", "Dependency Injection"], None),
    ("express", "express", ["Middleware", "Routing", "REST API"], None),
    ("fastify", "fastify", ["Plugins", "Hooks", "Validation"], None),
]

VANILLA_FEATURES = ["HTML", "CSS", "JavaScript"]


def detect_framework(files: Mapping[str, str]) -> FrameworkInfo:
    """Classify the project from its manifest dependencies."""
    deps = extract_dependencies(files)

    for dependency, fw_type, features, refinement in FRAMEWORK_RULES:
        if not deps.get(dependency):
            continue
        if refinement is not None:
            ref_dep, ref_type, ref_features = refinement
            if deps.get(ref_dep):
                return FrameworkInfo(
                    type=ref_type,
                    version=deps[ref_dep],
                    features=list(features) + list(ref_features),
                )
        return FrameworkInfo(type=fw_type, version=deps[dependency], features=list(features))

    return FrameworkInfo(type="vanilla", features=list(VANILLA_FEATURES))

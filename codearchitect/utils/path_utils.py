import os
from pathlib import Path
from typing import Optional, Union


def resolve_base_dir(
    cli_arg: Optional[str] = None,
    config_val: Optional[str] = None,
    cwd: Optional[Union[str, Path]] = None
) -> Path:
    """
    Resolves the absolute base directory for the workspace.

    Priority:
    1. CLI argument (--dir)
    2. Config value (default_dir)
    3. Current working directory (cwd)

    Returns:
        Path: Absolute, resolved path to the workspace root.
    """
    path_str = cli_arg or config_val

    if path_str:
        return Path(path_str).expanduser().resolve()
    return Path(cwd or os.getcwd()).resolve()


def is_safe_path(base_dir: Path, target_path: Path) -> bool:
    """
    Verifies that target_path is within base_dir or is base_dir itself.
    Prevents path traversal, including sibling directories sharing a prefix.
    """
    try:
        target_path.resolve().relative_to(base_dir.resolve())
    except (ValueError, OSError):
        return False
    return True


def to_posix_relative(base_dir: Path, target_path: Path) -> str:
    """Workspace-relative path with forward slashes."""
    return target_path.resolve().relative_to(base_dir.resolve()).as_posix()

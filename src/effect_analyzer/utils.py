"""Shared utilities for effect-analyzer."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


def snippet(source: str, lineno: int, max_len: int = 160) -> str:
    """Return the source line at lineno (1-based), stripped and truncated."""
    lines = source.splitlines()
    if 0 < lineno <= len(lines):
        return lines[lineno - 1].strip()[:max_len]
    return ""

# Directories to skip during file discovery
SKIP_DIRS = {
    ".git", "node_modules", "bower_components", "dist", "build", "out",
    "coverage", ".next", ".nuxt", ".turbo", ".cache", ".parcel-cache",
    ".svelte-kit", ".yarn", "storybook-static", "vendor",
}

# Source suffixes analyzed by default
SOURCE_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts")

# Maximum file size to read (skip bundles and generated code)
MAX_FILE_SIZE = 1024 * 1024  # 1 MB


def discover_files(
    workspace: Path,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    skip_dirs: Iterable[str] = SKIP_DIRS,
    max_file_size: int = MAX_FILE_SIZE,
) -> list[Path]:
    """Walk workspace, skipping ignored dirs, other suffixes and large files."""
    suffixes = {e.lower() for e in extensions}
    skipped = set(skip_dirs)
    files: list[Path] = []
    for item in sorted(workspace.rglob("*")):
        if item.is_dir():
            continue
        if item.suffix.lower() not in suffixes or item.name.endswith(".d.ts"):
            continue
        if any(part in skipped for part in item.relative_to(workspace).parts):
            continue
        try:
            if item.stat().st_size > max_file_size:
                continue
        except OSError:
            continue
        files.append(item)
    return files

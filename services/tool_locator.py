# ============================================================================
# TOOL LOCATOR
# ============================================================================
# STATUS: Service - executable discovery on the local filesystem
# PURPOSE: Fast PATH lookup and slow full filesystem scan
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ToolLocator
# ============================================================================
"""
Tool Locator.

Two discovery strategies:

    fast_lookup(name)   PATH entries, then the configured search paths.
                        Milliseconds.
    full_scan(name)     os.walk over the configured scan roots.
                        Minutes on a large disk; callers announce it first.

Both return every matching executable (not just the first), in discovery
order, so the resolver can pick the first installation that also has the
required driver.

scan_count counts full scans performed, for callers that need to prove a
cached result avoided one.
"""

import os
import shutil
from typing import Iterable, List, Optional

from config import ToolSearchConfig
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "tool_locator")


def _dedupe(paths: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for p in paths:
        key = os.path.normcase(os.path.abspath(p))
        if key not in seen:
            seen.add(key)
            result.append(p)
    return result


class ToolLocator:
    """
    Finds executables by name.

    Args:
        config: Search locations and platform family
    """

    def __init__(self, config: ToolSearchConfig):
        self._config = config
        self.scan_count = 0

    def _file_names(self, name: str) -> List[str]:
        suffix = self._config.exe_suffix
        if suffix and not name.lower().endswith(suffix):
            return [name + suffix, name]
        return [name]

    def _search_dirs(self) -> List[str]:
        path_dirs = [d for d in os.environ.get("PATH", "").split(os.pathsep) if d]
        return _dedupe(path_dirs + list(self._config.effective_search_paths))

    def fast_lookup(self, name: str) -> List[str]:
        """All executables called `name` on PATH and the search paths."""
        found = []
        for directory in self._search_dirs():
            if not os.path.isdir(directory):
                continue
            for file_name in self._file_names(name):
                hit = shutil.which(file_name, path=directory)
                if hit:
                    found.append(os.path.abspath(hit))
                    break
        found = _dedupe(found)
        logger.debug(f"Fast lookup for '{name}': {len(found)} candidate(s)")
        return found

    def find(self, name: str) -> Optional[str]:
        """First fast-lookup hit, or None."""
        hits = self.fast_lookup(name)
        return hits[0] if hits else None

    def full_scan(self, name: str) -> List[str]:
        """
        Walk every scan root looking for `name`.

        Unreadable directories are skipped. Symlinked directories are not
        followed, which also keeps the walk out of link cycles.
        """
        self.scan_count += 1
        wanted = {n.lower() for n in self._file_names(name)}
        found = []
        for root in self._config.effective_scan_roots:
            if not os.path.isdir(root):
                logger.debug(f"Scan root does not exist: {root}")
                continue
            logger.info(f"Scanning {root} for '{name}'")
            for dirpath, _dirnames, filenames in os.walk(root, onerror=None):
                for file_name in filenames:
                    if file_name.lower() in wanted:
                        candidate = os.path.join(dirpath, file_name)
                        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
                            found.append(os.path.abspath(candidate))
        found = _dedupe(found)
        logger.info(f"Full scan for '{name}': {len(found)} candidate(s)")
        return found

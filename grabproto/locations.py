"""
Default Installation Lookup

Finds a Vintage Story installation when no --input directory is given.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Union

from grabproto.constants import APP_DATA_SUBDIR, MACOS_INSTALL, MAIN_LIBRARY

log = logging.getLogger(__name__)


def application_data_dir() -> Path:
    """Per-user application data directory.

    Mirrors .NET's SpecialFolder.ApplicationData: %APPDATA% on Windows,
    $XDG_CONFIG_HOME (or ~/.config) everywhere else.
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def candidate_locations() -> List[Path]:
    """Well-known install locations, in probe order."""
    return [
        application_data_dir() / APP_DATA_SUBDIR,
        Path(MACOS_INSTALL),
    ]


def is_installation(path: Union[str, Path, None]) -> bool:
    """Whether path is a directory holding the main game library."""
    if not path:
        return False
    path = Path(path)
    return path.is_dir() and (path / MAIN_LIBRARY).is_file()


def find_default_location(candidates: Optional[Iterable[Union[str, Path]]] = None) -> Optional[Path]:
    """Return the first valid installation directory.

    Args:
        candidates: Directories to probe. Defaults to candidate_locations().

    Returns:
        Path of the first candidate containing the main library, None if
        none of them does.
    """
    if candidates is None:
        candidates = candidate_locations()

    for candidate in candidates:
        candidate = Path(candidate)
        if is_installation(candidate):
            log.debug("Found installation at %s", candidate)
            return candidate
        log.debug("No installation at %s", candidate)

    return None

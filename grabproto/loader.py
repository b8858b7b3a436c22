"""
Game Library Loader

Loads VintagestoryLib.dll into the hosted CLR so its types can be reflected
over. References the runtime cannot satisfy on its own are looked up next to
the main library first, then in the Lib/ folder.

Usage:
    from grabproto.loader import LibraryLoader

    loaded = LibraryLoader("/home/me/.config/Vintagestory").load()
    for t in loaded.assembly.GetTypes():
        print(t.FullName)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from grabproto.constants import (
    DEPENDENCY_DIR,
    LIBRARY_SUFFIX,
    MAIN_LIBRARY,
    PROTOBUF_LIBRARY,
)
from grabproto.errors import (
    DependencyNotFoundError,
    InstallationNotFoundError,
    LibraryLoadError,
    RuntimeLoadError,
)
from grabproto.runtime import load_clr

log = logging.getLogger(__name__)

# Resolvers stay hooked for the life of the process, one per base directory
_installed_resolvers: Dict[str, "DependencyResolver"] = {}


def find_dependency(base_dir: Union[str, Path], name: Optional[str]) -> Optional[Path]:
    """Locate a library file by assembly simple name.

    Searches base_dir/<name>.dll, then base_dir/Lib/<name>.dll. The first
    existing file wins.
    """
    if not name:
        return None

    base_dir = Path(base_dir)
    file_name = name + LIBRARY_SUFFIX
    for candidate in (base_dir / file_name, base_dir / DEPENDENCY_DIR / file_name):
        if candidate.is_file():
            return candidate
    return None


class DependencyResolver:
    """Handler for AssemblyLoadContext.Resolving.

    Called by the runtime with (context, AssemblyName) whenever a reference
    cannot be bound. Returns the loaded assembly, or None to report the
    reference as unresolvable.
    """

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)
        self.resolved: Dict[str, Path] = {}
        self.unresolved: List[str] = []
        # System.Func delegate registered on Resolving, once installed
        self.handler = None

    def __call__(self, context, assembly_name):
        name = assembly_name.Name
        path = find_dependency(self.base_dir, name)
        if path is None:
            log.debug("Could not resolve %s under %s", name, self.base_dir)
            self.unresolved.append(name)
            return None

        log.debug("Resolved %s -> %s", name, path)
        self.resolved[name] = path
        return context.LoadFromAssemblyPath(str(path))


@dataclass
class LoadedLibrary:
    """Main library plus the protobuf-net copy it was built against."""
    assembly: Any
    path: Path
    protobuf_assembly: Any
    protobuf_path: Path


class LibraryLoader:
    """Loads the main game library and its dependencies into the CLR."""

    def __init__(self, base_dir: Union[str, Path, None]):
        self.base_dir = Path(base_dir) if base_dir else None

    @property
    def main_library_path(self) -> Optional[Path]:
        if self.base_dir is None:
            return None
        return self.base_dir / MAIN_LIBRARY

    @property
    def dependency_dir(self) -> Optional[Path]:
        if self.base_dir is None:
            return None
        return self.base_dir / DEPENDENCY_DIR

    def check_installation(self):
        """Verify the base directory holds the main library."""
        if self.base_dir is None:
            raise InstallationNotFoundError("No installation directory given")
        if not self.base_dir.is_dir():
            raise InstallationNotFoundError(f"Installation directory not found: {self.base_dir}")
        if not self.main_library_path.is_file():
            raise InstallationNotFoundError(
                f"{MAIN_LIBRARY} not found in {self.base_dir}\n"
                "Pass the Vintage Story install directory with --input"
            )

    def install_resolver(self, clr=None) -> DependencyResolver:
        """Hook a DependencyResolver into the default load context.

        Installing twice for the same base directory reuses the first hook.
        """
        key = str(self.base_dir.resolve())
        if key in _installed_resolvers:
            return _installed_resolvers[key]

        if clr is None:
            clr = load_clr()

        from System import Func
        from System.Reflection import Assembly, AssemblyName
        from System.Runtime.Loader import AssemblyLoadContext

        resolver = DependencyResolver(self.base_dir)
        handler = Func[AssemblyLoadContext, AssemblyName, Assembly](resolver)
        AssemblyLoadContext.Default.Resolving += handler

        # Keep the delegate alive alongside the resolver
        resolver.handler = handler
        _installed_resolvers[key] = resolver
        log.debug("Installed dependency resolver for %s", self.base_dir)
        return resolver

    def load(self) -> LoadedLibrary:
        """Load protobuf-net and the main library.

        Raises:
            LibraryLoadError: installation, dependency or runtime problem.
            Exception: whatever the CLR raises while loading.
        """
        self.check_installation()

        clr = load_clr()
        self.install_resolver(clr)

        protobuf_path = find_dependency(self.base_dir, PROTOBUF_LIBRARY)
        if protobuf_path is None:
            raise DependencyNotFoundError(
                f"{PROTOBUF_LIBRARY}{LIBRARY_SUFFIX} not found in {self.base_dir} "
                f"or {self.dependency_dir}"
            )
        log.info("Loading %s", protobuf_path)
        protobuf_assembly = clr.AddReference(str(protobuf_path))

        from System.Reflection import Assembly

        log.info("Loading %s", self.main_library_path)
        assembly = Assembly.LoadFrom(str(self.main_library_path))

        return LoadedLibrary(
            assembly=assembly,
            path=self.main_library_path,
            protobuf_assembly=protobuf_assembly,
            protobuf_path=protobuf_path,
        )


__all__ = [
    "DependencyNotFoundError",
    "DependencyResolver",
    "InstallationNotFoundError",
    "LibraryLoadError",
    "LibraryLoader",
    "LoadedLibrary",
    "RuntimeLoadError",
    "find_dependency",
]

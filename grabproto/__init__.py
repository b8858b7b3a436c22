"""Vintage Story protobuf schema extraction.

Loads VintagestoryLib.dll into a hosted CLR, collects every type marked with
protobuf-net's [ProtoContract], and asks protobuf-net for the proto3 schema.

Example:
    from grabproto import generate_schema

    schema = generate_schema("/home/me/.config/Vintagestory")
    if schema:
        print(schema)
"""

from grabproto.constants import DEFAULT_PACKAGE, MAIN_LIBRARY
from grabproto.locations import find_default_location, is_installation
from grabproto.loader import (
    DependencyNotFoundError,
    DependencyResolver,
    InstallationNotFoundError,
    LibraryLoadError,
    LibraryLoader,
    LoadedLibrary,
    RuntimeLoadError,
    find_dependency,
)
from grabproto.extractor import (
    SchemaExtractor,
    SchemaOptions,
    build_schema,
    find_contract_types,
    generate_schema,
)

__all__ = [
    "DEFAULT_PACKAGE",
    "MAIN_LIBRARY",
    "find_default_location",
    "is_installation",
    "DependencyNotFoundError",
    "DependencyResolver",
    "InstallationNotFoundError",
    "LibraryLoadError",
    "LibraryLoader",
    "LoadedLibrary",
    "RuntimeLoadError",
    "find_dependency",
    "SchemaExtractor",
    "SchemaOptions",
    "build_schema",
    "find_contract_types",
    "generate_schema",
]

__version__ = "0.1.0"

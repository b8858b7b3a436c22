"""
Vintage Story installation layout and schema generation defaults.
"""

# ============================================================================
# Installation layout
# ============================================================================

# Main game library holding the [ProtoContract] types
MAIN_LIBRARY = "VintagestoryLib.dll"

# Subdirectory with the libraries VintagestoryLib depends on
DEPENDENCY_DIR = "Lib"

# Assembly simple name + suffix = file name on disk
LIBRARY_SUFFIX = ".dll"

# ============================================================================
# Well-known install locations
# ============================================================================

# Under the per-user application data directory
APP_DATA_SUBDIR = "Vintagestory"

# macOS app bundle
MACOS_INSTALL = "/Applications/Vintage Story.app/"

# ============================================================================
# protobuf-net
# ============================================================================

# Must be the copy shipped with the game so the marker type matches
PROTOBUF_LIBRARY = "protobuf-net"

CONTRACT_ATTRIBUTE = "ProtoBuf.ProtoContractAttribute"

# ============================================================================
# Schema generation
# ============================================================================

DEFAULT_PACKAGE = "vintagestory"
DEFAULT_SYNTAX = "proto3"

# pythonnet runtime; AssemblyLoadContext only exists on CoreCLR
CLR_RUNTIME = "coreclr"

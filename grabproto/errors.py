"""Errors raised while loading the game libraries."""


class LibraryLoadError(RuntimeError):
    """Base class for everything that stops the main library from loading."""


class InstallationNotFoundError(LibraryLoadError):
    """Base directory missing or not holding the main library."""


class DependencyNotFoundError(LibraryLoadError):
    """A library required up front is in neither search location."""


class RuntimeLoadError(LibraryLoadError):
    """The .NET runtime could not be started."""

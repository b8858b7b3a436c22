"""
CLR hosting via pythonnet.

The runtime is started lazily so path checks and argument handling work on
machines without .NET installed.
"""

import logging

from grabproto.constants import CLR_RUNTIME
from grabproto.errors import RuntimeLoadError

log = logging.getLogger(__name__)


def load_clr(runtime: str = CLR_RUNTIME):
    """Start the CLR (once per process) and return the clr module."""
    try:
        import pythonnet
    except ImportError as e:
        raise RuntimeLoadError(
            "pythonnet is not installed. Install it with:\n"
            "  python -m pip install pythonnet"
        ) from e

    try:
        # No-op when a runtime is already loaded
        pythonnet.load(runtime)
        import clr
    except Exception as e:
        raise RuntimeLoadError(
            f"Could not start the {runtime} runtime: {e}\n"
            "Install the .NET runtime matching your Vintage Story version, "
            "or point DOTNET_ROOT at an existing one."
        ) from e

    log.debug("CLR runtime %s ready", runtime)
    return clr

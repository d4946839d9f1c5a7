"""Podkeeper - configuration and project layout for a CocoaPods-style dependency manager."""

__version__ = "0.1.0"
__description__ = "Configuration and project layout for a CocoaPods-style dependency manager"

# Import modules only when needed to keep CLI startup light
__all__ = [
    "Config",
    "get_config",
    "set_config",
    "reset_config",
    "Podfile",
    "Lockfile",
    "Sandbox",
]

def __getattr__(name: str):
    """Lazy import of the public API."""
    if name in ("Config", "get_config", "set_config", "reset_config"):
        from . import config
        return getattr(config, name)
    elif name == "Podfile":
        from .podfile import Podfile
        return Podfile
    elif name == "Lockfile":
        from .lockfile import Lockfile
        return Lockfile
    elif name == "Sandbox":
        from .sandbox import Sandbox
        return Sandbox
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

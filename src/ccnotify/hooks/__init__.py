from ._generator import DEFAULT_MACOS_TITLE, Channel, HookGenerator

__all__ = [
    "DEFAULT_MACOS_TITLE",
    "Channel",
    "HookGenerator",
]

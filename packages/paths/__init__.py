from .resolve import KIND_COLORS, path_kind, resolve

__all__ = ["KIND_COLORS", "path_kind", "resolve"]

from .base_extension import Extension

__all__ = ["Extension"]

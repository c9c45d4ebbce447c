"""Storage configurations."""

from ragline.configuration.storage.local import LocalStorage

__all__ = ["LocalStorage"]

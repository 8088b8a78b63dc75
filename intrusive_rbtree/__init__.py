"""A red-black tree that indexes user objects by a key with a custom comparison."""

__version__ = "0.1.0"
__all__ = ["core", "tree"]
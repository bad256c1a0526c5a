"""
Muno - hierarchical workspace tree manager

Muno maps a tree of repositories, lazily-clonable repository references and
nested workspace configs onto a single path-addressable workspace.
"""

__version__ = "0.4.0"
__all__ = ["__version__"]

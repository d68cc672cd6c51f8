"""
Commandline interface for cascade_tree.
"""

from .app import cascade_tree

__all__ = ["cascade_tree"]

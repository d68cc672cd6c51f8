"""
cascade_tree Module
This module provides the on-disk locations used by cascade_tree.
Module Attributes:
    home (str): The user's home directory.
    cascade_tree_dir (str): The path to the cascade_tree directory.
"""

import os

home = os.path.expanduser("~")
# pylint: disable=invalid-name
cascade_tree_dir = f"{home}/.cascade_tree/"

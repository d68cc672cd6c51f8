"""
Version control module
"""

__version__ = "0.3.0"

"""
Utility module for operating on dicts for the CLI
"""


def merge_overwrite(old: dict, new: dict) -> dict:
    """
    Deep-merge ``new`` into ``old`` in place, values of ``new`` winning conflicts
    """
    for key, value in new.items():
        if isinstance(old.get(key), dict) and isinstance(value, dict):
            merge_overwrite(old[key], value)
        else:
            old[key] = value
    return old

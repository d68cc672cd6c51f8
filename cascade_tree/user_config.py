"""
User Config
"""

import os

import toml

from .exceptions import CascadeTreeConfigError
from .file_path import cascade_tree_dir
from .log import log, set_logging_level

config_file = os.path.join(cascade_tree_dir, "config.toml")

DEFAULT_CATEGORY_PREFIX = "category_"
DEFAULT_FAMILY_PREFIX = "family_"
DEFAULT_MODE = "unified"
DEFAULT_POLICY = "cascade"


class BasicUserConfig:
    """
    User configuration read from ``~/.cascade_tree/config.toml``.

    Layout::

        [selector]
        category_prefix = "category_"
        family_prefix = "family_"
        default_mode = "unified"
        default_policy = "cascade"

        [logging]
        level = "INFO"

    ``CASCADE_TREE_LOG_LEVEL`` and ``CASCADE_TREE_DEFAULT_MODE`` override the file.
    """

    def __init__(self, filename: str = None):
        self.filename = filename if filename is not None else config_file
        self.config = {}
        self._read_config()

    def _read_config(self):
        if not os.path.exists(self.filename):
            return
        try:
            with open(self.filename, encoding="utf-8") as file_handler:
                self.config = toml.loads(file_handler.read())
        except (OSError, toml.TomlDecodeError) as error:
            log.warning("Could not read config file %s, using defaults: %s", self.filename, error)

    def _selector(self, key: str, default: str) -> str:
        value = self.config.get("selector", {}).get(key, default)
        if not isinstance(value, str):
            raise CascadeTreeConfigError(f"selector.{key} must be a string, got {value!r}")
        return value

    @property
    def category_prefix(self) -> str:
        """prefix marking category ids in unified mode"""
        return self._selector("category_prefix", DEFAULT_CATEGORY_PREFIX)

    @property
    def family_prefix(self) -> str:
        """prefix marking family ids in unified mode"""
        return self._selector("family_prefix", DEFAULT_FAMILY_PREFIX)

    @property
    def default_mode(self) -> str:
        """selection mode used when a selector is built without one"""
        mode = os.environ.get("CASCADE_TREE_DEFAULT_MODE", None)
        if mode is not None:
            log.debug("Found env variable CASCADE_TREE_DEFAULT_MODE=%s", mode)
            return mode
        return self._selector("default_mode", DEFAULT_MODE)

    @property
    def default_policy(self) -> str:
        """selection policy used when a selector is built without one"""
        return self._selector("default_policy", DEFAULT_POLICY)

    @property
    def log_level(self):
        """console log level, ``None`` when not configured"""
        level = os.environ.get("CASCADE_TREE_LOG_LEVEL", None)
        if level is None:
            level = self.config.get("logging", {}).get("level", None)
        return level

    def apply_logging(self):
        """Apply the configured console log level, if any."""
        level = self.log_level
        if level is None:
            return
        try:
            set_logging_level(level)
        except ValueError as error:
            raise CascadeTreeConfigError(str(error)) from error


UserConfig = BasicUserConfig()

try:
    UserConfig.apply_logging()
except CascadeTreeConfigError as err:
    log.warning("Configured log level ignored: %s", err)

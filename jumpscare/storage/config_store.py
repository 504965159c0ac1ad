"""
Configuration Store

Persistence for PluginConfiguration (offsets + record collection).

The core never assumes a persistence format; it only loads and saves a
PluginConfiguration through this interface.
"""

from __future__ import annotations
from typing import Optional
import copy
import json
import logging
import os
import tempfile
import threading

from ..contracts.base import CollaboratorUnavailableError, Error, ErrorCode
from ..contracts.records import PluginConfiguration

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "configuration.json"


# =============================================================================
# STORE INTERFACE (Dependency Inversion)
# =============================================================================

class ConfigurationStore:
    """
    Abstract configuration store.

    load() returns defaults (-2, +2, no records) when nothing has been
    saved yet.
    """

    def load(self) -> PluginConfiguration:
        raise NotImplementedError

    def save(self, configuration: PluginConfiguration) -> None:
        raise NotImplementedError


# =============================================================================
# IN-MEMORY STORE (Reference Implementation)
# =============================================================================

class InMemoryConfigurationStore(ConfigurationStore):
    """Keeps a private copy of the last saved configuration."""

    def __init__(self, initial: Optional[PluginConfiguration] = None):
        self._lock = threading.Lock()
        self._configuration = copy.deepcopy(initial) if initial else None

    def load(self) -> PluginConfiguration:
        with self._lock:
            if self._configuration is None:
                return PluginConfiguration()
            return copy.deepcopy(self._configuration)

    def save(self, configuration: PluginConfiguration) -> None:
        with self._lock:
            self._configuration = copy.deepcopy(configuration)


# =============================================================================
# FILE STORE
# =============================================================================

class JsonFileConfigurationStore(ConfigurationStore):
    """
    JSON file store.

    Writes go to a temp file in the same directory and are swapped in
    with os.replace, so a reader never sees a half-written file.
    """

    def __init__(self, storage_dir: str, file_name: str = CONFIG_FILE_NAME):
        self._storage_dir = storage_dir
        self._path = os.path.join(storage_dir, file_name)
        self._lock = threading.Lock()

        os.makedirs(storage_dir, exist_ok=True)

    @property
    def path(self) -> str:
        return self._path

    def load(self) -> PluginConfiguration:
        with self._lock:
            if not os.path.exists(self._path):
                logger.info("No configuration at %s, using defaults", self._path)
                return PluginConfiguration()

            try:
                with open(self._path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                return PluginConfiguration.from_dict(data)
            except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
                raise CollaboratorUnavailableError(Error(
                    code=ErrorCode.CONFIGURATION_UNAVAILABLE,
                    message=f"Failed to load configuration from {self._path}: {e}"
                )) from e

    def save(self, configuration: PluginConfiguration) -> None:
        payload = json.dumps(configuration.to_dict(), indent=2)

        with self._lock:
            fd, tmp_path = tempfile.mkstemp(dir=self._storage_dir, suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(payload)
                os.replace(tmp_path, self._path)
            except OSError:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise

        logger.debug("Saved configuration with %d records to %s",
                     len(configuration.records), self._path)

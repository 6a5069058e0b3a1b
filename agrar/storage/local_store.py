"""
local_store.py: JSON file storage for the command line tools.

Provides read/write helpers for local JSON files and ``JsonFileStore``, a
string mapping persisted to one JSON file. The CLI uses it as the backing
store of the location cache so cached weather survives between runs.
"""

import json
import os
from collections.abc import MutableMapping
from pathlib import Path

from agrar.utils.log_util import app_logger

logger = app_logger(__name__)


def read_json_from_path(file_path: str) -> dict:
    """
    Reads a JSON file and returns its content as a dictionary.

    Missing, unreadable or non-object files yield an empty dict.

    :param file_path: Local path.
    :return: Dictionary containing the JSON file content.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug(f"Local file not found: {file_path}")
        return {}
    except (OSError, ValueError, RecursionError) as e:
        logger.warning(f"Could not read JSON from {file_path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring non-object JSON in {file_path}")
        return {}
    return data


def save_json_to_path(data: dict, file_path: str) -> bool:
    """
    Saves a dictionary as JSON, writing through a temporary file.

    :param data: Dictionary to save.
    :param file_path: Local path.
    :return: True on success.
    """
    path = Path(file_path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp_path, path)
        logger.debug(f"Saved JSON to {file_path}")
        return True
    except OSError as e:
        logger.error(f"Error saving JSON to {file_path}: {e}")
        return False


class JsonFileStore(MutableMapping):
    """String mapping persisted to a single JSON file on every write."""

    def __init__(self, file_path: str):
        self.file_path = str(file_path)
        self._data = read_json_from_path(self.file_path)

    def __getitem__(self, key):
        return self._data[key]

    def __setitem__(self, key, value):
        self._data[key] = value
        save_json_to_path(self._data, self.file_path)

    def __delitem__(self, key):
        del self._data[key]
        save_json_to_path(self._data, self.file_path)

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

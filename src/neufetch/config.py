"""
Project configuration store.

Reads and writes the project's `neutralino.config.json`. Keys are addressed
with dotted paths such as `cli.binaryVersion`.
"""

import json
import os
import tempfile
from typing import Any, Dict, Optional

from neufetch.constants import PROJECT_CONFIG_FILE_NAME
from neufetch.exceptions import ConfigFileError, ConfigurationError
from neufetch.log_utils import logger


def _atomic_write_json(file_path: str, data: Dict[str, Any]) -> None:
    """
    Atomically write the given dictionary to the target file as pretty-printed JSON.

    Raises:
        ConfigFileError: If the temporary file cannot be created, written or moved into place.
    """
    try:
        temp_fd, temp_path = tempfile.mkstemp(
            dir=os.path.dirname(file_path) or ".", prefix="tmp-", suffix=".json"
        )
    except OSError as e:
        raise ConfigFileError(
            f"Could not create temporary file for {file_path}",
            path=file_path,
            details=str(e),
        ) from e

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as temp_f:
            json.dump(data, temp_f, indent=2)
            temp_f.write("\n")
        os.replace(temp_path, file_path)
    except (OSError, TypeError, ValueError) as e:
        raise ConfigFileError(
            f"Could not write to {file_path}", path=file_path, details=str(e)
        ) from e
    finally:
        if os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError:
                pass


class ProjectConfig:
    """
    The project's configuration file.

    The file is read lazily on first access and re-read after every
    update so values persisted by one operation are visible to the next.
    """

    def __init__(self, project_dir: str = "."):
        self.project_dir = project_dir
        self.path = os.path.join(project_dir, PROJECT_CONFIG_FILE_NAME)
        self._data: Optional[Dict[str, Any]] = None

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def load(self) -> Dict[str, Any]:
        """
        Read the configuration file from disk.

        Returns:
            Dict[str, Any]: The parsed configuration mapping.

        Raises:
            ConfigFileError: If the file is missing, unreadable, or not a JSON object.
        """
        if not self.exists():
            raise ConfigFileError(
                f"Unable to find {PROJECT_CONFIG_FILE_NAME}. "
                "Please check whether the current directory has a Neutralinojs project.",
                path=self.path,
            )
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigFileError(
                f"Invalid JSON in {self.path}", path=self.path, details=str(e)
            ) from e
        except OSError as e:
            raise ConfigFileError(
                f"Could not read {self.path}", path=self.path, details=str(e)
            ) from e

        if not isinstance(data, dict):
            raise ConfigFileError(
                f"{self.path} must contain a JSON object", path=self.path
            )
        self._data = data
        return data

    def get(self) -> Dict[str, Any]:
        if self._data is None:
            return self.load()
        return self._data

    def get_value(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key such as `cli.clientLibrary`.

        Returns:
            The stored value, or `default` when any segment of the path is absent.
        """
        node: Any = self.get()
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def update(self, key: str, value: Any) -> None:
        """
        Set a dotted key and persist the whole configuration atomically.

        Intermediate objects are created when missing.

        Raises:
            ConfigurationError: If an intermediate segment holds a non-object value.
            ConfigFileError: If the file cannot be written.
        """
        data = self.get()
        parts = key.split(".")
        node = data
        try:
            for part in parts[:-1]:
                child = node.setdefault(part, {})
                if not isinstance(child, dict):
                    raise ConfigurationError(
                        f"Cannot set {key}: '{part}' is not an object in {self.path}"
                    )
                node = child
            node[parts[-1]] = value

            _atomic_write_json(self.path, data)
            logger.debug(f"Updated {key} in {self.path}")
        finally:
            # Reread from disk next time, whether or not the write happened
            self._data = None

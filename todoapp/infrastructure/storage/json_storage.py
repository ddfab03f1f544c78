"""JSON file storage with Result-based error handling.

A thin wrapper around file I/O for JSON documents. Failures come back as
``Err(InfrastructureError)`` instead of raised exceptions.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from todoapp.domain.shared.result import Err, Ok, Result
from todoapp.domain.todo.errors import InfrastructureError


class JsonStorage:
    """Low-level JSON document I/O.

    Writes go to a temporary file in the same directory and are moved into
    place, so a crash never leaves a half-written document behind.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("todos.json"), default={"todos": {}})
        if isinstance(result, Ok):
            data = result.value
    """

    def load_json(
        self,
        path: Path,
        default: dict[str, Any] | None = None,
    ) -> Result[dict[str, Any], InfrastructureError]:
        """Load a JSON object from a file.

        Args:
            path: File to read.
            default: Returned when the file does not exist. If None, a
                missing file is an error.

        Returns:
            Ok(dict) with the parsed object, or Err(InfrastructureError).
        """
        if not path.exists():
            if default is not None:
                return Ok(default)
            return Err(InfrastructureError("read_json", f"file not found: {path}"))

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            return Err(InfrastructureError("read_json", f"invalid JSON in {path}: {e}"))
        except OSError as e:
            return Err(InfrastructureError("read_json", e))

        if not isinstance(data, dict):
            return Err(InfrastructureError("read_json", f"expected an object in {path}"))
        return Ok(data)

    def save_json(
        self,
        path: Path,
        data: dict[str, Any],
        indent: int = 2,
    ) -> Result[None, InfrastructureError]:
        """Atomically write a JSON object to a file.

        Args:
            path: File to write. Parent directories are created.
            data: Object to serialise.
            indent: JSON indentation level (default 2).

        Returns:
            Ok(None) on success, Err(InfrastructureError) otherwise.
        """
        try:
            content = json.dumps(data, indent=indent)
        except (TypeError, ValueError) as e:
            return Err(InfrastructureError("write_json", f"data not JSON serializable: {e}"))

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(content)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            return Err(InfrastructureError("write_json", e))
        return Ok(None)

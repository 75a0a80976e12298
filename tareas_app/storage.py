"""
Credential storage for the tareas client.

The client keeps exactly one bearer token.  Two interchangeable stores are
provided, both exposing ``get`` / ``set`` / ``clear``:

- :class:`MemoryCredentialStore` keeps the token in process memory.
- :class:`FileCredentialStore` keeps it in a small JSON key-value file so
  the session survives restarts.

A missing token is reported as ``None``, never as an exception.  Each
store guards its cell with a lock; concurrent writers are last-write-wins.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

TOKEN_KEY = "userToken"


class CredentialStore(Protocol):
    """Interface shared by the credential stores; ``get`` never raises for absence."""

    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MemoryCredentialStore:
    """In-process credential cell."""

    def __init__(self, token: str | None = None):
        self._token = token
        self._lock = threading.Lock()

    def get(self) -> str | None:
        with self._lock:
            return self._token

    def set(self, token: str) -> None:
        with self._lock:
            self._token = token

    def clear(self) -> None:
        with self._lock:
            self._token = None


class FileCredentialStore:
    """
    Credential cell persisted to a JSON file on local disk.

    The file holds a single object such as ``{"userToken": "<jwt>"}``.
    Writes go to a temporary file in the same directory which is then
    renamed over the original, so readers never observe a half-written
    file.

    Attributes:
        path: Location of the JSON file.
        key: Key under which the token is stored.
    """

    def __init__(self, path: str | os.PathLike[str], key: str = TOKEN_KEY):
        self.path = Path(path)
        self.key = key
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except ValueError:
            # Covers both invalid JSON and bytes that are not UTF-8.
            logger.warning("Ignoring unreadable credential file at %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False), "utf-8")
        os.replace(tmp, self.path)
        try:
            # The file holds a bearer token.
            os.chmod(self.path, 0o600)
        except OSError as exc:
            logger.debug("Could not restrict permissions on %s: %r", self.path, exc)

    def get(self) -> str | None:
        """Return the stored token, or None when nothing is stored."""
        with self._lock:
            token = self._read().get(self.key)
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        """Store *token*, replacing any previous value."""
        with self._lock:
            data = self._read()
            data[self.key] = token
            self._write(data)
        logger.info("Stored credential in %s", self.path)

    def clear(self) -> None:
        """Remove the stored token; succeeds when nothing is stored."""
        with self._lock:
            data = self._read()
            if self.key not in data:
                return
            del data[self.key]
            self._write(data)
        logger.info("Cleared credential in %s", self.path)

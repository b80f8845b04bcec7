"""
Client-side credential storage.

Holds the bearer ``token`` and the signed-in ``user`` between runs, the
same two keys a browser keeps in local storage.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class CredentialStore:
    """In-memory credential store."""

    def __init__(self) -> None:
        self._items: dict[str, Any] = {}

    def _read(self) -> dict[str, Any]:
        return dict(self._items)

    def _write(self, items: dict[str, Any]) -> None:
        self._items = dict(items)

    def get_token(self) -> str | None:
        return self._read().get(TOKEN_KEY)

    def get_user(self) -> dict[str, Any]:
        return self._read().get(USER_KEY) or {}

    def save(self, token: str, user: dict[str, Any]) -> None:
        self._write({TOKEN_KEY: token, USER_KEY: user})

    def clear(self) -> None:
        self._write({})


class FileCredentialStore(CredentialStore):
    """
    Credential store persisted as a JSON file.

    A missing or unreadable file counts as "signed out".
    """

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable credential file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, items: dict[str, Any]) -> None:
        if not items:
            self.path.unlink(missing_ok=True)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items), encoding="utf-8")

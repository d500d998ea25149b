"""
Sesión del cliente (token + usuario) persistida en un archivo JSON local.

Es el equivalente de localStorage: se inyecta explícitamente en la UI en vez
de leerse como estado global.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

_log = logging.getLogger("smartnotes.client.session")


@dataclass
class Session:
    path: Path
    token: str = ""
    user: Optional[Dict[str, Any]] = field(default=None)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @classmethod
    def load(cls, path: Path) -> "Session":
        """Lee la sesión; archivo ausente o corrupto equivale a sesión vacía."""
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return cls(path=path)
        except (OSError, ValueError) as e:
            _log.warning("Sesión ilegible en %s: %s", path, e)
            return cls(path=path)
        if not isinstance(raw, dict):
            return cls(path=path)
        user = raw.get("user")
        return cls(path=path, token=str(raw.get("token") or ""), user=user if isinstance(user, dict) else None)

    def save(self, token: str, user: Optional[Dict[str, Any]]) -> None:
        self.token = token
        self.user = user
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token, "user": user}), encoding="utf-8")

    def clear(self) -> None:
        self.token = ""
        self.user = None
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

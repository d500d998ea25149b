"""Cliente HTTP (requests) para la API de notas."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

GENERIC_ERROR = "Request failed"


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_message(resp: Any) -> str:
    """`message` del servidor si existe; si no, el cuerpo en texto o un genérico."""
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    text = (getattr(resp, "text", "") or "").strip()
    return text or GENERIC_ERROR


class ApiClient:
    """
    Envuelve las rutas /auth, /notes y /note. `http` es cualquier objeto con
    `.request(method, url, json=, headers=, params=, timeout=)` (por defecto
    `requests.Session`).
    """

    def __init__(self, base_url: str, token: str = "", http: Any = None, timeout: int = 60) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout

    def _call(self, method: str, path: str, body: Optional[Dict[str, Any]] = None,
              params: Optional[Dict[str, str]] = None) -> Any:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            resp = self.http.request(
                method,
                f"{self.base_url}{path}",
                json=body,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ApiError(f"{GENERIC_ERROR}: {e}") from e
        if resp.status_code >= 400:
            raise ApiError(_error_message(resp), resp.status_code)
        return resp.json()

    # Auth
    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self._call("POST", "/auth/register", {"name": name, "email": email, "password": password})

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._call("POST", "/auth/login", {"email": email, "password": password})

    # Notes
    def list_notes(self, q: str = "", tag: str = "") -> List[Dict[str, Any]]:
        params: Dict[str, str] = {}
        if q and q.strip():
            params["q"] = q.strip()
        if tag and tag.strip():
            params["tag"] = tag.strip()
        return self._call("GET", "/notes", params=params or None)

    def create_note(self, note_text: str, note_html: str = "", tags: Optional[List[str]] = None) -> Dict[str, Any]:
        return self._call("POST", "/note", {"noteText": note_text, "noteHtml": note_html, "tags": list(tags or [])})

    def update_note(self, note_id: str, note_text: str, note_html: str = "",
                    tags: Optional[List[str]] = None) -> Dict[str, Any]:
        return self._call(
            "PUT", f"/note/{note_id}", {"noteText": note_text, "noteHtml": note_html, "tags": list(tags or [])}
        )

    def delete_note(self, note_id: str) -> Dict[str, Any]:
        return self._call("DELETE", f"/note/{note_id}")

    def health(self) -> Dict[str, Any]:
        return self._call("GET", "/health")

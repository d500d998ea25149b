"""Cliente HTTP mínimo para HuggingFace Inference (modelo de resumen)."""
from urllib.parse import quote

import requests

from smartnotes.core.config import settings


def model_url(model: str | None = None) -> str:
    base = (settings.hf_api_base or "").rstrip("/")
    return f"{base}/models/{quote(model or settings.hf_model, safe='')}"


def hf_summarize(text: str, timeout: int | None = None) -> str | None:
    """
    Llama al endpoint de inferencia con `{"inputs": text}`.
    Retorna `summary_text` si la respuesta lo trae (lista u objeto), None si no.
    Errores de transporte/HTTP/JSON se propagan al caller.
    """
    headers = {}
    if settings.hf_api_key:
        headers["Authorization"] = f"Bearer {settings.hf_api_key}"
    r = requests.post(
        model_url(),
        json={"inputs": text},
        headers=headers,
        timeout=timeout or settings.hf_timeout_seconds,
    )
    r.raise_for_status()
    data = r.json()
    if isinstance(data, list) and data and isinstance(data[0], dict):
        data = data[0]
    if isinstance(data, dict):
        summary = data.get("summary_text")
        if isinstance(summary, str) and summary.strip():
            return summary.strip()
    return None

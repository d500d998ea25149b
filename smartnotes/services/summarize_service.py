"""
Pasarela de resúmenes: una sola llamada al modelo externo con degradación local.

`summarize` nunca lanza: devuelve siempre un `SummaryResult` cuyo `source`
indica de dónde salió el texto ("empty", "short", "model" o "fallback").
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from smartnotes.infrastructure.ai.huggingface_client import hf_summarize

_log = logging.getLogger("smartnotes.summarize")

MIN_WORDS = 10
FALLBACK_CHARS = 180

SummarySource = Literal["empty", "short", "model", "fallback"]


@dataclass(frozen=True)
class SummaryResult:
    text: str
    source: SummarySource

    @property
    def degraded(self) -> bool:
        return self.source == "fallback"


def fallback_summary(text: str) -> str:
    return (text or "").strip()[:FALLBACK_CHARS]


def summarize(text: str) -> SummaryResult:
    trimmed = (text or "").strip()
    if not trimmed:
        return SummaryResult("", "empty")
    if len(trimmed.split()) < MIN_WORDS:
        return SummaryResult(trimmed, "short")

    try:
        summary = hf_summarize(trimmed)
    except Exception as e:
        # Transporte, HTTP no-2xx o cuerpo no-JSON: nunca se propaga
        _log.warning("Resumen externo falló, usando truncado: %s", e)
        return SummaryResult(fallback_summary(trimmed), "fallback")

    if not summary:
        _log.warning("Respuesta del modelo sin summary_text, usando truncado")
        return SummaryResult(fallback_summary(trimmed), "fallback")
    return SummaryResult(summary, "model")


def summarize_text(text: str) -> str:
    return summarize(text).text

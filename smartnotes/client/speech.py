"""
Adaptadores de voz: dictado continuo (SpeechRecognition) y lectura del resumen (pyttsx3).

Requiere el extra `voice` (SpeechRecognition, PyAudio, pyttsx3).
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

import pyttsx3
import speech_recognition as sr

_log = logging.getLogger("smartnotes.client.speech")

TextCallback = Callable[[str], None]


class Dictation:
    """
    Dictado continuo: cada frase reconocida llega a `on_final`; mientras se
    reconoce, `on_interim` recibe un marcador. Si la escucha termina de forma
    inesperada y seguimos activos, se reinicia tras `restart_delay` segundos.
    Cualquier otro error detiene el dictado y deja `listening` en False.
    """

    def __init__(self, lang: str = "en-US", phrase_time_limit: int = 15, restart_delay: float = 1.0) -> None:
        self.lang = lang
        self.phrase_time_limit = phrase_time_limit
        self.restart_delay = restart_delay
        self.recognizer = sr.Recognizer()
        self._listening = threading.Event()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def listening(self) -> bool:
        return self._listening.is_set()

    def start(self, on_final: TextCallback, on_interim: Optional[TextCallback] = None) -> None:
        if self.listening:
            return
        self._stop.clear()
        self._listening.set()
        self._thread = threading.Thread(target=self._run, args=(on_final, on_interim), daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.phrase_time_limit + 1)
        self._thread = None
        self._listening.clear()

    def _run(self, on_final: TextCallback, on_interim: Optional[TextCallback]) -> None:
        try:
            while not self._stop.is_set():
                try:
                    with sr.Microphone() as source:
                        self.recognizer.adjust_for_ambient_noise(source, duration=0.5)
                        while not self._stop.is_set():
                            self._listen_once(source, on_final, on_interim)
                except (OSError, sr.RequestError) as e:
                    # Fin inesperado (micrófono/servicio): reintenta mientras siga activo
                    _log.warning("Dictado interrumpido, reiniciando: %s", e)
                    self._stop.wait(self.restart_delay)
        except Exception:
            _log.exception("Dictado detenido por un error inesperado")
        finally:
            self._listening.clear()

    def _listen_once(self, source, on_final: TextCallback, on_interim: Optional[TextCallback]) -> None:
        try:
            audio = self.recognizer.listen(source, timeout=1, phrase_time_limit=self.phrase_time_limit)
        except sr.WaitTimeoutError:
            return
        if on_interim:
            on_interim("…")
        try:
            text = self.recognizer.recognize_google(audio, language=self.lang)
        except sr.UnknownValueError:
            text = ""
        if on_interim:
            on_interim("")
        if text:
            on_final(text)


def speak(text: str) -> None:
    """Lee en voz alta; cancela cualquier lectura previa."""
    if not text:
        return
    engine = pyttsx3.init()
    engine.stop()
    engine.say(text)
    engine.runAndWait()

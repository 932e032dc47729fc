from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Dict, Optional, Protocol, Tuple

import speech_recognition as sr

from utility.exceptions import InvalidTransition

logger = logging.getLogger(__name__)

HINDI_LOCALE = "hi-IN"

STATUS_LISTENING = "Listening... Speak now."
STATUS_RECOGNIZED = "Speech recognized."
STATUS_ENDED = "Speech recognition ended."
STATUS_UNAVAILABLE = "Speech recognition is not supported on this system. Please type your instructions instead."


class CaptureState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    RECOGNIZED = "recognized"
    ERRORED = "errored"
    UNAVAILABLE = "unavailable"


class CaptureEvent(str, Enum):
    START = "start"
    RESULT = "result"
    ERROR = "error"
    END = "end"


TRANSITIONS: Dict[Tuple[CaptureState, CaptureEvent], CaptureState] = {
    (CaptureState.IDLE, CaptureEvent.START): CaptureState.LISTENING,
    (CaptureState.LISTENING, CaptureEvent.RESULT): CaptureState.RECOGNIZED,
    (CaptureState.LISTENING, CaptureEvent.ERROR): CaptureState.ERRORED,
    (CaptureState.LISTENING, CaptureEvent.END): CaptureState.IDLE,
    (CaptureState.RECOGNIZED, CaptureEvent.END): CaptureState.IDLE,
    (CaptureState.ERRORED, CaptureEvent.END): CaptureState.IDLE,
}


class Recognizer(Protocol):
    """Platform speech capability: start/stop plus four callbacks."""
    onstart: Optional[Callable[[], None]]
    onresult: Optional[Callable[[str], None]]
    onend: Optional[Callable[[], None]]
    onerror: Optional[Callable[[str], None]]

    def is_available(self) -> bool:
        ...

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...


class GoogleSpeechRecognizer:
    """
    Single-utterance Hindi recognizer over the speech_recognition package.
    start() blocks until the utterance is recognized, fails, or is stopped;
    callbacks fire in the calling thread.
    """

    def __init__(
            self,
            language: str = HINDI_LOCALE,
            timeout: Optional[float] = 5,
            phrase_time_limit: Optional[float] = 15,
            recognizer: Optional[sr.Recognizer] = None,
            microphone_factory: Callable[[], sr.Microphone] = sr.Microphone,
    ):
        self.language = language
        self.timeout = timeout
        self.phrase_time_limit = phrase_time_limit
        self.recognizer = recognizer or sr.Recognizer()
        self.microphone_factory = microphone_factory
        self._stop_requested = False

        self.onstart: Optional[Callable[[], None]] = None
        self.onresult: Optional[Callable[[str], None]] = None
        self.onend: Optional[Callable[[], None]] = None
        self.onerror: Optional[Callable[[str], None]] = None

    def is_available(self) -> bool:
        try:
            return bool(sr.Microphone.list_microphone_names())
        except (AttributeError, OSError) as e:
            # PyAudio missing or no audio device
            logger.warning("Microphone unavailable: %s", e)
            return False

    def start(self) -> None:
        self._stop_requested = False
        if self.onstart:
            self.onstart()
        try:
            with self.microphone_factory() as source:
                self.recognizer.adjust_for_ambient_noise(source, duration=0.5)
                audio = self.recognizer.listen(
                    source, timeout=self.timeout, phrase_time_limit=self.phrase_time_limit
                )
            if self._stop_requested:
                return
            # final result only, no alternatives
            transcript = self.recognizer.recognize_google(audio, language=self.language)
            if self.onresult:
                self.onresult(transcript)
        except sr.WaitTimeoutError:
            self._error("no-speech")
        except sr.UnknownValueError:
            self._error("no-match")
        except sr.RequestError as e:
            logger.error("Speech recognition request failed: %s", e)
            self._error("network")
        except (AttributeError, OSError) as e:
            logger.error("Audio capture failed: %s", e)
            self._error("audio-capture")
        finally:
            if self.onend:
                self.onend()

    def stop(self) -> None:
        self._stop_requested = True

    def _error(self, code: str) -> None:
        if self.onerror:
            self.onerror(code)


class SpeechCapture:
    """
    Finite-state machine over a Recognizer:
    idle -> listening -> (recognized | errored) -> idle.
    A missing capability pins the machine in UNAVAILABLE for the session.
    """

    def __init__(
            self,
            recognizer: Optional[Recognizer],
            on_transcript: Optional[Callable[[str], None]] = None,
            on_status: Optional[Callable[[str], None]] = None,
    ):
        self.recognizer = recognizer
        self.on_transcript = on_transcript
        self.on_status = on_status
        self.transcript: str = ""
        self.last_error: Optional[str] = None
        self.status: str = ""
        self._start_pending = False

        if recognizer is None or not recognizer.is_available():
            self.state = CaptureState.UNAVAILABLE
            logger.warning("Speech recognition not supported.")
            self._set_status(STATUS_UNAVAILABLE)
            return

        self.state = CaptureState.IDLE
        recognizer.onstart = self._handle_start
        recognizer.onresult = self._handle_result
        recognizer.onerror = self._handle_error
        recognizer.onend = self._handle_end

    # -----------------------------
    # Controls
    # -----------------------------
    @property
    def available(self) -> bool:
        return self.state is not CaptureState.UNAVAILABLE

    @property
    def can_start(self) -> bool:
        return self.state is CaptureState.IDLE and not self._start_pending

    @property
    def can_stop(self) -> bool:
        return self.state is CaptureState.LISTENING

    def start(self) -> bool:
        if not self.can_start:
            logger.warning("Ignoring start request while %s", self.state.value)
            return False
        self._start_pending = True
        try:
            self.recognizer.start()
        except Exception:
            self._start_pending = False
            raise
        return True

    def stop(self) -> bool:
        if not self.can_stop:
            return False
        self.recognizer.stop()
        return True

    def listen_once(self) -> Optional[str]:
        """Run one capture cycle with a blocking recognizer; None on error or stop."""
        self.transcript = ""
        if not self.start():
            return None
        return self.transcript or None

    async def listen_once_async(self) -> Optional[str]:
        return await asyncio.to_thread(self.listen_once)

    # -----------------------------
    # Recognizer callbacks
    # -----------------------------
    def _transition(self, event: CaptureEvent) -> CaptureState:
        key = (self.state, event)
        if key not in TRANSITIONS:
            raise InvalidTransition(f"Cannot handle '{event.value}' while {self.state.value}")
        self.state = TRANSITIONS[key]
        return self.state

    def _set_status(self, message: str) -> None:
        self.status = message
        if self.on_status:
            self.on_status(message)

    def _handle_start(self) -> None:
        self._start_pending = False
        self._transition(CaptureEvent.START)
        self.transcript = ""
        self.last_error = None
        self._set_status(STATUS_LISTENING)

    def _handle_result(self, transcript: str) -> None:
        self._transition(CaptureEvent.RESULT)
        self.transcript = transcript
        logger.info("Recognized Hindi: %s", transcript)
        self._set_status(STATUS_RECOGNIZED)
        if self.on_transcript:
            self.on_transcript(transcript)

    def _handle_error(self, code: str) -> None:
        self._transition(CaptureEvent.ERROR)
        self.last_error = code
        logger.error("Speech Recognition Error: %s", code)
        self._set_status(f"Speech recognition error: {code}")

    def _handle_end(self) -> None:
        self._start_pending = False
        self._transition(CaptureEvent.END)
        # keep the error message visible; otherwise report the end of capture
        if self.last_error is None:
            self._set_status(STATUS_ENDED)

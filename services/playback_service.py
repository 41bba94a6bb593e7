"""
Playback Service - owns the single active audio playback.

State machine: IDLE -> PLAYING -> IDLE (no pause). Calling play() while
audio is playing stops it, mirroring the speaker toggle button. Natural
completion reported by the sink returns the controller to IDLE.

Pure Python, no Streamlit dependencies. The actual output device is an
AudioSink; BrowserAudioSink hands the buffer to the view for rendering.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Optional, Protocol

from models.audio import FloatAudioBuffer
from services.errors import MalformedAudioError

logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    IDLE = "IDLE"
    PLAYING = "PLAYING"


class PlaybackHandle(Protocol):
    def stop(self) -> None: ...


class AudioSink(Protocol):
    def start(
        self,
        buffer: FloatAudioBuffer,
        on_finished: Callable[[], None],
    ) -> PlaybackHandle: ...


class PlaybackController:
    """Enforces at most one concurrent playback."""

    def __init__(
        self,
        sink: AudioSink,
        on_state_change: Optional[Callable[[PlaybackState, PlaybackState], None]] = None,
    ):
        self._sink = sink
        self._on_state_change = on_state_change
        self._lock = threading.RLock()
        self._state = PlaybackState.IDLE
        self._handle: Optional[PlaybackHandle] = None
        # Bumped per playback so a late completion callback from an
        # earlier handle cannot stop a newer one
        self._generation = 0

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state == PlaybackState.PLAYING

    @property
    def active_handle(self) -> Optional[PlaybackHandle]:
        return self._handle

    def play(self, buffer: FloatAudioBuffer) -> PlaybackState:
        """
        Toggle playback.

        If audio is playing it is stopped and nothing new starts.
        Otherwise a new handle is acquired for the buffer.

        Returns:
            The resulting state
        """
        with self._lock:
            if self._state == PlaybackState.PLAYING:
                self._release()
                return self._state
            return self._start(buffer)

    def replace(self, buffer: FloatAudioBuffer) -> PlaybackState:
        """Stop whatever is playing, then start the new buffer."""
        with self._lock:
            self._release()
            return self._start(buffer)

    def stop(self):
        """Stop the active playback, if any."""
        with self._lock:
            self._release()

    def _start(self, buffer: FloatAudioBuffer) -> PlaybackState:
        self._generation += 1
        generation = self._generation
        try:
            self._handle = self._sink.start(
                buffer, lambda: self._on_finished(generation)
            )
        except Exception as e:
            self._handle = None
            self._transition(PlaybackState.IDLE)
            logger.error(f"Playback failed: {e}")
            raise MalformedAudioError("Failed to play audio.") from e
        self._transition(PlaybackState.PLAYING)
        logger.debug(f"Playback started ({buffer.duration_seconds:.2f}s)")
        return self._state

    def _on_finished(self, generation: int):
        with self._lock:
            if generation != self._generation or self._state != PlaybackState.PLAYING:
                return
            self._handle = None
            self._transition(PlaybackState.IDLE)
            logger.debug("Playback finished")

    def _release(self):
        handle = self._handle
        self._handle = None
        self._generation += 1
        if handle is not None:
            try:
                handle.stop()
            except Exception as e:
                logger.warning(f"Failed to stop playback cleanly: {e}")
        self._transition(PlaybackState.IDLE)

    def _transition(self, to_state: PlaybackState):
        from_state = self._state
        if from_state == to_state:
            return
        self._state = to_state
        if self._on_state_change:
            self._on_state_change(from_state, to_state)


class BrowserPlayback:
    """Handle for audio rendered by the browser."""

    def __init__(self, buffer: FloatAudioBuffer, on_finished: Callable[[], None]):
        self.buffer = buffer
        self._timer = threading.Timer(buffer.duration_seconds, on_finished)
        self._timer.daemon = True

    def begin(self):
        self._timer.start()

    def stop(self):
        self._timer.cancel()


class BrowserAudioSink:
    """
    Sink for the Streamlit view.

    The view renders the current handle's buffer with st.audio; the
    browser gives no completion callback, so completion is reported
    once the buffer's duration has elapsed.
    """

    def start(
        self,
        buffer: FloatAudioBuffer,
        on_finished: Callable[[], None],
    ) -> BrowserPlayback:
        handle = BrowserPlayback(buffer, on_finished)
        handle.begin()
        return handle

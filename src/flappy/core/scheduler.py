"""Frame scheduler: the host's "run on next frame" primitive."""

from typing import Callable, List
import logging

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler:
    """Queue of callbacks to run on the next display frame.

    The host calls run_frame() once per refresh. Callbacks scheduled while
    a frame is running are deferred to the following frame, so a callback
    that reschedules itself runs exactly once per frame.
    """

    def __init__(self):
        self._pending: List[FrameCallback] = []
        self._frame_count = 0

    @property
    def frame_count(self) -> int:
        """Number of frames run so far."""
        return self._frame_count

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def schedule(self, callback: FrameCallback) -> None:
        """Run callback on the next frame."""
        self._pending.append(callback)

    def run_frame(self) -> int:
        """Run every callback queued before this call.

        Returns:
            Number of callbacks run
        """
        callbacks, self._pending = self._pending, []
        self._frame_count += 1

        for callback in callbacks:
            callback()

        return len(callbacks)

    def clear(self) -> None:
        """Drop all pending callbacks."""
        if self._pending:
            logger.debug(f"Dropping {len(self._pending)} pending frame callbacks")
        self._pending.clear()

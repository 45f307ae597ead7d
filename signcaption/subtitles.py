"""
Assembly of confirmed signs into timed subtitle segments.
"""
import logging
import uuid
from collections import deque
from typing import Deque, Iterator, List, Optional

from .config import Cfg, default_config
from .timers import Deadline
from .types import DetectedSignEvent, SubtitleSegment

logger = logging.getLogger(__name__)


class SubtitleLog:
    """Append-only, insertion-ordered log of finalized segments, bounded to the newest."""

    def __init__(self, max_segments: int = 20):
        self._segments: Deque[SubtitleSegment] = deque(maxlen=max_segments)

    @property
    def max_segments(self) -> int:
        return self._segments.maxlen

    def append(self, segment: SubtitleSegment) -> None:
        self._segments.append(segment)

    def clear(self) -> None:
        self._segments.clear()

    def to_list(self) -> List[SubtitleSegment]:
        return list(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[SubtitleSegment]:
        return iter(self._segments)

    def __getitem__(self, i: int) -> SubtitleSegment:
        return self._segments[i]


class SubtitleSegmenter:
    """
    Idle/Open state machine that collects translated signs into caption lines.

    The first word opens a segment. Each new word is appended and restarts the
    finalize timer; a word equal to the last appended one is ignored. When the
    timer expires the segment is closed and appended to the log.

    The closed segment's start time is end - finalize_timeout_s, not the time
    of its first word.
    """

    def __init__(self, cfg: Optional[Cfg] = None, log: Optional[SubtitleLog] = None):
        """Initialize the segmenter with an empty log."""
        self.cfg = cfg or default_config()
        self.timeout_s = self.cfg.subtitles.finalize_timeout_s
        self.log = log if log is not None else SubtitleLog(self.cfg.subtitles.max_segments)

        self._words: List[str] = []
        self._last_confidence = 0.0
        self.finalize_timer = Deadline("subtitle-finalize")

    @property
    def is_open(self) -> bool:
        return bool(self._words)

    @property
    def current_text(self) -> str:
        """Text of the open segment, empty while idle."""
        return " ".join(self._words)

    def push(self, event: DetectedSignEvent, text: str, t_now: float) -> bool:
        """
        Feed one confirmed sign.

        Args:
            event: The confirmed sign
            text: Its translated display text
            t_now: Current timestamp in seconds

        Returns:
            True if the text was added to the open segment
        """
        if self._words and text == self._words[-1]:
            logger.debug("Ignored repeated word %r", text)
            return False

        self.finalize_timer.arm(t_now, self.timeout_s)
        if not self._words:
            logger.debug("Opened segment with %r", text)
        self._words.append(text)
        self._last_confidence = event.confidence
        return True

    def tick(self, t_now: float) -> Optional[SubtitleSegment]:
        """
        Close the open segment if its timer has expired.

        Returns:
            The finalized segment, or None
        """
        fired = self.finalize_timer.poll(t_now)
        if fired is None or not self._words:
            return None

        segment = SubtitleSegment(
            id=uuid.uuid4().hex,
            text=self.current_text,
            start_time=fired - self.timeout_s,
            end_time=fired,
            confidence=self._last_confidence,
        )
        self.log.append(segment)
        self._words = []
        self._last_confidence = 0.0
        logger.debug("Finalized segment %r", segment.text)
        return segment

    def abandon(self) -> None:
        """Drop the open segment without finalizing it. The log is kept."""
        self.finalize_timer.cancel()
        self._words = []
        self._last_confidence = 0.0

    def clear(self) -> None:
        """Drop the open segment and empty the log."""
        self.abandon()
        self.log.clear()

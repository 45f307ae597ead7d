"""
Caption sink that logs confirmed signs and finished subtitles.
"""
import logging

from .types import DetectedSignEvent, SubtitleSegment

logger = logging.getLogger(__name__)


class LoggingCaptionSink:
    """Sink that logs caption output instead of rendering it."""

    def __init__(self):
        """Initialize the sink."""
        self.sign_count = 0
        self.subtitle_count = 0

    def on_sign(self, event: DetectedSignEvent, text: str) -> None:
        """Log a confirmed sign."""
        self.sign_count += 1
        logger.info("Sign: %s -> %r (%.0f%%, #%d)",
                    event.sign, text, event.confidence * 100, self.sign_count)

    def on_subtitle(self, segment: SubtitleSegment) -> None:
        """Log a finalized subtitle."""
        self.subtitle_count += 1
        logger.info("Subtitle #%d: %r", self.subtitle_count, segment.text)

    def reset_counters(self) -> None:
        """Reset counters for testing."""
        self.sign_count = 0
        self.subtitle_count = 0


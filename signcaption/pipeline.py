"""
Frame-by-frame coordinator: classifier -> smoother -> segmenter.
"""
import logging
from collections import deque
from typing import Deque, List, Optional

from .classifier import classify
from .config import Cfg, default_config
from .srt import export_srt
from .smoother import TemporalSmoother
from .subtitles import SubtitleLog, SubtitleSegmenter
from .timers import SystemClock
from .translation import Translator
from .types import (
    BoundingBox,
    CaptionSinkProto,
    Clock,
    DetectedSignEvent,
    FrameResult,
    Gesture,
    HandLandmarkSet,
    SubtitleSegment,
)

logger = logging.getLogger(__name__)


class CaptionPipeline:
    """
    Drives one hand-tracking stream through classification, smoothing and
    segmentation.

    Single-threaded: call process_frame() from one frame source only. Run one
    pipeline per source if there are several.
    """

    def __init__(self, cfg: Optional[Cfg] = None, translator: Optional[Translator] = None,
                 clock: Optional[Clock] = None, sink: Optional[CaptionSinkProto] = None):
        """Initialize the pipeline with configuration."""
        self.cfg = cfg or default_config()
        self.translator = translator or Translator(
            self.cfg.translation.language, self.cfg.translation.extra
        )
        self.clock = clock or SystemClock()
        self.sink = sink

        self.smoother = TemporalSmoother(self.cfg)
        self.segmenter = SubtitleSegmenter(self.cfg)
        self.detections: Deque[DetectedSignEvent] = deque(maxlen=self.cfg.detections.max_recent)

    @property
    def subtitle_log(self) -> SubtitleLog:
        return self.segmenter.log

    @property
    def current_caption(self) -> str:
        return self.segmenter.current_text

    def current_smoothed(self) -> Gesture:
        return self.smoother.current_smoothed()

    def _now(self, t_now: Optional[float]) -> float:
        return self.clock.now() if t_now is None else t_now

    def tick(self, t_now: Optional[float] = None) -> Optional[SubtitleSegment]:
        """
        Apply expired timers without a new frame.

        Returns:
            The segment finalized by this tick, if any
        """
        t_now = self._now(t_now)
        self.smoother.tick(t_now)
        finalized = self.segmenter.tick(t_now)
        if finalized is not None and self.sink is not None:
            self.sink.on_subtitle(finalized)
        return finalized

    def process_frame(self, landmarks: Optional[HandLandmarkSet], t_now: Optional[float] = None,
                      bbox: Optional[BoundingBox] = None) -> FrameResult:
        """
        Process one frame of hand landmarks.

        Args:
            landmarks: 21 hand landmarks, or None if no hand was detected
            t_now: Current timestamp in seconds; the pipeline clock if None
            bbox: Hand bounding box to attach to confirmed signs

        Returns:
            FrameResult with the raw and smoothed gestures and any event or
            finalized segment this frame produced

        Raises:
            MalformedInputError: if the landmark set is unusable; no state is changed
        """
        gesture = classify(landmarks) if landmarks is not None else None

        t_now = self._now(t_now)
        finalized = self.tick(t_now)

        result = FrameResult(gesture=gesture, smoothed=self.current_smoothed(),
                             finalized=finalized, caption=self.current_caption)
        if gesture is None:
            return result

        event = self.smoother.observe(gesture, t_now, bbox)
        result.smoothed = self.current_smoothed()
        if event is None:
            return result

        text = self.translator(event.sign)
        self.detections.append(event)
        self.segmenter.push(event, text, t_now)
        if self.sink is not None:
            self.sink.on_sign(event, text)

        result.event = event
        result.translated = text
        result.caption = self.current_caption
        return result

    def recent_signs(self, min_confidence: Optional[float] = None) -> List[DetectedSignEvent]:
        """Buffered confirmed signs at or above the display confidence floor."""
        if min_confidence is None:
            min_confidence = self.cfg.detections.min_display_confidence
        return [e for e in self.detections if e.confidence >= min_confidence]

    def stop(self) -> None:
        """
        Stop detection: cancel both timers and drop transient state.

        The open segment is discarded unfinalized; the subtitle log is kept.
        """
        self.smoother.stop()
        self.segmenter.abandon()
        logger.debug("Pipeline stopped")

    def clear_detections(self) -> None:
        self.detections.clear()
        self.smoother.clear_history()

    def clear_subtitles(self) -> None:
        self.segmenter.clear()

    def export_srt(self) -> bytes:
        return export_srt(self.subtitle_log)

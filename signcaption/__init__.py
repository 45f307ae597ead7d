"""
Sign Caption

Turns per-frame hand landmarks from a hand-tracking model into a stable stream
of recognized signs, timed subtitle segments and SubRip exports.
"""

__version__ = "0.1.0"

from .types import (
    BoundingBox,
    CaptionSinkProto,
    DetectedSignEvent,
    FingerState,
    FrameResult,
    Gesture,
    MalformedInputError,
    SubtitleSegment,
    TimerSchedulingError,
)
from .config import load_config, default_config, Cfg
from .landmarks import distance, is_finger_extended, is_thumb_extended, finger_states
from .classifier import classify, RULES, RULE_NAMES
from .smoother import GestureHistory, TemporalSmoother
from .subtitles import SubtitleLog, SubtitleSegmenter
from .srt import export_srt, format_srt_time
from .translation import Translator
from .timers import Deadline, ManualClock, SystemClock
from .pipeline import CaptionPipeline
from .sinks import LoggingCaptionSink

__all__ = [
    "BoundingBox",
    "CaptionSinkProto",
    "DetectedSignEvent",
    "FingerState",
    "FrameResult",
    "Gesture",
    "MalformedInputError",
    "SubtitleSegment",
    "TimerSchedulingError",
    "load_config",
    "default_config",
    "Cfg",
    "distance",
    "is_finger_extended",
    "is_thumb_extended",
    "finger_states",
    "classify",
    "RULES",
    "RULE_NAMES",
    "GestureHistory",
    "TemporalSmoother",
    "SubtitleLog",
    "SubtitleSegmenter",
    "export_srt",
    "format_srt_time",
    "Translator",
    "Deadline",
    "ManualClock",
    "SystemClock",
    "CaptionPipeline",
    "LoggingCaptionSink",
]

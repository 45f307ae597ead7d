"""
Type definitions for the sign caption pipeline.
"""
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple, runtime_checkable


# (x, y, z) normalized to the frame; z is relative depth
Landmark = Tuple[float, float, float]
HandLandmarkSet = Sequence[Sequence[float]]

UNKNOWN = "Unknown"


class MalformedInputError(ValueError):
    """Raised when a landmark set cannot be classified (too few or non-numeric points)."""


class TimerSchedulingError(RuntimeError):
    """Raised when a deadline cannot be armed. Fatal for the owning pipeline."""


@dataclass(frozen=True)
class FingerState:
    """Per-frame extension state of the five fingers."""
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool


@dataclass(frozen=True)
class Gesture:
    """A classified hand pose."""
    name: str
    confidence: float
    landmarks: Tuple[Landmark, ...] = ()

    @property
    def is_unknown(self) -> bool:
        return self.name == UNKNOWN


@dataclass(frozen=True)
class BoundingBox:
    """Opaque box passed through from the hand tracker."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class DetectedSignEvent:
    """A debounced, confirmed sign."""
    id: str
    sign: str
    confidence: float
    timestamp: float  # seconds
    bbox: Optional[BoundingBox] = None


@dataclass(frozen=True)
class SubtitleSegment:
    """A finalized caption line."""
    id: str
    text: str
    start_time: float  # seconds
    end_time: float  # seconds
    confidence: float


@dataclass
class FrameResult:
    """Everything one processed frame produced."""
    gesture: Optional[Gesture]
    smoothed: Gesture
    event: Optional[DetectedSignEvent] = None
    finalized: Optional[SubtitleSegment] = None
    caption: str = ""
    translated: Optional[str] = None


@runtime_checkable
class Clock(Protocol):
    """Source of the current instant in seconds."""

    def now(self) -> float:
        ...


@runtime_checkable
class CaptionSinkProto(Protocol):
    """Abstract protocol for consumers of confirmed signs and finished subtitles."""

    def on_sign(self, event: DetectedSignEvent, text: str) -> None:
        """Handle a newly confirmed sign and its translated text."""
        ...

    def on_subtitle(self, segment: SubtitleSegment) -> None:
        """Handle a finalized subtitle segment."""
        ...

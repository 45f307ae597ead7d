"""
Temporal smoothing and debouncing of per-frame gesture classifications.
"""
import logging
import uuid
from collections import deque
from typing import Deque, Dict, Iterator, List, Optional

from .config import Cfg, default_config
from .timers import Deadline
from .types import UNKNOWN, BoundingBox, DetectedSignEvent, Gesture

logger = logging.getLogger(__name__)


class GestureHistory:
    """Fixed-capacity record of the most recent gestures, oldest evicted first."""

    def __init__(self, capacity: int = 5):
        if capacity < 1:
            raise ValueError("history capacity must be at least 1")
        self._items: Deque[Gesture] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen

    def push(self, gesture: Gesture) -> None:
        self._items.append(gesture)

    def clear(self) -> None:
        self._items.clear()

    def latest(self) -> Optional[Gesture]:
        return self._items[-1] if self._items else None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Gesture]:
        return iter(self._items)


class TemporalSmoother:
    """
    Turns the raw classification stream into two outputs.

    - current_smoothed(): a display label voted over the last few frames.
      It may flicker between close candidates from one frame to the next.
    - observe(): a debounced event stream. A label is confirmed once and not
      again until a different label is confirmed or the cooldown runs out.
    """

    def __init__(self, cfg: Optional[Cfg] = None):
        """Initialize the smoother from the smoothing and debounce settings."""
        self.cfg = cfg or default_config()
        self.history = GestureHistory(self.cfg.smoothing.history_size)
        self.confidence_cap = self.cfg.smoothing.confidence_cap
        self.min_confidence = self.cfg.debounce.min_confidence
        self.cooldown_s = self.cfg.debounce.cooldown_s

        self.last_confirmed_label = ""
        self.cooldown = Deadline("debounce-cooldown")

    def tick(self, t_now: float) -> None:
        """Apply an expired cooldown, if any."""
        fired = self.cooldown.poll(t_now)
        if fired is not None:
            logger.debug("Cooldown for %r expired at %.3f", self.last_confirmed_label, fired)
            self.last_confirmed_label = ""

    def observe(self, gesture: Gesture, t_now: float,
                bbox: Optional[BoundingBox] = None) -> Optional[DetectedSignEvent]:
        """
        Record a raw classification and confirm it if it qualifies.

        Args:
            gesture: Unsmoothed classification of the current frame
            t_now: Current timestamp in seconds
            bbox: Hand bounding box, passed through to the event untouched

        Returns:
            DetectedSignEvent if the gesture became a newly confirmed sign, None otherwise
        """
        self.tick(t_now)
        self.history.push(gesture)

        if gesture.name == UNKNOWN or gesture.confidence <= self.min_confidence:
            return None

        if gesture.name == self.last_confirmed_label:
            logger.debug("Suppressed repeat of %r", gesture.name)
            return None

        self.cooldown.arm(t_now, self.cooldown_s)
        self.last_confirmed_label = gesture.name

        return DetectedSignEvent(
            id=uuid.uuid4().hex,
            sign=gesture.name,
            confidence=gesture.confidence,
            timestamp=t_now,
            bbox=bbox,
        )

    def current_smoothed(self) -> Gesture:
        """
        Vote over the history.

        Returns:
            The label with the greatest count * average confidence (first seen
            wins ties), its average confidence capped at confidence_cap, and
            the newest landmarks. Unknown with confidence 0 if the history is empty.
        """
        latest = self.history.latest()
        if latest is None:
            return Gesture(UNKNOWN, 0.0, ())

        # dicts keep first-appearance order, which settles exact ties
        totals: Dict[str, List[float]] = {}
        for gesture in self.history:
            entry = totals.setdefault(gesture.name, [0, 0.0])
            entry[0] += 1
            entry[1] += gesture.confidence

        best_name = None
        best_score = float("-inf")
        for name, (count, conf_sum) in totals.items():
            score = count * (conf_sum / count)
            if score > best_score:
                best_score = score
                best_name = name

        count, conf_sum = totals[best_name]
        return Gesture(best_name, min(conf_sum / count, self.confidence_cap), latest.landmarks)

    def clear_history(self) -> None:
        self.history.clear()

    def stop(self) -> None:
        """Reset everything transient: history, confirmed label and cooldown."""
        self.history.clear()
        self.last_confirmed_label = ""
        self.cooldown.cancel()

"""
Hand landmark geometry used by the gesture classifier.
"""
from typing import Any, Iterable, Tuple

import numpy as np

from .types import BoundingBox, FingerState, HandLandmarkSet, Landmark, MalformedInputError


NUM_LANDMARKS = 21

# MediaPipe hand topology
WRIST = 0
THUMB_IP = 3
THUMB_TIP = 4
INDEX_PIP = 6
INDEX_TIP = 8
MIDDLE_PIP = 10
MIDDLE_TIP = 12
RING_PIP = 14
RING_TIP = 16
PINKY_PIP = 18
PINKY_TIP = 20


def validate_landmarks(landmarks: Any) -> Tuple[Landmark, ...]:
    """
    Check a landmark set and normalize it to (x, y, z) tuples.

    Args:
        landmarks: At least 21 points, as sequences or tracker landmark objects

    Returns:
        Tuple of (x, y, z) landmarks

    Raises:
        MalformedInputError: if the set is short, ragged or non-numeric
    """
    if landmarks is None:
        raise MalformedInputError("landmark set is None")

    try:
        points = to_landmark_set(landmarks)
        xy = np.asarray([p[:2] for p in points], dtype=float)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"landmark set is not numeric: {e}") from e

    if xy.ndim != 2 or xy.shape[1] != 2:
        raise MalformedInputError("every landmark needs at least x and y")
    if xy.shape[0] < NUM_LANDMARKS:
        raise MalformedInputError(
            f"expected {NUM_LANDMARKS} landmarks, got {xy.shape[0]}"
        )
    if not np.all(np.isfinite(xy)):
        raise MalformedInputError("landmark coordinates must be finite")

    return points


def distance(a: Landmark, b: Landmark) -> float:
    """Euclidean distance between two landmarks in the image plane (z ignored)."""
    return float(np.hypot(a[0] - b[0], a[1] - b[1]))


def is_finger_extended(landmarks: HandLandmarkSet, tip_idx: int, pip_idx: int) -> bool:
    """
    Check whether a finger points away from the palm.

    The tip has to be farther from the wrist than the PIP joint. This is a coarse
    proxy and poses near the boundary flip between the two answers.
    """
    wrist = landmarks[WRIST]
    return distance(landmarks[tip_idx], wrist) > distance(landmarks[pip_idx], wrist)


def is_thumb_extended(landmarks: HandLandmarkSet) -> bool:
    """Same test as is_finger_extended but against the thumb IP joint."""
    return is_finger_extended(landmarks, THUMB_TIP, THUMB_IP)


def finger_states(landmarks: HandLandmarkSet) -> FingerState:
    """
    Compute which fingers are extended.

    Args:
        landmarks: List of 21 hand landmarks

    Returns:
        FingerState with one flag per finger
    """
    return FingerState(
        thumb=is_thumb_extended(landmarks),
        index=is_finger_extended(landmarks, INDEX_TIP, INDEX_PIP),
        middle=is_finger_extended(landmarks, MIDDLE_TIP, MIDDLE_PIP),
        ring=is_finger_extended(landmarks, RING_TIP, RING_PIP),
        pinky=is_finger_extended(landmarks, PINKY_TIP, PINKY_PIP),
    )


def to_landmark_set(points: Iterable[Any]) -> Tuple[Landmark, ...]:
    """
    Convert tracker output into a tuple of (x, y, z) landmarks.

    Accepts MediaPipe landmark objects (anything with .x/.y and optionally .z)
    or plain sequences. A missing z becomes 0.0.
    """
    result = []
    for p in points:
        if hasattr(p, "x") and hasattr(p, "y"):
            result.append((float(p.x), float(p.y), float(getattr(p, "z", 0.0))))
        else:
            coords = tuple(float(c) for c in p)
            if len(coords) == 2:
                coords = coords + (0.0,)
            result.append(coords[:3])
    return tuple(result)


def bounding_box(landmarks: HandLandmarkSet) -> BoundingBox:
    """Normalized box enclosing all landmarks."""
    xs = [p[0] for p in landmarks]
    ys = [p[1] for p in landmarks]
    return BoundingBox(x=min(xs), y=min(ys), width=max(xs) - min(xs), height=max(ys) - min(ys))

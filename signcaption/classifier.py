"""
Rule-based static hand pose classifier.

Every frame is reduced to five finger-extension flags plus a few fingertip
distances, then matched against an ordered rule table. The first rule that
matches wins, so the order of RULES decides between overlapping poses.
"""
from typing import Callable, NamedTuple, Tuple

from .landmarks import (
    INDEX_TIP,
    MIDDLE_TIP,
    THUMB_TIP,
    distance,
    finger_states,
    validate_landmarks,
)
from .types import UNKNOWN, FingerState, Gesture, HandLandmarkSet


TOUCHING = 0.03
NEAR = 0.05
SPREAD = 0.05
CURVED_MIN = 0.05
CURVED_MAX = 0.15
CHIN_HEIGHT = 0.3

UNKNOWN_CONFIDENCE = 0.3

Predicate = Callable[[HandLandmarkSet, FingerState], bool]


class Rule(NamedTuple):
    name: str
    confidence: float
    predicate: Predicate


def _thumb_index_gap(lm: HandLandmarkSet) -> float:
    return distance(lm[THUMB_TIP], lm[INDEX_TIP])


def _index_middle_gap(lm: HandLandmarkSet) -> float:
    return distance(lm[INDEX_TIP], lm[MIDDLE_TIP])


def _four_fingers(f: FingerState) -> bool:
    return f.index and f.middle and f.ring and f.pinky


# ASL letters

def _is_a(lm, f):
    return not f.index and not f.middle and not f.ring and not f.pinky and f.thumb


def _is_b(lm, f):
    return _four_fingers(f) and not f.thumb


def _is_c(lm, f):
    # curved hand, thumb and index apart but not spread
    return CURVED_MIN < _thumb_index_gap(lm) < CURVED_MAX


def _is_d(lm, f):
    return f.index and not f.middle and not f.ring and not f.pinky and f.thumb


def _is_e(lm, f):
    return not f.index and not f.middle and not f.ring and not f.pinky and not f.thumb


def _is_f(lm, f):
    return _thumb_index_gap(lm) < NEAR and f.middle and f.ring and f.pinky


def _is_g(lm, f):
    return f.index and not f.middle and not f.ring and not f.pinky and not f.thumb


def _is_h(lm, f):
    return f.index and f.middle and not f.ring and not f.pinky and not f.thumb


def _is_i(lm, f):
    return not f.index and not f.middle and not f.ring and f.pinky and not f.thumb


def _is_l(lm, f):
    return f.index and not f.middle and not f.ring and not f.pinky and f.thumb


def _is_o(lm, f):
    return _thumb_index_gap(lm) < TOUCHING


def _is_u(lm, f):
    return f.index and f.middle and not f.ring and not f.pinky and not f.thumb


def _is_v(lm, f):
    return f.index and f.middle and not f.ring and not f.pinky and _index_middle_gap(lm) > SPREAD


def _is_w(lm, f):
    return f.index and f.middle and f.ring and not f.pinky and not f.thumb


def _is_y(lm, f):
    return not f.index and not f.middle and not f.ring and f.pinky and f.thumb


# Common words

def _is_hello(lm, f):
    return _four_fingers(f) and f.thumb


def _is_thank_you(lm, f):
    # index fingertip raised to chin height, regardless of the thumb
    return lm[INDEX_TIP][1] < CHIN_HEIGHT and _four_fingers(f)


def _is_please(lm, f):
    # Same pose as Hello, so it never wins. The motion that should tell them
    # apart is not observable from a single frame.
    return _four_fingers(f) and f.thumb


def _is_yes(lm, f):
    return not f.index and not f.middle and not f.ring and not f.pinky and f.thumb


def _is_no(lm, f):
    return f.index and f.middle and _index_middle_gap(lm) < TOUCHING


# Order matters: several predicates overlap and the first match wins.
# L, Yes, Please and Thank you are shadowed by earlier rules (D, A, Hello, B/Hello).
RULES: Tuple[Rule, ...] = (
    Rule("A", 0.85, _is_a),
    Rule("B", 0.88, _is_b),
    Rule("C", 0.82, _is_c),
    Rule("D", 0.86, _is_d),
    Rule("E", 0.84, _is_e),
    Rule("F", 0.87, _is_f),
    Rule("G", 0.83, _is_g),
    Rule("H", 0.85, _is_h),
    Rule("I", 0.89, _is_i),
    Rule("L", 0.87, _is_l),
    Rule("O", 0.85, _is_o),
    Rule("U", 0.86, _is_u),
    Rule("V", 0.88, _is_v),
    Rule("W", 0.84, _is_w),
    Rule("Y", 0.87, _is_y),
    Rule("Hello", 0.90, _is_hello),
    Rule("Thank you", 0.88, _is_thank_you),
    Rule("Please", 0.85, _is_please),
    Rule("Yes", 0.87, _is_yes),
    Rule("No", 0.86, _is_no),
)

RULE_NAMES = tuple(rule.name for rule in RULES)


def classify(landmarks: HandLandmarkSet, rules: Tuple[Rule, ...] = RULES) -> Gesture:
    """
    Classify one hand pose.

    Args:
        landmarks: 21 (x, y, z) hand landmarks in normalized frame coordinates
        rules: Ordered rule table, RULES by default

    Returns:
        Gesture of the first matching rule, or Unknown with confidence 0.3

    Raises:
        MalformedInputError: if the landmark set is short or non-numeric
    """
    points = validate_landmarks(landmarks)
    fingers = finger_states(points)

    for rule in rules:
        if rule.predicate(points, fingers):
            return Gesture(rule.name, rule.confidence, points)

    return Gesture(UNKNOWN, UNKNOWN_CONFIDENCE, points)


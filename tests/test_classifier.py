"""
Test cases for landmark geometry and the rule-based classifier.
"""
import unittest
import sys
from pathlib import Path
from types import SimpleNamespace

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from signcaption.classifier import RULES, RULE_NAMES, classify
from signcaption.landmarks import (
    bounding_box,
    distance,
    finger_states,
    is_finger_extended,
    is_thumb_extended,
    to_landmark_set,
)
from signcaption.types import FingerState, MalformedInputError

from hand_fixtures import make_hand


class TestGeometry(unittest.TestCase):
    """Test the landmark geometry helpers."""

    def test_distance_ignores_depth(self):
        self.assertAlmostEqual(distance((0.0, 0.0, 5.0), (0.3, 0.4, -2.0)), 0.5)

    def test_distance_is_symmetric(self):
        a, b = (0.1, 0.2, 0.0), (0.7, 0.5, 0.0)
        self.assertEqual(distance(a, b), distance(b, a))

    def test_finger_extended_compares_tip_and_pip_to_wrist(self):
        hand = make_hand(index=True)
        self.assertTrue(is_finger_extended(hand, 8, 6))
        self.assertFalse(is_finger_extended(hand, 12, 10))

    def test_thumb_uses_ip_joint(self):
        self.assertTrue(is_thumb_extended(make_hand(thumb=True)))
        self.assertFalse(is_thumb_extended(make_hand(thumb=False)))

    def test_finger_states(self):
        hand = make_hand(thumb=True, middle=True, pinky=True)
        self.assertEqual(
            finger_states(hand),
            FingerState(thumb=True, index=False, middle=True, ring=False, pinky=True),
        )

    def test_to_landmark_set_accepts_objects_and_pads_depth(self):
        points = [SimpleNamespace(x=0.1, y=0.2, z=0.3), (0.4, 0.5)]
        self.assertEqual(to_landmark_set(points), ((0.1, 0.2, 0.3), (0.4, 0.5, 0.0)))

    def test_bounding_box(self):
        box = bounding_box(make_hand(thumb=True, index=True, middle=True, ring=True, pinky=True))
        self.assertAlmostEqual(box.x, 0.22)
        self.assertAlmostEqual(box.y, 0.40)
        self.assertAlmostEqual(box.width, 0.44)
        self.assertAlmostEqual(box.height, 0.50)


class TestLetters(unittest.TestCase):
    """Test the single-letter hand shapes."""

    def assertGesture(self, hand, name, confidence):
        gesture = classify(hand)
        self.assertEqual(gesture.name, name)
        self.assertEqual(gesture.confidence, confidence)

    def test_letter_a_thumb_only(self):
        self.assertGesture(make_hand(thumb=True), "A", 0.85)

    def test_letter_b_four_fingers_no_thumb(self):
        self.assertGesture(make_hand(index=True, middle=True, ring=True, pinky=True), "B", 0.88)

    def test_letter_c_curved_gap(self):
        # thumb tip 0.10 away from the curled index tip
        hand = make_hand(overrides={4: (0.42, 0.78, 0.0)})
        self.assertGesture(hand, "C", 0.82)

    def test_letter_d_wins_over_identical_l(self):
        self.assertGesture(make_hand(thumb=True, index=True), "D", 0.86)

    def test_letter_e_closed_fist(self):
        self.assertGesture(make_hand(), "E", 0.84)

    def test_letter_f_thumb_near_index(self):
        hand = make_hand(middle=True, ring=True, pinky=True, overrides={4: (0.42, 0.66, 0.0)})
        self.assertGesture(hand, "F", 0.87)

    def test_letter_g_index_only(self):
        self.assertGesture(make_hand(index=True), "G", 0.83)

    def test_letter_h_wins_over_identical_u(self):
        self.assertGesture(make_hand(index=True, middle=True), "H", 0.85)

    def test_letter_i_pinky_only(self):
        self.assertGesture(make_hand(pinky=True), "I", 0.89)

    def test_letter_o_thumb_touching_index(self):
        hand = make_hand(thumb=True, index=True, middle=True, overrides={4: (0.43, 0.41, 0.0)})
        self.assertGesture(hand, "O", 0.85)

    def test_letter_v_spread_with_thumb(self):
        self.assertGesture(make_hand(thumb=True, index=True, middle=True), "V", 0.88)

    def test_letter_w(self):
        self.assertGesture(make_hand(index=True, middle=True, ring=True), "W", 0.84)

    def test_letter_y(self):
        self.assertGesture(make_hand(thumb=True, pinky=True), "Y", 0.87)


class TestWords(unittest.TestCase):
    """Test the common-word gestures and rule ordering."""

    def test_open_hand_is_hello_never_please(self):
        gesture = classify(make_hand(thumb=True, index=True, middle=True, ring=True, pinky=True))
        self.assertEqual(gesture.name, "Hello")
        self.assertEqual(gesture.confidence, 0.90)

    def test_please_predicate_matches_but_hello_comes_first(self):
        names = [rule.name for rule in RULES]
        hand = make_hand(thumb=True, index=True, middle=True, ring=True, pinky=True)
        points = to_landmark_set(hand)
        fingers = finger_states(points)
        please = RULES[names.index("Please")]
        self.assertTrue(please.predicate(points, fingers))
        self.assertLess(names.index("Hello"), names.index("Please"))

    def test_chin_height_is_shadowed_by_b_and_hello(self):
        raised = {8: (0.42, 0.25, 0.0)}
        no_thumb = make_hand(index=True, middle=True, ring=True, pinky=True, overrides=raised)
        with_thumb = make_hand(thumb=True, index=True, middle=True, ring=True, pinky=True, overrides=raised)
        self.assertEqual(classify(no_thumb).name, "B")
        self.assertEqual(classify(with_thumb).name, "Hello")

    def rule(self, name):
        return RULES[RULE_NAMES.index(name)]

    def test_thank_you_needs_index_tip_above_chin_height(self):
        thank_you = self.rule("Thank you")
        for y, expected in ((0.25, True), (0.35, False)):
            with self.subTest(y=y):
                hand = make_hand(thumb=True, index=True, middle=True, ring=True, pinky=True,
                                 overrides={8: (0.42, y, 0.0)})
                points = to_landmark_set(hand)
                self.assertIs(thank_you.predicate(points, finger_states(points)), expected)

    def test_yes_matches_thumb_only_fist_but_a_comes_first(self):
        hand = make_hand(thumb=True)
        points = to_landmark_set(hand)
        self.assertTrue(self.rule("Yes").predicate(points, finger_states(points)))
        self.assertEqual(classify(hand).name, "A")

    def test_no_fingers_together(self):
        hand = make_hand(thumb=True, index=True, middle=True, overrides={12: (0.43, 0.40, 0.0)})
        gesture = classify(hand)
        self.assertEqual(gesture.name, "No")
        self.assertEqual(gesture.confidence, 0.86)

    def test_unmatched_pose_is_unknown(self):
        gesture = classify(make_hand(thumb=True, middle=True, ring=True, pinky=True))
        self.assertEqual(gesture.name, "Unknown")
        self.assertEqual(gesture.confidence, 0.3)

    def test_rule_order(self):
        self.assertEqual(RULE_NAMES, (
            "A", "B", "C", "D", "E", "F", "G", "H", "I", "L", "O", "U", "V", "W", "Y",
            "Hello", "Thank you", "Please", "Yes", "No",
        ))
        for rule in RULES:
            self.assertGreaterEqual(rule.confidence, 0.82)
            self.assertLessEqual(rule.confidence, 0.90)


class TestClassifierContract(unittest.TestCase):
    """Test totality and input validation."""

    def test_random_hands_stay_in_range(self):
        rng = np.random.default_rng(7)
        valid = set(RULE_NAMES) | {"Unknown"}
        for _ in range(300):
            gesture = classify(rng.uniform(0.0, 1.0, size=(21, 3)).tolist())
            self.assertIn(gesture.name, valid)
            self.assertGreaterEqual(gesture.confidence, 0.0)
            self.assertLessEqual(gesture.confidence, 1.0)

    def test_deterministic(self):
        hand = make_hand(thumb=True, pinky=True)
        self.assertEqual(classify(hand), classify(hand))

    def test_keeps_landmarks(self):
        hand = make_hand(index=True)
        self.assertEqual(classify(hand).landmarks, tuple(hand))

    def test_accepts_tracker_objects(self):
        hand = make_hand(thumb=True)
        objects = [SimpleNamespace(x=x, y=y, z=z) for x, y, z in hand]
        self.assertEqual(classify(objects).name, "A")

    def test_short_set_is_rejected(self):
        with self.assertRaises(MalformedInputError):
            classify(make_hand()[:20])

    def test_empty_and_none_are_rejected(self):
        with self.assertRaises(MalformedInputError):
            classify([])
        with self.assertRaises(MalformedInputError):
            classify(None)

    def test_non_numeric_is_rejected(self):
        hand = make_hand()
        hand[5] = ("a", "b", "c")
        with self.assertRaises(MalformedInputError):
            classify(hand)

    def test_nan_is_rejected(self):
        hand = make_hand()
        hand[0] = (float("nan"), 0.9, 0.0)
        with self.assertRaises(MalformedInputError):
            classify(hand)


if __name__ == '__main__':
    unittest.main()

"""
Hand landmark detection using MediaPipe. Needs the `camera` extra.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import Optional, Tuple

from .landmarks import to_landmark_set
from .types import Landmark


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, min_detection_conf: float = 0.5, min_tracking_conf: float = 0.5):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> Optional[Tuple[Landmark, ...]]:
        """
        Process a frame and return the landmarks of the first detected hand.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            21 (x, y, z) landmarks with x/y in [0..1], or None if no hand detected
        """
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if results.multi_hand_landmarks:
            return to_landmark_set(results.multi_hand_landmarks[0].landmark)

        return None

    def close(self) -> None:
        self.hands.close()


def draw_landmarks(frame: np.ndarray, landmarks: Tuple[Landmark, ...]) -> np.ndarray:
    """
    Draw hand landmarks on the frame.

    Args:
        frame: Input frame
        landmarks: (x, y, z) coordinates with x/y in [0..1]

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]

    for i, (x, y, _z) in enumerate(landmarks):
        px = int(x * width)
        py = int(y * height)
        cv2.circle(frame, (px, py), 3, (0, 255, 0), -1)
        cv2.putText(frame, str(i), (px + 5, py - 5), cv2.FONT_HERSHEY_SIMPLEX, 0.3, (255, 255, 255), 1)

    return frame

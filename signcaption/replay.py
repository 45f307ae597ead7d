"""
Replay of recorded landmark streams through the caption pipeline.

A recording is JSON Lines, one frame per line:

    {"t": 12.345, "landmarks": [[x, y, z], ... 21 points]}
    {"t": 12.378, "landmarks": null}
    {"t": 12.411, "landmarks": [...], "bbox": {"x": 0.3, "y": 0.2, "width": 0.2, "height": 0.3}}

`t` is in seconds and must not decrease. `landmarks` is null for frames
without a detected hand. `bbox` is optional and passed through untouched.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterator, List, Optional, Tuple, Union

from .pipeline import CaptionPipeline
from .timers import ManualClock
from .types import BoundingBox, HandLandmarkSet, SubtitleSegment

logger = logging.getLogger(__name__)


@dataclass
class RecordedFrame:
    t: float
    landmarks: Optional[HandLandmarkSet]
    bbox: Optional[BoundingBox] = None


def read_frames(stream: IO[str]) -> Iterator[RecordedFrame]:
    """
    Parse a JSON Lines recording.

    Raises:
        ValueError: on invalid JSON, a missing timestamp or time going backwards
    """
    last_t = None
    for lineno, line in enumerate(stream, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
            t = float(record["t"])
            box = record.get("bbox")
            bbox = BoundingBox(**box) if box else None
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise ValueError(f"line {lineno}: bad frame record ({e})") from e

        if last_t is not None and t < last_t:
            raise ValueError(f"line {lineno}: timestamp {t} is before {last_t}")
        last_t = t

        yield RecordedFrame(t=t, landmarks=record.get("landmarks"), bbox=bbox)


def replay(frames: Iterator[RecordedFrame],
           pipeline: Optional[CaptionPipeline] = None) -> Tuple[CaptionPipeline, List[SubtitleSegment]]:
    """
    Feed recorded frames through a pipeline driven by a manual clock.

    After the last frame the clock is moved past the finalize timeout so an
    open segment is closed instead of lost.

    Returns:
        The pipeline and the segments finalized during the replay
    """
    clock = ManualClock()
    if pipeline is None:
        pipeline = CaptionPipeline(clock=clock)
    else:
        pipeline.clock = clock

    finalized: List[SubtitleSegment] = []
    frame_count = 0
    for frame in frames:
        clock.set(frame.t)
        result = pipeline.process_frame(frame.landmarks, bbox=frame.bbox)
        if result.finalized is not None:
            finalized.append(result.finalized)
        frame_count += 1

    if pipeline.segmenter.is_open:
        clock.advance(pipeline.cfg.subtitles.finalize_timeout_s)
        segment = pipeline.tick()
        if segment is not None:
            finalized.append(segment)

    logger.info("Replayed %d frames, %d subtitles", frame_count, len(finalized))
    return pipeline, finalized


def replay_file(path: Union[str, Path],
                pipeline: Optional[CaptionPipeline] = None) -> Tuple[CaptionPipeline, List[SubtitleSegment]]:
    """Replay a JSON Lines recording from disk."""
    with open(path, "r", encoding="utf-8") as f:
        return replay(read_frames(f), pipeline)

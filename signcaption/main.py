"""
Command line entry point: live camera captioning or replay of a recording.
"""
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .config import Cfg, load_config
from .landmarks import bounding_box
from .pipeline import CaptionPipeline
from .replay import replay_file
from .sinks import LoggingCaptionSink
from .srt import write_srt

logger = logging.getLogger(__name__)


class CaptionApp:
    """Live captioning from a webcam."""

    def __init__(self, config: Cfg, output: Optional[Path] = None):
        """Initialize camera, tracker and pipeline from configuration."""
        import cv2
        from .tracker import HandsTracker

        self.cv2 = cv2
        self.config = config
        self.output = output
        self.tracker = HandsTracker(
            max_num_hands=config.mediapipe.max_num_hands,
            min_detection_conf=config.mediapipe.min_detection_confidence,
            min_tracking_conf=config.mediapipe.min_tracking_confidence
        )
        self.pipeline = CaptionPipeline(config, sink=LoggingCaptionSink())

        self.cap = cv2.VideoCapture(config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, config.camera.fps)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {config.camera.index}")

    def run(self) -> None:
        """Run the capture loop until 'q' is pressed."""
        from .tracker import draw_landmarks

        cv2 = self.cv2
        logger.info("🎥 Starting %s, press 'q' to quit", self.config.display.window_name)

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    logger.error("Failed to read frame from camera")
                    break

                landmarks = self.tracker.process(frame)
                bbox = bounding_box(landmarks) if landmarks else None
                result = self.pipeline.process_frame(landmarks, bbox=bbox)

                if landmarks and self.config.display.show_landmarks:
                    frame = draw_landmarks(frame, landmarks)

                smoothed = result.smoothed
                status = "No hand detected"
                if landmarks:
                    status = f"Now signing: {self.pipeline.translator(smoothed.name)} ({smoothed.confidence:.0%})"

                cv2.putText(frame, status, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
                cv2.putText(frame, result.caption, (10, frame.shape[0] - 40),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.9, (0, 255, 255), 2)

                cv2.imshow(self.config.display.window_name, frame)
                if cv2.waitKey(1) & 0xFF == ord('q'):
                    break
        finally:
            self.pipeline.stop()
            self.cap.release()
            self.tracker.close()
            cv2.destroyAllWindows()

        if self.output is not None:
            write_srt(self.pipeline.subtitle_log, self.output)
            logger.info("💾 Wrote %d subtitles to %s", len(self.pipeline.subtitle_log), self.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="signcaption", description="Hand sign captioning")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--language", help="Output language for captions")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    replay_cmd = sub.add_parser("replay", help="Caption a JSON Lines landmark recording")
    replay_cmd.add_argument("recording", type=Path)
    replay_cmd.add_argument("-o", "--output", type=Path, help="SRT file (default: stdout)")

    live_cmd = sub.add_parser("live", help="Caption from the webcam")
    live_cmd.add_argument("-o", "--output", type=Path, help="SRT file written on exit")

    return parser


def _load(args: argparse.Namespace) -> Cfg:
    config = load_config(args.config or os.getenv("SIGNCAPTION_CONFIG"))
    language = args.language or os.getenv("SIGNCAPTION_LANGUAGE")
    if language:
        config.translation.language = language
    return config


def run_replay(config: Cfg, recording: Path, output: Optional[Path]) -> int:
    pipeline = CaptionPipeline(config, sink=LoggingCaptionSink())
    pipeline, _ = replay_file(recording, pipeline)

    if output is None:
        sys.stdout.buffer.write(pipeline.export_srt())
        sys.stdout.flush()
    else:
        write_srt(pipeline.subtitle_log, output)
        logger.info("💾 Wrote %d subtitles to %s", len(pipeline.subtitle_log), output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = _load(args)
        if args.command == "replay":
            return run_replay(config, args.recording, args.output)
        CaptionApp(config, args.output).run()
        return 0
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except ImportError as e:
        logger.error("❌ %s (live mode needs: pip install 'signcaption[camera]')", e)
        return 1
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        logger.error("❌ %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Configuration management for the sign caption pipeline.
"""
import math
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, field


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class SmoothingConfig:
    """Display smoothing over recent classifications."""
    history_size: int = 5
    confidence_cap: float = 0.95


@dataclass
class DebounceConfig:
    """Confirmation of detected signs."""
    min_confidence: float = 0.7
    cooldown_s: float = 1.5


@dataclass
class SubtitleConfig:
    """Subtitle segmentation settings."""
    finalize_timeout_s: float = 3.0
    max_segments: int = 20


@dataclass
class DetectionsConfig:
    """Recent detections shown in the history panel."""
    max_recent: int = 10
    min_display_confidence: float = 0.7


@dataclass
class TranslationConfig:
    """Output language and extra label tables."""
    language: str = "english"
    extra: Dict[str, Dict[str, str]] = field(default_factory=dict)


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool = True
    window_name: str = "SignCaption"


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    debounce: DebounceConfig = field(default_factory=DebounceConfig)
    subtitles: SubtitleConfig = field(default_factory=SubtitleConfig)
    detections: DetectionsConfig = field(default_factory=DetectionsConfig)
    translation: TranslationConfig = field(default_factory=TranslationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def default_config() -> Cfg:
    """Built-in defaults, without reading any file."""
    return Cfg()


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if a setting is out of range
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object. Missing keys keep their defaults."""
    camera_data = data.get('camera') or {}
    camera = CameraConfig(
        index=int(camera_data.get('index', 0)),
        width=int(camera_data.get('width', 1280)),
        height=int(camera_data.get('height', 720)),
        fps=int(camera_data.get('fps', 30))
    )

    mp_data = data.get('mediapipe') or {}
    mediapipe = MediaPipeConfig(
        max_num_hands=int(mp_data.get('max_num_hands', 1)),
        min_detection_confidence=float(mp_data.get('min_detection_confidence', 0.5)),
        min_tracking_confidence=float(mp_data.get('min_tracking_confidence', 0.5))
    )

    smoothing_data = data.get('smoothing') or {}
    smoothing = SmoothingConfig(
        history_size=int(smoothing_data.get('history_size', 5)),
        confidence_cap=float(smoothing_data.get('confidence_cap', 0.95))
    )

    debounce_data = data.get('debounce') or {}
    debounce = DebounceConfig(
        min_confidence=float(debounce_data.get('min_confidence', 0.7)),
        cooldown_s=float(debounce_data.get('cooldown_s', 1.5))
    )

    subtitles_data = data.get('subtitles') or {}
    subtitles = SubtitleConfig(
        finalize_timeout_s=float(subtitles_data.get('finalize_timeout_s', 3.0)),
        max_segments=int(subtitles_data.get('max_segments', 20))
    )

    detections_data = data.get('detections') or {}
    detections = DetectionsConfig(
        max_recent=int(detections_data.get('max_recent', 10)),
        min_display_confidence=float(detections_data.get('min_display_confidence', 0.7))
    )

    translation_data = data.get('translation') or {}
    translation = TranslationConfig(
        language=str(translation_data.get('language', 'english')),
        extra={
            str(lang): {str(k): str(v) for k, v in (table or {}).items()}
            for lang, table in (translation_data.get('extra') or {}).items()
        }
    )

    display_data = data.get('display') or {}
    display = DisplayConfig(
        show_landmarks=bool(display_data.get('show_landmarks', True)),
        window_name=str(display_data.get('window_name', 'SignCaption'))
    )

    return validate_config(Cfg(
        camera=camera,
        mediapipe=mediapipe,
        smoothing=smoothing,
        debounce=debounce,
        subtitles=subtitles,
        detections=detections,
        translation=translation,
        display=display
    ))


def _require_count(name: str, value: int) -> None:
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")


def _require_duration(name: str, value: float) -> None:
    if not (math.isfinite(value) and value > 0):
        raise ValueError(f"{name} must be a positive number of seconds, got {value}")


def _require_unit(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {value}")


def validate_config(cfg: Cfg) -> Cfg:
    """
    Check the ranges the pipeline depends on.

    Raises:
        ValueError: naming the first offending setting
    """
    _require_count("mediapipe.max_num_hands", cfg.mediapipe.max_num_hands)
    _require_unit("mediapipe.min_detection_confidence", cfg.mediapipe.min_detection_confidence)
    _require_unit("mediapipe.min_tracking_confidence", cfg.mediapipe.min_tracking_confidence)
    _require_count("smoothing.history_size", cfg.smoothing.history_size)
    _require_unit("smoothing.confidence_cap", cfg.smoothing.confidence_cap)
    _require_unit("debounce.min_confidence", cfg.debounce.min_confidence)
    _require_duration("debounce.cooldown_s", cfg.debounce.cooldown_s)
    _require_duration("subtitles.finalize_timeout_s", cfg.subtitles.finalize_timeout_s)
    _require_count("subtitles.max_segments", cfg.subtitles.max_segments)
    _require_count("detections.max_recent", cfg.detections.max_recent)
    _require_unit("detections.min_display_confidence", cfg.detections.min_display_confidence)
    return cfg

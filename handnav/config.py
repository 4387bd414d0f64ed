"""
Configuration management for the hand navigation gesture engine.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"

DEFAULT_VIEWS = ["dashboard", "tasks", "calendar", "routines", "settings"]


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    # consecutive empty reads before the camera is treated as lost
    max_failed_reads: int = 30


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    model_path: str = "models/hand_landmarker.task"
    max_num_hands: int = 1
    min_detection_confidence: float = 0.5
    min_presence_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class GesturesConfig:
    """Gesture recognition thresholds (normalized landmark units)."""
    enabled: bool = True
    extension_threshold: float = 0.2
    pinch_threshold: float = 0.05
    open_palm_min_pinch: float = 0.1
    wave_window: int = 8
    wave_threshold: float = 0.12
    wave_cooldown_ms: int = 400


@dataclass
class ScreenConfig:
    """Target screen size in pixels for cursor projection."""
    width: int = 1920
    height: int = 1080
    # [x, y, width, height] rectangles where pinches never click
    ignore_regions: List[List[float]] = field(default_factory=list)


@dataclass
class NavigationConfig:
    """Ordered, cyclic list of view identifiers."""
    views: List[str] = field(default_factory=lambda: list(DEFAULT_VIEWS))
    initial_view: Optional[str] = None


@dataclass
class DisplayConfig:
    """Preview window settings."""
    show_preview: bool = True
    show_landmarks: bool = True
    mirror_preview: bool = True
    window_name: str = "Hand Navigation"
    ripple_ms: int = 500


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GesturesConfig = field(default_factory=GesturesConfig)
    screen: ScreenConfig = field(default_factory=ScreenConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return _dict_to_config(data)


def _section(cls, data: Dict[str, Any], name: str):
    """Build one config dataclass, keeping defaults for missing keys."""
    raw = data.get(name) or {}
    known = {key: value for key, value in raw.items() if key in cls.__dataclass_fields__}
    return cls(**known)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    cfg = Cfg(
        camera=_section(CameraConfig, data, 'camera'),
        mediapipe=_section(MediaPipeConfig, data, 'mediapipe'),
        gestures=_section(GesturesConfig, data, 'gestures'),
        screen=_section(ScreenConfig, data, 'screen'),
        navigation=_section(NavigationConfig, data, 'navigation'),
        display=_section(DisplayConfig, data, 'display'),
    )

    if not cfg.navigation.views:
        raise ValueError("navigation.views must list at least one view")
    if cfg.gestures.wave_window < 2:
        raise ValueError("gestures.wave_window must be at least 2")

    return cfg

import argparse
from pathlib import Path
from typing import Optional, Sequence

class Config:
    """
    Central configuration for the push-up repetition engine.
    Holds detection thresholds, logging mode and replay settings.
    """

    def __init__(self, **overrides):
        # Application mode settings
        self.debug_mode: str = "debug"

        # Pose visibility
        self.visibility_threshold: float = 0.35  # Minimum keypoint confidence to count as visible

        # Lock-in
        self.body_ready_threshold: int = 5  # Net-positive gate frames required before counting starts

        # Elbow angle hysteresis (degrees)
        self.down_angle_deg: float = 110.0  # Below this the arms are bent
        self.up_angle_deg: float = 145.0  # Above this the arms are extended

        # Smoothing
        self.smoothing_factor: float = 0.6  # Weight on the previous value (60% old, 40% new)
        self.neutral_angle_deg: float = 160.0  # Arms-extended seed used on lock-in

        # Counting robustness
        self.rep_cooldown_ms: float = 150.0  # Minimum time between counted reps
        self.bad_frame_tolerance: int = 5  # Consecutive posture failures before counting pauses
        self.milestone_interval: int = 10  # Every Nth rep is a milestone

        # Position gate geometry (normalized image coordinates)
        self.horizontal_tolerance: float = 0.35  # Max shoulder/hip height difference
        self.hand_height_tolerance: float = 0.25  # Max height of wrists above shoulders
        self.standing_max_horizontal_spread: float = 0.03
        self.standing_min_vertical_spread: float = 0.1

        # Replay settings
        self.frames_path: Optional[Path] = None
        self.fps: float = 30.0
        self.layout: str = "coco"
        self.image_size: Optional[tuple] = None

        self.supported_layouts = ["coco", "mediapipe", "compact"]

        # Human-readable descriptions for each debug mode
        self.mode_descriptions = {
            "debug": "Debug Mode (detailed logging)",
            "non_debug": "Non-Debug Mode (minimal logging)"
        }

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise TypeError(f"Unknown config option: {name}")
            setattr(self, name, value)

    def validate(self) -> "Config":
        """
        Check that thresholds are consistent with each other.
        Raises ValueError describing the first problem found.
        """
        if not 0.0 <= self.smoothing_factor < 1.0:
            raise ValueError(f"smoothing_factor must be in [0, 1), got {self.smoothing_factor}")
        if self.down_angle_deg >= self.up_angle_deg:
            raise ValueError(
                f"down_angle_deg ({self.down_angle_deg}) must be below up_angle_deg ({self.up_angle_deg})"
            )
        if self.body_ready_threshold < 1:
            raise ValueError("body_ready_threshold must be at least 1")
        if self.bad_frame_tolerance < 1:
            raise ValueError("bad_frame_tolerance must be at least 1")
        if self.milestone_interval < 1:
            raise ValueError("milestone_interval must be at least 1")
        if self.rep_cooldown_ms < 0:
            raise ValueError("rep_cooldown_ms cannot be negative")
        if not 0.0 <= self.visibility_threshold < 1.0:
            raise ValueError(f"visibility_threshold must be in [0, 1), got {self.visibility_threshold}")
        if self.debug_mode not in self.mode_descriptions:
            raise ValueError(f"Unknown debug mode: {self.debug_mode}")
        return self

    def setup_from_args(self, argv: Optional[Sequence[str]] = None):
        """
        Parse command line arguments for the replay tool.
        Threshold flags override the defaults above.
        """
        parser = argparse.ArgumentParser(description="Push-up counter keypoint replay")
        parser.add_argument("frames", type=Path, help="Recorded keypoints (.npy, shape frames x joints x 3)")
        parser.add_argument(
            "--mode",
            choices=list(self.mode_descriptions),
            default="debug",
            help="Debug mode setting"
        )
        parser.add_argument("--fps", type=float, default=self.fps, help="Frame rate of the recording")
        parser.add_argument("--layout", choices=self.supported_layouts, default=self.layout,
                            help="Joint layout of the recording")
        parser.add_argument("--width", type=float, help="Image width, for pixel coordinates")
        parser.add_argument("--height", type=float, help="Image height, for pixel coordinates")
        parser.add_argument("--down-angle", type=float, default=self.down_angle_deg)
        parser.add_argument("--up-angle", type=float, default=self.up_angle_deg)
        parser.add_argument("--cooldown-ms", type=float, default=self.rep_cooldown_ms)
        parser.add_argument("--smoothing", type=float, default=self.smoothing_factor)
        parser.add_argument("--visibility", type=float, default=self.visibility_threshold)
        args = parser.parse_args(argv)

        if (args.width is None) != (args.height is None):
            parser.error("--width and --height must be given together")

        self.debug_mode = args.mode
        self.frames_path = args.frames
        self.fps = args.fps
        self.layout = args.layout
        self.image_size = (args.width, args.height) if args.width is not None else None
        self.down_angle_deg = args.down_angle
        self.up_angle_deg = args.up_angle
        self.rep_cooldown_ms = args.cooldown_ms
        self.smoothing_factor = args.smoothing
        self.visibility_threshold = args.visibility
        return self

    @property
    def mode_description(self) -> str:
        """Get human-readable description of current mode"""
        return self.mode_descriptions[self.debug_mode]

# Global configuration instance - import this in other modules
config = Config()

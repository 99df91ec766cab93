"""Configuration settings for the Drawer animation engine."""

from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Drawer configuration settings.

    Defaults give a 2000x2000 canvas with twelve pens; every field can be
    overridden with a DRAWER_-prefixed environment variable.
    """

    # Logging settings
    # Root log level (DEBUG, INFO, WARNING, ERROR)
    log_level: str = "INFO"
    # Module-specific overrides
    log_level_agents: str = "WARNING"  # Very verbose at DEBUG (mode changes per dot)
    log_level_render: str = "INFO"

    # Canvas
    canvas_width: int = 2000
    canvas_height: int = 2000
    background: tuple[int, int, int] = (0, 0, 0)

    # Population
    dot_count: int = 12
    phase_offset: float = 0.1  # t = id * phase_offset, keeps pens spread along the ring

    # Shape catalog
    initial_shape: Literal["sphere", "torus", "spiral", "wave", "cross"] = "sphere"
    radius_min: float = 100.0
    radius_max: float = 300.0

    # Sampler projection
    perspective: float = 800.0
    damping: float = 0.8  # Shrinks the figure so it stays inside the frame

    # Steady motion
    t_step: float = 0.0002
    rotation_step: float = 0.001  # Added by every dot, so rotation scales with dot_count
    follow_rate: float = 0.1
    history_size: int = 3
    smoothing_factor: float = 0.6  # Weight of the k-th most recent sample is factor**k
    depth_min: float = 0.4
    depth_max: float = 1.2

    # Transition (chaotic motion during a shape switch)
    transition_duration_ms: float = 2000.0
    speed_min: float = 2.0
    speed_max: float = 10.0
    jump_probability: float = 0.05
    burst_probability: float = 0.03

    # Line width animation
    min_width: float = 0.5
    max_width: float = 14.0
    width_reroll_probability: float = 0.1
    width_reroll_probability_fast: float = 0.03  # "fast" mode re-rolls less often
    width_relax_rate: float = 0.25
    width_relax_rate_fast: float = 0.1

    # Colour animation
    color_reroll_probability: float = 0.01
    hue_smoothing: float = 0.05
    opacity_smoothing: float = 0.15
    saturation_smoothing: float = 0.05
    lightness_smoothing: float = 0.05

    # Runner
    fps: int = 60
    seed: Optional[int] = None
    export_format: Literal["PNG", "JPEG"] = "PNG"
    jpeg_quality: int = 90

    @field_validator("depth_max")
    @classmethod
    def check_depth_band(cls, v, info):
        depth_min = info.data.get("depth_min")
        if depth_min is not None and v <= depth_min:
            raise ValueError(f"depth_max ({v}) must be greater than depth_min ({depth_min})")
        return v

    @field_validator("export_format", mode="before")
    @classmethod
    def coerce_export_format(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    class Config:
        env_prefix = "DRAWER_"
        env_file = ".env"


settings = Settings()

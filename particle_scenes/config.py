"""
Central application configuration.

Per-scene tuning constants live on the scene classes themselves; this block
only covers the host side (window, frame driver, HUD, recording).
"""

from __future__ import annotations

from .colors import RGB


class AppConfig:
    # Window size in pixels (resizable at runtime)
    screen_width: int = 1200
    screen_height: int = 800

    # Frame driver: one logical tick per frame. Scene constants (friction,
    # speed caps, decay rates) are tuned against this rate.
    target_fps: int = 60

    # Horizontal swipe distance that counts as a scene switch
    swipe_threshold: float = 50.0

    # Rendering
    background: RGB = (0, 0, 0)
    hud_color: RGB = (230, 230, 230)
    hud_hint_color: RGB = (150, 150, 150)
    hud_font_size: int = 18
    hud_hint: str = "Use <- -> keys or swipe to switch modes"

    # Recording
    record_duration: float = 10.0
    playback_fps: int = 60
    video_codec: str = "libx264"
    video_quality: int = 8

    # Headless runs
    headless_frames: int = 120

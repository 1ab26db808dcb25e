from __future__ import annotations

import logging
from typing import List, Optional

import imageio
import numpy as np
import pygame

from .config import AppConfig

logger = logging.getLogger(__name__)


class FrameRecorder:
    """Collects rendered frames and writes them out as a video file."""

    def __init__(
        self,
        output_file: Optional[str],
        duration: float = AppConfig.record_duration,
        fps: int = AppConfig.playback_fps,
    ) -> None:
        self.output_file = output_file
        self.duration = float(duration)
        self.fps = int(fps)
        self.frames: List[pygame.Surface] = []

    @property
    def frame_budget(self) -> int:
        return max(1, int(round(self.duration * self.fps)))

    @property
    def complete(self) -> bool:
        return len(self.frames) >= self.frame_budget

    def capture(self, screen: pygame.Surface) -> None:
        if self.complete:
            return
        self.frames.append(screen.copy())
        if len(self.frames) % 30 == 0:
            progress = len(self.frames) / self.frame_budget * 100.0
            logger.info("Recording: %.1f%% (%d frames)", progress, len(self.frames))

    def to_arrays(self) -> List[np.ndarray]:
        # surfarray is (width, height, rgb); video frames are (height, width, rgb)
        return [np.transpose(pygame.surfarray.array3d(frame), (1, 0, 2)) for frame in self.frames]

    def save(self) -> bool:
        """Write the captured frames; returns False if nothing was written."""
        if not self.output_file:
            return False
        if not self.frames:
            logger.warning("No frames captured, skipping %s", self.output_file)
            return False

        logger.info("Saving %d frames to %s", len(self.frames), self.output_file)
        try:
            imageio.mimwrite(
                self.output_file,
                self.to_arrays(),
                fps=self.fps,
                codec=AppConfig.video_codec,
                quality=AppConfig.video_quality,
                pixelformat="yuv420p",
            )
        except Exception:
            logger.exception("Failed to save recording to %s (is imageio-ffmpeg installed?)", self.output_file)
            return False
        logger.info("Saved %s: %d frames at %d FPS", self.output_file, len(self.frames), self.fps)
        return True

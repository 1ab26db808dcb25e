"""
Pygame host for the scene engine: window, event capture and frame driver.

Keyboard controls:
  - Left / Right arrows: previous / next scene
  - Space: pause / resume
  - Period: single-step one tick while paused
  - R: rebuild the current scene
  - G: toggle the FPS graph
  - Esc or window close: quit

Touch: a horizontal swipe switches scenes (left = next, right = previous).
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import pygame

from .config import AppConfig
from .context import InputState, Viewport
from .gestures import SwipeTracker
from .manager import SceneManager
from .recorder import FrameRecorder
from .scenes import build_scenes
from .surface import PygameSurface

logger = logging.getLogger(__name__)


class ParticleScenesApp:
    """Pygame app wrapper around SceneManager."""

    def __init__(
        self,
        screen_size: Tuple[int, int] = (AppConfig.screen_width, AppConfig.screen_height),
        target_fps: int = AppConfig.target_fps,
        start_scene: int = 0,
        seed: Optional[int] = None,
        recorder: Optional[FrameRecorder] = None,
    ) -> None:
        pygame.init()
        self.clock = pygame.time.Clock()
        self.target_fps = int(target_fps)

        # Window
        self.screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
        self.viewport = Viewport(*self.screen.get_size())
        self.surface = PygameSurface(self.screen)

        # Shared state, written only here
        self.input = InputState()
        self.swipe = SwipeTracker(AppConfig.swipe_threshold)

        self.manager = SceneManager(build_scenes(seed), self.viewport)
        self.manager.add_listener(self._on_scene_changed)
        self.manager.start(start_scene)

        self.recorder = recorder

        self.running = True
        self.paused = False
        self.step_once = False

        self.show_graphs = False
        self.fps_history: List[float] = []
        self.max_history_points = 240  # about 4 seconds at 60 fps

    def _on_scene_changed(self, name: str) -> None:
        pygame.display.set_caption(f"{name} - Particle Scenes")

    # ---------------
    # Input handling
    # ---------------

    def _finger_pos(self, event) -> Tuple[float, float]:
        # Finger coordinates are normalized to [0, 1]
        return event.x * self.viewport.width, event.y * self.viewport.height

    def _resize(self, width: int, height: int) -> None:
        width = max(1, int(width))
        height = max(1, int(height))
        if (width, height) == self.viewport.size:
            return
        self.screen = pygame.display.get_surface()
        if self.screen is None or self.screen.get_size() != (width, height):
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.viewport.resize(*self.screen.get_size())
        self.surface.retarget(self.screen)
        logger.info("Window resized to %dx%d", *self.viewport.size)
        self.manager.on_resize(self.viewport)

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_RIGHT:
                    self.manager.next()
                elif event.key == pygame.K_LEFT:
                    self.manager.previous()
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key == pygame.K_PERIOD:
                    self.step_once = True
                elif event.key == pygame.K_r:
                    self.manager.current.init(self.viewport)
                elif event.key == pygame.K_g:
                    self.show_graphs = not self.show_graphs
            elif event.type == pygame.MOUSEMOTION:
                self.input.move(*event.pos)
            elif event.type == pygame.WINDOWLEAVE:
                self.input.leave()
            elif event.type == pygame.VIDEORESIZE:
                self._resize(event.w, event.h)
            elif event.type == pygame.WINDOWSIZECHANGED:
                self._resize(event.x, event.y)
            elif event.type == pygame.FINGERDOWN:
                x, y = self._finger_pos(event)
                self.swipe.begin(x)
                self.input.move(x, y)
            elif event.type == pygame.FINGERMOTION:
                self.input.move(*self._finger_pos(event))
            elif event.type == pygame.FINGERUP:
                x, _ = self._finger_pos(event)
                direction = self.swipe.end(x)
                self.input.leave()
                if direction is not None:
                    self.manager.switch(direction)

    # ---------------
    # Rendering
    # ---------------

    def _draw(self) -> None:
        self.surface.clear(AppConfig.background)
        self.manager.draw(self.surface, self.input)
        self.surface.present()
        self.surface.reset_transform()
        self._draw_hud()

        if self.show_graphs:
            self._draw_graphs()

        pygame.display.flip()

    def _draw_hud(self) -> None:
        size = AppConfig.hud_font_size
        self.surface.text(self.manager.display_name, 20, 20 + size, AppConfig.hud_color, size=size)
        self.surface.text(AppConfig.hud_hint, 20, 26 + size * 2, AppConfig.hud_hint_color, size=size - 4)
        if self.paused:
            self.surface.text("paused", 20, 32 + size * 3, AppConfig.hud_hint_color, size=size - 4)

    def _draw_graphs(self) -> None:
        """FPS graph at the top-right with a grid and the current FPS."""
        margin = 10
        rect = pygame.Rect(self.viewport.size[0] - margin - 260, margin, 260, 80)

        pygame.draw.rect(self.screen, (5, 5, 20), rect)
        pygame.draw.rect(self.screen, (180, 180, 180), rect, 1)

        step_x = rect.width // 4
        step_y = rect.height // 3
        for i in range(1, 4):
            x = rect.left + i * step_x
            pygame.draw.line(self.screen, (60, 60, 90), (x, rect.top), (x, rect.bottom))
        for i in range(1, 3):
            y = rect.top + i * step_y
            pygame.draw.line(self.screen, (60, 60, 90), (rect.left, y), (rect.right, y))

        data = self.fps_history
        max_val = max(max(data), 1e-3) * 1.1 if data else 1.0
        n = len(data)
        for i in range(1, n):
            x0 = rect.left + int(rect.width * (i - 1) / max(n - 1, 1))
            x1 = rect.left + int(rect.width * i / max(n - 1, 1))
            y0 = rect.bottom - int(rect.height * (data[i - 1] / max_val))
            y1 = rect.bottom - int(rect.height * (data[i] / max_val))
            pygame.draw.line(self.screen, (80, 220, 80), (x0, y0), (x1, y1), 2)

        self.surface.text(self._fps_label(), rect.left + 4, rect.top + 14, (230, 230, 230), size=12)

    def _fps_label(self) -> str:
        if not self.fps_history:
            return "FPS --"
        return f"FPS {self.fps_history[-1]:.0f}"

    def _track_fps(self) -> None:
        fps = self.clock.get_fps()
        if fps > 0:
            self.fps_history.append(fps)
        if len(self.fps_history) > self.max_history_points:
            self.fps_history = self.fps_history[-self.max_history_points :]

    # ---------------
    # Main loop
    # ---------------

    def run(self) -> None:
        if self.recorder is not None:
            logger.info("Recording %d frames. Press ESC to stop early.", self.recorder.frame_budget)

        while self.running:
            self.clock.tick(self.target_fps)
            self._handle_events()

            # One fixed logical tick per frame, whatever the real frame time
            if not self.paused or self.step_once:
                self.manager.update(self.input)
                self.step_once = False
                self._track_fps()

            self._draw()

            if self.recorder is not None:
                self.recorder.capture(self.screen)
                if self.recorder.complete:
                    logger.info("Recording complete: %d frames", len(self.recorder.frames))
                    self.running = False

        if self.recorder is not None:
            self.recorder.save()
        pygame.quit()

# host.py
"""
A Pygame window that hosts the background animation.

PygameHost plays the role of the embedding page: it provides the drawing
surface, delivers resize notifications, runs requested frame callbacks once
per display refresh, and tears the animation down when the window closes.
"""
import itertools
import logging
import pygame
from typing import Callable, Dict, List, Optional, Tuple
from constants import FPS, TITLE, BACKGROUND_COLOR

# --- Data Contracts ---
#
# class PygameHost:
#   - __init__(self, width, height, fullscreen=False, fps=FPS, title=TITLE):
#     - Side Effects: Initializes Pygame and opens a resizable window. If no
#       display can be opened, the host has no surface (get_surface()
#       returns None) and run() returns immediately.
#
#   - request_frame(callback) -> int / cancel_frame(handle) -> None:
#     - A requested callback runs at most once, on the next refresh tick.
#       A cancelled callback never runs.
#
#   - set_unmount_handler(callback) -> None:
#     - callback is invoked once when the window is closed or run() ends.
#
#   - run(self, max_frames: Optional[int] = None) -> int:
#     - Outputs: number of refresh ticks processed.
#     - Side Effects: Pumps events until quit or max_frames, then tears down
#       and shuts Pygame down.


class PygameHost:
    """
    Desktop stand-in for the page that mounts the animated surface.
    """
    def __init__(self, width: int, height: int, fullscreen: bool = False, fps: int = FPS, title: str = TITLE):
        self.fps = fps
        self.clock = None
        self.screen = None

        self._handles = itertools.count(1)
        self._pending: Dict[int, Callable[[], None]] = {}
        self._resize_listeners: List[Callable[[int, int], None]] = []
        self._unmount_handler: Optional[Callable[[], None]] = None
        self._torn_down = False

        pygame.init()
        try:
            if fullscreen:
                display_info = pygame.display.Info()
                width, height = display_info.current_w, display_info.current_h
                self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
            else:
                self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        except pygame.error as e:
            logging.error(f"Could not open a display: {e}")
            self.screen = None
            return

        pygame.display.set_caption(title)
        self.screen.fill(BACKGROUND_COLOR)
        self.clock = pygame.time.Clock()
        logging.info(f"Host window opened ({width}x{height}, fullscreen={fullscreen}).")

    # --- Host contract ---

    def get_surface(self) -> Optional[pygame.Surface]:
        if self.screen is None:
            return None
        try:
            return pygame.display.get_surface()
        except pygame.error as e:
            logging.error(f"Display surface unavailable: {e}")
            return None

    def get_viewport_size(self) -> Tuple[int, int]:
        surface = self.get_surface()
        if surface is None:
            return (0, 0)
        return surface.get_size()

    def request_frame(self, callback: Callable[[], None]) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int):
        self._pending.pop(handle, None)

    def add_resize_listener(self, callback: Callable[[int, int], None]):
        self._resize_listeners.append(callback)

    def remove_resize_listener(self, callback: Callable[[int, int], None]):
        if callback in self._resize_listeners:
            self._resize_listeners.remove(callback)

    def set_unmount_handler(self, callback: Callable[[], None]):
        self._unmount_handler = callback

    # --- Event loop ---

    def _notify_resize(self, width: int, height: int):
        logging.debug(f"Viewport resized to {width}x{height}.")
        for listener in list(self._resize_listeners):
            listener(width, height)

    def _handle_events(self) -> bool:
        """Processes pending events. Returns False once the page is closing."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Tearing down.")
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Tearing down.")
                return False
            if event.type == pygame.VIDEORESIZE:
                self._notify_resize(event.w, event.h)
        return True

    def tick(self):
        """Runs every frame callback that was pending when the tick began."""
        # Frames requested from inside a callback wait for the next tick;
        # frames cancelled from inside one are skipped.
        for handle in list(self._pending):
            callback = self._pending.pop(handle, None)
            if callback is not None:
                callback()

    def teardown(self):
        """Invokes the unmount handler once."""
        if self._torn_down:
            return
        self._torn_down = True
        if self._unmount_handler is not None:
            self._unmount_handler()
        self._pending.clear()

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        Runs the refresh loop until the window closes or max_frames ticks
        have been processed.
        """
        if self.screen is None:
            self.teardown()
            return 0

        frames = 0
        running = True
        while running:
            running = self._handle_events()
            if not running:
                break

            self.tick()
            pygame.display.flip()
            self.clock.tick(self.fps)
            frames += 1

            if max_frames is not None and frames >= max_frames:
                logging.info(f"Reached max_frames ({max_frames}). Stopping.")
                running = False

        self.teardown()
        return frames

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()

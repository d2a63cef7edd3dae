# animation.py
"""
Drives the background animation and owns its lifecycle.

The AnimationDriver acquires the drawing surface from its host, builds the
particle system, and then runs one simulation step and one render per
display refresh until the host tears it down.
"""
import enum
import logging
import numpy as np
from typing import Optional
from particle import ParticleSystem
from simulation import Simulation
from visualization import Renderer

# --- Data Contracts ---
#
# The host passed to AnimationDriver must provide:
#   - get_surface() -> Optional[pygame.Surface]
#   - get_viewport_size() -> Tuple[int, int]
#   - request_frame(callback) -> int
#   - cancel_frame(handle: int) -> None
#   - add_resize_listener(callback) / remove_resize_listener(callback),
#     where callback receives (width, height).
#
# class AnimationDriver:
#   - mount(self) -> None:
#     - Side Effects: UNMOUNTED -> INITIALIZING -> RUNNING, or -> STOPPED if
#       the host has no drawing surface. Never raises for a missing surface.
#       Raises RuntimeError if called in any state other than UNMOUNTED.
#   - unmount(self) -> None:
#     - Side Effects: Releases the resize listener and the pending frame
#       exactly once; state becomes STOPPED. Further calls do nothing.
#     - Invariants: No frame callback of this driver runs after it returns.


class AnimationState(enum.Enum):
    UNMOUNTED = "unmounted"
    INITIALIZING = "initializing"
    RUNNING = "running"
    STOPPED = "stopped"


class AnimationDriver:
    """
    Runs the simulate-then-render loop on the host's refresh signal.
    """
    def __init__(self, host, rng: Optional[np.random.Generator] = None, log_throttle: int = 300):
        self.host = host
        self.rng = rng
        self.log_throttle = max(int(log_throttle), 1)

        self.state = AnimationState.UNMOUNTED
        self.surface = None
        self.width = 0
        self.height = 0
        self.particles: Optional[ParticleSystem] = None
        self.simulation: Optional[Simulation] = None
        self.renderer: Optional[Renderer] = None

        self.frame_count = 0
        self._frame_handle: Optional[int] = None
        self._resize_registered = False

    @property
    def is_running(self) -> bool:
        return self.state is AnimationState.RUNNING

    def mount(self):
        """Acquires the surface, builds the particle system and starts the loop."""
        if self.state is not AnimationState.UNMOUNTED:
            raise RuntimeError(f"Cannot mount an animation in state {self.state.name}.")

        self.state = AnimationState.INITIALIZING
        logging.info("Mounting background animation.")

        surface = self.host.get_surface()
        if surface is None:
            logging.warning("Drawing surface unavailable. Background animation will not start.")
            self.state = AnimationState.STOPPED
            return
        self.surface = surface

        # Size the surface to the viewport.
        self.width, self.height = self.host.get_viewport_size()

        self.host.add_resize_listener(self._handle_resize)
        self._resize_registered = True

        self.particles = ParticleSystem(self.width, self.height, rng=self.rng)
        self.simulation = Simulation(self.particles)
        self.renderer = Renderer((self.width, self.height))

        self.state = AnimationState.RUNNING
        self._frame_handle = self.host.request_frame(self._animate)
        logging.info(
            f"Background animation running: {self.particles.particle_count} particles "
            f"on a {self.width}x{self.height} surface."
        )

    def unmount(self):
        """Stops the loop and releases host resources."""
        if self.state is AnimationState.STOPPED:
            return

        if self._resize_registered:
            self.host.remove_resize_listener(self._handle_resize)
            self._resize_registered = False
        if self._frame_handle is not None:
            self.host.cancel_frame(self._frame_handle)
            self._frame_handle = None

        previous = self.state
        self.state = AnimationState.STOPPED
        self.particles = None
        self.simulation = None
        self.renderer = None
        self.surface = None
        logging.info(f"Background animation stopped after {self.frame_count} frames (was {previous.name}).")

    def _handle_resize(self, width: int, height: int):
        """
        Tracks new surface dimensions. The particle system is left as is;
        the next frame simply uses the new bounds.
        """
        self.width, self.height = int(width), int(height)
        surface = self.host.get_surface()
        if surface is not None:
            self.surface = surface
        logging.debug(f"Surface resized to {self.width}x{self.height}.")

    def _animate(self):
        """One frame: step, render, reschedule."""
        self._frame_handle = None
        if self.state is not AnimationState.RUNNING:
            return

        connections = self.simulation.step(self.width, self.height)
        self.renderer.draw(self.surface, self.particles, connections)
        self.frame_count += 1

        # Hot loops must throttle logs
        if self.frame_count % self.log_throttle == 0:
            logging.debug(f"Frame {self.frame_count} | Connections: {len(connections)}")

        self._frame_handle = self.host.request_frame(self._animate)

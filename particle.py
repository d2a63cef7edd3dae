# particle.py
"""
Manages the state of all particles in the background.

This module defines the ParticleSystem class, which is responsible for
initializing and storing particle data (position, velocity, size, opacity)
in NumPy arrays. A particle's id is its row index in those arrays.
"""
import logging
import numpy as np
from typing import NamedTuple, Optional
from constants import (
    MAX_PARTICLES, PARTICLE_DENSITY_DIVISOR, VELOCITY_RANGE, SIZE_RANGE,
    OPACITY_RANGE
)

# --- Data Contracts ---
#
# particle_count_for_width(width: float) -> int:
#   - Outputs: min(MAX_PARTICLES, floor(width / PARTICLE_DENSITY_DIVISOR)),
#     never negative.
#
# class ParticleSystem:
#   - __init__(self, width: int, height: int, rng: Optional[np.random.Generator]):
#     - Inputs:
#       - width, height: dimensions of the drawing surface in pixels.
#       - rng: random generator. A fresh, unseeded one is used if None.
#     - Side Effects: Initializes internal NumPy arrays for particle state.
#     - Invariants:
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64.
#       - self.velocities is a NumPy array of shape (N, 2) of dtype float64.
#       - self.sizes and self.opacities have shape (N,) and are never
#         written after initialization.
#       - N is fixed for the lifetime of the instance.


class Particle(NamedTuple):
    """Read-only snapshot of one particle."""
    id: int
    x: float
    y: float
    vx: float
    vy: float
    size: float
    opacity: float


def particle_count_for_width(width: float) -> int:
    """Number of particles for a viewport of the given width."""
    if width <= 0:
        return 0
    return min(MAX_PARTICLES, int(width // PARTICLE_DENSITY_DIVISOR))


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self, width: int, height: int, rng: Optional[np.random.Generator] = None):
        """
        Initializes the particle system.

        Args:
            width (int): The width of the drawing surface.
            height (int): The height of the drawing surface.
            rng (Optional[np.random.Generator]): Source of randomness.
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        count = particle_count_for_width(width)

        self.positions = self.rng.uniform(
            low=[0.0, 0.0],
            high=[max(width, 0), max(height, 0)],
            size=(count, 2)
        )
        self.velocities = self.rng.uniform(
            low=VELOCITY_RANGE[0],
            high=VELOCITY_RANGE[1],
            size=(count, 2)
        )
        self.sizes = self.rng.uniform(SIZE_RANGE[0], SIZE_RANGE[1], size=count)
        self.opacities = self.rng.uniform(OPACITY_RANGE[0], OPACITY_RANGE[1], size=count)

        # Size and opacity are fixed at creation.
        self.sizes.flags.writeable = False
        self.opacities.flags.writeable = False

        logging.info(f"ParticleSystem initialized with {count} particles for a {width}x{height} surface.")
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Velocities shape: {self.velocities.shape}"
        )

    @property
    def particle_count(self) -> int:
        return self.positions.shape[0]

    def particle(self, index: int) -> Particle:
        """Returns a snapshot of the particle with the given id."""
        x, y = self.positions[index]
        vx, vy = self.velocities[index]
        return Particle(
            int(index), float(x), float(y), float(vx), float(vy),
            float(self.sizes[index]), float(self.opacities[index])
        )

    def __len__(self) -> int:
        return self.particle_count

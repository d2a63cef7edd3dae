# simulation.py
"""
Handles the per-frame motion and proximity logic.

This module defines the Simulation class, which advances the particle
system by one frame and derives the connections (pairs of particles within
the proximity threshold) that the renderer draws for that frame.
"""
import logging
import numpy as np
from typing import List, NamedTuple
from particle import ParticleSystem
from constants import PROXIMITY_THRESHOLD, CONNECTION_MAX_OPACITY
from numba import jit

# --- Data Contracts ---
#
# class Connection(NamedTuple):
#   - from_id: int, to_id: int with from_id < to_id.
#   - opacity: float in [0, CONNECTION_MAX_OPACITY).
#
# class Simulation:
#   - __init__(self, particles: ParticleSystem, threshold: float):
#     - Side Effects: Stores a reference to the particle system.
#
#   - step(self, width: float, height: float) -> List[Connection]:
#     - Inputs: current drawing surface dimensions.
#     - Outputs: a new list of connections for this frame, ordered by
#       (from_id, to_id). Each unordered pair appears at most once.
#     - Side Effects: Modifies positions and velocities of the particle
#       system in place. Sizes and opacities are never touched.
#     - Ordering: particle i is moved and reflected, then compared with
#       every j > i before j itself moves.
#     - Invariants: Particle count remains constant. Positions are NOT
#       clamped; a particle may sit just outside the surface until its
#       reflected velocity brings it back.


class Connection(NamedTuple):
    """A line between two particles within the proximity threshold."""
    from_id: int
    to_id: int
    opacity: float


@jit(nopython=True)
def _step_numba(positions, velocities, width, height, threshold, max_opacity):
    """
    Numba-jitted frame step.

    Particles are visited in id order. Particle i is moved, reflected off
    the bounds, and then paired with every j > i. Those j have not moved
    yet this frame, so each pair uses i's new position and j's previous one.
    Returns the number of connections found and three preallocated arrays
    holding them.
    """
    particle_count = positions.shape[0]
    max_pairs = particle_count * (particle_count - 1) // 2
    from_ids = np.empty(max_pairs, dtype=np.int64)
    to_ids = np.empty(max_pairs, dtype=np.int64)
    opacities = np.empty(max_pairs, dtype=np.float64)

    count = 0
    for i in range(particle_count):
        # 1. Euler step
        positions[i, 0] += velocities[i, 0]
        positions[i, 1] += velocities[i, 1]
        x = positions[i, 0]
        y = positions[i, 1]

        # 2. Reflection flips velocity only; the position is left outside.
        if x < 0.0 or x > width:
            velocities[i, 0] = -velocities[i, 0]
        if y < 0.0 or y > height:
            velocities[i, 1] = -velocities[i, 1]

        # 3. Proximity against higher ids
        for j in range(i + 1, particle_count):
            dx = x - positions[j, 0]
            dy = y - positions[j, 1]
            distance = np.sqrt(dx * dx + dy * dy)
            if distance < threshold:
                from_ids[count] = i
                to_ids[count] = j
                opacities[count] = (1.0 - distance / threshold) * max_opacity
                count += 1
    return count, from_ids, to_ids, opacities


class Simulation:
    """
    Advances particle motion and computes proximity connections.
    """
    def __init__(self, particles: ParticleSystem, threshold: float = PROXIMITY_THRESHOLD):
        """
        Args:
            particles (ParticleSystem): The particle system to simulate.
            threshold (float): Maximum distance, in pixels, for a connection.
        """
        if threshold <= 0:
            msg = f"Proximity threshold must be positive, got {threshold}."
            logging.critical(msg)
            raise ValueError(msg)

        self.particles = particles
        self.threshold = float(threshold)
        self.max_opacity = float(CONNECTION_MAX_OPACITY)

        logging.info(
            f"Simulation initialized for {particles.particle_count} particles, "
            f"proximity threshold {self.threshold:.1f}px."
        )

    def step(self, width: float, height: float) -> List[Connection]:
        """
        Executes one frame of the simulation.
        """
        count, from_ids, to_ids, opacities = _step_numba(
            self.particles.positions, self.particles.velocities,
            float(width), float(height), self.threshold, self.max_opacity
        )

        return [
            Connection(int(from_ids[k]), int(to_ids[k]), float(opacities[k]))
            for k in range(count)
        ]

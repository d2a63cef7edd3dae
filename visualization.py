# visualization.py
"""
Handles the rendering of the background using Pygame.
"""
import logging
import math
import pygame
import numpy as np
from particle import ParticleSystem
from constants import (
    ACCENT_COLOR, TRAIL_FADE_COLOR, CONNECTION_LINE_WIDTH,
    GLOW_RADIUS_RATIO, GLOW_INTENSITY
)
from typing import List, Sequence, Tuple

# Forward reference for type hinting to avoid circular import
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from simulation import Connection


# --- Data Contracts ---
#
# class Renderer:
#   - __init__(self, size: Tuple[int, int]):
#     - Inputs:
#       - size: (width, height) of the drawing surface.
#     - Side Effects: Creates the off-screen fade and line surfaces.
#
#   - draw(self, surface, particles, connections) -> None:
#     - Inputs:
#       - surface: the pygame.Surface to paint on (normally the display).
#       - particles: the ParticleSystem after this frame's step.
#       - connections: this frame's connection list.
#     - Side Effects: Paints, in order, the trail fade, the connection
#       lines and the particles (core disc with glow halo) onto surface.


def build_particle_sprite(size: float, opacity: float) -> Tuple[pygame.Surface, int]:
    """
    Pre-renders one particle: a solid core disc with a radial glow halo.

    The halo alpha falls linearly from opacity * GLOW_INTENSITY at the
    centre to zero at size * GLOW_RADIUS_RATIO. It is composited over the
    core disc ("over" operator, same hue), so blitting the sprite once is
    equivalent to painting the disc and then the halo.

    Returns:
        The sprite surface and the offset from its top-left corner to the
        particle centre.
    """
    glow_radius = size * GLOW_RADIUS_RATIO
    half = int(math.ceil(glow_radius))
    diameter = half * 2 + 1

    offsets = np.arange(diameter, dtype=np.float64) - half
    distance = np.sqrt(offsets[:, np.newaxis] ** 2 + offsets[np.newaxis, :] ** 2)

    halo_alpha = np.clip(1.0 - distance / glow_radius, 0.0, 1.0) * (opacity * GLOW_INTENSITY)
    core_alpha = np.where(distance <= size, opacity, 0.0)
    alpha = halo_alpha + core_alpha * (1.0 - halo_alpha)

    sprite = pygame.Surface((diameter, diameter), pygame.SRCALPHA)
    sprite.fill((*ACCENT_COLOR, 0))
    pixels = pygame.surfarray.pixels_alpha(sprite)
    pixels[:, :] = np.round(alpha * 255).astype(np.uint8)
    del pixels  # Unlocks the surface
    return sprite, half


class Renderer:
    """
    Paints one frame of particles and connections with a motion trail.
    """
    def __init__(self, size: Tuple[int, int]):
        self.size = (0, 0)
        self.fade_surface = None
        self.line_surface = None
        self.resize(size)

        self._sprite_owner = None
        self.particle_sprites: List[Tuple[pygame.Surface, int]] = []

        logging.info(f"Renderer initialized for a {self.size[0]}x{self.size[1]} surface.")

    def resize(self, size: Tuple[int, int]):
        """Rebuilds the off-screen surfaces for a new surface size."""
        width, height = max(int(size[0]), 0), max(int(size[1]), 0)
        self.size = (width, height)

        # The fade surface is blitted over the previous frame instead of a
        # clear. This fades old content, creating trails.
        self.fade_surface = pygame.Surface(self.size, pygame.SRCALPHA)
        self.fade_surface.fill(TRAIL_FADE_COLOR)

        # Scratch layer for connection lines: transparent accent hue, so a
        # line blends with its own alpha when its area is blitted.
        self.line_surface = pygame.Surface(self.size, pygame.SRCALPHA)
        self.line_surface.fill((*ACCENT_COLOR, 0))

        logging.debug(f"Renderer surfaces resized to {width}x{height}.")

    def _pre_render_particles(self, particles: ParticleSystem):
        """
        Pre-renders a sprite for each particle. Size and opacity never
        change, so this runs once per particle system.
        """
        logging.debug("Pre-rendering particle sprites...")
        self.particle_sprites = [
            build_particle_sprite(float(size), float(opacity))
            for size, opacity in zip(particles.sizes, particles.opacities)
        ]
        self._sprite_owner = particles
        logging.debug(f"Finished pre-rendering {len(self.particle_sprites)} particle sprites.")

    def draw(self, surface: pygame.Surface, particles: ParticleSystem, connections: Sequence["Connection"]):
        """
        Draws one frame onto the given surface.
        """
        if surface.get_size() != self.size:
            self.resize(surface.get_size())
        if self._sprite_owner is not particles:
            self._pre_render_particles(particles)

        positions = particles.positions

        # 1. Trail fade: darken everything drawn so far.
        surface.blit(self.fade_surface, (0, 0))

        # 2. Connections, below the particles.
        # Each line is blitted on its own so crossing lines composite over
        # one another. The scratch area is cleared again after each blit.
        clear = (*ACCENT_COLOR, 0)
        # A hairline thinner than one pixel covers that fraction of it.
        coverage = min(CONNECTION_LINE_WIDTH, 1.0)
        for connection in connections:
            start = positions[connection.from_id]
            end = positions[connection.to_id]
            alpha = int(round(connection.opacity * coverage * 255))
            dirty = pygame.draw.line(
                self.line_surface,
                (*ACCENT_COLOR, alpha),
                (start[0], start[1]),
                (end[0], end[1]),
                1
            )
            surface.blit(self.line_surface, dirty, dirty)
            self.line_surface.fill(clear, dirty)

        # 3. Particles with their glow halos.
        for i, (sprite, half) in enumerate(self.particle_sprites):
            x, y = positions[i]
            surface.blit(sprite, (int(round(x)) - half, int(round(y)) - half))

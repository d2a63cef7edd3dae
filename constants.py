# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They define the
visual character of the background (density, proximity threshold, colors,
glow) and are deliberately not part of the run configuration.
"""

# Host window defaults
TITLE = "Neural Background"
FPS = 60
DEFAULT_WINDOW_SIZE = (1280, 720)

# --- Particle density ---
MAX_PARTICLES = 80
# One particle per this many pixels of viewport width.
PARTICLE_DENSITY_DIVISOR = 20

# --- Initial particle state ranges (half-open intervals) ---
VELOCITY_RANGE = (-0.25, 0.25)  # Pixels per frame, each axis
SIZE_RANGE = (1.0, 3.0)         # Radius in pixels
OPACITY_RANGE = (0.3, 0.8)

# --- Connections ---
PROXIMITY_THRESHOLD = 150.0  # Pixels
CONNECTION_MAX_OPACITY = 0.4
CONNECTION_LINE_WIDTH = 0.5  # Pixels. Drawn 1px wide at proportionally lower alpha.

# --- Colors (RGB) ---
ACCENT_COLOR = (0, 255, 213)  # Teal-green
BACKGROUND_COLOR = (10, 10, 15)

# --- Trail effect ---
# Alpha of the dark overlay painted each frame instead of a full clear.
# Lower is a longer trail.
TRAIL_FADE_ALPHA = 0.1
TRAIL_FADE_COLOR = (*BACKGROUND_COLOR, round(TRAIL_FADE_ALPHA * 255))

# --- Glow halo ---
# Ratio of the halo radius to the particle radius.
GLOW_RADIUS_RATIO = 4
# Halo centre alpha as a fraction of the particle's opacity.
GLOW_INTENSITY = 0.3

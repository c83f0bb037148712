"""
Wave Field Constants
====================

Numerical constants and defaults shared by the wave-field modules.
Demo-level presentation constants live here too; user options live in
config.py.

Oct 2026
"""

# ---------------------------------------------------------------------
# FIELD MODEL
# ---------------------------------------------------------------------

# Length scale of the exponential amplitude decay:
#   A(d) = A0 * exp(-d * attenuation / ATTENUATION_LENGTH_SCALE)
ATTENUATION_LENGTH_SCALE = 300.0

# Base amplitude of every source in the demos
DEFAULT_AMPLITUDE = 2.0

# Displacement range mapped onto the two-hue gradient: Y in [-R, R] -> [0, 1]
COLOR_RANGE = 2.0

# Green channel of the gradient (constant, the hue runs red <-> blue)
GRADIENT_GREEN = 0.5

# Side length of the square sampling plane, centred on the origin
DEFAULT_EXTENT = 70.0

# Segments used when sampling a wave along a source -> probe segment
LINE_SEGMENTS = 100

# ---------------------------------------------------------------------
# SAMPLE CATEGORIES (colour classification)
# ---------------------------------------------------------------------

BELOW_THRESHOLD = 0   # |Y| < black threshold, drawn as a neutral marker
GRADIENT = 1          # drawn on the two-hue gradient
UNDEFINED = 2         # no transmitted wave (beyond the critical angle)

# ---------------------------------------------------------------------
# REFRACTION DEMO
# ---------------------------------------------------------------------

# Fixed source of the refraction demo, (x, z)
REFRACTION_SOURCE_POSITION = (-20.0, 0.0)

# ---------------------------------------------------------------------
# CLOCK / HISTORY
# ---------------------------------------------------------------------

# Bounded demos wrap time after this many periods
DEFAULT_WRAP_CYCLES = 3

# PlotHistory takes this many samples per period
PLOT_SAMPLES_PER_PERIOD = 32

# Slack added before flooring elapsed intervals (avoids losing a sample
# to floating error exactly on an interval edge)
PLOT_TIME_EPSILON = 1e-4

# ---------------------------------------------------------------------
# TOLERANCES
# ---------------------------------------------------------------------

# Interference classification: fractional wavelength within this of 0/1
# is constructive, within this of 0.5 is destructive
INTERFERENCE_TOLERANCE = 0.05

# Zero detection for offsets along the boundary in the Fermat ray search
ZERO_OFFSET_THRESHOLD = 1e-12

# brentq absolute tolerance for the boundary crossing coordinate
RAY_XTOL = 1e-12

# ---------------------------------------------------------------------
# TWO-WAVE (BEATS) DEMO
# ---------------------------------------------------------------------

BEAT_NUM_POINTS = 500
BEAT_WAVE_WIDTH = 900.0
BEAT_RADIUS = 60.0

# Clock advance per animation frame per unit of speed
BEAT_TIME_STEP = 4e-5

# Frame rate the per-frame step above was tuned for
BEAT_FRAME_RATE = 60.0

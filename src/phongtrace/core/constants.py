"""Shared numeric constants for intersection, shading and rendering."""

# Threshold for a valid forward hit and for a non-degenerate plane denominator.
# Every primitive uses this same value.
EPSILON = 1e-6

# Offset of shadow ray origins along the surface normal, also used as the
# shadow ray's t_min.
SHADOW_BIAS = 1e-4

# Default parametric range for scene queries
T_MIN = EPSILON
T_MAX = 1e12

# Background gradient, blended by the ray's y direction
BACKGROUND_BOTTOM = (0.6, 0.7, 0.9)
BACKGROUND_TOP = (0.1, 0.1, 0.15)

# Rows claimed by a worker at a time in the parallel row loop
ROW_BATCH_SIZE = 16

DEFAULT_WORKER_COUNTS = (1, 2, 4, 8)

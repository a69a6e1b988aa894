"""Presets and constants for the swarm visualizer."""


# ============= Search space =============
# Particles are initialized uniformly inside and hard-clamped to this square.
BOUND_LO = -5.0
BOUND_HI = 5.0


# ============= Driver limits =============
# Particle count range offered by the controls; changing it reinitializes the swarm.
MIN_PARTICLES = 5
MAX_PARTICLES = 50
DEFAULT_PARTICLES = 20

# Milliseconds between timer-driven steps.
DEFAULT_INTERVAL_MS = 100

# Coefficient ranges for w and c1/c2.
W_RANGE = (0.0, 1.0)
C_RANGE = (0.0, 3.0)


# ============= Presets =============

# Default: moderate inertia, equal pull to personal and global best.
DEFAULT = {
    'w': 0.5,
    'c1': 1.5,
    'c2': 1.5,
}

# Exploration: high inertia, particles lean on their own memory.
EXPLORE = {
    'w': 0.9,
    'c1': 2.0,
    'c2': 1.0,
}

# Exploitation: low inertia, strong social pull; collapses quickly.
EXPLOIT = {
    'w': 0.3,
    'c1': 1.0,
    'c2': 2.0,
}

# Clerc-Kennedy constriction equivalent.
CONSTRICTION = {
    'w': 0.729,
    'c1': 1.49445,
    'c2': 1.49445,
}


# Preset lookup helper for convenience in runners / scripts.
PRESETS = {
    'DEFAULT': DEFAULT,
    'EXPLORE': EXPLORE,
    'EXPLOIT': EXPLOIT,
    'CONSTRICTION': CONSTRICTION,
}

"""
Configuration constants.

Centralizes the magic numbers and attribute names used by world generation
and the spatial model. Organized by functional area for easy maintenance.
"""

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = None
RANDOM_SEED = "burrito1"

# =============================================================================
# DEFINITIONS
# =============================================================================

# Attribute holding a definition's unique name within its collection.
DEFINITION_NAME_ATTRIBUTE = "name"

# Optional attribute naming the parent definition to inherit from.
DEFINITION_BASE_ATTRIBUTE = "base"

# Attribute on a worker element selecting an alternate implementation.
WORKER_CLASS_ATTRIBUTE = "class"

# Attributes consumed by the resolver itself, never copied into fields.
RESERVED_DEFINITION_ATTRIBUTES = frozenset(
    {DEFINITION_NAME_ATTRIBUTE, DEFINITION_BASE_ATTRIBUTE, WORKER_CLASS_ATTRIBUTE}
)

# =============================================================================
# ROOMS & VISIBILITY
# =============================================================================

# Width of the wall ring carved by the default room layout.
ROOM_WALL_THICKNESS = 1

# Radius (in tiles) an observer can see when no explicit radius is given.
DEFAULT_VISIBILITY_RADIUS = 12

# Domain name of the RNG stream handed to room layouts.
ROOM_LAYOUT_RNG_DOMAIN = "map.rooms"

# config.py
DEFAULT_SEED = 651321525
# Any int seeds the session stream; it is folded into numpy's unsigned seed range
SEED_MASK = 0xFFFFFFFFFFFFFFFF
DEFAULT_WIDTH = 100
DEFAULT_HEIGHT = 100
DEFAULT_MIN_SITES = 4
DEFAULT_MAX_SITES = 12
DEFAULT_BLOCK_SIZE = 8

# Uniform height multiplier range for jittered buildings
DEFAULT_HEIGHT_RANGE = (1.0, 10.0)

# Mixed-use split: roll <= PRIMARY -> own archetype, <= SECONDARY -> second, else third
MIXED_USE_PRIMARY = 0.75
MIXED_USE_SECONDARY = 0.90

# RGB per category (district map image); road is drawn black
CATEGORY_COLORS = {
    "road": (0, 0, 0),
    "residential": (255, 255, 255),
    "park": (0, 255, 0),
    "industrial": (255, 0, 0),
    "market": (255, 235, 4),
    "business": (128, 128, 128),
}

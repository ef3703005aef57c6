# ============================================================================
# RULE DEFAULTS
# ============================================================================
DEFAULT_COLORS = (
    0xFF0000,  # red
    0x00FF00,  # green
    0x0000FF,  # blue
    0xFFFF00,  # yellow
    0xFF00FF,  # magenta
    0x00FFFF,  # cyan
    0xFFA500,  # orange
)
DEFAULT_MIN_LINE_LENGTH = 5
DEFAULT_BOARD_SIZE = 9
DEFAULT_BALLS_PER_ROUND = 3

# Allowed values for each configurable field (inclusive ranges).
ALLOWED_MIN_LINE_LENGTHS = tuple(range(3, 9))
ALLOWED_BOARD_SIZES = tuple(range(3, 13))
ALLOWED_BALLS_PER_ROUND = tuple(range(1, 6))
MIN_PALETTE_SIZE = 2
MAX_COLOR_VALUE = 0xFFFFFF


# ============================================================================
# SCORING
# ============================================================================
POINTS_PER_BALL = 10
LEADERBOARD_SIZE = 5


# ============================================================================
# PERSISTENCE
# ============================================================================
CONFIG_STORAGE_KEY = "colorlines.config"
LEADERBOARD_STORAGE_KEY = "colorlines.leaderboard"

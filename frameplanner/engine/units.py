"""
units.py - Centimetre/inch conversions and planner constants.

This is the foundation module. All geometry is stored in CENTIMETRES;
inches only exist at the display/input boundary.
"""

import re

# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

CM_PER_INCH = 2.54

UNIT_CM = "cm"
UNIT_INCH = "in"

_NUMBER_PREFIX = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")


def cm_to_inches(cm: float) -> float:
    """Convert centimetres to inches."""
    return cm / CM_PER_INCH


def inches_to_cm(inches: float) -> float:
    """Convert inches to centimetres."""
    return inches * CM_PER_INCH


def convert_dimension(value: float, from_unit: str, to_unit: str) -> float:
    """Convert a length between display units."""
    if from_unit == to_unit:
        return value
    if from_unit == UNIT_CM and to_unit == UNIT_INCH:
        return cm_to_inches(value)
    return inches_to_cm(value)


def format_dimension(value_cm: float, unit: str) -> str:
    """Format a centimetre value for display in the given unit.

    Whole centimetre values print without decimals, fractional ones with a
    single decimal. Inches always print with two decimals.
    """
    if unit == UNIT_CM:
        if value_cm % 1 == 0:
            formatted = str(int(value_cm))
        else:
            formatted = f"{value_cm:.1f}"
        return f"{formatted} cm"

    return f"{cm_to_inches(value_cm):.2f} in"


def parse_dimension_input(text: str, unit: str) -> float:
    """Parse user input in the given unit into centimetres.

    Leading numeric prefix wins ("12.5cm" -> 12.5). Empty or non-numeric
    input yields 0.
    """
    match = _NUMBER_PREFIX.match(text or "")
    if not match:
        return 0.0

    parsed = float(match.group(0))
    if unit == UNIT_CM:
        return parsed
    return inches_to_cm(parsed)


# =============================================================================
# PLANNER CONSTANTS
# =============================================================================

# Snap distance in screen units; callers divide by the current view scale
SNAP_THRESHOLD = 5

MAX_FRAMES = 50
ZOOM_MIN = 0.25
ZOOM_MAX = 4
UNDO_LIMIT = 50

# Rapid updates inside this window collapse into one undo step
CHECKPOINT_WINDOW_SECONDS = 1.0

# Offset applied to a duplicated frame
DUPLICATE_OFFSET_CM = 2

# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_WALL_WIDTH = 300
DEFAULT_WALL_HEIGHT = 250
DEFAULT_WALL_COLOR = "#F5F0EB"

DEFAULT_FRAME_WIDTH = 40
DEFAULT_FRAME_HEIGHT = 30
DEFAULT_FRAME_COLOR = "#2C2C2C"
DEFAULT_FRAME_BORDER = 2
DEFAULT_MAT_WIDTH = 5
DEFAULT_MAT_COLOR = "#FFFEF2"
DEFAULT_HANGING_OFFSET = 3

DEFAULT_GRID_SPACING = 10

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between min and max."""
    return max(min_val, min(max_val, value))

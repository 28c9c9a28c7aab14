"""Shared constants and paths for InkForge."""

from pathlib import Path

# Package paths
PACKAGE_DIR = Path(__file__).parent
ASSETS_DIR = PACKAGE_DIR / "assets"
CONFIG_DIR = ASSETS_DIR / "config"

# Height field
NEUTRAL_HEIGHT = 0.5   # Returned when there are no warp points
SNAP_EPSILON = 0.001   # Queries closer than this return the point's z exactly
IDW_EPSILON = 0.01     # Added to d^2 so weights stay finite

# Warp points
DEFAULT_DEPTH = 0.5
QUICK_DEPTHS = {"back": 0.2, "mid": 0.5, "front": 0.8}

# Terrain transform
DEFAULT_FOOTPRINT = (0.2, 0.2)   # Approximate overlay size, normalized
PROBE_FRACTION = 0.25            # Gradient probes sit at +-1/4 footprint
BASE_SCALE_MIN = 0.7
BASE_SCALE_RANGE = 0.6           # base scale spans 0.7..1.3
HEIGHT_SCALE_GAIN = 0.8
SKEW_DEGREES_PER_GRADIENT = 15.0
OFFSET_GAIN = 10.0

# Warp strength slider (percent)
MIN_STRENGTH = 0.0
MAX_STRENGTH = 100.0
DEFAULT_STRENGTH = 50.0

# Terrain mesh
DEFAULT_GRID_SIZE = 15
MESH_SATURATION = 70.0
MESH_LIGHTNESS = 60.0
MESH_LINE_MAX_DISTANCE = 0.3

# Auto-detection
EDGE_THRESHOLD = 50.0
DEFAULT_DETECT_POINTS = 20
SESSION_DETECT_POINTS = 12

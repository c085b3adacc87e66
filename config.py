# config.py
from pathlib import Path

# ARGO files are written by DOS-era tools in the Cyrillic OEM code page
ARGO_ENCODING = "cp866"

# Input / output folders (batch mode, overridable from the CLI)
RAW_DIR = Path("Data/RAW")
OUT_DIR = Path("Data/PRSSM")

# Polygons with |area| below this are degenerate
AREA_EPS = 1e-10

# ARGO lengths are centimeters, PRSSM lengths are millimeters
CM_TO_MM = 10.0

# Contour clean-up (source units)
DUPLICATE_POINT_TOL = 0.1

# Section normalization (mm)
MIRROR_SYMMETRY_TOL = 50.0
RIB_BOTTOM_TOL = 5.0
RIB_EDGE_FLAT_TOL = 1.0
RIB_EDGE_MIN_LENGTH = 10.0
RIB_TOP_SEARCH_HALF_WIDTH = 50.0
PROFILE_POINT_CROSS_TOL = 0.5

# Reinforcement (mm)
SIDE_COVER = 25.0
BOTTOM_COVER = 25.0
STANDARD_DIAMETERS = (6, 8, 10, 12, 14, 16, 18, 20, 22, 25, 28, 32, 36, 40)
STIRRUP_DIAMETERS = (6, 8, 10, 12, 14)
STIRRUP_UTILIZATION = 0.8
MAX_BARS_PER_ROW = 10

# Minimum-thickness scan resolution
THICKNESS_SCAN_STEPS = 100

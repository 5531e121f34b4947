# Reference background of the supported map style
MAP_BG_COLOR = (247, 247, 247)

# Pixel classification
LABEL_MIN_ALPHA = 128
LABEL_MAX_LUMA = 110.0
BOUNDARY_MAX_LUMA = 180.0
BOUNDARY_MAX_CHANNEL_DIFF = 20

# Intensity extraction
EXTRACTION_BG_DISTANCE = 40.0
EXTRACTION_MIN_SATURATION = 0.15
RESERVED_HUE_MIN = 250.0
RESERVED_HUE_MAX = 310.0
HUE_HEAT_SPAN = 240.0
MIN_HEAT = 0.01
DEFAULT_SENSITIVITY = 0.05

# Region fill
FILL_SEED_SPAN = 80
FILL_SEED_STEP = 15
FILL_SEED_BG_DISTANCE = 10.0
FILL_GROW_BG_DISTANCE = 8.0
FILL_BASE_INTENSITY = 0.1
FILL_PEAK_STRENGTH = 0.6
FILL_PEAK_RADIUS_DIVISOR = 3.0

# Brush
BRUSH_SIGMA_DIVISOR = 2.2
DEFAULT_BRUSH_RADIUS = 60.0
DEFAULT_BRUSH_STRENGTH = 0.15
DEFAULT_BRUSH_ALPHA = 1.0

# Rendering (thresholds ordered base -> peak)
BAND_THRESHOLDS = (0.01, 0.25, 0.5, 0.75)
BAND_BLUR_WIDTH = 0.25
RAMP_STOP_COUNT = 4
DEFAULT_OPACITY = 1.0
DEFAULT_BLUR = 0.3

# Ramp stops ordered peak -> base: (offset, color, alpha)
DEFAULT_STOPS = (
    (1.0, "#ef4444", 0.8),
    (0.66, "#fbbf24", 0.8),
    (0.33, "#10b981", 0.8),
    (0.0, "#3b82f6", 0.8),
)

# Session
MAX_HISTORY = 20

# Output
DEFAULT_OUTPUT_SUFFIX = "_heatmap"
DEFAULT_OUTPUT_EXTENSION = ".png"

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/core/config.py

# ==========================================
# Color Science Constants & Coefficients
# ==========================================

# Max size for conversion cache
LRU_CACHE_SIZE = 65536

EPS = 1e-12                        # Floating-point precision and division-by-zero safety

# Standard Scaling & Mathematical Constants
UNIT = 1.0                         # Normalized maximum
HALF = 0.5                         # Midpoint of the normalized range
INVERSE_EPS = 1e-9                 # Slack allowed on analytic inverses before they count as out of range
DIV_2 = 2.0                        # Standard divisor for averages
RGB_MAX = 255.0                    # 8-bit color depth limit
HUE_MAX = 360.0                    # Full circle degrees
HUE_SECTOR = 60.0                  # Degrees per HSL sector
HSL_HUE_MOD = 6.0                  # Hue sector divisor for HSL
EXP_2 = 2                          # Square power
EXP_7 = 7                          # Power for CIEDE2000 chroma calculation
DEG_180 = 180.0                    # Half circle degrees
DEG_360 = 360.0                    # Full circle degrees

# sRGB Transfer Function Constants (Source: IEC 61966-2-1:1999)
SRGB_SLOPE = 12.92                 # Slope of the linear portion of the sRGB curve
SRGB_OFFSET = 0.055                # Constant offset used in the non-linear sRGB segment
SRGB_DIVISOR = 1.055               # Divisor for normalizing the sRGB component
SRGB_GAMMA = 2.4                   # Effective gamma exponent for sRGB transfer
SRGB_TO_LINEAR_TH = 0.04045        # Threshold for switching from linear to non-linear sRGB
LINEAR_TO_SRGB_TH = 0.0031308      # Threshold for switching from linear to sRGB space

# XYZ D65 Reference White (Source: ASTM E308-01 / CIE D65)
D65_X = 95.047                     # X coordinate for D65 illuminant (2-degree observer)
D65_Y = 100.0                      # Y coordinate (Luminance) for D65 illuminant
D65_Z = 108.883                    # Z coordinate for D65 illuminant
XYZ_SCALING = 100.0                # Factor for scaling XYZ coordinates

# sRGB to XYZ Matrix (Source: sRGB D65)
M_SRGB_XYZ_X = (0.4124564, 0.3575761, 0.1804375)  # Coefficients for X coordinate calculation
M_SRGB_XYZ_Y = (0.2126729, 0.7151522, 0.0721750)  # Coefficients for Y (Luminance) calculation
M_SRGB_XYZ_Z = (0.0193339, 0.1191920, 0.9503041)  # Coefficients for Z coordinate calculation

# XYZ to sRGB Matrix (Source: sRGB D65 inverse)
M_XYZ_SRGB_R = (3.2404542, -1.5371385, -0.4985314)  # Coefficients for linear Red component calculation
M_XYZ_SRGB_G = (-0.9692660, 1.8760108, 0.0415560)   # Coefficients for linear Green component calculation
M_XYZ_SRGB_B = (0.0556434, -0.2040259, 1.0572252)   # Coefficients for linear Blue component calculation

# CIELAB Constants (Source: CIE 15:2004)
LAB_E = 0.008856                   # Threshold for switching between linear and power functions
LAB_K = 7.787                      # Slope of the linear segment for low luminance values
LAB_OFFSET = 16.0 / 116.0          # Constant offset for normalization in XYZ to Lab conversion
LAB_L_MULT = 116.0                 # Multiplier for Lightness (L*) calculation
LAB_L_SUB = 16.0                   # Subtraction constant for Lightness (L*) calculation
LAB_A_MULT = 500.0                 # Multiplier for 'a*' (green-red) channel calculation
LAB_B_MULT = 200.0                 # Multiplier for 'b*' (blue-yellow) channel calculation
LAB_POW = 1.0 / 3.0                # Cube root exponent of the Lab nonlinearity
LAB_INV_THR = 0.20689655           # Threshold for inverse conversion (Lab to XYZ)

# CIEDE2000 Constants (Source: Sharma, G., Wu, W., & Dalal, E. N. (2005))
POW7_25 = 6103515625.0             # Constant for chroma normalization (25^7)
G_FACTOR = 0.5                     # Axial adjustment factor for neutral gray
T_K1 = 0.17                        # First T-factor coefficient for hue weighting
T_K2 = 0.24                        # Second T-factor coefficient for hue weighting
T_K3 = 0.32                        # Third T-factor coefficient for hue weighting
T_K4 = 0.20                        # Fourth T-factor coefficient for hue weighting
T_OFFSET_1 = 30.0                  # Primary phase offset for hue angle T-factor
T_OFFSET_2 = 6.0                   # Secondary phase offset for hue angle T-factor
T_OFFSET_3 = 63.0                  # Tertiary phase offset for hue angle T-factor
T_MUL_3 = 3.0                      # Multiplier for tertiary hue angle calculation
T_MUL_4 = 4.0                      # Multiplier for quaternary hue angle calculation
L_OFFSET = 50.0                    # Lightness midpoint for S_L weighting function
S_L_K = 0.015                      # Lightness weighting coefficient for S_L
S_C_K = 0.045                      # Chroma weighting coefficient for S_C
S_H_K = 0.015                      # Hue weighting coefficient for S_H
S_L_DIV = 20.0                     # Divisor term for S_L weighting calculation
RT_D30 = 30.0                      # Degree factor for rotation term (R_T) calculation
RT_H_OFFSET = 275.0                # Hue offset for blue region in R_T calculation
RT_DIV = 25.0                      # Hue divisor for blue region in R_T calculation
K_FACTORS = (1.0, 1.0, 1.0)        # Parametric weighting factors (k_L, k_C, k_H)

# ==========================================
# Optimizer Constants
# ==========================================

# Nelder-Mead coefficients
NM_ALPHA = 1.0                     # Reflection
NM_GAMMA = 2.0                     # Expansion
NM_RHO = 0.5                       # Contraction
NM_SIGMA = 0.5                     # Shrink
NM_DEFAULT_STEP = 0.1              # Default simplex perturbation along each axis
NM_DEFAULT_ITERATIONS = 200
NM_DEFAULT_TOLERANCE = 1e-6

# Single blend refinement
BLEND_MAX_ITERATIONS = 300
BLEND_TOLERANCE = 1e-7
BLEND_STEP = 0.1
NEUTRAL_BLEND = (0.5, 0.5, 0.5)    # Fallback seed when no pair inverts analytically

# Quality thresholds on weighted average Delta E (upper bounds, exclusive)
QUALITY_THRESHOLDS = (
    ("exact", 1.0),
    ("good", 3.0),
    ("approx", 6.0),
)
QUALITY_FALLBACK = "poor"
QUALITY_LABELS = {
    "exact": "Exact",
    "good": "Good",
    "approx": "Approx",
    "poor": "Poor",
}

# Hard Mix inverse seeds (drive Vivid Light below / above 0.5)
HARD_MIX_LOW_SEED = 0.25
HARD_MIX_HIGH_SEED = 0.75

# Hue/Saturation adjustment ranges
HSL_HUE_RANGE = (-180.0, 180.0)
HSL_SAT_RANGE = (-100.0, 100.0)
HSL_LIGHT_RANGE = (-100.0, 100.0)
HSL_FULL_SAT_MULTIPLIER = 1000.0   # Spread used at +100 saturation instead of dividing by zero
PERCENT_TO_FACTOR = 100.0          # Divisor to convert percentage values to decimal factors
HSL_MAX_ITERATIONS = 300
HSL_TOLERANCE = 1e-7
HSL_STEPS = (30.0, 20.0, 20.0)
HSL_STARTING_POINTS = (
    (0.0, 0.0, 0.0),               # neutral
    (0.0, -50.0, 0.0),             # desaturate
    (0.0, 50.0, 0.0),              # saturate
    (0.0, 0.0, -30.0),             # darken
    (0.0, 0.0, 30.0),              # lighten
    (60.0, 0.0, 0.0),              # warm hue shift
    (-60.0, 0.0, 0.0),             # cool hue shift
    (120.0, 0.0, 0.0),             # complement-ish
    (-120.0, 0.0, 0.0),            # complement-ish, other way
)

# Levels adjustment ranges
LEVELS_INPUT_BLACK_MAX = 253.0
LEVELS_MIN_INPUT_GAP = 2.0         # Input white must stay this far above input black
LEVELS_GAMMA_MIN = 0.1
LEVELS_GAMMA_MAX = 9.99
LEVELS_MAX_ITERATIONS = 500
LEVELS_TOLERANCE = 1e-6
LEVELS_STEPS = (10.0, -10.0, 0.2, 10.0, -10.0)
LEVELS_STARTING_POINTS = (
    (0.0, 255.0, 1.0, 0.0, 255.0),     # default
    (10.0, 245.0, 1.0, 0.0, 255.0),    # slight clip
    (0.0, 255.0, 0.8, 0.0, 255.0),     # gamma down
    (0.0, 255.0, 1.2, 0.0, 255.0),     # gamma up
    (0.0, 255.0, 1.0, 10.0, 245.0),    # output clip
    (20.0, 235.0, 1.0, 0.0, 255.0),    # more input clip
    (0.0, 255.0, 1.0, 0.0, 200.0),     # darken output
    (0.0, 255.0, 1.0, 50.0, 255.0),    # lighten output
)

# ==========================================
# Multi-Step Search Constants
# ==========================================

HSL_MODE_NAME = "Hue/Saturation"
LEVELS_MODE_NAME = "Levels"
HSL_PARAM_COUNT = 3
LEVELS_PARAM_COUNT = 5
BLEND_PARAM_COUNT = 3

# Normalized Levels gamma mapping: gamma = p * LEVELS_GAMMA_SPAN + LEVELS_GAMMA_MIN
LEVELS_GAMMA_SPAN = 9.89
LEVELS_NEUTRAL_PARAMS = (0.0, 1.0, (1.0 - 0.1) / 9.89, 0.0, 1.0)

# Opacity bounds (percent at the boundary, fractions inside the core)
DEFAULT_MIN_OPACITY = 10.0
DEFAULT_MAX_OPACITY = 100.0
OPACITY_PERCENT_MIN = 1.0
OPACITY_PERCENT_MAX = 100.0

# Joint refinement
JOINT_MAX_ITERATIONS = 400
JOINT_TOLERANCE = 1e-8
JOINT_STEP = 0.25
HOP_MAX_ITERATIONS = 300
HOP_TOLERANCE = 1e-7
HOP_STEP = 0.15
HOP_BASE_RADIUS = 0.2              # Perturbation radius of the first basin hop
HOP_RADIUS_GROWTH = 0.1            # Radius added per subsequent hop

# Greedy step refinement for the pseudo-modes
GREEDY_ADJUST_ITERATIONS = 100

# Candidate generation
MIN_GREEDY_SUBSET = 5              # Smallest mode subset tried by truncated greedy trials

# Top solutions retained by the search
MAX_TOP_SOLUTIONS = 6

# Search budgets per mode
SEARCH_BUDGETS = {
    "standard": {
        "greedy_trials": 40,
        "max_sequences": 250,
        "restarts_with_guess": 3,
        "restarts_without_guess": 5,
        "basin_hops": 2,
    },
    "extensive": {
        "greedy_trials": 200,
        "max_sequences": 1000,
        "restarts_with_guess": 8,
        "restarts_without_guess": 15,
        "basin_hops": 5,
    },
}

# Search phases in the order they run
PHASES = ("single", "greedy", "generating", "optimizing", "done")

# ==========================================
# CLI UI & Data Structures
# ==========================================

MAX_STEPS = 6                      # Deepest sequence accepted from the command line
MAX_PAIRS = 256                    # Maximum number of pairs accepted from the command line
MAX_WEIGHT = 1000.0

# ANSI Terminal Styling
MSG_BOLD_COLORS = {
    "error": "\033[1;31m",
    "warning": "\033[1;33m",
    "info": "\033[1;36m",
    "success": "\033[1;32m",
    "progress": "\033[1;35m",
    "dim": "\033[1;2;37m",
}

MSG_COLORS = {
    "error": "\033[0;31m",
    "warning": "\033[0;33m",
    "info": "\033[0;36m",
    "success": "\033[0;32m",
    "progress": "\033[0;35m",
}

# Colors for quality badges
QUALITY_COLORS = {
    "exact": "\033[1;32m",
    "good": "\033[1;36m",
    "approx": "\033[1;33m",
    "poor": "\033[1;31m",
}

RESET = "\033[0m"
BOLD_WHITE = "\033[1;37m"

from dotenv import load_dotenv
import math
import os
from pathlib import Path

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# Runtime settings
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
DEFAULT_CORE_ID = os.environ.get('DEFAULT_CORE_ID', 'FT140-43')
HIGH_POWER_CORE_ID = os.environ.get('HIGH_POWER_CORE_ID', 'FT240-43')
HIGH_POWER_THRESHOLD_W = float(os.environ.get('HIGH_POWER_THRESHOLD_W', '150'))
SWEEP_POINTS = int(os.environ.get('SWEEP_POINTS', '100'))

# Physical constants
SPEED_OF_LIGHT = 299792458.0  # m/s
MU0 = 4e-7 * math.pi  # H/m
CU_SIGMA = 58e6  # S/m
CU_RESISTIVITY = 1.68e-8  # ohm*m

# Design rules
RULE_OF_FOUR_FACTOR = 4.0
MAX_LINEAR_FLUX_DENSITY_MT = 50.0
MAX_TEMP_RISE_C = 30.0
DEFAULT_THERMAL_COEFFICIENT = 0.044
WINDING_LENGTH_FACTOR = 1.2  # teflon insulation / lead dressing
WINDING_LEAD_MARGIN_CM = 5.0
MAX_WINDING_LENGTH_FRACTION = 0.1  # lambda/10
Q_WARNING_THRESHOLD = 5.0
STANDARD_CHARACTERISTIC_IMPEDANCES = (50.0, 100.0)
CHARACTERISTIC_IMPEDANCE_TOLERANCE = 10.0
WIRE_CURRENT_SAFETY_MARGIN = 1.5

# Turns search bounds
MAX_SEARCH_TURNS = 50
MAX_EXTRA_LOSS_TURNS = 20
FALLBACK_TURNS = 12
CANDIDATE_MIN_FREQUENCIES = (1.8, 3.5, 5.0, 7.0, 10.0, 14.0)

# Lower duty cycle -> proportionally higher permissible average loss
DUTY_CYCLE_FACTORS = {
    "SSB": 0.3,
    "CW": 0.5,
    "50_PERCENT": 0.5,
    "DIGITAL": 0.8,
    "CONTINUOUS": 1.0,
}

# Ferrite toroid catalog. Dimensions in mm, frequency range in MHz, Bsat in mT.
_FT_SIZES = {
    "FT50": {"od": 12.7, "id": 7.6, "height": 5.1},
    "FT82": {"od": 21.0, "id": 12.7, "height": 6.4},
    "FT114": {"od": 29.0, "id": 19.1, "height": 7.1},
    "FT140": {"od": 36.0, "id": 23.0, "height": 12.7},
    "FT240": {"od": 61.0, "id": 35.6, "height": 12.7},
    "FT290": {"od": 73.65, "id": 38.85, "height": 12.7},
    "FT340": {"od": 85.7, "id": 55.5, "height": 13.5},
}

MIX_PROPERTIES = {
    "43": {"initial_permeability": 850, "saturation_flux_density": 290, "loss_factor": 0.008},
    "52": {"initial_permeability": 250, "saturation_flux_density": 350, "loss_factor": 0.005},
    "61": {"initial_permeability": 125, "saturation_flux_density": 350, "loss_factor": 0.002},
    "77": {"initial_permeability": 2000, "saturation_flux_density": 510, "loss_factor": 0.015},
}

# (size, mix, recommended min MHz, recommended max MHz)
_CORE_CATALOG = [
    ("FT50", "43", 10.0, 300), ("FT82", "43", 5.0, 100), ("FT114", "43", 1.0, 50),
    ("FT140", "43", 1.0, 50), ("FT240", "43", 1.0, 50), ("FT290", "43", 1.0, 30),
    ("FT340", "43", 0.1, 10),
    ("FT140", "52", 2.0, 50), ("FT240", "52", 1.0, 30), ("FT290", "52", 0.5, 30),
    ("FT340", "52", 0.5, 30),
    ("FT114", "61", 10.0, 200), ("FT140", "61", 5.0, 150), ("FT240", "61", 15.0, 200),
    ("FT290", "61", 10.0, 200), ("FT340", "61", 10.0, 200),
    ("FT140", "77", 0.5, 8), ("FT240", "77", 0.1, 5), ("FT290", "77", 0.1, 5),
    ("FT340", "77", 0.1, 5),
]

CORE_MODELS = [
    {
        "id": f"{size}-{mix}",
        "mix": mix,
        "dimensions": dict(_FT_SIZES[size]),
        "recommended_freq_range": {"min": f_min, "max": f_max},
        "thermal_coefficient": DEFAULT_THERMAL_COEFFICIENT,
        **MIX_PROPERTIES[mix],
    }
    for size, mix, f_min, f_max in _CORE_CATALOG
]

# Complex permeability per mix: (MHz, mu', mu'')
PERMEABILITY_DATA = {
    "43": [
        (0.01, 791.5, 3.5), (0.05, 789.1, 3.9), (0.1, 788.0, 6.0), (0.3, 790.6, 10.9),
        (0.5, 795.1, 17.9), (0.7, 787.8, 24.9), (1.0, 747.1, 62.8), (1.17, 713.5, 83.0),
        (1.36, 673.6, 107.3), (1.6, 637.4, 131.6), (1.84, 608.7, 155.2), (2.15, 572.3, 176.3),
        (2.5, 544.2, 194.4), (2.92, 513.4, 208.9), (3.4, 480.6, 219.6), (3.96, 446.9, 226.8),
        (4.62, 413.5, 230.6), (5.38, 380.8, 231.5), (6.27, 349.2, 230.3), (7.31, 318.9, 227.4),
        (8.51, 289.8, 223.5), (9.92, 261.7, 218.7), (11.6, 234.3, 212.7), (13.5, 207.7, 205.8),
        (15.7, 182.0, 197.6), (18.3, 157.5, 188.2), (21.3, 134.6, 177.5), (24.8, 113.8, 165.8),
        (28.9, 94.9, 153.5), (33.7, 78.7, 140.9), (39.3, 64.2, 128.3), (45.8, 51.9, 116.0),
        (53.4, 41.5, 104.2),
    ],
    "52": [
        (1.0, 250, 10), (2.0, 240, 25), (4.0, 225, 40), (7.0, 200, 45), (10.0, 190, 50),
        (15.0, 170, 55), (20.0, 150, 50), (30.0, 100, 45), (40.0, 85, 40), (50.0, 70, 35),
    ],
    "61": [
        (1.0, 125, 1), (2.0, 125, 2), (4.0, 125, 4), (7.0, 125, 6), (10.0, 125, 8),
        (15.0, 125, 10), (20.0, 120, 12), (30.0, 115, 15), (40.0, 110, 18), (50.0, 105, 20),
    ],
    "77": [
        (1.0, 2097, 791), (2.0, 1174, 1286), (4.0, 278, 920), (7.0, 27, 603), (10.0, -40, 346),
        (15.0, -41, 237), (20.0, -36, 163), (30.0, -26, 92), (40.0, -19, 62), (50.0, -16, 51),
    ],
}

# AWG wire data: diameter mm, area mm^2, current A
WIRE_DATA = {
    10: {"diameter": 2.588, "area": 5.26, "current": 15},
    12: {"diameter": 2.053, "area": 3.31, "current": 9.3},
    14: {"diameter": 1.628, "area": 2.08, "current": 5.9},
    16: {"diameter": 1.291, "area": 1.31, "current": 3.7},
    18: {"diameter": 1.024, "area": 0.823, "current": 2.3},
    20: {"diameter": 0.812, "area": 0.518, "current": 1.5},
    22: {"diameter": 0.644, "area": 0.326, "current": 0.92},
    24: {"diameter": 0.511, "area": 0.205, "current": 0.58},
    26: {"diameter": 0.405, "area": 0.129, "current": 0.37},
    28: {"diameter": 0.321, "area": 0.081, "current": 0.23},
    30: {"diameter": 0.255, "area": 0.051, "current": 0.14},
}

# Band definitions
HAM_BANDS = [
    {"name": "160m", "min": 1.8, "max": 2.0},
    {"name": "80m", "min": 3.5, "max": 4.0},
    {"name": "60m", "min": 5.3, "max": 5.4},
    {"name": "40m", "min": 7.0, "max": 7.3},
    {"name": "30m", "min": 10.1, "max": 10.15},
    {"name": "20m", "min": 14.0, "max": 14.35},
    {"name": "17m", "min": 18.068, "max": 18.168},
    {"name": "15m", "min": 21.0, "max": 21.45},
    {"name": "12m", "min": 24.89, "max": 24.99},
    {"name": "10m", "min": 28.0, "max": 29.7},
    {"name": "6m", "min": 50.0, "max": 54.0},
    {"name": "2m", "min": 144.0, "max": 148.0},
    {"name": "70cm", "min": 430.0, "max": 450.0},
]

_REGION_BANDS_COMMON = {
    "10.125": {"name": "30m", "center": 10.125, "min": 10.100, "max": 10.150},
    "14.175": {"name": "20m", "center": 14.175, "min": 14.000, "max": 14.350},
    "18.118": {"name": "17m", "center": 18.118, "min": 18.068, "max": 18.168},
    "21.225": {"name": "15m", "center": 21.225, "min": 21.000, "max": 21.450},
    "24.940": {"name": "12m", "center": 24.940, "min": 24.890, "max": 24.990},
    "28.400": {"name": "10m", "center": 28.400, "min": 28.000, "max": 29.700},
    "1296.150": {"name": "23cm", "center": 1296.150, "min": 1240.000, "max": 1300.000},
}

IARU_REGION_BANDS = {
    "Region 1": {
        "1.900": {"name": "160m", "center": 1.900, "min": 1.810, "max": 2.000},
        "3.650": {"name": "80m", "center": 3.650, "min": 3.500, "max": 3.800},
        "7.150": {"name": "40m", "center": 7.150, "min": 7.000, "max": 7.200},
        "50.150": {"name": "6m", "center": 50.150, "min": 50.000, "max": 52.000},
        "70.150": {"name": "4m", "center": 70.150, "min": 70.000, "max": 70.500},
        "144.200": {"name": "2m", "center": 144.200, "min": 144.000, "max": 146.000},
        "432.150": {"name": "70cm", "center": 432.150, "min": 430.000, "max": 440.000},
        **_REGION_BANDS_COMMON,
    },
    "Region 2": {
        "1.900": {"name": "160m", "center": 1.900, "min": 1.800, "max": 2.000},
        "3.650": {"name": "80m", "center": 3.650, "min": 3.500, "max": 4.000},
        "7.150": {"name": "40m", "center": 7.150, "min": 7.000, "max": 7.300},
        "50.150": {"name": "6m", "center": 50.150, "min": 50.000, "max": 54.000},
        "70.150": {"name": "4m", "center": 70.150, "min": 70.000, "max": 70.300},
        "144.200": {"name": "2m", "center": 144.200, "min": 144.000, "max": 148.000},
        "432.150": {"name": "70cm", "center": 432.150, "min": 420.000, "max": 450.000},
        **_REGION_BANDS_COMMON,
    },
    "Region 3": {
        "1.900": {"name": "160m", "center": 1.900, "min": 1.800, "max": 2.000},
        "3.650": {"name": "80m", "center": 3.650, "min": 3.500, "max": 3.900},
        "7.150": {"name": "40m", "center": 7.150, "min": 7.000, "max": 7.300},
        "50.150": {"name": "6m", "center": 50.150, "min": 50.000, "max": 54.000},
        "70.150": {"name": "4m", "center": 70.150, "min": 70.000, "max": 70.300},
        "144.200": {"name": "2m", "center": 144.200, "min": 144.000, "max": 148.000},
        "432.150": {"name": "70cm", "center": 432.150, "min": 430.000, "max": 440.000},
        **_REGION_BANDS_COMMON,
    },
}

# Coax cables for wound chokes (mm)
COAX_CABLES = {
    "rg316": {"name": "RG316", "outer_diameter": 2.00, "insulation_thickness": 0.30},
    "rg58": {"name": "RG58/LL195", "outer_diameter": 3.50, "insulation_thickness": 0.60},
    "rg59": {"name": "RG59", "outer_diameter": 4.40, "insulation_thickness": 0.75},
    "lmr240": {"name": "LMR-240", "outer_diameter": 4.52, "insulation_thickness": 0.76},
    "rg6": {"name": "RG-6", "outer_diameter": 6.30, "insulation_thickness": 1.00},
    "rg213": {"name": "RG213/RG11", "outer_diameter": 7.98, "insulation_thickness": 1.25},
    "rg8": {"name": "RG-8/LL400", "outer_diameter": 8.14, "insulation_thickness": 1.30},
}

PRESET_CONFIGS = [
    {
        "name": "1:1 Current Balun (50Ω:50Ω)",
        "input_impedance": 50, "output_impedance": 50,
        "min_frequency": 1.8, "max_frequency": 30, "power": 100,
        "operation_mode": "SSB", "use_hybrid_design": False,
        "suggested_core_model": "FT240-43", "suggested_core_count": 1,
    },
    {
        "name": "1:2 Current Balun (50Ω:100Ω)",
        "input_impedance": 50, "output_impedance": 100,
        "min_frequency": 3.5, "max_frequency": 30, "power": 100,
        "operation_mode": "SSB", "use_hybrid_design": True,
        "suggested_core_model": "FT140-43", "suggested_core_count": 1,
    },
    {
        "name": "1:4 Current Balun (50Ω:200Ω)",
        "input_impedance": 50, "output_impedance": 200,
        "min_frequency": 3.5, "max_frequency": 30, "power": 100,
        "operation_mode": "SSB", "use_hybrid_design": False,
        "suggested_core_model": "FT140-43", "suggested_core_count": 1,
    },
    {
        "name": "1:9 High Power Hybrid Balun (50Ω:450Ω)",
        "input_impedance": 50, "output_impedance": 450,
        "min_frequency": 3.5, "max_frequency": 30, "power": 280,
        "operation_mode": "SSB", "use_hybrid_design": False,
        "suggested_core_model": "FT240-43", "suggested_core_count": 2,
    },
    {
        "name": "QRP 1:1 Current Balun",
        "input_impedance": 50, "output_impedance": 50,
        "min_frequency": 3.5, "max_frequency": 30, "power": 10,
        "operation_mode": "CW", "use_hybrid_design": False,
        "suggested_core_model": "FT82-43", "suggested_core_count": 1,
    },
]

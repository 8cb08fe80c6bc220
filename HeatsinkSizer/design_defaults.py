"""Default inputs and manufacturability limits for heat sink sizing."""

DEFAULT_TOOL_DIAM_MM = 3.0
MIN_FIN_THICKNESS_MM = 2.0
MIN_FIN_GAP_MM = 3.0

# Film temperature range where the fixed air constants are representative
AIR_PROPERTIES_VALID_RANGE_C = (0.0, 100.0)
LOW_EMISSIVITY = 0.1
MAX_TYPICAL_FAN_VELOCITY_M_S = 10.0

DEFAULT_INPUTS = {
    "ambient_temp_c": 25.0,
    "max_surface_temp_c": 85.0,
    "power_w": 10.0,
    "length_mm": 50.0,
    "height_mm": 25.0,
    "fin_thickness_mm": 2.0,
    "base_thickness_mm": 3.0,
    "emissivity": 0.82,
    "convection_type": "natural",
    "air_velocity_m_s": None,
}

MANUFACTURING = {
    "processes": ["machining", "extrusion", "casting"],
    "tolerances": {
        "general": "±0.1mm",
        "finSpacing": "±0.05mm",
        "finThickness": "±0.02mm",
    },
    "surfaceFinish": {
        "recommended": "Ra 1.6 μm",
        "notes": "Anodized finish recommended for improved emissivity",
    },
}

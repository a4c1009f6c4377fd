"""Constants used throughout ColdSize.

Values follow the reference spreadsheet model; all loads are in kJ and kW
unless otherwise noted.
"""

# Time
SECONDS_PER_HOUR = 3600.0
HOURS_PER_DAY = 24.0
SECONDS_PER_DAY = SECONDS_PER_HOUR * HOURS_PER_DAY

# Refrigeration
KW_PER_TR = 3.517  # kW per ton of refrigeration
BTU_PER_HR_PER_TR = 12000.0

# Airflow sizing identity: CFM = TR · 12000 · SHR / (ΔT_F · 1.08)
AIRFLOW_DELTA_T_F = 5.0
AIRFLOW_SENSIBLE_FACTOR = 1.08

# Air film and structure resistances [m²·K/W]
R_INSIDE_AIR = 0.13
R_STRUCTURE = 0.15
R_OUTSIDE_AIR = 0.04

# Floor slab reference temperature [°C], used instead of ambient
FLOOR_REFERENCE_TEMP_C = 28.0

# Door heater rating per metre of door perimeter [kW/m]
DOOR_HEATER_KW_PER_M = 0.025
DOOR_HEATER_KW_PER_M_COLD = 0.045
DOOR_HEATER_GATE_TEMP_C = 5.0

# Conversion factors
FT_TO_M = 0.3048
LB_PER_KG = 2.20462
MM_TO_M = 1.0e-3
KW_TO_BTU_PER_HR = 3412.0

# Respiration: W/tonne · kg → kJ/24h  (m · W · 3.6 · 24 / 1000)
RESPIRATION_KJ_FACTOR = 3.6 * HOURS_PER_DAY / 1000.0

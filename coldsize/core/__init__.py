"""Core calculation modules for ColdSize.

This package contains the load-calculation engine:
- variants: enclosure variants and their formula-coefficient tables
- models: input records, unit normalisation and the result record
- insulation: insulation database and panel U-factor model
- transmission: wall, ceiling and floor heat gain
- product: single-phase and three-phase product loads, respiration
- ancillary: air change, equipment, occupancy, lighting and heater loads
- sizing: aggregation, TR sizing, SHR and airflow (entry points)
- products: product preset database
- config: input construction with defaults, project file persistence
"""

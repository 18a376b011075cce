# msrb_pension/schema.py
"""Centralized column names for the DataFrames produced by projections and the validation harness.

All other modules should import from here for consistency.
"""

# COLA projection table
COLA_YEAR = "year"
COLA_STARTING_PENSION = "starting_pension"
COLA_INCREASE = "cola_increase"
COLA_ENDING_PENSION = "ending_pension"
COLA_MONTHLY_PENSION = "monthly_pension"
COLA_CUMULATIVE_INCREASE = "cumulative_increase"
COLA_AT_MAXIMUM = "at_maximum"

COLA_PROJECTION_COLS = [
    COLA_YEAR,
    COLA_STARTING_PENSION,
    COLA_INCREASE,
    COLA_ENDING_PENSION,
    COLA_MONTHLY_PENSION,
    COLA_CUMULATIVE_INCREASE,
    COLA_AT_MAXIMUM,
]

# COLA structure comparison
COLA_STRUCTURE = "structure"
COLA_RATE = "rate"
COLA_BASE_AMOUNT = "base_amount"
COLA_ANNUAL_CAP = "annual_cap"
COLA_TOTAL_INCREASE = "total_increase"
COLA_FINAL_PENSION = "final_pension"

# Retirement-age projection table
PROJ_AGE = "age"
PROJ_YEARS_OF_SERVICE = "years_of_service"
PROJ_BENEFIT_FACTOR = "benefit_factor"
PROJ_BENEFIT_PERCENTAGE = "benefit_percentage"
PROJ_CAPPED = "capped_at_80_percent"
PROJ_ANNUAL_PENSION = "annual_pension"
PROJ_MONTHLY_PENSION = "monthly_pension"
PROJ_SURVIVOR_ANNUAL = "survivor_annual"
PROJ_SURVIVOR_MONTHLY = "survivor_monthly"

AGE_PROJECTION_COLS = [
    PROJ_AGE,
    PROJ_YEARS_OF_SERVICE,
    PROJ_BENEFIT_FACTOR,
    PROJ_BENEFIT_PERCENTAGE,
    PROJ_CAPPED,
    PROJ_ANNUAL_PENSION,
    PROJ_MONTHLY_PENSION,
    PROJ_SURVIVOR_ANNUAL,
    PROJ_SURVIVOR_MONTHLY,
]

# Validation report
VAL_FIXTURE = "fixture"
VAL_METRIC = "metric"
VAL_SOURCE = "source"
VAL_EXPECTED = "expected"
VAL_ACTUAL = "actual"
VAL_DIFFERENCE = "difference"
VAL_TOLERANCE = "tolerance"
VAL_PASSED = "passed"

VALIDATION_REPORT_COLS = [
    VAL_FIXTURE,
    VAL_METRIC,
    VAL_SOURCE,
    VAL_EXPECTED,
    VAL_ACTUAL,
    VAL_DIFFERENCE,
    VAL_TOLERANCE,
    VAL_PASSED,
]

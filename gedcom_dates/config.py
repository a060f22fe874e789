"""
Configuration for gedcom_dates.

Contains:
- Logging level for the command-line tools
- Plausibility thresholds used by gedcom_dates.validation and the audit script

Values are read from environment variables with sensible defaults.
"""

import os

# =============================================================================
# Logging
# =============================================================================

# Only applied by scripts; the library itself never configures handlers
LOG_LEVEL = os.getenv("GEDCOM_DATES_LOG_LEVEL", "WARNING").upper()

# =============================================================================
# Plausibility thresholds (years)
# =============================================================================

# Youngest biologically plausible parent at a child's birth
MIN_PARENT_AGE = int(os.getenv("MIN_PARENT_AGE", "12"))

# Oldest plausible parent at a child's birth (mothers and fathers alike)
MAX_PARENT_AGE = int(os.getenv("MAX_PARENT_AGE", "70"))

# Historical minimum age at marriage in some cultures
MIN_MARRIAGE_AGE = int(os.getenv("MIN_MARRIAGE_AGE", "12"))

# Longest lifespan accepted before flagging a birth/death pair
MAX_LIFESPAN = int(os.getenv("MAX_LIFESPAN", "120"))

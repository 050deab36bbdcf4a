"""Utility constants for timespan.

Time unit constants represent durations in milliseconds, the unit every
Duration stores internally.
"""

import sys

# Time unit constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY

# Stand-in magnitude for a forever operand inside Duration.between
FOREVER_MILLISECONDS = sys.float_info.max

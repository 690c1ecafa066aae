"""
Physical, calendar and display constants for the orrery core.

Distances are carried in km or AU, times in seconds, speeds in km/s and
catalog accelerations in m/s^2.
"""

# Basic astronomical and time constants
AU_TO_KM = 149597870.7  # km per AU
SPEED_OF_LIGHT = 299792.458  # km/s
DAY = 86400.0  # seconds per day
YEAR = 365.25 * DAY  # seconds per Julian year

# Epoch bookkeeping for mean longitudes
J2000_JD = 2451545.0  # Julian date of J2000.0 (2000-01-01 12:00 TT)
UNIX_EPOCH_JD = 2440587.5  # Julian date of 1970-01-01 00:00 UTC
DAYS_PER_CENTURY = 36525.0

# Scene units per AU for each display scale
SCALE_FACTORS = {
    'visual': 50.0,
    'realistic': 100.0,
}

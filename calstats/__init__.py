"""
calstats - meeting load statistics for Google calendars.
"""

__version__ = "0.3.0"

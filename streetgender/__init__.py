"""
Street gender: GeoJSON street networks annotated with the gender of the
people streets are named after.
"""

__version__ = "1.0.0"

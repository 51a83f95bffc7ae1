"""
Elpris Beregner: Danish consumer electricity price composition and provider
comparison.
"""

__version__ = "1.0.0"

"""
InkBook: booking API for a tattoo studio
"""

__version__ = "1.0.0"

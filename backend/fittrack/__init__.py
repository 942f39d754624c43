"""
FitTrack - personal workout logging and statistics.
"""
__version__ = "1.0.0"

"""
streetguess - round state machine and scoring engine for a street-view
location guessing game.
"""

__version__ = "1.0.0"

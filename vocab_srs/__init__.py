"""
vocab-srs: phase-aware spaced-repetition scheduler for vocabulary cards.
"""

__version__ = "1.0.0"

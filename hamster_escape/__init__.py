"""
Hamster Escape - Sliding-block escape puzzle.

Slide the blocks so the hamster (key block) reaches the exit on the
right edge. Rules and level generation live in hamster_escape.engine;
this package adds the caller-side pieces (session, settings, progress,
debug images).
"""

__version__ = "1.0.0"

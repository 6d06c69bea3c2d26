"""Brass: aggregate fleet combat.

Groups of identical ships are simulated as one average ship plus a count, so
battles between thousands of ships resolve in a handful of steps.
"""

__version__ = "0.1.0"

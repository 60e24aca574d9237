"""
Rift Profile application package.

Aggregates League of Legends player profiles from the Riot API and resolves
game asset images across public CDNs.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]

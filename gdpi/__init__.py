"""
GDPI quote analysis core
Torsion spring pricing heuristics, AI reply parsing and verdict reconciliation
"""

__version__ = "1.0.0"

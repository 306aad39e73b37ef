"""
Utility modules for GDPI quote analysis
Text normalization and formatting helpers

Import directly:
    from gdpi.utils.helpers import normalize_text, includes_any
"""

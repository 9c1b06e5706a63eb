"""
Core package for the MathArena participants dashboard.

Submodules provide data loading, filtering, statistics, and user interface
rendering helpers that are orchestrated by the top-level `app.py`.
"""

"""
releasegen — aggregate per-app metadata descriptors into release files.
"""

__version__ = "0.1.0"

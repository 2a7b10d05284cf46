"""
pyaltinstall — build and altinstall several Python versions side by side.
"""

__version__ = "0.1.0"

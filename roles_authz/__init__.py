"""
Role and permission management with cached permission checks for Django.
"""

__version__ = "0.1.0"

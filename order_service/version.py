"""
Application version information.

Version format: MAJOR.MINOR
- MAJOR: Breaking changes to the order model or persisted shape
- MINOR: Incremented with each merged change

Version is printed by the manage_orders CLI.
"""

__version__ = "0.1"

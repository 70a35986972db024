"""
TechTales presentation core.

Session store, comment subsystem, article pages and navigation chrome for the
TechTales publishing site.
"""

__version__ = "1.0.0"

"""Version information for the parsetrain package."""

__version__ = '0.1.0'

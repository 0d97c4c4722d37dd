"""Interactive plane/box cross-section navigator."""
__version__ = "0.3.0"

"""Knowledge Keepers: dodge questions, collect info, survive three levels."""

__version__ = "0.1.0"

"""Find unsorted files that are missing from, or differ within, organized base trees."""

__version__ = "0.1.0"

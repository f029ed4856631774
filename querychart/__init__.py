"""Natural language to SQL to chart configuration pipeline."""

__version__ = "0.1.0"

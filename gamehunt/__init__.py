"""GameHunt: terminal client for the RAWG video game catalog."""

__version__ = "0.1.0"

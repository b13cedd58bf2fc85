"""Synthetic weather-conditioned sensor data generator."""

__version__ = "0.1.0"

"""Core value types, errors and random sources."""

from .conditions import SensorType, WeatherCondition
from .errors import (
  InsufficientLocationSamplesError,
  InvalidModelError,
  MissingSensorBindingError,
  OutputWriteError,
  UnknownCodeError,
  WeatherSimError,
)
from .rng import RNG

__all__ = [
  "SensorType",
  "WeatherCondition",
  "WeatherSimError",
  "InvalidModelError",
  "MissingSensorBindingError",
  "InsufficientLocationSamplesError",
  "OutputWriteError",
  "UnknownCodeError",
  "RNG",
]

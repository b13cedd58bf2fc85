"""Stochastic models: weather transitions, sensors and locations."""

from .locations import GeoLocation, RegionConfig, sample_from_elevation_grid, sample_locations, take_locations
from .sensors import NormalDistribution, SensorModel, UniformDistribution, build_sensor_models
from .transition import TransitionModel

__all__ = [
  "GeoLocation",
  "RegionConfig",
  "sample_locations",
  "sample_from_elevation_grid",
  "take_locations",
  "NormalDistribution",
  "UniformDistribution",
  "SensorModel",
  "build_sensor_models",
  "TransitionModel",
]

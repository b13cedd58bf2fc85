import pytest
from pydantic import ValidationError

from weathersim.core.conditions import SensorType, WeatherCondition
from weathersim.core.errors import MissingSensorBindingError
from weathersim.core.rng import RNG
from weathersim.model.sensors import (
  NormalDistribution,
  SensorConfig,
  SensorModel,
  UniformDistribution,
  build_sensor_models,
)
from weathersim.settings import load_defaults


def default_sensor_config():
  return SensorConfig(sensors=load_defaults()["sensors"])


def test_full_configuration_samples_every_pair():
  models = build_sensor_models(default_sensor_config())
  rng = RNG(0)
  assert set(models) == set(SensorType)
  for st, model in models.items():
    for cond in WeatherCondition:
      assert isinstance(model.sample(cond, rng), float)


def test_missing_condition_fails_at_construction():
  raw = load_defaults()["sensors"]
  del raw["humidity"]["snow"]
  with pytest.raises(MissingSensorBindingError):
    build_sensor_models(SensorConfig(sensors=raw))


def test_missing_sensor_type_fails_at_construction():
  raw = load_defaults()["sensors"]
  del raw["pressure"]
  with pytest.raises(MissingSensorBindingError):
    build_sensor_models(SensorConfig(sensors=raw))


def test_sensor_model_requires_every_condition():
  dist = NormalDistribution(mean=0.0, stddev=1.0)
  with pytest.raises(MissingSensorBindingError):
    SensorModel(SensorType.TEMPERATURE, {WeatherCondition.SUNNY: dist, WeatherCondition.RAIN: dist})


def test_uniform_samples_stay_in_range():
  dist = UniformDistribution(low=70.0, high=95.0)
  rng = RNG(11)
  values = [dist.sample(rng) for _ in range(500)]
  assert all(70.0 <= v <= 95.0 for v in values)


def test_zero_stddev_normal_returns_mean():
  dist = NormalDistribution(mean=-10.0, stddev=0.0)
  assert dist.sample(RNG(1)) == -10.0


def test_snow_is_colder_than_sunny_by_default():
  model = build_sensor_models(default_sensor_config())[SensorType.TEMPERATURE]
  rng = RNG(8)
  snow = sum(model.sample(WeatherCondition.SNOW, rng) for _ in range(200)) / 200
  sunny = sum(model.sample(WeatherCondition.SUNNY, rng) for _ in range(200)) / 200
  assert snow < sunny


def test_invalid_distribution_parameters():
  with pytest.raises(ValidationError):
    UniformDistribution(low=5.0, high=1.0)
  with pytest.raises(ValidationError):
    NormalDistribution(mean=0.0, stddev=-1.0)
  with pytest.raises(ValidationError):
    SensorConfig(sensors={"temperature": {"sunny": {"family": "poisson", "lam": 2}}})

from typing import Annotated, Dict, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.conditions import SensorType, WeatherCondition
from ..core.errors import MissingSensorBindingError


class NormalDistribution(BaseModel):
  model_config = ConfigDict(frozen=True)

  family: Literal["normal"] = "normal"
  mean: float
  stddev: float = Field(ge=0.0)

  def sample(self, rng) -> float:
    return rng.normal(self.mean, self.stddev)


class UniformDistribution(BaseModel):
  model_config = ConfigDict(frozen=True)

  family: Literal["uniform"] = "uniform"
  low: float
  high: float

  @model_validator(mode="after")
  def _check_bounds(self):
    if self.low > self.high:
      raise ValueError(f"uniform low {self.low} exceeds high {self.high}")
    return self

  def sample(self, rng) -> float:
    return float(rng.uniform(self.low, self.high))


Distribution = Annotated[Union[NormalDistribution, UniformDistribution], Field(discriminator="family")]


class SensorModel:
  """Condition-conditioned generator for one sensor type."""

  def __init__(self, sensor_type: SensorType, bindings: Mapping[WeatherCondition, Distribution]):
    missing = [c.name for c in WeatherCondition if c not in bindings]
    if missing:
      raise MissingSensorBindingError(
        f"{sensor_type.name} has no distribution for: {', '.join(missing)}"
      )
    self.sensor_type = sensor_type
    self._bindings = {c: bindings[c] for c in WeatherCondition}

  def distribution(self, condition: WeatherCondition) -> Distribution:
    try:
      return self._bindings[condition]
    except KeyError:
      raise MissingSensorBindingError(f"{self.sensor_type.name} has no binding for {condition!r}") from None

  def sample(self, condition: WeatherCondition, rng) -> float:
    return self.distribution(condition).sample(rng)


class SensorConfig(BaseModel):
  """``{sensor: {condition: distribution}}`` keyed by lowercase enum names."""
  sensors: Dict[str, Dict[str, Distribution]]


def build_sensor_models(cfg: SensorConfig) -> Dict[SensorType, SensorModel]:
  """
  Resolve configuration keys and build one SensorModel per SensorType.
  Every sensor type x condition pair is checked here, before any output exists.
  """
  resolved: Dict[SensorType, Dict[WeatherCondition, Distribution]] = {}
  for sensor_key, per_cond in cfg.sensors.items():
    st = SensorType.from_name(sensor_key)
    resolved[st] = {WeatherCondition.from_name(k): v for k, v in per_cond.items()}
  missing = [st.name for st in SensorType if st not in resolved]
  if missing:
    raise MissingSensorBindingError(f"No sensor configuration for: {', '.join(missing)}")
  return {st: SensorModel(st, resolved[st]) for st in SensorType}

from enum import Enum

from .errors import UnknownCodeError


def _integral(code):
  """Exact integer value of ``code``, or None; no truncation, bools rejected."""
  if isinstance(code, bool):
    return None
  try:
    value = float(code)
  except (TypeError, ValueError):
    return None
  if not value.is_integer():
    return None
  return int(value)


class WeatherCondition(Enum):
  SUNNY = (0, "Sunny")
  RAIN = (1, "Rain")
  SNOW = (2, "Snow")

  def __init__(self, code: int, label: str):
    self.code = code
    self.label = label

  @classmethod
  def from_code(cls, code: int) -> "WeatherCondition":
    key = _integral(code)
    if key not in _CONDITION_BY_CODE:
      raise UnknownCodeError(f"Undefined weather condition code: {code!r}")
    return _CONDITION_BY_CODE[key]

  @classmethod
  def from_name(cls, name: str) -> "WeatherCondition":
    # Accepts both the member name ("SUNNY") and the label ("Sunny")
    key = str(name).strip().upper()
    for cond in cls:
      if key in (cond.name, cond.label.upper()):
        return cond
    raise UnknownCodeError(f"Undefined weather condition: {name!r}")


class SensorType(Enum):
  """Measured quantities. The id is the value of feature 5 in training lines."""

  TEMPERATURE = (1, "Temp")
  HUMIDITY = (2, "Humidity")
  PRESSURE = (3, "Pressure")

  def __init__(self, sensor_id: int, label: str):
    self.sensor_id = sensor_id
    self.label = label

  @classmethod
  def from_id(cls, sensor_id: int) -> "SensorType":
    key = _integral(sensor_id)
    if key not in _SENSOR_BY_ID:
      raise UnknownCodeError(f"Undefined sensor id: {sensor_id!r}")
    return _SENSOR_BY_ID[key]

  @classmethod
  def from_name(cls, name: str) -> "SensorType":
    key = str(name).strip().upper()
    for st in cls:
      if key in (st.name, st.label.upper()):
        return st
    raise UnknownCodeError(f"Undefined sensor type: {name!r}")


_CONDITION_BY_CODE = {c.code: c for c in WeatherCondition}
_SENSOR_BY_ID = {s.sensor_id: s for s in SensorType}

import numpy as np
import pytest

from weathersim.core.conditions import SensorType, WeatherCondition
from weathersim.core.errors import UnknownCodeError


def test_condition_codes_are_stable():
  assert [c.code for c in WeatherCondition] == [0, 1, 2]
  assert WeatherCondition.RAIN.label == "Rain"


def test_condition_reverse_lookup_is_total():
  for cond in WeatherCondition:
    assert WeatherCondition.from_code(cond.code) is cond


@pytest.mark.parametrize("code", [-1, 3, 99, 1.5, 2.9, True, "x", None])
def test_undefined_condition_code_fails(code):
  with pytest.raises(UnknownCodeError):
    WeatherCondition.from_code(code)


def test_condition_from_name_accepts_member_and_label():
  assert WeatherCondition.from_name("snow") is WeatherCondition.SNOW
  assert WeatherCondition.from_name("Sunny") is WeatherCondition.SUNNY
  with pytest.raises(UnknownCodeError):
    WeatherCondition.from_name("fog")


def test_sensor_ids_are_one_based():
  assert [s.sensor_id for s in SensorType] == [1, 2, 3]
  assert SensorType.from_id(3) is SensorType.PRESSURE
  with pytest.raises(UnknownCodeError):
    SensorType.from_id(0)


def test_sensor_from_name():
  assert SensorType.from_name("temperature") is SensorType.TEMPERATURE
  assert SensorType.from_name("Temp") is SensorType.TEMPERATURE


def test_integral_codes_of_other_types_resolve():
  assert WeatherCondition.from_code(np.int64(2)) is WeatherCondition.SNOW
  assert WeatherCondition.from_code(1.0) is WeatherCondition.RAIN


@pytest.mark.parametrize("sensor_id", [1.5, True, False, 3.01])
def test_non_integral_sensor_id_fails(sensor_id):
  with pytest.raises(UnknownCodeError):
    SensorType.from_id(sensor_id)

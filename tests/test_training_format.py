from datetime import datetime, timezone

import numpy as np

from weathersim.core.conditions import SensorType, WeatherCondition
from weathersim.engine import GeneratedRecord
from weathersim.io.training import (
  format_training_lines,
  load_training_subset,
  parse_training_line,
  write_training,
)
from weathersim.model.locations import GeoLocation

from helpers import transition


def make_record(condition=WeatherCondition.RAIN, day=datetime(2019, 1, 1, tzinfo=timezone.utc)):
  loc = GeoLocation(34.21, 12.31, 54, transition())
  obs = {SensorType.TEMPERATURE: 3.456, SensorType.HUMIDITY: 80.0, SensorType.PRESSURE: 699.994}
  return GeneratedRecord(0, loc, day, condition, obs)


def test_condition_line():
  lines = format_training_lines(make_record())
  assert lines[0] == "1 1:34.21 2:12.31 3:54 4:1 5:0"


def test_sensor_lines_follow_in_type_order():
  lines = format_training_lines(make_record())
  assert lines[1:] == [
    "3.46 1:34.21 2:12.31 3:54 4:1 5:1",
    "80.00 1:34.21 2:12.31 3:54 4:1 5:2",
    "699.99 1:34.21 2:12.31 3:54 4:1 5:3",
  ]


def test_day_of_year_in_leap_year():
  rec = make_record(day=datetime(2020, 12, 31, tzinfo=timezone.utc))
  assert format_training_lines(rec)[0].endswith("4:366 5:0")


def test_lines_parse_back_exactly():
  for line in format_training_lines(make_record(WeatherCondition.SNOW)):
    label, feats = parse_training_line(line)
    tokens = line.split(" ")
    assert float(tokens[0]) == label
    assert {int(t.split(":")[0]): float(t.split(":")[1]) for t in tokens[1:]} == feats
  label, feats = parse_training_line(format_training_lines(make_record(WeatherCondition.SNOW))[0])
  assert label == 2.0
  assert feats == {1: 34.21, 2: 12.31, 3: 54.0, 4: 1.0, 5: 0.0}


def test_load_subset_filters_on_feature_five(tmp_path):
  path = tmp_path / "run" / "training.dat"
  records = [make_record(), make_record(WeatherCondition.SUNNY)]
  assert write_training(records, path) == 8
  X, y = load_training_subset(path, 0)
  assert X.shape == (2, 5)
  np.testing.assert_array_equal(y, [1.0, 0.0])
  X, y = load_training_subset(path, SensorType.HUMIDITY.sensor_id)
  np.testing.assert_array_equal(y, [80.0, 80.0])
  assert np.all(X[:, 4] == 2.0)
  X, y = load_training_subset(path, 9)
  assert X.shape == (0, 5)

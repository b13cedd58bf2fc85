from datetime import datetime, timezone

from weathersim.model.transition import TransitionModel
from weathersim.settings import load_run_config

MATRIX = [
  [0.6, 0.3, 0.1],
  [0.4, 0.4, 0.2],
  [0.3, 0.3, 0.4],
]


class ScriptedRNG:
  """Random source returning scripted draws for random(); fixed values otherwise."""

  def __init__(self, draws, initial=0):
    self.draws = list(draws)
    self.initial = initial

  def random(self):
    return self.draws.pop(0)

  def integers(self, low, high):
    return self.initial

  def normal(self, mean, stddev):
    return mean

  def uniform(self, low, high, size=None):
    return (low + high) / 2

  def spawn(self, n):
    return [self] * n


def make_config(tmp_path, **overrides):
  params = dict(
    run_id="test-run",
    output_root=tmp_path,
    start_time=datetime(2019, 1, 1, tzinfo=timezone.utc),
    locations=2,
    days=3,
    seed=42,
  )
  params.update(overrides)
  return load_run_config(**params)


def transition():
  return TransitionModel(MATRIX)

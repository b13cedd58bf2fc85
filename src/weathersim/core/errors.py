"""Error kinds raised by the generator. None of them is retried internally."""


class WeatherSimError(Exception):
  """Base class for all generator failures."""


class InvalidModelError(WeatherSimError, ValueError):
  """Transition matrix is not a square row-stochastic matrix over all conditions."""


class MissingSensorBindingError(WeatherSimError, ValueError):
  """A (sensor type, condition) pair has no sampling distribution."""


class InsufficientLocationSamplesError(WeatherSimError):
  """The location source delivered fewer locations than requested."""


class OutputWriteError(WeatherSimError):
  """Writing an output file failed; nothing at the destination is valid."""


class UnknownCodeError(WeatherSimError, ValueError):
  """Lookup of a condition or sensor type by an undefined code or name."""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass
class Timebase:
  start: datetime
  days: int

  def dates(self):
    d = self.start
    for _ in range(self.days):
      yield d
      d += timedelta(days=1)

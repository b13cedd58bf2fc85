from typing import Iterable
import logging

import pyarrow as pa
import pyarrow.parquet as pq

from ..core.conditions import SensorType
from .atomic import atomic_output

logger = logging.getLogger(__name__)


def record_row(record) -> dict:
  loc = record.location
  row = {
    "location_index": record.location_index,
    "latitude": loc.latitude,
    "longitude": loc.longitude,
    "elevation": loc.elevation,
    "date": record.date,
    "day_of_year": record.day_of_year,
    "condition_code": record.condition.code,
    "condition": record.condition.label,
  }
  for st in SensorType:
    row[st.name.lower()] = record.observations[st]
  return row


def write_records_parquet(records: Iterable, path) -> int:
  rows = [record_row(r) for r in records]
  with atomic_output(path) as tmp:
    pq.write_table(pa.Table.from_pylist(rows), str(tmp), compression="snappy")
  logger.info(f"Wrote {len(rows)} rows to {path}")
  return len(rows)

"""Run configuration: package defaults, YAML overrides and validation."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional
import time

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .model.locations import RegionConfig
from .model.sensors import Distribution, SensorConfig

DEFAULTS_PATH = Path(__file__).parent / "config" / "defaults.yaml"


def _default_run_id() -> str:
  return str(int(time.time() * 1000))


def _default_start() -> datetime:
  return datetime(datetime.now(timezone.utc).year, 1, 1, tzinfo=timezone.utc)


class RunConfig(BaseModel):
  """Read-only parameters of one generation run."""
  model_config = ConfigDict(frozen=True)

  start_time: datetime = Field(default_factory=_default_start)
  locations: int = Field(default=10, ge=1)
  days: int = Field(default=365, ge=1)
  run_id: str = Field(default_factory=_default_run_id)
  output_root: Path = Path("target/tmp")
  seed: Optional[int] = None
  workers: int = Field(default=1, ge=1)
  transition_matrix: List[List[float]]
  region: RegionConfig
  sensors: Dict[str, Dict[str, Distribution]]

  @field_validator("start_time")
  @classmethod
  def _as_utc(cls, v: datetime) -> datetime:
    # Naive timestamps are taken as UTC
    if v.tzinfo is None:
      return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)

  @field_validator("run_id", mode="before")
  @classmethod
  def _check_run_id(cls, v: Any) -> str:
    v = str(v).strip()
    if not v or "/" in v or "\\" in v or v in (".", ".."):
      raise ValueError(f"run_id must be a single path component, got {v!r}")
    return v

  @property
  def run_dir(self) -> Path:
    return self.output_root / self.run_id

  def sensor_config(self) -> SensorConfig:
    return SensorConfig(sensors=self.sensors)


def load_defaults() -> dict:
  return yaml.safe_load(DEFAULTS_PATH.read_text(encoding="utf-8"))


def merge_config(base: dict, overrides: dict) -> dict:
  """
  Recursive dict merge. A distribution entry (a mapping carrying ``family``)
  replaces the default entry as a whole instead of being merged key by key.
  """
  out = dict(base)
  for k, v in overrides.items():
    if isinstance(v, dict) and "family" not in v and isinstance(out.get(k), dict):
      out[k] = merge_config(out[k], v)
    else:
      out[k] = v
  return out


def load_run_config(path: Optional[str] = None, **overrides) -> RunConfig:
  """Defaults, then the YAML file at ``path``, then non-None keyword overrides."""
  cfg = load_defaults()
  if path:
    user = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    cfg = merge_config(cfg, user)
  cfg.update({k: v for k, v in overrides.items() if v is not None})
  return RunConfig(**cfg)

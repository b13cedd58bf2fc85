import hashlib
import json

from .atomic import atomic_text_writer

# Wall-clock fields; left out of the hash so identical seeded runs hash alike
VOLATILE_KEYS = ("created", "dataset_hash")


def dataset_hash(meta: dict) -> str:
  stable = {k: v for k, v in meta.items() if k not in VOLATILE_KEYS}
  s = json.dumps(stable, sort_keys=True, default=str).encode()
  return hashlib.sha256(s).hexdigest()[:16]


def write_manifest(path, meta: dict):
  meta["dataset_hash"] = dataset_hash(meta)
  with atomic_text_writer(path) as f:
    json.dump(meta, f, indent=2, default=str)


def read_manifest(path) -> dict:
  with open(path, encoding="utf-8") as f:
    return json.load(f)

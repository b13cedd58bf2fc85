from contextlib import contextmanager
from pathlib import Path
import logging
import os
import tempfile

from ..core.errors import OutputWriteError

logger = logging.getLogger(__name__)


@contextmanager
def atomic_output(path):
  """
  Yield a temporary path next to ``path``; it replaces ``path`` only if the block
  completes. Any previous file at ``path`` is removed up front, so a failed run
  leaves nothing there.
  """
  path = Path(path)
  try:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists():
      path.unlink()
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    os.close(fd)
  except OSError as e:
    raise OutputWriteError(f"Cannot prepare {path}: {e}") from e
  tmp = Path(tmp_name)
  try:
    # mkstemp creates 0600; final files get the usual umask-derived mode
    os.chmod(tmp, 0o666 & ~_current_umask())
    yield tmp
    os.replace(tmp, path)
  except OSError as e:
    _discard(tmp)
    raise OutputWriteError(f"Failed writing {path}: {e}") from e
  except BaseException:
    _discard(tmp)
    raise


@contextmanager
def atomic_text_writer(path):
  with atomic_output(path) as tmp:
    with open(tmp, "w", encoding="utf-8", newline="\n") as f:
      yield f


def _discard(tmp: Path):
  try:
    tmp.unlink()
  except FileNotFoundError:
    pass
  except OSError as e:
    logger.warning(f"Could not remove temporary file {tmp}: {e}")


def _current_umask() -> int:
  mask = os.umask(0)
  os.umask(mask)
  return mask

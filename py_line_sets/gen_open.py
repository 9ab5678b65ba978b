import contextlib
import sys

import fsspec


STDIN_PATH = '-'


def _std_file(path, mode):
  if path in (STDIN_PATH, 'STDIN'):
    return sys.stdin.buffer if 'b' in mode else sys.stdin


def gen_open(path, mode='rb', **kwargs):
  # Standard streams are not closed on exit, since they are owned by the process.
  sfd = _std_file(path, mode)
  if sfd is not None:
    return contextlib.nullcontext(sfd)

  return fsspec.open(path, mode=mode, **kwargs)


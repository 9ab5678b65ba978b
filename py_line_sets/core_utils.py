# This module is for APIs which has no local dependecies.
import os

import yaml


def size_str(size):
  syms = ('B', 'KB', 'MB', 'GB', 'TB')

  for i, sym in enumerate(syms):
    if size < 1024:
      return f'{size} {sym}' if i == 0 else f'{size:.2f} {sym}'

    size /= 1024

  return f'{size * 1024:.2f} {syms[-1]}'


def to_type(v, vtype):
  return vtype(yaml.safe_load(v)) if isinstance(v, str) else vtype(v)


def getenv(name, dtype=None, defval=None):
  # os.getenv expects the default value to be a string, so cannot be passed in there.
  env = os.getenv(name, None)
  if env is None:
    env = defval
  if env is not None:
    return to_type(env, dtype) if dtype is not None else env


def enum_chunks(stream, chunk_size=64 * 1024):
  while True:
    data = stream.read(chunk_size)
    if data:
      yield data
    if chunk_size > len(data):
      break


import os
import types

import yaml

from . import alog
from . import core_utils as cu
from . import errors


ENV_PREFIX = 'LINE_SETS_'
CONFIG_ENV = f'{ENV_PREFIX}CONFIG'


class Config:
  # Width of the right aligned count column printed in counting mode.
  count_width = 7
  # Read size used when streaming the second and following operands.
  read_chunk_size = 64 * 1024

  def __init__(self, path=None, **kwargs):
    values = self.defaults()
    if path is not None:
      values.update(self._load_file(path))
    values.update(self._load_env(values))
    values.update(kwargs)

    for name, value in values.items():
      setattr(self, name, self._cast(name, value))

    self._validate()

  @classmethod
  def defaults(cls):
    values = dict()
    for name in dir(cls):
      if not name.startswith('_'):
        value = getattr(cls, name)
        if not callable(value):
          values[name] = value

    return values

  def _cast(self, name, value):
    defval = getattr(type(self), name, None)
    if defval is None or callable(defval) or name.startswith('_'):
      alog.xraise(errors.ConfigError, f'Unknown configuration key "{name}"')

    dtype = type(defval)
    try:
      return cu.to_type(value, dtype)
    except (TypeError, ValueError, yaml.YAMLError) as ex:
      raise errors.ConfigError(f'Invalid value for "{name}": {value!r}') from ex

  def _load_file(self, path):
    try:
      with open(path, mode='r') as fd:
        data = yaml.safe_load(fd)
    except OSError as ex:
      raise errors.ConfigError(f'Cannot read configuration file: {path}') from ex
    except yaml.YAMLError as ex:
      raise errors.ConfigError(f'Invalid configuration file {path}: {ex}') from ex

    if data is None:
      return dict()
    if not isinstance(data, dict):
      alog.xraise(errors.ConfigError,
                  f'Configuration file {path} must hold a mapping, got {type(data).__name__}')

    defaults = self.defaults()
    for name in data.keys():
      if name not in defaults:
        alog.xraise(errors.ConfigError, f'Unknown configuration key "{name}" in {path}')

    alog.debug(f'Loaded configuration from {path}: {data}')

    return data

  def _load_env(self, values):
    env_values = dict()
    for name in values.keys():
      env = os.getenv(f'{ENV_PREFIX}{name.upper()}', None)
      if env is not None:
        env_values[name] = env

    return env_values

  def _validate(self):
    if self.count_width < 0:
      alog.xraise(errors.ConfigError, f'Invalid count width: {self.count_width}')
    if self.read_chunk_size < 4:
      # The UTF-16 BOM sniffing needs at least the BOM bytes in the first chunk.
      alog.xraise(errors.ConfigError, f'Invalid read chunk size: {self.read_chunk_size}')

  def as_dict(self):
    return {name: getattr(self, name) for name in self.defaults().keys()}


_CONFIG = None

def current():
  global _CONFIG

  if _CONFIG is None:
    _CONFIG = Config(path=cu.getenv(CONFIG_ENV))

  return _CONFIG


def add_config_options(parser):
  parser.add_argument('--config', type=str, default=cu.getenv(CONFIG_ENV),
                      help='YAML configuration file (count_width, read_chunk_size)')


def setup_config(args):
  global _CONFIG

  _CONFIG = Config(path=getattr(args, 'config', None))


def get_main_config():
  return types.SimpleNamespace(add_arguments=add_config_options,
                               config_module=setup_config)


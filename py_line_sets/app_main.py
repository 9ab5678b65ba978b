import signal

from . import alog
from . import config
from . import errors


class TerminationError(Exception):
  pass


def _sig_handler(sig, frame):
  if sig == signal.SIGINT:
    raise KeyboardInterrupt()
  elif sig == signal.SIGTERM:
    raise TerminationError()


def _signals_setup():
  signal.signal(signal.SIGINT, _sig_handler)
  signal.signal(signal.SIGTERM, _sig_handler)


def _signals_restore(handlers):
  for sig, handler in handlers.items():
    signal.signal(sig, handler)


def _get_init_modules():
  # Objects returned by the get_main_config() API must have a add_arguments(parser)
  # API to allow them to add command line arguments, and a config_module(args) API
  # to configure themselves with the parsed arguments. An optional cleanup_module()
  # is allowed, to give the module a chance to cleanup when exiting the main function.
  # Logging comes first, so that the following modules can log while configuring.
  modules = []
  modules.append(alog.get_main_config())
  modules.append(config.get_main_config())

  return tuple(modules)


def _add_arguments(init_modules, parser):
  for module in init_modules:
    module.add_arguments(parser)


def _config_modules(init_modules, args):
  for module in init_modules:
    module.config_module(args)


def _cleanup_modules(init_modules):
  for module in init_modules:
    if (cleanup_module := getattr(module, 'cleanup_module', None)) is not None:
      cleanup_module()


def _main(parser, init_modules, mainfn, args):
  _add_arguments(init_modules, parser)

  # Intermixed parsing lets options follow the operation name and file arguments.
  parsed_args = parser.parse_intermixed_args(args=args)
  _config_modules(init_modules, parsed_args)

  return mainfn(parsed_args)


def main(parser, mainfn, args=None):
  """Parses the command line with parser, and runs mainfn(parsed_args).

  Returns the process exit code: the mainfn() return value (0 if None), or 1 if a
  LineSetsError is raised. Errors of this kind are logged as a single line, while
  any other exception is logged with its traceback and propagated.
  """
  init_modules = _get_init_modules()
  handlers = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGTERM)}
  _signals_setup()
  try:
    result = _main(parser, init_modules, mainfn, args)
  except errors.LineSetsError as ex:
    alog.error(f'{ex}')
    return 1
  except (KeyboardInterrupt, TerminationError):
    alog.warning(f'Interrupted')
    return 130
  except Exception as ex:
    alog.exception(ex, exmsg=f'Exception while running main function')
    raise
  finally:
    _cleanup_modules(init_modules)
    _signals_restore(handlers)

  return 0 if result is None else result


import argparse
import sys

import psutil

from . import alog
from . import app_main
from . import config
from . import core_utils as cu
from . import line_output as lo
from . import operands as opd
from . import operations as ops


VERSION = '0.1.0'

# Stored by -c/--count, whose meaning depends on whether --files was given.
COUNT_DEFAULT = 'count'

_DESCRIPTION = 'Finds the union, intersection, set difference, etc. of files ' \
  'considered as sets of lines.'

_EPILOG = '''
Each line is output at most once, no matter how many times it occurs in the
input files. Lines are not sorted, but printed in the order they first occur.

  Operation  Prints lines appearing in
  ========== =========================
  union      ANY file
  intersect  EVERY file
  diff       the FIRST file, and no other
  single     exactly ONE file (exactly once overall with --lines)
  multiple   two or more files (more than once overall with --lines)

The output uses the line terminator of the first line of the first file, and
starts with a byte order mark if the first file does.
'''


def create_parser():
  parser = argparse.ArgumentParser(
    prog='line_sets',
    description=_DESCRIPTION,
    epilog=_EPILOG,
    formatter_class=argparse.RawDescriptionHelpFormatter,
  )
  parser.add_argument('op', choices=ops.OPERATIONS,
                      help='The set operation to perform')
  parser.add_argument('paths', nargs='*', metavar='PATH',
                      help='The input files (- for standard input)')

  # Within each group the last flag given wins.
  parser.add_argument('-c', '--count', dest='log_type',
                      action='store_const', const=COUNT_DEFAULT, default=ops.LOG_NONE,
                      help='Prefix each line with a count: the number of files it '
                      'appears in with --files, the number of times otherwise')
  parser.add_argument('--count-lines', dest='log_type',
                      action='store_const', const=ops.LOG_LINES,
                      help='Prefix each line with the number of times it appears in the input')
  parser.add_argument('--count-files', dest='log_type',
                      action='store_const', const=ops.LOG_FILES,
                      help='Prefix each line with the number of files it appears in')
  parser.add_argument('--count-none', dest='log_type',
                      action='store_const', const=ops.LOG_NONE,
                      help='Do not prefix lines with counts (default)')
  parser.add_argument('--files', '--file', dest='by_lines',
                      action='store_const', const=False, default=None,
                      help='single and multiple count the files a line appears in (default)')
  parser.add_argument('--lines', '--line', dest='by_lines',
                      action='store_const', const=True,
                      help='single and multiple count the times a line appears in the input')
  parser.add_argument('-V', '--version', action='version',
                      version=f'%(prog)s {VERSION}')

  return parser


def log_type_of(args):
  if args.log_type == COUNT_DEFAULT:
    return ops.LOG_FILES if args.by_lines is False else ops.LOG_LINES

  return args.log_type


def _log_memory(op):
  if alog.level_active(alog.DEBUG):
    rss = psutil.Process().memory_info().rss
    alog.debug(f'Operation {op} done, resident memory {cu.size_str(rss)}')


def run(args, out=None):
  cfg = config.current()
  alog.debug(f'Running {args.op} over {len(args.paths)} files with config {cfg.as_dict()}')

  operands = opd.first_and_rest(args.paths, chunk_size=cfg.read_chunk_size)
  if operands is None:
    return 0

  first, rest = operands
  lset = ops.calculate(args.op, first, rest,
                       log_type=log_type_of(args),
                       by_lines=bool(args.by_lines))

  _log_memory(args.op)

  # Nothing is written before every operand has been read, so that a failure on
  # a later operand never leaves a truncated output behind.
  lo.write_lines(lset, out or sys.stdout.buffer, count_width=cfg.count_width)

  return 0


def main(args=None, out=None):
  return app_main.main(create_parser(), lambda pargs: run(pargs, out=out), args=args)


if __name__ == '__main__':
  sys.exit(main())


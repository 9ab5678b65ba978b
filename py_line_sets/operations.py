import functools

from . import alog
from . import errors
from . import line_set as ls
from . import tally as tly


UNION = 'union'
INTERSECT = 'intersect'
DIFF = 'diff'
SINGLE = 'single'
MULTIPLE = 'multiple'

OPERATIONS = (UNION, INTERSECT, DIFF, SINGLE, MULTIPLE)

LOG_NONE = 'none'
LOG_LINES = 'lines'
LOG_FILES = 'files'

LOG_TYPES = (LOG_NONE, LOG_LINES, LOG_FILES)

# Operand ids are kept within 32 bits, like the counters.
OPERAND_MAX = 2**32 - 1


def select_tally(op, by_lines=False):
  if op == UNION:
    return tly.Unit()
  if op == DIFF:
    return tly.KeepFlag()
  if op == INTERSECT:
    return tly.Color()
  if op in (SINGLE, MULTIPLE):
    return tly.LineCount() if by_lines else tly.OperandId()

  alog.xraise(ValueError, f'Unknown operation "{op}", should be one of: {", ".join(OPERATIONS)}')


def make_tally(op, log_type=LOG_NONE, by_lines=False):
  selector = select_tally(op, by_lines=by_lines)
  if log_type == LOG_LINES:
    return tly.Dual(selector, tly.LineCount())
  if log_type == LOG_FILES:
    return tly.Dual(selector, tly.FileCount())
  if log_type not in (None, LOG_NONE):
    alog.xraise(ValueError, f'Unknown count type "{log_type}", should be one of: ' \
                f'{", ".join(LOG_TYPES)}')

  return selector


def _numbered(rest):
  operand_id = tly.FIRST_OPERAND
  for operand in rest:
    operand_id += 1
    if operand_id > OPERAND_MAX:
      alog.xraise(errors.OperandCountError,
                  f'Cannot handle more than {OPERAND_MAX} operands')

    alog.debug(f'Processing operand {operand_id}: {getattr(operand, "path", None)}')

    yield operand_id, operand


def _operand_lines(operand):
  lines = getattr(operand, 'lines', None)

  return lines() if lines is not None else operand


def _union(lset, rest):
  tally = lset.tally
  for operand_id, operand in _numbered(rest):
    initial = tally.new(operand_id)
    modify = functools.partial(tally.modify, operand_id=operand_id)
    for line in _operand_lines(operand):
      lset.upsert(line, initial, modify)


def _diff(lset, rest):
  # Later operands can only clear the keep flag of lines already in the set, so
  # nothing gets allocated past the first operand.
  tally = lset.tally
  for operand_id, operand in _numbered(rest):
    modify = functools.partial(tally.modify, operand_id=operand_id)
    for line in _operand_lines(operand):
      lset.update_if_present(line, modify)

  lset.retain(tally.select)


def _intersect(lset, rest):
  # Before each operand is processed, every line in the set has been seen in all
  # the previous operands, and carries the color of the last one. Sighted lines
  # get painted with the color of the current operand, and the ones which did not
  # get painted are dropped.
  tally = lset.tally
  for operand_id, operand in _numbered(rest):
    this_cycle = tly.color_of(operand_id)
    modify = functools.partial(tally.modify, operand_id=operand_id)
    for line in _operand_lines(operand):
      lset.update_if_present(line, modify)

    dropped = lset.retain(lambda value: tally.select(value) == this_cycle)
    alog.verbose(f'Operand {operand_id} dropped {dropped} lines, {len(lset)} left')


def _single_multiple(lset, op, by_lines, rest):
  # With operand ids, a line seen in two distinct operands collapses to None.
  # With line counts, the total number of occurrences is kept instead.
  _union(lset, rest)

  if by_lines:
    if op == SINGLE:
      lset.retain(lambda value: lset.tally.select(value) == 1)
    else:
      lset.retain(lambda value: lset.tally.select(value) > 1)
  elif op == SINGLE:
    lset.retain(lambda value: lset.tally.select(value) is not None)
  else:
    lset.retain(lambda value: lset.tally.select(value) is None)


def calculate(op, first_operand, rest=(), log_type=LOG_NONE, by_lines=False):
  """Computes the set operation op over the given operands.

  Args:
    op: One of OPERATIONS.
    first_operand: The full contents (bytes) of the first operand, including
      its byte order mark and line terminators.
    rest: Iterable of the following operands. Each one is either an object
      with a lines() API returning an iterable of lines with the terminator
      stripped (like operands.LaterOperand), or directly such an iterable.
    log_type: One of LOG_TYPES, selecting the count column.
    by_lines: For SINGLE and MULTIPLE, count the total number of occurrences
      of a line, instead of the number of distinct operands containing it.

  Returns:
    The LineSet holding the resulting lines, in first occurrence order.
  """
  tally = make_tally(op, log_type=log_type, by_lines=by_lines)
  lset = ls.LineSet.from_first_operand(first_operand, tally)

  alog.debug(f'Operation {op} with {tally!r}: {len(lset)} distinct lines in first operand')

  if op == UNION:
    _union(lset, rest)
  elif op == DIFF:
    _diff(lset, rest)
  elif op == INTERSECT:
    _intersect(lset, rest)
  else:
    _single_multiple(lset, op, by_lines, rest)

  alog.debug(f'Operation {op} result has {len(lset)} lines')

  return lset


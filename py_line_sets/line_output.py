from . import assert_checks as tas


OVERFLOW_MARKER = 'overflow'

DEFAULT_COUNT_WIDTH = 7


def format_count(count, width=DEFAULT_COUNT_WIDTH):
  text = OVERFLOW_MARKER if count is None else str(count)

  return f'{text:>{width}} '.encode('ascii')


def write_lines(lset, out, count_width=DEFAULT_COUNT_WIDTH):
  """Writes the lines of lset to the binary stream out.

  The byte order mark of the first operand (if any) is written first, then each
  line followed by the first operand line terminator. If the set tally is a
  counting one, every line is prefixed by its right aligned count.
  """
  tas.check_ge(count_width, 0, msg=f'Invalid count width')

  tally = lset.tally
  terminator = lset.terminator

  out.write(lset.bom)
  nlines = 0
  for line, value in lset.for_each_in_order():
    if tally.counting:
      out.write(format_count(tally.count(value), width=count_width))
    out.write(line)
    out.write(terminator)
    nlines += 1

  out.flush()

  return nlines


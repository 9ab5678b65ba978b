from . import assert_checks as tas
from . import tally as tly


BOM = b'\xef\xbb\xbf'
LF = b'\n'
CRLF = b'\r\n'

_MISSING = object()


def output_info(data):
  """Returns the (bom, terminator) pair to be used when writing out lines.

  The bom is the UTF-8 byte order mark if data starts with one, or empty.
  The terminator is CRLF if the first line of data ends with CRLF, and LF
  otherwise (including when data holds a single, unterminated, line).
  """
  bom = BOM if data.startswith(BOM) else b''
  terminator = LF
  pos = data.find(LF)
  if pos > 0 and data[pos - 1] == CRLF[0]:
    terminator = CRLF

  return bom, terminator


def iter_borrowed_lines(data, start=0):
  # Lines are yielded as memoryview slices of data, with the LF (or CRLF)
  # terminator stripped. A trailing unterminated line is yielded as is.
  view = memoryview(data)
  size = len(data)
  while start < size:
    end = data.find(LF, start)
    if end < 0:
      yield view[start:]
      break

    lend = end - 1 if end > start and data[end - 1] == CRLF[0] else end
    yield view[start: lend]
    start = end + 1


class LineSet:
  """Insertion ordered set of lines, each one mapped to its tally value.

  Lines from the first operand are stored as memoryview slices of its buffer,
  lines from the following operands as owned bytes. A memoryview over bytes
  hashes and compares like the bytes it points to, so lookups work with either.
  Entries are never removed one at a time: retain() rebuilds the mapping in a
  single pass, which keeps multi operand filtering linear.
  """

  def __init__(self, tally=None, bom=b'', terminator=LF):
    self.tally = tally or tly.Unit()
    self.bom = bom
    self.terminator = terminator
    self._data = dict()
    self._building = False

  @classmethod
  def from_first_operand(cls, data, tally):
    data = bytes(data)
    bom, terminator = output_info(data)

    lset = cls(tally=tally, bom=bom, terminator=terminator)
    initial = tally.new(tly.FIRST_OPERAND)

    lset._building = True
    try:
      for line in iter_borrowed_lines(data, start=len(bom)):
        if not lset.insert_borrowed_if_absent(line, initial):
          lset.update_if_present(line, tally.repeat)
    finally:
      lset._building = False

    return lset

  def insert_borrowed_if_absent(self, line, initial):
    tas.check(self._building, msg='Borrowed lines can only be added from the first operand')

    if line in self._data:
      return False

    self._data[line] = initial

    return True

  def insert_or_init(self, line, make_initial):
    if line in self._data:
      return False

    self._data[bytes(line)] = make_initial()

    return True

  def update_if_present(self, line, fn):
    value = self._data.get(line, _MISSING)
    if value is _MISSING:
      return False

    self._data[line] = fn(value)

    return True

  def upsert(self, line, initial, fn):
    value = self._data.get(line, _MISSING)
    if value is _MISSING:
      self._data[bytes(line)] = initial
    else:
      self._data[line] = fn(value)

  def retain(self, keep):
    size = len(self._data)
    self._data = {line: value for line, value in self._data.items() if keep(value)}

    return size - len(self._data)

  def for_each_in_order(self):
    for line, value in self._data.items():
      yield line, value

  def __len__(self):
    return len(self._data)

  def __iter__(self):
    return iter(self._data.keys())

  def __contains__(self, line):
    return line in self._data


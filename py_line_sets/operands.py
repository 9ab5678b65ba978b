# The first operand is read in memory in its entirety, since the lines stored in
# the LineSet point into its buffer. The following operands are streamed in chunks
# and split in lines, which are only copied when they enter the set.
import codecs

from . import alog
from . import core_utils as cu
from . import errors
from . import gen_open as gop
from . import line_set as ls


_UTF16_BOMS = (
  (codecs.BOM_UTF16_LE, 'utf-16-le'),
  (codecs.BOM_UTF16_BE, 'utf-16-be'),
)

DEFAULT_CHUNK_SIZE = 64 * 1024


def utf16_encoding(data):
  for bom, encoding in _UTF16_BOMS:
    if data.startswith(bom):
      return bom, encoding

  return None, None


def decode_if_utf16(data):
  # A UTF-16 buffer is translated to UTF-8, and its BOM to the UTF-8 BOM, so that
  # the output will carry the BOM as well. Malformed sequences are replaced with
  # U+FFFD rather than failing the run.
  bom, encoding = utf16_encoding(data)
  if encoding is None:
    return data

  alog.debug(f'Translating {encoding} operand to UTF-8')

  return ls.BOM + data[len(bom):].decode(encoding, errors='replace').encode('utf-8')


def read_first(path):
  try:
    with gop.gen_open(path, mode='rb') as fd:
      data = fd.read()
  except OSError as ex:
    raise errors.OperandError(path, f'Cannot read file: {path}: {ex}') from ex

  alog.debug(f'Read first operand {path}: {cu.size_str(len(data))}')

  return decode_if_utf16(data)


def decoded_chunks(chunks):
  chunks = iter(chunks)
  head = next(chunks, b'')

  bom, encoding = utf16_encoding(head)
  if encoding is not None:
    decoder = codecs.getincrementaldecoder(encoding)(errors='replace')
    yield decoder.decode(head[len(bom):]).encode('utf-8')
    for chunk in chunks:
      yield decoder.decode(chunk).encode('utf-8')
    yield decoder.decode(b'', final=True).encode('utf-8')
  else:
    yield head[len(ls.BOM):] if head.startswith(ls.BOM) else head
    yield from chunks


def split_lines(chunks):
  # Lines are yielded without their LF (or CRLF) terminator. A final line without
  # terminator is yielded as is.
  # Pieces of an unterminated line are only joined once its LF shows up, so a very
  # long line spanning many chunks is copied once.
  pending = []
  for chunk in chunks:
    pos = chunk.find(ls.LF)
    if pos < 0:
      if chunk:
        pending.append(chunk)
      continue

    head = chunk[: pos]
    if pending:
      pending.append(head)
      head = b''.join(pending)
      pending = []
    yield head[: -1] if head.endswith(b'\r') else head

    lines = chunk[pos + 1:].split(ls.LF)
    tail = lines.pop()
    for line in lines:
      yield line[: -1] if line.endswith(b'\r') else line
    if tail:
      pending.append(tail)

  if pending:
    yield b''.join(pending)


class LaterOperand:

  def __init__(self, path, chunk_size=None):
    self.path = path
    self.chunk_size = chunk_size or DEFAULT_CHUNK_SIZE

  def lines(self):
    try:
      with gop.gen_open(self.path, mode='rb') as fd:
        chunks = cu.enum_chunks(fd, chunk_size=self.chunk_size)
        yield from split_lines(decoded_chunks(chunks))
    except OSError as ex:
      raise errors.OperandError(self.path, f'Cannot read file: {self.path}: {ex}') from ex

  def __repr__(self):
    return f'LaterOperand({self.path!r})'


def first_and_rest(paths, chunk_size=None):
  if not paths:
    return None

  first = read_first(paths[0])
  rest = (LaterOperand(path, chunk_size=chunk_size) for path in paths[1:])

  return first, rest


import pytest

from conftest import set_lines, set_values
from py_line_sets import line_set as ls
from py_line_sets import tally as tly


@pytest.mark.parametrize('data, bom, terminator', [
  (b'a\nb\n', b'', b'\n'),
  (b'a\r\nb\n', b'', b'\r\n'),
  (b'a\nb\r\n', b'', b'\n'),
  (b'single line', b'', b'\n'),
  (b'', b'', b'\n'),
  (b'\xef\xbb\xbfa\r\nb', b'\xef\xbb\xbf', b'\r\n'),
  (b'\r\n', b'', b'\r\n'),
])
def test_output_info(data, bom, terminator):
  assert ls.output_info(data) == (bom, terminator)


def test_borrowed_lines_strip_terminators():
  data = b'a\r\nb\n\nc\r'
  lines = list(ls.iter_borrowed_lines(data))
  assert all(isinstance(line, memoryview) for line in lines)
  assert [bytes(line) for line in lines] == [b'a', b'b', b'', b'c\r']


def test_borrowed_lines_skip_bom():
  data = ls.BOM + b'x\ny\n'
  lines = ls.iter_borrowed_lines(data, start=len(ls.BOM))
  assert [bytes(line) for line in lines] == [b'x', b'y']


def test_first_operand_keys_are_views_in_first_occurrence_order():
  lset = ls.LineSet.from_first_operand(b'xxx\nabc\nxxx\nyyy\nxxx\nabc\n', tly.Unit())
  assert set_lines(lset) == [b'xxx', b'abc', b'yyy']
  assert all(isinstance(line, memoryview) for line in lset)
  assert b'abc' in lset
  assert b'zzz' not in lset


def test_first_operand_repeats_update_tally():
  lset = ls.LineSet.from_first_operand(b'a\nb\na\na\n', tly.LineCount())
  assert set_values(lset)[b'a'] == 3
  assert set_values(lset)[b'b'] == 1


def test_borrowed_insert_outside_construction_fails():
  lset = ls.LineSet.from_first_operand(b'a\n', tly.Unit())
  with pytest.raises(AssertionError):
    lset.insert_borrowed_if_absent(memoryview(b'b'), None)


def test_upsert_inserts_owned_copies_at_the_end():
  lset = ls.LineSet.from_first_operand(b'a\nb\n', tly.LineCount())
  lset.upsert(b'c', 1, lambda v: v + 1)
  lset.upsert(b'a', 1, lambda v: v + 1)

  assert set_lines(lset) == [b'a', b'b', b'c']
  assert set_values(lset)[b'a'] == 2
  keys = list(lset)
  assert isinstance(keys[0], memoryview)
  assert type(keys[2]) is bytes


def test_update_if_present_never_grows_the_set():
  lset = ls.LineSet.from_first_operand(b'a\nb\n', tly.KeepFlag())
  assert lset.update_if_present(b'b', lambda v: False) is True
  assert lset.update_if_present(b'z', lambda v: False) is False
  assert len(lset) == 2
  assert set_values(lset)[b'b'] is False
  assert set_values(lset)[b'a'] is True


def test_insert_or_init_keeps_existing_values():
  lset = ls.LineSet(tally=tly.OperandId())
  assert lset.insert_or_init(b'a', lambda: 2) is True
  assert lset.insert_or_init(b'a', lambda: 3) is False
  assert set_values(lset)[b'a'] == 2


def test_retain_preserves_order():
  lset = ls.LineSet.from_first_operand(b'1\n2\n3\n4\n5\n6\n', tly.Unit())
  for line in (b'2', b'4', b'5'):
    lset.update_if_present(line, lambda v: True)

  removed = lset.retain(lambda v: v is True)
  assert removed == 3
  assert set_lines(lset) == [b'2', b'4', b'5']
  assert list(lset.for_each_in_order()) == [(b'2', True), (b'4', True), (b'5', True)]


def test_empty_first_operand():
  lset = ls.LineSet.from_first_operand(b'', tly.Unit())
  assert len(lset) == 0
  assert lset.bom == b''
  assert lset.terminator == b'\n'


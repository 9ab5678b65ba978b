import pytest

from py_line_sets import tally as tly


class TestLineCount:

  def test_counts_every_sighting(self):
    t = tly.LineCount()
    value = t.new(1)
    value = t.repeat(value)
    value = t.modify(value, 2)
    value = t.modify(value, 2)
    assert t.count(value) == 4

  def test_saturates_and_reports_overflow(self, monkeypatch):
    monkeypatch.setattr(tly, 'COUNT_MAX', 3)
    t = tly.LineCount()
    value = t.new(1)
    for _ in range(10):
      value = t.modify(t.repeat(value), 2)

    assert value == 3
    assert t.count(value) is None

  def test_just_below_saturation_is_numeric(self, monkeypatch):
    monkeypatch.setattr(tly, 'COUNT_MAX', 3)
    t = tly.LineCount()
    assert t.count(t.repeat(t.new(1))) == 2


class TestOperandId:

  def test_same_operand_keeps_id(self):
    t = tly.OperandId()
    value = t.new(3)
    assert t.modify(t.repeat(value), 3) == 3

  def test_collapse_is_permanent(self):
    t = tly.OperandId()
    value = t.modify(t.new(1), 2)
    assert value is None
    assert t.modify(value, 1) is None
    assert t.modify(value, 2) is None


def test_keep_flag_cleared_by_later_operands():
  t = tly.KeepFlag()
  value = t.new(tly.FIRST_OPERAND)
  assert t.repeat(value) is True
  assert t.modify(value, 2) is False
  assert t.modify(False, 3) is False


def test_color_flips_at_each_operand():
  t = tly.Color()
  first = t.new(tly.FIRST_OPERAND)
  assert t.modify(first, 2) != first
  assert t.modify(first, 3) == first
  assert tly.color_of(2) != tly.color_of(3)


def test_file_count_ignores_repeats_within_an_operand():
  t = tly.FileCount()
  value = t.new(1)
  value = t.repeat(value)
  value = t.modify(value, 2)
  value = t.modify(value, 2)
  value = t.modify(value, 4)
  assert t.count(value) == 3


def test_file_count_saturates(monkeypatch):
  monkeypatch.setattr(tly, 'COUNT_MAX', 2)
  t = tly.FileCount()
  value = t.new(1)
  for operand_id in range(2, 6):
    value = t.modify(value, operand_id)

  assert t.count(value) is None


def test_unit_has_no_state():
  t = tly.Unit()
  assert t.new(1) is None
  assert t.modify(None, 2) is None
  assert t.counting is False


def test_dual_drives_both_tallies_independently():
  t = tly.Dual(tly.OperandId(), tly.LineCount())
  assert t.counting is True

  value = t.new(1)
  value = t.repeat(value)
  value = t.modify(value, 2)
  assert t.select(value) is None
  assert t.count(value) == 3


@pytest.mark.parametrize('tally', [tly.Unit(), tly.KeepFlag(), tly.Color(), tly.OperandId()])
def test_selection_tallies_do_not_count(tally):
  assert tally.count(tally.new(1)) is None
  assert tally.counting is False


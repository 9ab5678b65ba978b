# Bookkeeping strategies for the line set operations.
#
# Every line stored in a LineSet carries a small value describing what has been
# observed about it so far. The values are plain immutable Python objects (None,
# bool, int, tuples of those), and a Tally strategy object holds the transition
# functions used to create and update them:
#
#   new(operand_id)           Value for a line first seen in operand operand_id.
#   repeat(value)             The line shows up again within the same operand.
#   modify(value, operand_id) The line shows up in a later operand.
#   select(value)             The part of the value driving retention.
#   count(value)              Number shown in the count column, None once saturated.
#
# Operand ids start at FIRST_OPERAND for the first operand.

FIRST_OPERAND = 1

# Counters saturate at this value rather than growing without bounds.
COUNT_MAX = 2**32 - 1


def saturating_add(value, n=1):
  return min(value + n, COUNT_MAX)


class Tally:

  # Only the Dual tally carries a count column, the one of its log tally.
  counting = False

  def new(self, operand_id):
    raise NotImplementedError()

  def repeat(self, value):
    return value

  def modify(self, value, operand_id):
    return value

  def select(self, value):
    return value

  def count(self, value):
    return None

  def __repr__(self):
    return f'{type(self).__name__}()'


class Unit(Tally):

  def new(self, operand_id):
    return None


class KeepFlag(Tally):
  # True while the line has been seen only in the first operand.

  def new(self, operand_id):
    return operand_id == FIRST_OPERAND

  def modify(self, value, operand_id):
    return False


def color_of(operand_id):
  return operand_id % 2 == 1


class Color(Tally):
  # The color flips at every operand, so a line carrying the color of the operand
  # being processed is known to have been seen within it.

  def new(self, operand_id):
    return color_of(operand_id)

  def modify(self, value, operand_id):
    return color_of(operand_id)


class OperandId(Tally):
  # Id of the only operand the line has been seen in, or None once two distinct
  # operands did contain it.

  def new(self, operand_id):
    return operand_id

  def modify(self, value, operand_id):
    return value if value == operand_id else None


class LineCount(Tally):

  def new(self, operand_id):
    return 1

  def repeat(self, value):
    return saturating_add(value)

  def modify(self, value, operand_id):
    return saturating_add(value)

  def count(self, value):
    return value if value < COUNT_MAX else None


class FileCount(Tally):
  # Value is (last operand id seen, number of distinct operands seen in).

  def new(self, operand_id):
    return operand_id, 1

  def modify(self, value, operand_id):
    last_id, files = value
    if last_id == operand_id:
      return value

    return operand_id, saturating_add(files)

  def select(self, value):
    return value[1]

  def count(self, value):
    files = value[1]

    return files if files < COUNT_MAX else None


class Dual(Tally):

  def __init__(self, selector, log):
    self.selector = selector
    self.log = log
    self.counting = True

  def new(self, operand_id):
    return self.selector.new(operand_id), self.log.new(operand_id)

  def repeat(self, value):
    return self.selector.repeat(value[0]), self.log.repeat(value[1])

  def modify(self, value, operand_id):
    return (self.selector.modify(value[0], operand_id),
            self.log.modify(value[1], operand_id))

  def select(self, value):
    return self.selector.select(value[0])

  def count(self, value):
    return self.log.count(value[1])

  def __repr__(self):
    return f'Dual({self.selector!r}, {self.log!r})'


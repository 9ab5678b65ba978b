"""
Pytest configuration and shared fixtures.
"""
import io
import sys
from pathlib import Path

import pytest

# Make the package importable when running from a source checkout.
sys.path.insert(0, str(Path(__file__).parent.parent))

from py_line_sets import config
from py_line_sets import line_output as lo
from py_line_sets import operations as ops


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
  monkeypatch.setattr(config, '_CONFIG', None)
  for name in config.Config.defaults().keys():
    monkeypatch.delenv(f'{config.ENV_PREFIX}{name.upper()}', raising=False)
  monkeypatch.delenv(config.CONFIG_ENV, raising=False)


@pytest.fixture
def write_files(tmp_path):
  """Writes each (bytes) content in its own file, returning the paths."""

  def write(*contents):
    paths = []
    for i, content in enumerate(contents):
      path = tmp_path / f'operand{i}.txt'
      path.write_bytes(content)
      paths.append(str(path))

    return paths

  return write


def lines_of(data):
  return data.decode('utf-8').splitlines()


def calc(op, *operands, **kwargs):
  """Runs op over in memory operands, returning the formatted output bytes.

  The first operand is passed as a buffer, the following ones as lists of lines.
  """
  first = operands[0]
  rest = [[line.encode('utf-8') for line in lines_of(operand)] for operand in operands[1:]]
  lset = ops.calculate(op, first, rest, **kwargs)

  out = io.BytesIO()
  lo.write_lines(lset, out)

  return out.getvalue()



def set_lines(lset):
  return [bytes(line) for line, _ in lset.for_each_in_order()]


def set_values(lset):
  return {bytes(line): value for line, value in lset.for_each_in_order()}

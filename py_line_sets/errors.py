
class LineSetsError(Exception):
  pass


class OperandError(LineSetsError):

  def __init__(self, path, msg=None):
    super().__init__(msg or f'Cannot read file: {path}')
    self.path = path


class OperandCountError(LineSetsError):
  pass


class ConfigError(LineSetsError):
  pass


"""
SimpleLang runtime environment
Variable table kept in first-assignment order
"""

from typing import Dict, Optional, Tuple

from error_handling import ErrorKind, InterpretError
from parsing import Token


class Environment:
  """Mapping of variable names to integers.

  Reassigning a variable updates its value in place; it keeps the position of
  its first assignment. Entries are never removed.
  """

  def __init__(self):
    self._bindings: Dict[str, int] = {}

  def get(self, name: str, token: Optional[Token] = None) -> int:
    """Value bound to name; unbound names are an UNINITIALIZED_VARIABLE error"""
    try:
      return self._bindings[name]
    except KeyError:
      raise InterpretError(ErrorKind.UNINITIALIZED_VARIABLE, token=token, name=name) from None

  def set(self, name: str, value: int) -> None:
    self._bindings[name] = value

  def snapshot(self) -> Tuple[Tuple[str, int], ...]:
    return tuple(self._bindings.items())

  def names(self) -> Tuple[str, ...]:
    return tuple(self._bindings)

  def __contains__(self, name: object) -> bool:
    return name in self._bindings

  def __len__(self) -> int:
    return len(self._bindings)


"""
Utilities module for the SimpleLang interpreter
Integer arithmetic helpers shared by the evaluator
"""

from typing import Callable, Dict, Optional
import operator


# ==================== ARITHMETIC OPERATORS ====================

BINARY_OPERATORS: Dict[str, Callable[[int, int], int]] = {
  '+': operator.add,
  '-': operator.sub,
  '*': operator.mul,
}


# ==================== FIXED-WIDTH INTEGERS ====================

def wrap_int(value: int, bits: Optional[int] = None) -> int:
  """
  Wrap an integer to a signed two's complement width

  Args:
    value: Integer to wrap
    bits: Width in bits, or None to leave the value unbounded

  Returns:
    value reduced into [-2**(bits-1), 2**(bits-1))

  Examples:
    wrap_int(2147483648, 32) -> -2147483648
    wrap_int(-1, 8) -> -1
    wrap_int(10 ** 20) -> 100000000000000000000
  """
  if bits is None:
    return value
  value &= (1 << bits) - 1
  if value >> (bits - 1):
    value -= 1 << bits
  return value


def apply_binary_op(op: str, left: int, right: int, bits: Optional[int] = None) -> int:
  """
  Apply a binary arithmetic operator

  Args:
    op: One of '+', '-', '*'
    left: Left operand
    right: Right operand
    bits: Optional wraparound width (see wrap_int)

  Returns:
    The (possibly wrapped) result

  Raises:
    ValueError if op is not an arithmetic operator
  """
  try:
    func = BINARY_OPERATORS[op]
  except KeyError:
    raise ValueError(f"Unknown binary operator: {op!r}") from None
  return wrap_int(func(left, right), bits)


def negate(value: int, bits: Optional[int] = None) -> int:
  return wrap_int(operator.neg(value), bits)

"""
SimpleLang Interpreter
Recursive descent parser fused with evaluation: every expression is
evaluated while it is parsed, every assignment is executed before the next
statement is read
"""

from typing import List, Optional, Tuple
from dataclasses import dataclass, field
import logging

from environment import Environment
from error_handling import ErrorKind, InterpretError
from parsing import SPLIT_MODES, Token, TokenCursor, TokenKind, create_tokenizer
from utilities import apply_binary_op, negate, wrap_int

logger = logging.getLogger(__name__)


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True)
class InterpreterOptions:
  """Run configuration.

  split_mode: "whitespace" (default) or "boundary", see parsing.Tokenizer
  int_bits: wrap every value to this signed width; None keeps Python ints
  filename: name used in source spans
  """
  split_mode: str = "whitespace"
  int_bits: Optional[int] = None
  filename: str = "<input>"

  def __post_init__(self):
    if self.split_mode not in SPLIT_MODES:
      raise ValueError(f"Unknown split mode: {self.split_mode!r}")
    if self.int_bits is not None and self.int_bits < 1:
      raise ValueError(f"int_bits must be positive, got {self.int_bits}")


@dataclass
class EvalContext:
  """State of one run; created fresh by every interpret() call"""
  cursor: TokenCursor
  env: Environment = field(default_factory=Environment)
  options: InterpreterOptions = field(default_factory=InterpreterOptions)
  debug: bool = False


@dataclass(frozen=True)
class InterpretResult:
  """Outcome of a run: the final bindings, or the first error.

  `environment` holds whatever was assigned before the run ended, including
  the assignments that completed before an error. Only `bindings` is meant
  to be reported.
  """
  bindings: Tuple[Tuple[str, int], ...] = ()
  error: Optional[InterpretError] = None
  environment: Tuple[Tuple[str, int], ...] = ()

  @property
  def ok(self) -> bool:
    return self.error is None

  def unwrap(self) -> List[Tuple[str, int]]:
    """Final bindings, raising the error if the run failed"""
    if self.error is not None:
      raise self.error
    return list(self.bindings)


# ============================================================================
# EVALUATION
# ============================================================================

def eval_program(ctx: EvalContext) -> None:
  """Program := (Statement)*"""
  while not ctx.cursor.at_end:
    eval_statement(ctx)


def eval_statement(ctx: EvalContext) -> None:
  """Statement := ';' | Assignment"""
  if ctx.debug:
    logger.debug("statement at %s", ctx.cursor.current.span)
  if ctx.cursor.current_is(";"):
    ctx.cursor.advance()
    return
  eval_assignment(ctx)


def eval_assignment(ctx: EvalContext) -> None:
  """Assignment := Identifier '=' Expr ';'"""
  cursor = ctx.cursor
  target = cursor.current
  if target is None or target.kind is not TokenKind.IDENTIFIER:
    raise InterpretError(ErrorKind.EXPECTED_IDENTIFIER, token=target)
  cursor.advance()

  if not cursor.current_is("="):
    raise InterpretError(ErrorKind.EXPECTED_EQUALS, token=cursor.current)
  cursor.advance()

  value = eval_expression(ctx)

  if not cursor.current_is(";"):
    raise InterpretError(ErrorKind.EXPECTED_SEMICOLON, token=cursor.current)
  cursor.advance()

  ctx.env.set(target.text, value)
  if ctx.debug:
    logger.debug("bound %s = %d", target.text, value)


def eval_expression(ctx: EvalContext) -> int:
  """Expr := Term (('+' | '-') Term)*"""
  value = eval_term(ctx)
  while ctx.cursor.current_is("+", "-"):
    op = ctx.cursor.advance().text
    value = apply_binary_op(op, value, eval_term(ctx), ctx.options.int_bits)
  return value


def eval_term(ctx: EvalContext) -> int:
  """Term := Factor ('*' Factor)*"""
  value = eval_factor(ctx)
  while ctx.cursor.current_is("*"):
    ctx.cursor.advance()
    value = apply_binary_op("*", value, eval_factor(ctx), ctx.options.int_bits)
  return value


def eval_factor(ctx: EvalContext) -> int:
  """Factor := '(' Expr ')' | '+' Factor | '-' Factor | Literal | Identifier"""
  cursor = ctx.cursor
  token = cursor.current
  if token is None:
    raise InterpretError(ErrorKind.UNEXPECTED_END_OF_INPUT)

  if token.text == "(":
    cursor.advance()
    value = eval_expression(ctx)
    if not cursor.current_is(")"):
      raise InterpretError(ErrorKind.EXPECTED_CLOSE_PAREN, token=cursor.current)
    cursor.advance()
    return value

  if token.text == "+":
    cursor.advance()
    return eval_factor(ctx)

  if token.text == "-":
    cursor.advance()
    return negate(eval_factor(ctx), ctx.options.int_bits)

  kind = token.kind
  if kind is TokenKind.LITERAL:
    cursor.advance()
    return wrap_int(token.literal_value, ctx.options.int_bits)

  if kind is TokenKind.IDENTIFIER:
    cursor.advance()
    return ctx.env.get(token.text, token=token)

  raise InterpretError(ErrorKind.UNEXPECTED_TOKEN, token=token)


# ============================================================================
# ENTRY POINTS
# ============================================================================

def interpret(program_text: str, options: Optional[InterpreterOptions] = None,
              debug: bool = False) -> InterpretResult:
  """Run a SimpleLang program from a fresh environment.

  Program errors never raise: the first one is returned in the result.
  """
  options = options or InterpreterOptions()
  tokens = create_tokenizer(options.filename, options.split_mode).tokenize(program_text)
  if debug:
    logger.debug("%d tokens from %s", len(tokens), options.filename)

  ctx = EvalContext(cursor=TokenCursor(tokens), options=options, debug=debug)
  try:
    try:
      eval_program(ctx)
    except RecursionError:
      raise InterpretError(ErrorKind.NESTING_TOO_DEEP, token=ctx.cursor.current) from None
  except InterpretError as e:
    if debug:
      logger.debug("stopped at token %d: %r", ctx.cursor.position, e)
    return InterpretResult(error=e, environment=ctx.env.snapshot())

  snapshot = ctx.env.snapshot()
  return InterpretResult(bindings=snapshot, environment=snapshot)


def run(program_text: str, options: Optional[InterpreterOptions] = None,
        debug: bool = False) -> List[Tuple[str, int]]:
  """Like interpret(), but raises the InterpretError instead of returning it"""
  return interpret(program_text, options, debug).unwrap()


class Interpreter:
  """Reusable front end holding options; keeps no state between runs"""

  def __init__(self, options: Optional[InterpreterOptions] = None, debug: bool = False):
    self.options = options or InterpreterOptions()
    self.debug = debug

  def tokenize(self, program_text: str) -> Tuple[Token, ...]:
    tokenizer = create_tokenizer(self.options.filename, self.options.split_mode)
    return tokenizer.tokenize(program_text)

  def interpret(self, program_text: str) -> InterpretResult:
    return interpret(program_text, self.options, self.debug)

  def run(self, program_text: str) -> List[Tuple[str, int]]:
    return run(program_text, self.options, self.debug)


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_interpreter(debug: bool = False, split_mode: str = "whitespace",
                       int_bits: Optional[int] = None,
                       filename: str = "<input>") -> Interpreter:
  """Factory function returning an interpreter"""
  options = InterpreterOptions(split_mode=split_mode, int_bits=int_bits, filename=filename)
  return Interpreter(options, debug=debug)


def create_debug_interpreter(**kwargs) -> Interpreter:
  """Factory function returning a debug interpreter"""
  return create_interpreter(debug=True, **kwargs)

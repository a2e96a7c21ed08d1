"""
SimpleLang - Main Entry Point
Reads a program, runs it and prints the final variable values
"""

import sys
import argparse
import logging
from typing import List, Optional, Tuple
import os

# Readline support for history
try:
  import readline
  READLINE_AVAILABLE = True
except ImportError:
  READLINE_AVAILABLE = False

from error_handling import format_interpret_error
from interpreter import create_interpreter, Interpreter
from parsing import pretty_print_tokens

VERSION = "SimpleLang v1.0.0"
PROMPT = "Enter your program (end with empty line):"
RESULT_HEADER = "Final variable values:"


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='simplelang',
      description='SimpleLang - integer assignment language interpreter',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s                        # Type a program, end it with an empty line
  %(prog)s program.sl             # Run a program file
  %(prog)s - < program.sl         # Read the program from stdin
  %(prog)s --tokens program.sl    # Show the token stream
  %(prog)s --int-bits 32 prog.sl  # 32-bit wraparound arithmetic
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help="program file to run ('-' reads stdin)"
  )

  parser.add_argument(
      '--tokens',
      action='store_true',
      help='Tokenize the program and show the tokens instead of running it'
  )

  parser.add_argument(
      '--boundary-split',
      action='store_const',
      const='boundary',
      default='whitespace',
      dest='split_mode',
      help='Also split tokens around operators and punctuation (accepts x=5;)'
  )

  parser.add_argument(
      '--int-bits',
      type=int,
      default=None,
      metavar='N',
      help='Wrap all values to N-bit two\'s complement integers'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


def setup_logging(debug: bool) -> None:
  if debug:
    logging.basicConfig(
        level=logging.DEBUG,
        stream=sys.stderr,
        format="DEBUG: %(name)s: %(message)s"
    )


def setup_readline() -> None:
  """Setup readline history for console input"""
  if not READLINE_AVAILABLE:
    return

  history_file = os.path.expanduser("~/.simplelang_history")
  try:
    readline.read_history_file(history_file)
  except OSError:
    pass  # First time, no history yet, or permission denied

  readline.set_history_length(1000)

  import atexit
  atexit.register(save_history, history_file)


def save_history(history_file: str) -> None:
  try:
    readline.write_history_file(history_file)
  except OSError:
    pass


def read_program_from_console() -> str:
  """Read lines until the first empty line (or end of input)"""
  print(PROMPT)
  lines = []
  while True:
    try:
      line = input()
    except EOFError:
      break
    if not line:
      break
    lines.append(line + "\n")
  return ''.join(lines)


def read_program_file(script_path: str) -> str:
  if script_path == '-':
    return sys.stdin.read()
  with open(script_path, 'r', encoding='utf-8') as f:
    return f.read()


def print_final_values(bindings: List[Tuple[str, int]]) -> None:
  print()
  print(RESULT_HEADER)
  for name, value in bindings:
    print(f"{name} = {value}")


def run_program(program_text: str, interpreter: Interpreter, show_tokens: bool = False,
                debug: bool = False) -> int:
  """Run program text and print the outcome; returns the exit status"""
  if show_tokens:
    tokens = interpreter.tokenize(program_text)
    print(f"{len(tokens)} tokens:")
    if tokens:
      print(pretty_print_tokens(tokens))
    return 0

  result = interpreter.interpret(program_text)
  if not result.ok:
    if debug:
      print(format_interpret_error(result.error, program_text), end='', file=sys.stderr)
    else:
      print(f"Error: {result.error.message}", file=sys.stderr)
    return 1

  print_final_values(result.bindings)
  return 0


def load_program(script: Optional[str]) -> str:
  """Program text from a file, stdin, or the console"""
  if script is None:
    setup_readline()
    return read_program_from_console()
  return read_program_file(script)


def main(argv: Optional[List[str]] = None) -> None:
  """Main entry point for SimpleLang"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)

  if args.int_bits is not None and args.int_bits < 1:
    arg_parser.error("--int-bits must be a positive integer")

  setup_logging(args.debug)

  filename = args.script if args.script not in (None, '-') else "<stdin>"
  interpreter = create_interpreter(
      debug=args.debug,
      split_mode=args.split_mode,
      int_bits=args.int_bits,
      filename=filename
  )

  script_path = args.script
  try:
    program_text = load_program(script_path)
  except FileNotFoundError:
    print(f"Error: Script file '{script_path}' not found", file=sys.stderr)
    print("  Hint: Check the file path and make sure the file exists", file=sys.stderr)
    sys.exit(1)
  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'", file=sys.stderr)
    print("  Hint: Make sure you have read permissions for this file", file=sys.stderr)
    sys.exit(1)
  except UnicodeDecodeError as e:
    print(f"Error: Cannot decode file '{script_path}': {e}", file=sys.stderr)
    print("  Hint: Make sure the file is a text file with UTF-8 encoding", file=sys.stderr)
    sys.exit(1)
  except KeyboardInterrupt:
    print(file=sys.stderr)
    sys.exit(130)

  try:
    status = run_program(program_text, interpreter, show_tokens=args.tokens, debug=args.debug)
  except Exception as e:
    print(f"Unexpected error: {e}", file=sys.stderr)
    if args.debug:
      import traceback
      traceback.print_exc()
    sys.exit(1)

  sys.exit(status)


if __name__ == "__main__":
  main()

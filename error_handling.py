"""
Error handling for the SimpleLang interpreter
One flat set of error kinds; the first error raised ends the run
"""

from typing import Dict, List, Optional
import enum

from parsing import SourceSpan, Token


# ============================================================================
# ERROR KINDS
# ============================================================================

class ErrorKind(enum.Enum):
    EXPECTED_IDENTIFIER = "Expected identifier at the beginning of assignment"
    EXPECTED_EQUALS = "Expected '=' after identifier"
    EXPECTED_SEMICOLON = "Expected ';' at the end of assignment"
    EXPECTED_CLOSE_PAREN = "Expected ')'"
    UNEXPECTED_END_OF_INPUT = "Unexpected end of input in expression"
    UNEXPECTED_TOKEN = "Unexpected token: {token}"
    UNINITIALIZED_VARIABLE = "Uninitialized variable: {token}"
    NESTING_TOO_DEEP = "Expression nested too deeply"


class InterpretError(Exception):
    """The single error reported for a SimpleLang run"""

    def __init__(self, kind: ErrorKind, token: Optional[Token] = None, name: Optional[str] = None):
        self.kind = kind
        self.token = token.text if token is not None else name
        self.span: Optional[SourceSpan] = token.span if token is not None else None
        self.message = kind.value.format(token=self.token)
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"InterpretError({self.kind.name}, {self.token!r})"


# ============================================================================
# REPORTING
# ============================================================================

def make_error_report(error: InterpretError, source_text: Optional[str] = None) -> Dict:
    """Collect everything known about an error into a plain dict"""
    span = error.span
    context = None
    if span is not None and source_text is not None:
        context = get_context_lines(source_text, span.line, span.column)

    return {
        'kind': error.kind.name,
        'message': error.message,
        'location': str(span) if span else None,
        'line': span.line if span else None,
        'column': span.column if span else None,
        'got': error.token,
        'context': context,
    }


def format_error_report(report: Dict) -> str:
    """Format an error report as text"""
    error_msg = f"Error: {report['message']}\n"

    if report['location']:
        error_msg += f"  Location: {report['location']}\n"

    if report['got'] is not None:
        error_msg += f"  Got: '{report['got']}'\n"

    if report['context']:
        error_msg += f"  Context:\n{report['context']}\n"

    return error_msg


def format_interpret_error(error: InterpretError, source_text: Optional[str] = None) -> str:
    return format_error_report(make_error_report(error, source_text))


def get_context_lines(source_text: str, line_num: int, col_num: int, context_lines: int = 2) -> str:
    """Get context lines around the error"""
    lines = source_text.split('\n')
    start_line = max(0, line_num - context_lines - 1)
    end_line = min(len(lines), line_num + context_lines)

    context_parts: List[str] = []
    for i in range(start_line, end_line):
        line_prefix = f"{i+1:4d}: "
        context_parts.append(f"{line_prefix}{lines[i]}")
        if i == line_num - 1:
            context_parts.append(f"{'':6}{' ' * (col_num - 1)}^ Error here")

    return '\n'.join(context_parts)

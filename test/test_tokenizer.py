"""
Tokenizer tests for SimpleLang
Comment stripping, whitespace splitting, classification and spans
"""

import pytest
from parsing import (
  Token, TokenCursor, TokenKind, Tokenizer, classify, create_boundary_tokenizer, strip_comments
)


def texts(tokens):
  return [t.text for t in tokens]


class TestClassification:
  """Token kinds are derived from the token text"""

  @pytest.mark.parametrize("text", ["x", "abc", "x1", "Total2go", "é"])
  def test_identifiers(self, text):
    assert classify(text) is TokenKind.IDENTIFIER

  @pytest.mark.parametrize("text", ["@", "1", "42", "100", "907"])
  def test_literals(self, text):
    assert classify(text) is TokenKind.LITERAL

  @pytest.mark.parametrize("text", ["=", "+", "-", "*"])
  def test_operators(self, text):
    assert classify(text) is TokenKind.OPERATOR

  @pytest.mark.parametrize("text", ["(", ")", ";"])
  def test_punctuation(self, text):
    assert classify(text) is TokenKind.PUNCTUATION

  @pytest.mark.parametrize("text", ["0", "007", "1x", "x=5;", "a_b", "@@", "/", "x;", "²", "a½", "Ⅳ"])
  def test_unknown(self, text):
    assert classify(text) is TokenKind.UNKNOWN

  def test_literal_value(self):
    assert Token("@").literal_value == 0
    assert Token("120").literal_value == 120

  def test_literal_value_of_non_literal(self):
    with pytest.raises(ValueError):
      Token("x").literal_value

  def test_token_is_immutable(self):
    token = Token("x")
    with pytest.raises(AttributeError):
      token.text = "y"


class TestCommentStripping:

  def test_line_comment(self):
    stripped, _ = strip_comments("x = 1 ; // trailing\ny = 2 ;")
    assert stripped == "x = 1 ; \ny = 2 ;"

  def test_block_comment_is_non_greedy(self):
    stripped, _ = strip_comments("a /* one */ b /* two */ c")
    assert stripped == "a  b  c"

  @pytest.mark.parametrize("newline", ["\n", "\r", "\x85", "\u2028", "\u2029"])
  def test_block_comment_stops_at_line_terminator(self, newline):
    text = f"a /* one{newline}two */ b"
    stripped, _ = strip_comments(text)
    assert stripped == text

  @pytest.mark.parametrize("newline", ["\n", "\r", "\x85", "\u2028", "\u2029"])
  def test_line_comment_ends_at_line_terminator(self, newline):
    stripped, _ = strip_comments(f"a // c{newline}b")
    assert stripped == f"a {newline}b"

  def test_comment_removed_without_replacement(self):
    stripped, _ = strip_comments("a/*c*/b")
    assert stripped == "ab"

  def test_line_comment_wins_at_same_position(self):
    stripped, _ = strip_comments("a //* not a block */\nb")
    assert stripped == "a \nb"

  def test_unterminated_block_comment_is_kept(self):
    stripped, _ = strip_comments("a /* b")
    assert stripped == "a /* b"

  def test_offsets_map_back_to_original(self):
    text = "a/*c*/b"
    stripped, origin = strip_comments(text)
    assert [text[i] for i in origin] == list(stripped)
    assert origin == [0, 6]


class TestWhitespaceTokenizer:

  def test_simple_assignment(self, tokenizer):
    tokens = tokenizer.tokenize("x = 1 + 2 ;")
    assert texts(tokens) == ["x", "=", "1", "+", "2", ";"]

  def test_glued_operators_stay_one_token(self, tokenizer):
    tokens = tokenizer.tokenize("x=5;")
    assert texts(tokens) == ["x=5;"]
    assert tokens[0].kind is TokenKind.UNKNOWN

  def test_empty_and_blank_input(self, tokenizer):
    assert tokenizer.tokenize("") == ()
    assert tokenizer.tokenize(" \t\n\n  ") == ()

  def test_comments_are_ignored(self, tokenizer):
    program = "// header\nx = 1 ; /* note */ y = x ;\n"
    assert texts(tokenizer.tokenize(program)) == ["x", "=", "1", ";", "y", "=", "x", ";"]

  def test_comment_joins_fragments(self, tokenizer):
    assert texts(tokenizer.tokenize("ab/**/cd = 1 ;"))[0] == "abcd"

  def test_returns_tuple(self, tokenizer):
    assert isinstance(tokenizer.tokenize("x = 1 ;"), tuple)

  def test_spans(self):
    tokens = Tokenizer("prog.sl").tokenize("x = 1 ;\n  y = x ;")
    y = tokens[4]
    assert y.text == "y"
    assert (y.span.line, y.span.column) == (2, 3)
    assert str(y.span) == "prog.sl:2:3"

  def test_spans_after_comments(self, tokenizer):
    tokens = tokenizer.tokenize("/* one */\n// two\n  /**/x = 1 ;")
    assert (tokens[0].span.line, tokens[0].span.column) == (3, 7)

  def test_multiline_block_comment_leaves_tokens(self, tokenizer):
    tokens = tokenizer.tokenize("x = 1 ; /* a\nb */ y = 2 ;")
    assert texts(tokens)[4:7] == ["/*", "a", "b"]

  def test_tabs_do_not_shift_columns(self, tokenizer):
    tokens = tokenizer.tokenize("\tx\t=\t1 ;")
    assert [t.span.column for t in tokens] == [2, 4, 6, 8]

  def test_unknown_split_mode(self):
    with pytest.raises(ValueError):
      Tokenizer(split_mode="regex")


class TestBoundaryTokenizer:

  @pytest.fixture
  def tokenizer(self):
    return create_boundary_tokenizer()

  def test_splits_glued_operators(self, tokenizer):
    assert texts(tokenizer.tokenize("x=5;")) == ["x", "=", "5", ";"]

  def test_splits_parentheses_and_unary(self, tokenizer):
    assert texts(tokenizer.tokenize("y=-(x*2)+1;")) == [
      "y", "=", "-", "(", "x", "*", "2", ")", "+", "1", ";"
    ]

  def test_keeps_whitespace_separation(self, tokenizer):
    assert texts(tokenizer.tokenize("a b")) == ["a", "b"]

  def test_spans(self, tokenizer):
    tokens = tokenizer.tokenize("x=5;\nyy=x;")
    assert [(t.span.line, t.span.column) for t in tokens[4:]] == [
      (2, 1), (2, 3), (2, 4), (2, 5)
    ]


class TestTokenCursor:

  def test_walks_forward(self, tokenizer):
    cursor = TokenCursor(tokenizer.tokenize("a = 1 ;"))
    assert cursor.current.text == "a"
    assert cursor.peek().text == "="
    assert cursor.advance().text == "a"
    assert cursor.position == 1
    assert cursor.current_is("=", ";")

  def test_end_of_input(self):
    cursor = TokenCursor((Token(";"),))
    cursor.advance()
    assert cursor.at_end
    assert cursor.current is None
    assert cursor.peek() is None
    assert not cursor.current_is(";")

"""
minilang Lexer - turns source text into tokens, one token per call.

The scanning position is an explicit LexerState value rather than hidden
global state, so scanning is repeatable: restoring a saved state and
scanning again yields the same token. The parser relies on this for its
single two-token lookahead.
"""

from typing import List, Tuple
from dataclasses import dataclass

from .tokens import (
    Token, TokenType, SourceLocation, LexErrorKind, KEYWORDS, OPERATORS,
    MAX_LEXEME_LENGTH
)


@dataclass(frozen=True)
class LexerState:
    """
    Cursor into the source: character offset plus line/column, and the
    position just past the most recent token (where EOF is reported).
    """
    pos: int = 0
    line: int = 1
    column: int = 1
    end_pos: int = 0
    end_line: int = 1
    end_column: int = 1


class Lexer:
    """
    minilang lexical analyzer.

    Skips whitespace and ``/* ... */`` block comments, then classifies
    numbers, identifiers/keywords, operators and delimiters. Unrecognized
    characters come back as ERROR tokens carrying a LexErrorKind; the lexer
    itself never raises.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.restore(LexerState())

    def reset(self):
        """Rewind to the start of the source."""
        self.restore(LexerState())

    def save(self) -> LexerState:
        """Snapshot the current scanning position."""
        return LexerState(self.pos, self.line, self.column,
                          self.end_pos, self.end_line, self.end_column)

    def restore(self, state: LexerState):
        """Resume scanning from a previously saved position."""
        self.pos = state.pos
        self.line = state.line
        self.column = state.column
        self.end_pos = state.end_pos
        self.end_line = state.end_line
        self.end_column = state.end_column

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code from the beginning.

        Returns:
            List of tokens including error tokens and the final EOF token
        """
        self.reset()
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def next_token(self) -> Token:
        """Scan and return the next token, advancing past its lexeme."""
        self._skip_whitespace_and_comments()

        # EOF sits just past the last token, before trailing whitespace and comments
        if self.pos >= len(self.source):
            location = SourceLocation(self.filename, self.end_line, self.end_column, self.end_pos)
            return Token(TokenType.EOF, "EOF", None, location)

        token = self._scan_token(self._location())
        self.end_pos, self.end_line, self.end_column = self.pos, self.line, self.column
        return token

    def _scan_token(self, location: SourceLocation) -> Token:
        """Classify and consume the token starting at the current position."""
        current_char = self.source[self.pos]

        if current_char.isdigit():
            return self._tokenize_number(location)

        if self._is_identifier_start(current_char):
            return self._tokenize_identifier_or_keyword(location)

        # Operators and delimiters (two-character lexemes first)
        for op_len in (2, 1):
            potential_op = self.source[self.pos:self.pos + op_len]
            if len(potential_op) == op_len and potential_op in OPERATORS:
                self._advance_by(op_len)
                return Token(OPERATORS[potential_op], potential_op, None, location)

        self._advance()
        return Token(TokenType.ERROR, current_char, None, location,
                     error=LexErrorKind.INVALID_CHARACTER)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        """Tokenize a run of decimal digits."""
        start_pos = self.pos
        while (self.pos < len(self.source) and self.source[self.pos].isdigit()
               and self.pos - start_pos < MAX_LEXEME_LENGTH):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.NUMBER, lexeme, int(lexeme), location)

    def _tokenize_identifier_or_keyword(self, location: SourceLocation) -> Token:
        """Tokenize an identifier or keyword."""
        start_pos = self.pos

        # First character is already validated as identifier start
        self._advance()

        while (self.pos < len(self.source) and self._is_identifier_continue(self.source[self.pos])
               and self.pos - start_pos < MAX_LEXEME_LENGTH):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        value = lexeme if token_type == TokenType.IDENTIFIER else None

        return Token(token_type, lexeme, value, location)

    @staticmethod
    def _is_identifier_start(char: str) -> bool:
        """Check if character can start an identifier (ASCII letters and '_')."""
        return char.isascii() and (char.isalpha() or char == '_')

    @staticmethod
    def _is_identifier_continue(char: str) -> bool:
        """Check if character can continue an identifier."""
        return char.isascii() and (char.isalnum() or char == '_')

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and block comments."""
        while self.pos < len(self.source):
            if self.source[self.pos] in ' \t\r\n':
                self._advance()
                continue

            # Block comments /* */; an unterminated comment runs to end of input
            if self.source.startswith('/*', self.pos):
                self._advance_by(2)
                while self.pos < len(self.source) and not self.source.startswith('*/', self.pos):
                    self._advance()
                self._advance_by(2)
                continue

            break

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()


def get_next_token(source: str, state: LexerState,
                   filename: str = "<string>") -> Tuple[Token, LexerState]:
    """
    Scan one token starting at ``state``.

    Pure with respect to its arguments: the same (source, state) pair always
    yields the same token and successor state.

    Returns:
        The token and the state just past its lexeme
    """
    lexer = Lexer(source, filename)
    lexer.restore(state)
    token = lexer.next_token()
    return token, lexer.save()


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens, ending with EOF
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)

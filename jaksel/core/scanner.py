"""Lexical analysis for the Jaksel language. Turns raw source text into a flat list of Tokens.

Statements are newline-terminated, so unlike most whitespace a newline is a token of its own. Invalid input never stops
the scan: errors are handed to the error handler and scanning carries on with the next character.
"""

from jaksel.core.token import KEYWORDS, Token, TokenType


SINGLE_CHARS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
}

# char: (kind without trailing '=', kind with trailing '=')
ONE_OR_TWO_CHARS = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

QUOTES = "\"'"
WHITESPACE = " \r\t"


class Scanner:
    """Single-pass scanner over one source string."""

    def __init__(self, source, error_handler):
        self.source = source
        self.error_handler = error_handler
        self.tokens = []

        self._start = 0       # index of the first char of the lexeme being scanned
        self._current = 0     # index of the char about to be consumed
        self._line = 1
        self._line_start = 0  # index of the first char of the current line

        self._start_line = 1
        self._start_column = 1

    def scan(self):
        """Scans the whole source. Always returns a list ending in exactly one EOF token."""
        while not self._is_at_end():
            self._start = self._current
            self._start_line = self._line
            self._start_column = self._column()
            self._scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self._line, self._column()))
        return self.tokens

    def _scan_token(self):
        char = self._advance()

        if char in SINGLE_CHARS:
            self._add_token(SINGLE_CHARS[char])

        elif char in ONE_OR_TWO_CHARS:
            single, double = ONE_OR_TWO_CHARS[char]
            self._add_token(double if self._match("=") else single)

        elif char == "#":
            while self._peek() != "\n" and not self._is_at_end():
                self._advance()

        elif char in WHITESPACE:
            pass

        elif char == "\n":
            self._add_token(TokenType.NEWLINE)
            self._newline()

        elif char in QUOTES:
            self._string(char)

        elif self._is_digit(char):
            self._number()

        elif self._is_alpha(char):
            self._identifier()

        else:
            self.error_handler.lex_error(self._start_line, self._start_column, "Unexpected character.")

    def _string(self, quote):
        while self._peek() != quote and not self._is_at_end():
            if self._advance() == "\n":
                self._newline()

        if self._is_at_end():
            self.error_handler.lex_error(self._start_line, self._start_column, "Unterminated string.")
            return

        self._advance()  # closing quote
        self._add_token(TokenType.STRING, self.source[self._start + 1:self._current - 1])

    def _number(self):
        while self._is_digit(self._peek()):
            self._advance()

        # fractional part needs at least one digit after the '.'
        if self._peek() == "." and self._is_digit(self._peek_next()):
            self._advance()
            while self._is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self.source[self._start:self._current]))

    def _identifier(self):
        while self._is_alpha(self._peek()) or self._is_digit(self._peek()):
            self._advance()

        text = self.source[self._start:self._current]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def _add_token(self, kind, literal=None):
        lexeme = self.source[self._start:self._current]
        self.tokens.append(Token(kind, lexeme, literal, self._start_line, self._start_column))

    def _newline(self):
        self._line += 1
        self._line_start = self._current

    def _column(self):
        return self._current - self._line_start + 1

    def _advance(self):
        char = self.source[self._current]
        self._current += 1
        return char

    def _match(self, expected):
        if self._is_at_end() or self.source[self._current] != expected:
            return False
        self._current += 1
        return True

    def _peek(self):
        if self._is_at_end():
            return "\0"
        return self.source[self._current]

    def _peek_next(self):
        if self._current + 1 >= len(self.source):
            return "\0"
        return self.source[self._current + 1]

    def _is_at_end(self):
        return self._current >= len(self.source)

    @staticmethod
    def _is_digit(char):
        return "0" <= char <= "9"

    @staticmethod
    def _is_alpha(char):
        return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"

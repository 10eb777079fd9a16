"""Lexical units of the Jaksel language: token kinds, the Token record and the reserved word table."""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Every lexical category the scanner can produce."""

    # single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SLASH = auto()
    STAR = auto()
    PERCENT = auto()
    NEWLINE = auto()

    # one or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # keywords
    TRUE = auto()
    FALSE = auto()
    NIL = auto()
    SPILL = auto()
    LITERALLY = auto()
    ITU = auto()
    KALO = auto()
    PERHAPS = auto()
    KALOGAK = auto()
    UDAHAN = auto()

    # reserved, not part of the grammar yet
    FOMO = auto()
    ENDUP = auto()
    THATS = auto()
    IT = auto()
    SIH = auto()
    SERIOUSLY = auto()
    WHICHIS = auto()
    SO = auto()
    ABOUT = auto()
    OVERTHINKING = auto()
    CALL = auto()

    EOF = auto()


KEYWORDS = {
    "ril": TokenType.TRUE,
    "impossible": TokenType.FALSE,
    "hampa": TokenType.NIL,
    "spill": TokenType.SPILL,
    "literally": TokenType.LITERALLY,
    "itu": TokenType.ITU,
    "kalo": TokenType.KALO,
    "perhaps": TokenType.PERHAPS,
    "kalogak": TokenType.KALOGAK,
    "udahan": TokenType.UDAHAN,

    "fomo": TokenType.FOMO,
    "endup": TokenType.ENDUP,
    "thats": TokenType.THATS,
    "it": TokenType.IT,
    "sih": TokenType.SIH,
    "seriously": TokenType.SERIOUSLY,
    "whichis": TokenType.WHICHIS,
    "so": TokenType.SO,
    "about": TokenType.ABOUT,
    "overthinking": TokenType.OVERTHINKING,
    "call": TokenType.CALL,
}


@dataclass(frozen=True)
class Token:
    """One lexical unit. line and column are 1-based and point at the first character of lexeme."""
    type: TokenType
    lexeme: str
    literal: object
    line: int
    column: int

    def __str__(self):
        lexeme = self.lexeme.replace("\n", "\\n")
        return f"{self.type.name} {lexeme} {self.literal}"

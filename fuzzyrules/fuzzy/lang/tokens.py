from enum import Enum
from typing import Dict, Optional


class Token(Enum):
    START = "start"
    IF = "if"
    IS = "is"
    THEN = "then"
    AND = "and"
    OR = "or"
    LEFT_PAR = "("
    RIGHT_PAR = ")"
    IDENT = "ident"
    END = "end"

    def __str__(self) -> str:
        # postfix stacks and error messages use the upper-case name ("IS", "AND", ...)
        return self.name


KEYWORDS: Dict[str, Token] = {
    "if": Token.IF,
    "is": Token.IS,
    "then": Token.THEN,
    "and": Token.AND,
    "or": Token.OR,
}


def keyword(word: str) -> Optional[Token]:
    """Keyword token for word (case-insensitive), None for identifiers."""
    return KEYWORDS.get(word.lower())

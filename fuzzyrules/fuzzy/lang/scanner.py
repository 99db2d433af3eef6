"""
Lexical scanner for rule text.

States:
  STARTING  first call yields START without consuming input
  SCANNING  skips spaces, yields ( ) keywords and identifiers, END at end of text
  FINISH    no more tokens; further calls re-yield END

Identifier text is not carried by the tokens; it is appended to ``identifiers``
and the two most recent ones are kept for the 'LV is LT' pattern.
"""

from __future__ import annotations
import string
from collections import deque
from enum import Enum
from typing import Callable, Deque, Dict, List

from ..core.types import IllegalNameError
from .tokens import Token, keyword

_SP = " "
_STX = "\x02"  # start of text
_ETX = "\x03"  # end of text
_LETTERS = frozenset(string.ascii_lowercase)
_DIGITS = frozenset(string.digits)


class ScannerState(Enum):
    STARTING = "starting"
    SCANNING = "scanning"
    FINISH = "finish"


class RuleScanner:
    def __init__(self, text: str) -> None:
        self._text = text.strip().lower()
        self._index = 0
        self._ch = _STX
        self.state = ScannerState.STARTING
        self.identifiers: List[str] = []
        self._recent: Deque[str] = deque(maxlen=2)
        self._dispatch: Dict[ScannerState, Callable[[], Token]] = {
            ScannerState.STARTING: self._starting,
            ScannerState.SCANNING: self._scanning,
            ScannerState.FINISH: self._finish,
        }

    # ---------- API ----------

    def next_token(self) -> Token:
        return self._dispatch[self.state]()

    def has_more_tokens(self) -> bool:
        return self.state is not ScannerState.FINISH

    @property
    def identifier(self) -> str:
        """Most recently scanned identifier."""
        return self._recent[-1]

    @property
    def last_identifier(self) -> str:
        """Identifier scanned before the most recent one."""
        return self._recent[0]

    @property
    def index(self) -> int:
        return self._index

    # ---------- states ----------

    def _starting(self) -> Token:
        self._next_char()
        self.state = ScannerState.SCANNING
        return Token.START

    def _scanning(self) -> Token:
        while self._ch == _SP:
            self._next_char()

        if self._ch == "(":
            self._next_char()
            return Token.LEFT_PAR
        if self._ch == ")":
            self._next_char()
            return Token.RIGHT_PAR
        if self._ch == _ETX:
            self.state = ScannerState.FINISH
            return Token.END
        return self._read_identifier()

    def _finish(self) -> Token:
        return Token.END

    # ---------- helpers ----------

    def _next_char(self) -> None:
        if self._index < len(self._text):
            self._ch = self._text[self._index]
            self._index += 1
        else:
            self._ch = _ETX

    def _read_identifier(self) -> Token:
        if self._ch not in _LETTERS:
            raise IllegalNameError(self._index)
        chars = [self._ch]
        self._next_char()
        while self._ch in _LETTERS or self._ch in _DIGITS:
            chars.append(self._ch)
            self._next_char()

        word = "".join(chars)
        key = keyword(word)
        if key is not None:
            return key
        self.identifiers.append(word)
        self._recent.append(word)
        return Token.IDENT

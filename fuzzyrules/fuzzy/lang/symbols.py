from __future__ import annotations
from typing import TYPE_CHECKING, Dict, Iterator, Optional, Tuple

from ..core.types import FuzzyEngineError

if TYPE_CHECKING:
    from ..model.variable import LinguisticVariable


class SymbolTable:
    """
    Registry of linguistic variables by lower-case name.
    Built once, then frozen; parsing and evaluation only read it.
    """

    def __init__(self) -> None:
        self._symbols: Dict[str, "LinguisticVariable"] = {}
        self._frozen = False

    def register(self, lv: "LinguisticVariable") -> bool:
        """Register lv; False (and no change) if the name is taken."""
        if self._frozen:
            raise FuzzyEngineError(
                f"Cannot register linguistic variable \"{lv.name}\" because the symbol table is frozen.")
        key = lv.name.lower()
        if key in self._symbols:
            return False
        self._symbols[key] = lv
        return True

    def freeze(self) -> "SymbolTable":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def validate_lv(self, name: str) -> bool:
        return name.lower() in self._symbols

    def validate_lt(self, lv_name: str, lt_name: str) -> bool:
        lv = self._symbols.get(lv_name.lower())
        return lv is not None and lv.contains_term(lt_name)

    def get(self, name: str) -> Optional["LinguisticVariable"]:
        return self._symbols.get(name.lower())

    @property
    def variables(self) -> Tuple["LinguisticVariable", ...]:
        return tuple(self._symbols.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.validate_lv(name)

    def __iter__(self) -> Iterator["LinguisticVariable"]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self._symbols)

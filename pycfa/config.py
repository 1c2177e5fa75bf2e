#!/usr/bin/env python3

from dataclasses import dataclass, replace
from typing import Optional

EPSILON = "ε"
END_MARKER = "$"

@dataclass(frozen=True)
class GrammarConfig:
    """Lexical markers of the rule format.

    ``nonTermPattern`` is the spelling of a non-terminal; body symbols that
    match it but are never defined are reported as undefined.  Set it to
    ``None`` to turn that diagnostic off.
    """
    arrow:          str           = "->"
    separator:      str           = "|"
    epsilon:        str           = EPSILON
    endMarker:      str           = END_MARKER
    nonTermPattern: Optional[str] = r"[A-Z]\w*"

    def __post_init__(self):
        if not self.arrow.strip() or not self.separator.strip():
            raise ValueError("Rule arrow and alternative separator must not be blank")
        if self.epsilon == self.endMarker:
            raise ValueError("Epsilon and end-of-input markers must differ")

    def replace(self, **changes) -> "GrammarConfig":
        return replace(self, **changes)

DEFAULT_CONFIG = GrammarConfig()

#!/usr/bin/env python3

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeVar, Callable
from copy import deepcopy

from .config import EPSILON

T = TypeVar('T')
G = TypeVar('G')

log = logging.getLogger(__name__)

# Grammar Representation
# ######################

# symbols are plain strings; whether one is a terminal is decided by the
# grammar at lookup time
Symbol = str
Word   = tuple[Symbol, ...]

@dataclass(frozen=True)
class Rule:
    lhs: Symbol
    rhs: Word

    def __repr__(self):
        return self.lhs + " -> " + (" ".join(self.rhs) if self.rhs else EPSILON)

    def __len__(self):
        return len(self.rhs)

@dataclass(frozen=True)
class Grammar:
    start: Symbol
    ruleDict: Mapping[Symbol, tuple[Word, ...]]
    epsilon: Symbol = field(default=EPSILON, compare=False)

    def __post_init__(self):
        if self.start not in self.ruleDict:
            raise ValueError(f"Start symbol '{self.start}' has no rules")
        if any(len(alts) == 0 for alts in self.ruleDict.values()):
            raise ValueError("Every non-terminal must have at least one production")
        if self.epsilon in self.ruleDict:
            raise ValueError(f"Epsilon marker '{self.epsilon}' cannot be a non-terminal")
        # an epsilon production is stored as the empty word
        frozen = { n : tuple(tuple(s for s in alt if s != self.epsilon) for alt in alts)
                   for n, alts in self.ruleDict.items() }
        object.__setattr__(self, 'ruleDict', MappingProxyType(frozen))

    def __repr__(self):
        res = f"Grammar(\n  start = {self.start},\n"
        for rule in self.iterRules():
            res += "  " + repr(rule) + "\n"
        res += ")"
        return res

    def __hash__(self):
        return hash((self.start, tuple(self.ruleDict.items())))

    def keys(self):
        return self.ruleDict.keys()

    def items(self):
        return self.ruleDict.items()

    def rules(self):
        return self.ruleDict.items()

    def iterRules(self) -> Iterator[Rule]:
        for n, alts in self.ruleDict.items():
            for alt in alts:
                yield Rule(n, alt)

    def __getitem__(self, nonterm):
        if not isinstance(nonterm, str):
            raise ValueError("Grammar rule lookup must use a symbol name")
        return self.ruleDict.get(nonterm, ())

    @property
    def nonterms(self) -> Word:
        return tuple(self.ruleDict)

    @property
    def terms(self) -> Word:
        # discovery order; derived from the rules on every call
        seen = {}
        for alts in self.ruleDict.values():
            for alt in alts:
                for sym in alt:
                    if not self.isNonTerm(sym) and not self.isEpsilon(sym):
                        seen.setdefault(sym)
        return tuple(seen)

    def isNonTerm(self, s: Symbol) -> bool:
        return s in self.ruleDict

    def isEpsilon(self, s: Symbol) -> bool:
        return s == self.epsilon

    def isTerm(self, s: Symbol) -> bool:
        return not self.isNonTerm(s) and not self.isEpsilon(s)

# utility functions
# #################

def tableSize(table: Mapping[Symbol, set]) -> int:
    return sum(len(s) for s in table.values())

def closure(f: Callable[[T, G], T], measure: Callable[[T], int] = len, name: str = "closure") -> Callable[[T, G], T]:
    """Lift a one-pass update ``f`` into its least fixpoint.

    ``f`` may only grow its argument, so ``measure`` is non-decreasing and
    bounded; iteration stops at the first pass that adds nothing.
    """

    def closure_f(s: T, g: G) -> T:
       s = deepcopy(s)
       size, newsize = -1, measure(s)
       passes = 0
       while size < newsize:
           size = newsize
           s = f(s,g)
           newsize = measure(s)
           passes += 1
       log.debug("%s: fixpoint after %d passes (size %d)", name, passes, newsize)
       return s

    return closure_f

def freeze(table: Mapping[Symbol, set]) -> Mapping[Symbol, frozenset]:
    return MappingProxyType({ k : frozenset(v) for k, v in table.items() })

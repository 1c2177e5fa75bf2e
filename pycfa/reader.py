#!/usr/bin/env python3

import logging
import re
import warnings
from collections.abc import Iterable
from typing import Optional, Union

from .config import GrammarConfig, DEFAULT_CONFIG
from .errors import MalformedRule, EmptyGrammar, UndefinedSymbolWarning
from .grammar import Symbol, Word, Rule, Grammar

log = logging.getLogger(__name__)

# rule text parsing
# #################

def _rulePattern(config: GrammarConfig):
    return re.compile(rf"^\s*(\w+)\s*{re.escape(config.arrow)}\s*(.*?)\s*$")

def parseAlternative(text: str, config: GrammarConfig = DEFAULT_CONFIG) -> Word:
    # epsilon markers only matter when nothing else is left
    return tuple(sym for sym in text.split() if sym != config.epsilon)

def parseRule(line: str, config: GrammarConfig = DEFAULT_CONFIG, lineno: Optional[int] = None) -> list[Rule]:
    """Split one ``N -> a b | c | ε`` line into its alternatives."""
    match = _rulePattern(config).match(line)
    if match is None:
        raise MalformedRule(line, lineno)
    lhs, body = match.groups()
    if lhs == config.epsilon:
        raise MalformedRule(line, lineno, "left-hand side is the epsilon marker")
    if not body:
        raise MalformedRule(line, lineno, "rule body is empty")
    return [ Rule(lhs, parseAlternative(alt, config)) for alt in body.split(config.separator) ]

# grammar construction
# ####################

class GrammarBuilder:
    """Accumulates rule lines and freezes them into a ``Grammar``.

    The first left-hand side seen becomes the start symbol.  Terminals are
    only classified by ``build``, once every rule is known.
    """
    config: GrammarConfig
    start: Optional[Symbol]
    ruleDict: dict[Symbol, list[Word]]

    def __init__(self, config: GrammarConfig = DEFAULT_CONFIG):
        self.config   = config
        self.start    = None
        self.ruleDict = {}

    def __len__(self):
        return sum(len(alts) for alts in self.ruleDict.values())

    def addRule(self, line: str, lineno: Optional[int] = None) -> list[Rule]:
        rules = parseRule(line, self.config, lineno)
        lhs = rules[0].lhs
        if self.start is None:
            self.start = lhs
            log.debug("start symbol is %s", lhs)
        self.ruleDict.setdefault(lhs, []).extend(rule.rhs for rule in rules)
        return rules

    def undefinedSymbols(self) -> list[tuple[Symbol, Rule]]:
        if self.config.nonTermPattern is None:
            return []
        looksNonTerm = re.compile(self.config.nonTermPattern)
        found = {}
        for lhs, alts in self.ruleDict.items():
            for alt in alts:
                for sym in alt:
                    if sym not in self.ruleDict and sym not in found and looksNonTerm.fullmatch(sym):
                        found[sym] = Rule(lhs, alt)
        return list(found.items())

    def build(self) -> Grammar:
        if self.start is None:
            raise EmptyGrammar()
        for sym, rule in self.undefinedSymbols():
            warnings.warn(UndefinedSymbolWarning(sym, rule), stacklevel=2)
        grammar = Grammar(self.start, self.ruleDict, self.config.epsilon)
        log.debug("built grammar: %d non-terminals, %d terminals, %d productions",
                  len(grammar.nonterms), len(grammar.terms), len(self))
        return grammar

def parseGrammar(lines: Union[str, Iterable[str]], config: GrammarConfig = DEFAULT_CONFIG) -> Grammar:
    """Read rule lines up to the first blank one and build the grammar."""
    if isinstance(lines, str):
        lines = lines.splitlines()
    builder = GrammarBuilder(config)
    for lineno, line in enumerate(lines, 1):
        if not line.strip():
            break
        builder.addRule(line, lineno)
    return builder.build()

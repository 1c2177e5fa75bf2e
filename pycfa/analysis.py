#!/usr/bin/env python3

import logging
from collections.abc import Iterable
from typing import Union

from .config import GrammarConfig, DEFAULT_CONFIG
from .errors import LeftRecursionDetected
from .grammar import Symbol, Grammar
from .reader import parseGrammar
from .recursion import findLeftRecursion
from .sets import FirstSets, FollowSets, first, buildFirst, buildFollow, nullable, productive, reachable

log = logging.getLogger(__name__)

class GrammarAnalysis:
    """Left-recursion gate followed by the FIRST and FOLLOW fixpoints.

    Construction fails with ``LeftRecursionDetected`` before any set is
    computed if the grammar is left recursive.
    """
    grammar: Grammar
    config: GrammarConfig
    firstMap: FirstSets
    followMap: FollowSets

    def __init__(self, grammar: Grammar, config: GrammarConfig = DEFAULT_CONFIG):
        self.grammar = grammar
        self.config  = config
        if config.epsilon != grammar.epsilon:
            raise ValueError(f"Config epsilon '{config.epsilon}' does not match grammar epsilon '{grammar.epsilon}'")
        recursion = findLeftRecursion(grammar)
        if recursion is not None:
            raise LeftRecursionDetected(recursion)
        self._diagnose()
        self.firstMap  = buildFirst(grammar)
        self.followMap = buildFollow(grammar, self.firstMap, config.endMarker)

    def __repr__(self):
        return f"GrammarAnalysis(start={self.grammar.start}, nonterms={list(self.grammar.nonterms)})"

    def _diagnose(self):
        g = self.grammar
        p, r = productive(g), reachable(g)
        for n in g.nonterms:
            if n not in p:
                log.warning("non-terminal %s derives no terminal string", n)
            if n not in r:
                log.warning("non-terminal %s is unreachable from %s", n, g.start)

    def first(self, word: Union[Symbol, Iterable[Symbol]]) -> set[Symbol]:
        if isinstance(word, str):
            word = word.split()
        return first(self.firstMap, word, self.grammar.epsilon)

    def follow(self, nonterm: Symbol) -> frozenset[Symbol]:
        if not self.grammar.isNonTerm(nonterm):
            raise ValueError(f"FOLLOW is only defined for non-terminals, not '{nonterm}'")
        return self.followMap[nonterm]

    def nullable(self) -> set[Symbol]:
        return nullable(self.grammar)

    def todict(self):
        return {
            'first':  { n : sorted(self.firstMap[n])  for n in self.grammar.nonterms },
            'follow': { n : sorted(self.followMap[n]) for n in self.grammar.nonterms },
        }

def analyze(lines: Union[str, Iterable[str]], config: GrammarConfig = DEFAULT_CONFIG) -> GrammarAnalysis:
    return GrammarAnalysis(parseGrammar(lines, config), config)

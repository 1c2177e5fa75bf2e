#!/usr/bin/env python3

from collections.abc import Iterable, Mapping

from .config import EPSILON, END_MARKER
from .grammar import Symbol, Word, Grammar, closure, tableSize, freeze

FirstSets  = Mapping[Symbol, frozenset[Symbol]]
FollowSets = Mapping[Symbol, frozenset[Symbol]]

# grammar properties
# ##################

def productive_rule(rule: Word, p: set[Symbol], g: Grammar) -> bool:
    return all(g.isTerm(s) or s in p for s in rule)

def _productive_1(p: set[Symbol], g: Grammar) -> set[Symbol]:
    for n, rules in g.rules():
        if n in p: continue
        if any(productive_rule(rule, p, g) for rule in rules):
            p.add(n)
    return p

_productive_0 = closure(_productive_1, name="productive")

def productive(g: Grammar) -> set[Symbol]:
    return _productive_0(set(), g)

def _reachable_1(r: set[Symbol], g: Grammar) -> set[Symbol]:
    for n, rules in g.rules():
        if n not in r: continue
        for rule in rules:
            r.update({ s for s in rule if g.isNonTerm(s) })
    return r

_reachable_0 = closure(_reachable_1, name="reachable")

def reachable(g: Grammar) -> set[Symbol]:
    return _reachable_0({ g.start }, g)

def _nullable_1(null: set[Symbol], g: Grammar) -> set[Symbol]:
    for n, rules in g.rules():
        if n in null: continue
        for rule in rules:
            if all(s in null for s in rule):
                null.add(n)
                break
    return null

_nullable_0 = closure(_nullable_1, name="nullable")

def nullable(g: Grammar) -> set[Symbol]:
    return _nullable_0(set(), g)

# FIRST and FOLLOW
# ################

def first(firstMap: Mapping[Symbol, Iterable[Symbol]], word: Iterable[Symbol], epsilon: Symbol = EPSILON) -> set[Symbol]:
    """FIRST of a symbol string; symbols missing from ``firstMap`` are terminals."""
    firstWord = set()
    for sym in word:
        if sym == epsilon: continue
        firstSym = firstMap.get(sym, (sym,))
        hasEpsilon = epsilon in firstSym
        firstWord.update(s for s in firstSym if s != epsilon)
        if not hasEpsilon:
            break
    else:
        firstWord.add(epsilon)
    return firstWord

def _buildFirst1(firstMap: dict[Symbol, set[Symbol]], g: Grammar):
    for n, rules in g.rules():
        for rule in rules:
            firstMap[n] |= first(firstMap, rule, g.epsilon)
    return firstMap

_buildFirst0 = closure(_buildFirst1, tableSize, name="FIRST")

def buildFirst(g: Grammar) -> FirstSets:
    """FIRST sets of every terminal and non-terminal of ``g``.

    Only meaningful once ``g`` has passed the left-recursion gate.
    """
    init = { t : { t } for t in g.terms }
    init.update({ n : set() for n in g.nonterms })
    return freeze(_buildFirst0(init, g))

def _buildFollow1(follow: dict[Symbol, set[Symbol]], gfp: tuple[Grammar, FirstSets]):
    g, firstMap = gfp
    for n, rules in g.rules():
        for rule in rules:
            for i, sym in enumerate(rule):
                if not g.isNonTerm(sym): continue
                rest = first(firstMap, rule[i+1:], g.epsilon)
                follow[sym] |= rest - { g.epsilon }
                if g.epsilon in rest:
                    follow[sym] |= follow[n]
    return follow

_buildFollow0 = closure(_buildFollow1, tableSize, name="FOLLOW")

def buildFollow(g: Grammar, firstMap: FirstSets, endMarker: Symbol = END_MARKER) -> FollowSets:
    d = { n : set() for n in g.nonterms }
    d[g.start].add(endMarker)
    return freeze(_buildFollow0(d, (g, firstMap)))

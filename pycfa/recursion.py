#!/usr/bin/env python3

# Left recursion detection over the "first symbol of a production" relation.
# Only production heads are followed, so recursion hidden behind a nullable
# prefix (S -> B S with B -> ε) is not reported.

import logging
from dataclasses import dataclass
from typing import Optional

from .grammar import Symbol, Rule, Grammar

log = logging.getLogger(__name__)

@dataclass(frozen=True)
class LeftRecursion:
    nonterm: Symbol
    chain: tuple[Rule, ...]

    @property
    def direct(self) -> bool:
        return len(self.chain) == 1

    @property
    def rule(self) -> Rule:
        return self.chain[0]

    @property
    def involved(self) -> tuple[Symbol, ...]:
        return tuple(rule.lhs for rule in self.chain)

    @property
    def message(self) -> str:
        if self.direct:
            return f"direct left recursion found in rule: {self.rule!r}"
        path = " => ".join(self.involved + (self.nonterm,))
        return f"indirect left recursion detected involving {self.nonterm} via {self.rule!r} ({path})"

def directLeftRecursion(g: Grammar, n: Symbol) -> Optional[LeftRecursion]:
    for rhs in g[n]:
        if rhs and rhs[0] == n:
            return LeftRecursion(n, (Rule(n, rhs),))
    return None

def indirectLeftRecursion(g: Grammar, root: Symbol) -> Optional[LeftRecursion]:
    """Depth-first search from ``root`` for a chain of production heads
    leading back to ``root`` through at least one other non-terminal.

    Every root starts with a fresh visited set; a non-terminal already
    visited from this root is not expanded again.
    """
    visited = { root }
    stack = [ (root, ()) ]
    while stack:
        current, chain = stack.pop()
        successors = []
        for rhs in g[current]:
            if not rhs: continue
            head = rhs[0]
            rule = Rule(current, rhs)
            if head == root and current != root:
                return LeftRecursion(root, chain + (rule,))
            if g.isNonTerm(head) and head != current and head not in visited:
                visited.add(head)
                successors.append((head, chain + (rule,)))
        # keep production order when popping
        stack.extend(reversed(successors))
    return None

def findLeftRecursion(g: Grammar) -> Optional[LeftRecursion]:
    """Return the first left-recursive non-terminal in declaration order,
    or ``None`` if the grammar is free of (head-visible) left recursion."""
    for n in g.nonterms:
        found = directLeftRecursion(g, n) or indirectLeftRecursion(g, n)
        if found is not None:
            log.info("%s", found.message)
            return found
    log.debug("no left recursion in %d non-terminals", len(g.nonterms))
    return None

def hasLeftRecursion(g: Grammar) -> bool:
    return findLeftRecursion(g) is not None

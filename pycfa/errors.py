#!/usr/bin/env python3

class GrammarError(ValueError):
    """Base class for grammar parse and analysis failures."""

class MalformedRule(GrammarError):
    def __init__(self, line, lineno=None, reason="expected 'identifier -> body'"):
        self.line, self.lineno, self.reason = line, lineno, reason
        where = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{where}malformed rule {line!r}, {reason}")

class EmptyGrammar(GrammarError):
    def __init__(self):
        super().__init__("Grammar must contain at least one rule")

class LeftRecursionDetected(GrammarError):
    """The grammar cannot be analysed for top-down parsing.

    Raised by the analysis pipeline once the left-recursion gate fires;
    ``recursion`` holds the witness found by the detector.
    """
    def __init__(self, recursion):
        self.recursion = recursion
        super().__init__(f"grammar invalid for top-down parsing: {recursion.message}")

class UndefinedSymbolWarning(UserWarning):
    def __init__(self, symbol, rule=None):
        self.symbol, self.rule = symbol, rule
        msg = f"Symbol '{symbol}' is used but not defined; treating it as a terminal"
        if rule is not None: msg += f" (in '{rule!r}')"
        super().__init__(msg)

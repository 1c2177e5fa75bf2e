from .config import GrammarConfig, DEFAULT_CONFIG, EPSILON, END_MARKER
from .errors import GrammarError, MalformedRule, EmptyGrammar, LeftRecursionDetected, UndefinedSymbolWarning
from .grammar import Rule, Grammar
from .reader import GrammarBuilder, parseRule, parseGrammar
from .recursion import LeftRecursion, findLeftRecursion, hasLeftRecursion
from .sets import first, buildFirst, buildFollow, nullable, productive, reachable
from .analysis import GrammarAnalysis, analyze

import pytest
from deepdiff import DeepDiff

from pycfa.grammar import Grammar, closure
from pycfa.reader import parseGrammar
from pycfa.sets import first, buildFirst, buildFollow, nullable, productive, reachable, _buildFirst1, _buildFollow1

G1 = parseGrammar([ "E -> T X",
                    "X -> + T X | ε",
                    "T -> int | ( E )" ])

G2 = parseGrammar([ "S -> A B C d | B e",
                    "A -> a | ε",
                    "B -> b | ε",
                    "C -> c | A B" ])

G3 = parseGrammar([ "S -> a S | ε" ])

def plain(table):
    return { k : set(v) for k, v in table.items() }

def validate_table(expected, actual):
    diff = DeepDiff(expected, plain(actual))
    if len(diff) != 0:
        raise ValueError(f"Table does not match expected table:\n{expected}\n{plain(actual)}\n{diff.pretty()}")

def test_expression_first():
    validate_table({ "E"   : { "int", "(" },
                     "X"   : { "+", "ε" },
                     "T"   : { "int", "(" },
                     "+"   : { "+" },
                     "int" : { "int" },
                     "("   : { "(" },
                     ")"   : { ")" } },
                   buildFirst(G1))

def test_expression_follow():
    validate_table({ "E" : { "$", ")" },
                     "X" : { "$", ")" },
                     "T" : { "+", "$", ")" } },
                   buildFollow(G1, buildFirst(G1)))

def test_nullable_chain():
    f = buildFirst(G2)
    assert f["A"] == { "a", "ε" }
    assert f["B"] == { "b", "ε" }
    assert f["C"] == { "c", "a", "b", "ε" }
    assert f["S"] == { "a", "b", "c", "d", "e" }
    validate_table({ "S" : { "$" },
                     "A" : { "a", "b", "c", "d" },
                     "B" : { "c", "d", "e", "a", "b" },
                     "C" : { "d" } },
                   buildFollow(G2, f))

@pytest.mark.parametrize("g", [ G1, G2, G3 ])
def test_terminal_first_is_itself(g):
    f = buildFirst(g)
    for t in g.terms:
        assert f[t] == { t }
    assert set(f) == set(g.terms) | set(g.nonterms)

@pytest.mark.parametrize("g", [ G1, G2, G3 ])
def test_epsilon_iff_nullable(g):
    f = buildFirst(g)
    assert { n for n in g.nonterms if g.epsilon in f[n] } == nullable(g)

@pytest.mark.parametrize("g", [ G1, G2, G3 ])
def test_start_follow_has_end_marker(g):
    assert "$" in buildFollow(g, buildFirst(g))[g.start]
    assert "#" in buildFollow(g, buildFirst(g), endMarker="#")[g.start]

@pytest.mark.parametrize("g", [ G1, G2, G3 ])
def test_solvers_are_idempotent(g):
    f = buildFirst(g)
    again = closure(_buildFirst1)(plain(f), g)
    assert DeepDiff(plain(f), again) == {}
    flw = buildFollow(g, f)
    again = closure(_buildFollow1)(plain(flw), (g, f))
    assert DeepDiff(plain(flw), again) == {}

def test_one_pass_is_monotone():
    table = { t : { t } for t in G2.terms }
    table.update({ n : set() for n in G2.nonterms })
    for _ in range(4):
        before = plain(table)
        table = _buildFirst1(table, G2)
        assert all(before[k] <= table[k] for k in before)

def test_tables_are_frozen():
    f = buildFirst(G1)
    with pytest.raises(TypeError):
        f["E"] = frozenset()
    with pytest.raises(AttributeError):
        f["E"].add("x")

def test_undefined_symbol_is_terminal():
    with pytest.warns(UserWarning):
        g = parseGrammar([ "S -> A Q", "A -> a | ε" ])
    f = buildFirst(g)
    assert f["Q"] == { "Q" }
    assert f["S"] == { "a", "Q" }
    assert buildFollow(g, f)["A"] == { "Q" }

def test_first_of_word():
    f = buildFirst(G2)
    assert first(f, ("A", "B")) == { "a", "b", "ε" }
    assert first(f, ("A", "B", "C", "d")) == { "a", "b", "c", "d" }
    assert first(f, ()) == { "ε" }
    assert first(f, ("z", "A")) == { "z" }

def test_grammar_properties():
    g = parseGrammar([ "S -> A | b", "A -> A a", "B -> b" ])
    assert productive(g) == { "S", "B" }
    assert reachable(g) == { "S", "A" }
    assert nullable(G2) == { "A", "B", "C" }
    assert nullable(G3) == { "S" }

def test_epsilon_production_in_direct_grammar():
    g = Grammar("S", { "S" : [ ("ε",), ("a",) ], "A" : [ ("ε",) ] })
    f = buildFirst(g)
    assert { n for n in g.nonterms if "ε" in f[n] } == nullable(g) == { "S", "A" }
    assert productive(g) == { "S", "A" }

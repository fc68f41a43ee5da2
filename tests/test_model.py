from firstfollow.grammar.model import EMPTY, Grammar, Rule


def _g() -> Grammar:
    return Grammar.build(
        non_terminals=["S", "A"],
        terminals=["a", "b"],
        rules=[("S", ["A", "b"]), ("A", ["a"]), ("A", []), ("A", ["a"])],
        start="S",
    )


def test_membership():
    g = _g()
    assert g.has_terminal("a")
    assert not g.has_terminal("S")
    assert g.has_non_terminal("A")
    assert not g.has_non_terminal("b")
    assert not g.has_terminal(EMPTY)
    assert not g.has_non_terminal(EMPTY)


def test_duplicate_rules_are_dropped_and_order_kept():
    g = _g()
    assert g.rules == (Rule("S", ("A", "b")), Rule("A", ("a",)), Rule("A", ()))


def test_rules_for():
    g = _g()
    assert g.rules_for("A") == (Rule("A", ("a",)), Rule("A", ()))
    assert g.rules_for("b") == ()
    assert g.rules_for("missing") == ()


def test_empty_rule_and_symbols():
    g = _g()
    assert Rule("A").is_empty()
    assert not Rule("S", ("A", "b")).is_empty()
    assert g.symbols() == ["A", "S", "a", "b"]


def test_grammar_is_hashable_and_comparable():
    assert _g() == _g()
    assert hash(_g()) == hash(_g())


def test_head_index_is_built_at_construction():
    g = Grammar(frozenset(["S"]), frozenset(["a"]), (Rule("S", ("a",)),), "S")
    assert g._by_head == {"S": (Rule("S", ("a",)),)}
    assert Grammar(frozenset(["S"]), frozenset(), (), "S")._by_head == {}

from parsetrain.punctuation import (PUNCTUATION_TAGS,
                                    attach_punctuation,
                                    collapse_punctuation,
                                    is_punctuation)
from parsetrain.tree_util import ParseNode

TREE = ParseNode.fromstring("(S (`` ``) (NP (PRP He)) (, ,) (: --) "
                            "(VP (VBD left)) (. .))")


def test_is_punctuation():
    """Check the default punctuation tags."""
    assert is_punctuation(TREE[0])
    assert not is_punctuation(TREE[1])
    assert is_punctuation(TREE[1], punct_set={"NP"})
    assert PUNCTUATION_TAGS == {"''", "``", ",", ".", ":"}


def test_collapse_punctuation():
    """Check that punctuation is removed and the order kept."""
    collapsed = collapse_punctuation(list(TREE))
    assert len(collapsed) == 2
    assert collapsed[0] is TREE[1]
    assert collapsed[1] is TREE[4]


def test_collapse_punctuation_does_not_attach():
    """Check that collapsing leaves the nodes untouched."""
    tree = ParseNode.fromstring("(S (NP (PRP He)) (VP (VBD left)) (. .))")
    collapse_punctuation(list(tree))
    assert tree[1].next_punctuation == []


def test_collapse_punctuation_custom_set():
    """Check that a custom punctuation set can be used."""
    collapsed = collapse_punctuation(list(TREE), punct_set={"."})
    assert [node.label() for node in collapsed] == ["``", "NP", ",", ":", "VP"]


def test_attach_punctuation():
    """Check that punctuation is attached to both neighbors."""
    tree = ParseNode.fromstring("(S (`` ``) (NP (PRP He)) (, ,) (: --) "
                                "(VP (VBD left)) (. .))")
    quote, noun_phrase, comma, dash, verb_phrase, period = tree
    collapsed = attach_punctuation(list(tree))

    assert len(collapsed) == 2
    assert collapsed[0] is noun_phrase
    assert collapsed[1] is verb_phrase

    assert len(noun_phrase.prev_punctuation) == 1
    assert noun_phrase.prev_punctuation[0] is quote
    assert [node.label() for node in noun_phrase.next_punctuation] == [",", ":"]
    assert [node.label() for node in verb_phrase.prev_punctuation] == [",", ":"]
    assert len(verb_phrase.next_punctuation) == 1
    assert verb_phrase.next_punctuation[0] is period


def test_attach_punctuation_only_punctuation():
    """Check that a sequence of only punctuation collapses to nothing."""
    tree = ParseNode.fromstring("(X (, ,) (. .))")
    assert attach_punctuation(list(tree)) == []

import pytest
from parsetrain.tree_util import (HeadRules,
                                  ParseNode,
                                  contains_node,
                                  count_constituents,
                                  prune_tree)

EXAMPLE_TREE = ParseNode.fromstring("""
                               (S
                                 (NP (PRP I))
                                 (VP
                                   (VBP am)
                                   (VP
                                     (VBG going)
                                     (PP (TO to) (NP (DT the) (NN market)))
                                     (PP (IN with) (NP (PRP$ her) (NN tomorrow)))))
                                 (. .))
                """)


def test_head_words():
    """Check the heads found with Collins's head rules."""
    assert EXAMPLE_TREE.head_word() == "am"
    assert EXAMPLE_TREE.head() is EXAMPLE_TREE[1]
    assert EXAMPLE_TREE[1][1].head_word() == "going"
    assert EXAMPLE_TREE[1][1][1].head_word() == "to"
    assert EXAMPLE_TREE[1][1][1][1].head_word() == "market"
    assert EXAMPLE_TREE[1][1][2][1].head_word() == "tomorrow"
    assert EXAMPLE_TREE[1][1][2].head_pos() == "IN"


def test_head_of_preterminal():
    """Check that the head of a preterminal is its token."""
    preterminal = EXAMPLE_TREE[0][0]
    assert preterminal.head() == "I"
    assert preterminal.head_word() == "I"
    assert preterminal.head_pos() == "PRP"


def test_head_child_possessive():
    """Check that a final POS is the head of an NP."""
    tree = ParseNode.fromstring("(NP (NNP John) (POS 's))")
    assert HeadRules().head_child(tree, "NP") is tree[1]


def test_head_child_unknown_category():
    """Check that categories without rules default to the leftmost child."""
    tree = ParseNode.fromstring("(TOP (S (NP (NN dog))) (. .))")
    assert HeadRules().head_child(list(tree), "TOP") is tree[0]


def test_head_child_no_children():
    """Check that a constituent without children has no head."""
    with pytest.raises(ValueError):
        HeadRules().head_child([], "NP")


def test_node_kinds():
    """Check the preterminal and chunk tests."""
    noun_phrase = EXAMPLE_TREE[1][1][1][1]
    assert noun_phrase.is_chunk()
    assert not noun_phrase.is_pos_tag()
    assert noun_phrase[0].is_pos_tag()
    assert not noun_phrase[0].is_chunk()
    assert not EXAMPLE_TREE.is_chunk()
    assert noun_phrase.covered_text() == "the market"


def test_punctuation_attachment_deduplicates():
    """Check that the same punctuation node is attached only once."""
    tree = ParseNode.fromstring("(S (NP (NN dog)) (. .))")
    noun_phrase = tree[0]
    period = tree[1]
    noun_phrase.add_next_punctuation(period)
    noun_phrase.add_next_punctuation(period)
    assert len(noun_phrase.next_punctuation) == 1
    assert noun_phrase.prev_punctuation == []


def test_contains_node():
    """Check that node membership uses identity."""
    tree = ParseNode.fromstring("(S (NP (NN dog)) (NP (NN dog)))")
    copy = ParseNode.fromstring("(NP (NN dog))")
    assert contains_node(tree, tree[1])
    assert copy == tree[0]
    assert not contains_node(tree, copy)


def test_count_constituents():
    """Check that constituents above the preterminals are counted."""
    assert count_constituents(EXAMPLE_TREE) == 8


def test_prune_tree():
    """Check that empty elements and function tags are removed."""
    tree = ParseNode.fromstring("""( (S
                                      (NP-SBJ-1 (-NONE- *T*))
                                      (NP-SBJ (PRP I))
                                      (VP (VBD paid) (NP (CD 3\\/4)) (S (-NONE- *)))
                                      (. .)))""")
    prune_tree(tree)
    expected = ParseNode.fromstring("(TOP (S (NP (PRP I)) (VP (VBD paid) "
                                    "(NP (CD 3/4))) (. .)))")
    assert tree == expected
    assert tree[0][1].parent() is tree[0]


def test_prune_tree_keeps_bracket_labels():
    """Check that labels starting with a hyphen are kept."""
    tree = ParseNode.fromstring("(S (-LRB- -LRB-) (NP (NN x)) (-RRB- -RRB-))")
    prune_tree(tree)
    assert [child.label() for child in tree] == ["-LRB-", "NP", "-RRB-"]
    assert tree.label() == "S"

from parsetrain.context_generators import (BuildContextGenerator,
                                           CheckContextGenerator,
                                           ChunkerContextGenerator,
                                           TaggerContextGenerator)
from parsetrain.parser_events import get_initial_chunks
from parsetrain.punctuation import attach_punctuation
from parsetrain.tree_util import ParseNode

EXAMPLE_TREE = """(TOP
                    (S
                      (NP (DT The) (NN dog))
                      (VP
                        (VBD chased)
                        (NP (DT the) (NN cat))
                        (PP (IN into) (NP (DT the) (NN yard))))
                      (. .)))"""


def make_chunks():
    """Create the working sequence for the example tree."""
    tree = ParseNode.fromstring(EXAMPLE_TREE)
    return attach_punctuation(get_initial_chunks(tree))


def test_tagger_context():
    """Check the features for tagging the first token."""
    feats = TaggerContextGenerator().get_context(0,
                                                 ["The", "dog", "ran"],
                                                 ["DT", "NN", "VBD"])
    for feat in ["w:The", "lw:the", "pre:T", "suf:he", "shape:cap",
                 "w-1:BOS", "w1:dog", "w2:ran", "t-1:BOS", "t-2t-1:BOS,BOS"]:
        assert feat in feats
    # the tag being predicted is not a feature
    assert not any("DT" in feat for feat in feats)


def test_tagger_context_previous_tags():
    """Check that the previous tags are used."""
    feats = TaggerContextGenerator(affix_length=1).get_context(2,
                                                               ["The", "dog", "ran"],
                                                               ["DT", "NN", "VBD"])
    assert "t-1:NN" in feats
    assert "t-2t-1:DT,NN" in feats
    assert "w1:EOS" in feats
    assert "pre:r" in feats
    assert "pre:ra" not in feats


def test_chunker_context():
    """Check the features for chunking a token."""
    feats = ChunkerContextGenerator().get_context(1,
                                                  ["The", "dog", "ran"],
                                                  ["DT", "NN", "VBD"],
                                                  ["START-NP", "CONT-NP", "O"])
    for feat in ["w-1:The", "t0:NN", "t1:VBD", "w2:EOS", "p-1:START-NP",
                 "p-2p-1:BOS,START-NP", "p-1t0:START-NP,NN"]:
        assert feat in feats
    assert not any("CONT-NP" in feat for feat in feats)


def test_build_context():
    """Check the features for labeling the first chunk."""
    chunks = make_chunks()
    feats = BuildContextGenerator().get_context(chunks, 0)
    for feat in ["default", "c0:NP", "c0w:NP|dog", "c-1:BOS", "c1:VBD",
                 "c1w:VBD|chased", "c2w:NP|cat", "c0c1:NP,VBD"]:
        assert feat in feats


def test_build_context_uses_decisions():
    """Check that decisions are used for the nodes to the left."""
    chunks = make_chunks()
    chunks[0].decision = "START-S"
    feats = BuildContextGenerator().get_context(chunks, 1)
    assert "c-1:START-S" in feats
    assert "c-1w:START-S|dog" in feats
    assert "c0:VBD" in feats


def test_build_context_punctuation():
    """Check the punctuation features of the last chunk."""
    chunks = make_chunks()
    feats = BuildContextGenerator().get_context(chunks, 4)
    assert "punct1:." in feats
    assert "c0punct1:NP,." in feats
    assert "c1:EOS" in feats


def test_check_context():
    """Check the features for a candidate VP."""
    chunks = make_chunks()
    feats = CheckContextGenerator().get_context(chunks, "VP", 1, 2)
    for feat in ["default", "type:VP", "fc:VP|VBD", "fw:VP|chased", "fp:VP|VBD",
                 "lc:VP|NP", "lw:VP|cat", "lp:VP|NN", "len:VP|2", "span:VP|VBD_NP",
                 "c-1:VP|NP", "c1:VP|IN", "lcc1:VP|NP,IN"]:
        assert feat in feats


def test_check_context_boundaries():
    """Check the features for a span at the end of the sequence."""
    chunks = make_chunks()
    feats = CheckContextGenerator().get_context(chunks, "PP", 3, 4)
    assert "c1:PP|EOS" in feats
    assert "punct1:PP|." in feats
    assert "fw:PP|into" in feats

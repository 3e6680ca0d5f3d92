"""
Feature context generators for the four stages of the parser.

Each generator turns one decision point into a list of string features.
The same feature may appear more than once; the lists are turned into
feature counts when the events are written out for training.
"""

from .tree_util import DEFAULT_HEAD_RULES

BOS = "BOS"
EOS = "EOS"


def _item_at(items, index, left_boundary=BOS, right_boundary=EOS):
    """Return ``items[index]``, or a boundary marker if out of range."""
    if index < 0:
        return left_boundary
    if index >= len(items):
        return right_boundary
    return items[index]


class TaggerContextGenerator(object):
    """Features for assigning a part-of-speech tag to a token."""

    def __init__(self, affix_length=3):
        """
        Initialize the generator.

        Parameters
        ----------
        affix_length : int
            The longest prefix and suffix to use as features.
        """
        self.affix_length = affix_length

    def get_context(self, index, tokens, tags):
        """
        Get the features for tagging ``tokens[index]``.

        Only the tags to the left of ``index`` are used.
        """
        word = tokens[index]
        feats = [f"w:{word}", f"lw:{word.lower()}"]

        for length in range(1, self.affix_length + 1):
            if len(word) > length:
                feats.append(f"pre:{word[:length]}")
                feats.append(f"suf:{word[-length:]}")

        if any(char.isdigit() for char in word):
            feats.append("shape:digit")
        if '-' in word:
            feats.append("shape:hyphen")
        if word[:1].isupper():
            feats.append("shape:cap")

        for offset in (-2, -1, 1, 2):
            feats.append(f"w{offset}:{_item_at(tokens, index + offset)}")

        prev_tag = _item_at(tags, index - 1)
        prev_prev_tag = _item_at(tags, index - 2)
        feats.append(f"t-1:{prev_tag}")
        feats.append(f"t-2t-1:{prev_prev_tag},{prev_tag}")
        return feats


class ChunkerContextGenerator(object):
    """Features for deciding whether a token starts or continues a chunk."""

    def get_context(self, index, tokens, tags, preds):
        """
        Get the features for chunking ``tokens[index]``.

        Only the chunk decisions to the left of ``index`` are used.
        """
        feats = []
        for offset in range(-2, 3):
            feats.append(f"w{offset}:{_item_at(tokens, index + offset)}")
            feats.append(f"t{offset}:{_item_at(tags, index + offset)}")

        prev_pred = _item_at(preds, index - 1)
        prev_prev_pred = _item_at(preds, index - 2)
        tag = tags[index]
        feats.append(f"p-1:{prev_pred}")
        feats.append(f"p-2p-1:{prev_prev_pred},{prev_pred}")

        # combinations of features
        feats.append(f"t-1t0:{_item_at(tags, index - 1)},{tag}")
        feats.append(f"t0t1:{tag},{_item_at(tags, index + 1)}")
        feats.append(f"p-1t0:{prev_pred},{tag}")
        feats.append(f"p-1w0:{prev_pred},{tokens[index]}")
        return feats


class BuildContextGenerator(object):
    """
    Features for labeling a node as starting or continuing a constituent.

    For the nodes to the left of the current one, the decisions that were
    already made are used instead of their categories.
    """

    def __init__(self, head_rules=None):
        """Initialize the generator."""
        self.head_rules = head_rules or DEFAULT_HEAD_RULES

    def _cons(self, chunks, index, use_decision):
        """Return the (category, head word) of a node in the sequence."""
        node = _item_at(chunks, index)
        if isinstance(node, str):
            return node, node
        category = node.label()
        if use_decision and node.decision is not None:
            category = node.decision
        return category, node.head_word(self.head_rules)

    def get_context(self, chunks, index):
        """
        Get the features for the node at ``index``.

        Parameters
        ----------
        chunks : list
            The current working sequence of ``ParseNode`` objects.
        index : int
            The index of the node being labeled.

        Returns
        -------
        feats : list
            List of feature strings.
        """
        feats = ["default"]
        categories = {}
        for offset in range(-2, 3):
            category, head_word = self._cons(chunks, index + offset, offset < 0)
            categories[offset] = category
            feats.append(f"c{offset}:{category}")
            feats.append(f"c{offset}w:{category}|{head_word}")

        node = chunks[index]
        for punct in node.prev_punctuation:
            feats.append(f"punct-1:{punct.label()}")
            feats.append(f"punct-1c0:{punct.label()},{categories[0]}")
        for punct in node.next_punctuation:
            feats.append(f"punct1:{punct.label()}")
            feats.append(f"c0punct1:{categories[0]},{punct.label()}")

        # combinations of features
        feats.append(f"c-1c0:{categories[-1]},{categories[0]}")
        feats.append(f"c0c1:{categories[0]},{categories[1]}")
        feats.append(f"c-2c-1c0:{categories[-2]},{categories[-1]},"
                     f"{categories[0]}")
        feats.append(f"c0c1c2:{categories[0]},{categories[1]},"
                     f"{categories[2]}")
        return feats


class CheckContextGenerator(object):
    """Features for deciding whether a candidate constituent is complete."""

    max_span_length = 5

    def __init__(self, head_rules=None):
        """Initialize the generator."""
        self.head_rules = head_rules or DEFAULT_HEAD_RULES

    def get_context(self, chunks, node_type, start, end):
        """
        Get the features for the span ``chunks[start:end + 1]``.

        Parameters
        ----------
        chunks : list
            The current working sequence of ``ParseNode`` objects.
        node_type : str
            The category of the candidate constituent.
        start : int
            The index of the first node of the span.
        end : int
            The index of the last node of the span.

        Returns
        -------
        feats : list
            List of feature strings.
        """
        first = chunks[start]
        last = chunks[end]
        span_length = end - start + 1

        feats = ["default", f"type:{node_type}"]
        feats.append(f"fc:{node_type}|{first.label()}")
        feats.append(f"fw:{node_type}|{first.head_word(self.head_rules)}")
        feats.append(f"fp:{node_type}|{first.head_pos(self.head_rules)}")
        feats.append(f"lc:{node_type}|{last.label()}")
        feats.append(f"lw:{node_type}|{last.head_word(self.head_rules)}")
        feats.append(f"lp:{node_type}|{last.head_pos(self.head_rules)}")
        feats.append(f"len:{node_type}|{min(span_length, self.max_span_length)}")

        if span_length <= self.max_span_length:
            labels = "_".join(node.label() for node in chunks[start:end + 1])
            feats.append(f"span:{node_type}|{labels}")

        before = _item_at(chunks, start - 1)
        after = _item_at(chunks, end + 1)
        before_label = before if isinstance(before, str) else before.label()
        after_label = after if isinstance(after, str) else after.label()
        feats.append(f"c-1:{node_type}|{before_label}")
        feats.append(f"c1:{node_type}|{after_label}")
        feats.append(f"lcc1:{node_type}|{last.label()},{after_label}")

        for punct in first.prev_punctuation:
            feats.append(f"punct-1:{node_type}|{punct.label()}")
        for punct in last.next_punctuation:
            feats.append(f"punct1:{node_type}|{punct.label()}")

        return feats

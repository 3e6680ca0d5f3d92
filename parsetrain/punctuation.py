"""
Functions for tracking punctuation at constituent boundaries.

Punctuation preterminals do not take part in attachment decisions.  They
are removed from the sequences that the first-child and last-child tests
look at, and they are carried along as metadata on the neighboring
constituents instead.  Both tests and the initial working sequence must use
the same collapsing rule, so everything goes through
``collapse_punctuation()``.
"""

PUNCTUATION_TAGS = frozenset(["''", "``", ",", ".", ":"])


def is_punctuation(node, punct_set=PUNCTUATION_TAGS):
    """Check whether the category of ``node`` is in ``punct_set``."""
    return node.label() in punct_set


def collapse_punctuation(nodes, punct_set=PUNCTUATION_TAGS):
    """
    Remove punctuation from a sequence of nodes.

    Parameters
    ----------
    nodes : list
        A sequence of ``ParseNode`` objects.
    punct_set : set
        The part-of-speech tags that count as punctuation.

    Returns
    -------
    collapsed : list
        The nodes that are not punctuation, in their original order.
    """
    return [node for node in nodes if not is_punctuation(node, punct_set)]


def attach_punctuation(nodes, punct_set=PUNCTUATION_TAGS):
    """
    Remove punctuation from a sequence of nodes, attaching it to neighbors.

    Each punctuation node is recorded as next punctuation of the closest
    preceding non-punctuation node and as previous punctuation of the
    closest following non-punctuation node.

    **IMPORTANT**: The remaining nodes are modified in place.

    Parameters
    ----------
    nodes : list
        A sequence of ``ParseNode`` objects.
    punct_set : set
        The part-of-speech tags that count as punctuation.

    Returns
    -------
    collapsed : list
        The nodes that are not punctuation, in their original order.
    """
    nodes = list(nodes)
    collapsed = []
    for i, node in enumerate(nodes):
        if not is_punctuation(node, punct_set):
            collapsed.append(node)
            continue

        if collapsed:
            collapsed[-1].add_next_punctuation(node)

        following = next((other for other in nodes[i + 1:]
                          if not is_punctuation(other, punct_set)), None)
        if following is not None:
            following.add_prev_punctuation(node)

    return collapsed

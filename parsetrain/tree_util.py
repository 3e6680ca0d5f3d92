"""
Classes and functions pertaining to gold constituency trees.

The trees handled here are Penn Treebank style bracketed parses that are
read into ``ParseNode`` objects, a subclass of ``nltk.tree.ParentedTree``
that additionally carries the bookkeeping needed to derive parser training
events from the tree (decision labels and attached punctuation).
"""
import re

from nltk.tree import ParentedTree, Tree

TREE_PRINT_MARGIN = 1000000000
TOP_NODE = "TOP"


class HeadRules(object):
    """
    Head rules from Michael Collins's 1999 thesis, Appendix A.

    A default of the leftmost child was added for NX nodes, which aren't
    discussed in Collin's thesis.  This follows the Stanford Parser
    (http://nlp.stanford.edu/nlp/javadoc/javanlp/edu/stanford/nlp/trees/CollinsHeadFinder.html).
    Categories without a rule (e.g., the top node) default to the leftmost
    child.
    """

    start_points = {"ADJP": "L",
                    "ADVP": "R",
                    "CONJP": "R",
                    "FRAG": "R",
                    "INTJ": "L",
                    "LST": "R",
                    "NAC": "L",
                    "PP": "R",
                    "PRN": "L",
                    "PRT": "R",
                    "QP": "L",
                    "RRC": "R",
                    "S": "L",
                    "SBAR": "L",
                    "SBARQ": "L",
                    "SINV": "L",
                    "SQ": "L",
                    "UCP": "R",
                    "VP": "L",
                    "WHADJP": "L",
                    "WHADVP": "R",
                    "WHNP": "L",
                    "WHPP": "R",
                    "NX": "L",
                    "X": "L"}

    priority_list = {"ADJP": ["NNS", "QP", "NN", "$", "ADVP", "JJ", "VBN",
                              "VBG", "ADJP", "JJR", "NP", "JJS", "DT", "FW",
                              "RBR", "RBS", "SBAR", "RB"],
                     "ADVP": ["RB", "RBR", "RBS", "FW", "ADVP", "TO", "CD",
                              "JJR", "JJ", "IN", "NP", "JJS", "NN"],
                     "CONJP": ["CC", "RB", "IN"],
                     "FRAG": [],
                     "INTJ": [],
                     "LST": ["LS", ":"],
                     "NAC": ["NN", "NNS", "NNP", "NNPS", "NP", "NAC", "EX",
                             "$", "CD", "QP", "PRP", "VBG", "JJ", "JJS",
                             "JJR", "ADJP", "FW"],
                     "PP": ["IN", "TO", "VBG", "VBN", "RP", "FW"],
                     "PRN": [],
                     "PRT": ["RP"],
                     "QP": ["$", "IN", "NNS", "NN", "JJ", "RB", "DT", "CD",
                            "NCD", "QP", "JJR", "JJS"],
                     "RRC": ["VP", "NP", "ADVP", "ADJP", "PP"],
                     "S": ["TO", "IN", "VP", "S", "SBAR", "ADJP", "UCP", "NP"],
                     "SBAR": ["WHNP", "WHPP", "WHADVP", "WHADJP", "IN", "DT",
                              "S", "SQ", "SINV", "SBAR", "FRAG"],
                     "SBARQ": ["SQ", "S", "SINV", "SBARQ", "FRAG"],
                     "SINV": ["VBZ", "VBD", "VBP", "VB", "MD", "VP", "S",
                              "SINV", "ADJP", "NP"],
                     "SQ": ["VBZ", "VBD", "VBP", "VB", "MD", "VP", "SQ"],
                     "UCP": [],
                     "VP": ["TO", "VBD", "VBN", "MD", "VBZ", "VB", "VBG",
                            "VBP", "VP", "ADJP", "NN", "NNS", "NP"],
                     "WHADJP": ["CC", "WRB", "JJ", "ADJP"],
                     "WHADVP": ["CC", "WRB"],
                     "WHNP": ["WDT", "WP", "WP$", "WHADJP", "WHPP", "WHNP"],
                     "WHPP": ["IN", "TO", "FW"],
                     "NX": [],
                     "X": []}

    @staticmethod
    def _search_children(children, search_list, start_point):
        """
        Find the first child whose label is in ``search_list``.

        The search starts from ``start_point``, either "L" for left
        (i.e., 0) or "R" for right.

        Parameters
        ----------
        children : list
            List of ``ParseNode`` objects.
        search_list : list
            List of labels.
        start_point : str
            The starting point for the search.

        Returns
        -------
        head_index : int
            The positional index of the head node, or ``None``.
        """
        assert start_point == "L" or start_point == "R"

        num_children = len(children)
        indices = range(num_children)

        # walk the indices backwards if we start from the right
        if start_point == "R":
            indices = reversed(indices)

        for i in indices:
            if children[i].label() in search_list:
                return i

        return None

    def head_child(self, children, node_type):
        """
        Find the head among the children of a constituent.

        Parameters
        ----------
        children : list
            The children of the constituent, in surface order.
        node_type : str
            The category of the constituent.

        Returns
        -------
        head : ParseNode
            The child that heads the constituent.

        Raises
        ------
        ValueError
            If ``children`` is empty.
        """
        children = list(children)
        num_children = len(children)
        if num_children == 0:
            raise ValueError(f"cannot find the head of an empty {node_type}")

        # shortcut for when there is only one child
        if num_children < 2:
            return children[0]

        head_index = None

        # special case: NPs
        if node_type == 'NP':
            # If last node is POS, that's the head
            if children[-1].label() == "POS":
                head_index = num_children - 1

            # Otherwise, look right to left for NN, NNP, NNPS, NNS, NX,
            # POS, or JJR; then left to right for NP; then right to left
            # for $, ADJP, PRN; then CD; then JJ, JJS, RB, or QP.
            for search_list, start_point in [(["NN", "NNP", "NNPS", "NNS",
                                               "NX", "POS", "JJR"], "R"),
                                              (["NP"], "L"),
                                              (["$", "ADJP", "PRN"], "R"),
                                              (["CD"], "R"),
                                              (["JJ", "JJS", "RB", "QP"], "R")]:
                if head_index is not None:
                    break
                head_index = self._search_children(children,
                                                   search_list,
                                                   start_point)

            # Otherwise, return the last child.
            if head_index is None:
                head_index = num_children - 1

        else:  # typical cases
            start_point = self.start_points.get(node_type, "L")

            # Try looking for each symbol in the priority list.
            # Stop at the first match.
            for symbol in self.priority_list.get(node_type, []):
                head_index = self._search_children(children,
                                                   [symbol],
                                                   start_point)
                if head_index is not None:
                    break

            if head_index is None:
                # default to the first child from the left or right,
                # as specified by the starting points table.
                head_index = 0 if start_point == 'L' else num_children - 1

        # special case: coordination.
        # After finding the head, check to see if its left sibling is a
        # conjunction.  If so, move the head index left 2.
        if 'CC' in {x.label() for x in children}:
            if head_index > 2 and children[head_index - 1].label() == 'CC':
                head_index -= 2

        return children[head_index]


DEFAULT_HEAD_RULES = HeadRules()


class ParseNode(ParentedTree):
    """
    A node of a gold constituency tree.

    The label of the node is its grammar category (or part-of-speech tag
    for preterminals). In addition to the ``nltk.tree.ParentedTree``
    structure, each node carries:

    - ``decision``: the derivational decision label assigned while
      deriving BUILD/CHECK events (e.g., "START-NP").
    - ``prev_punctuation`` and ``next_punctuation``: punctuation
      preterminals adjacent to the node that attach to it rather than
      being constituents of their own.

    Note that ``nltk`` trees compare by structure; membership of a node in
    a sequence of nodes must be tested with ``is`` (see ``contains_node()``).
    """

    def __init__(self, node_or_str, children=None):
        """Initialize the node."""
        self.decision = None
        self.prev_punctuation = []
        self.next_punctuation = []
        self._head = None
        super(ParseNode, self).__init__(node_or_str, children)

    def add_prev_punctuation(self, punct):
        """Attach ``punct`` as punctuation immediately before this node."""
        if not contains_node(self.prev_punctuation, punct):
            self.prev_punctuation.append(punct)

    def add_next_punctuation(self, punct):
        """Attach ``punct`` as punctuation immediately after this node."""
        if not contains_node(self.next_punctuation, punct):
            self.next_punctuation.append(punct)

    def is_pos_tag(self):
        """Check whether this node is a preterminal."""
        return len(self) > 0 and all(isinstance(child, str) for child in self)

    def is_chunk(self):
        """Check whether all children of this node are preterminals."""
        return (len(self) > 0 and
                all(isinstance(child, Tree) and child.is_pos_tag()
                    for child in self))

    def covered_text(self):
        """Return the tokens spanned by this node, joined by spaces."""
        return " ".join(self.leaves())

    def head(self, head_rules=None):
        """
        Find the head child of this node.

        For preterminals, this is the token itself. The result is cached,
        so the same head rules should be used for all calls on a tree.
        """
        if self._head is None:
            if self.is_pos_tag():
                self._head = self[0]
            else:
                rules = head_rules or DEFAULT_HEAD_RULES
                self._head = rules.head_child([child for child in self
                                               if isinstance(child, Tree)],
                                              self.label())
        return self._head

    def head_preterminal(self, head_rules=None):
        """Return the head preterminal."""
        res = self
        while not res.is_pos_tag():
            res = res.head(head_rules)
        return res

    def head_word(self, head_rules=None):
        """Return the head word."""
        return self.head_preterminal(head_rules)[0]

    def head_pos(self, head_rules=None):
        """Return the part-of-speech for the head."""
        return self.head_preterminal(head_rules).label()


def contains_node(nodes, node):
    """Check whether ``node`` itself (not an equal copy) is in ``nodes``."""
    return any(other is node for other in nodes)


def count_constituents(tree):
    """Count the nodes of ``tree`` that are not preterminals."""
    return len([node for node in tree.subtrees() if node.height() > 2])


def prune_tree(tree):
    """
    Convert a PTB tree to remove traces etc.

    Empty elements (``-NONE-``) and the constituents that only dominated
    them are removed, function tags and coindexation are stripped from the
    labels, escape sequences are removed from words, and an empty root
    label is replaced with the top node label.

    Note that this modifies the tree in place.
    """
    for subtree in [st for st in
                    tree.subtrees(filter=lambda x: x.label() == "-NONE-")]:
        curtree = subtree
        while curtree.label() == "-NONE-" or len(curtree) == 0:
            parent = curtree.parent()
            if parent is None:
                break
            del parent[curtree.parent_index()]
            curtree = parent

    # remove suffixes that don't appear in typical parser output
    # (e.g., "-SBJ-1" in "NP-SBJ-1"); leave labels starting with
    # "-" as is (e.g., "-LRB-").
    for subtree in tree.subtrees():
        label = subtree.label()
        if '-' in label and label[0] != '-':
            subtree.set_label(label[:label.index('-')])
        label = subtree.label()
        if '=' in label and label[0] != '=':
            subtree.set_label(label[:label.index('=')])

    # remove escape sequences from words (e.g., "3\\/4")
    for subtree in tree.subtrees():
        if len(subtree) > 0 and isinstance(subtree[0], str):
            for i in range(len(subtree)):
                subtree[i] = re.sub(r'\\', r'', subtree[i])

    if tree.label() == '':
        tree.set_label(TOP_NODE)

"""
Derive training events for a bottom-up shift-reduce parser from gold trees.

A parser of this family builds a tree in stages.  Tokens are tagged, tagged
tokens are grouped into flat chunks, and then the chunks are repeatedly
labeled as starting or continuing a parent constituent (BUILD) and each
candidate parent is checked for completeness (CHECK).  Completed runs of
siblings are reduced into their parent, which is then itself considered
for attachment.

This module simulates that derivation against a known gold tree and emits
one ``TrainingEvent`` per decision for exactly one of the four stages.
"""

import logging
from collections import namedtuple
from enum import Enum

from nltk.tree import Tree

from .punctuation import PUNCTUATION_TAGS, attach_punctuation, collapse_punctuation
from .tree_util import (DEFAULT_HEAD_RULES,
                        TOP_NODE,
                        TREE_PRINT_MARGIN,
                        contains_node,
                        count_constituents)

START = "START-"
CONT = "CONT-"
OTHER = "O"
COMPLETE = "COMPLETE"
INCOMPLETE = "INCOMPLETE"

TrainingEvent = namedtuple("TrainingEvent", ["outcome", "context"])
logger = logging.getLogger(__name__)


class EventType(Enum):
    """The stage of the parser that events are generated for."""

    TAG = "tag"
    CHUNK = "chunk"
    BUILD = "build"
    CHECK = "check"


class MalformedTreeError(ValueError):
    """Raised when a gold tree cannot be derived bottom-up."""


def _one_line(node):
    """Format a node for error messages."""
    return node.pformat(margin=TREE_PRINT_MARGIN)


def get_initial_chunks(tree):
    """
    Flatten a gold tree into the sequence of chunks the parser starts from.

    A preterminal that is not part of a chunk is its own entry.  A node
    whose children are all preterminals is a chunk.  Any other node is
    replaced by the chunks of its children.

    Parameters
    ----------
    tree : tree_util.ParseNode
        The gold tree.

    Returns
    -------
    chunks : list
        The ``ParseNode`` chunks and preterminals, left to right.
    """
    if tree.is_pos_tag() or tree.is_chunk():
        return [tree]

    chunks = []
    for child in tree:
        if isinstance(child, Tree):
            chunks.extend(get_initial_chunks(child))
    return chunks


def _collapsed_children(parent, punct_set):
    """Return the non-punctuation children of ``parent``."""
    children = collapse_punctuation([child for child in parent
                                     if isinstance(child, Tree)],
                                    punct_set)
    if not children:
        raise MalformedTreeError(f"{parent.label()} has no children other "
                                 f"than punctuation: {_one_line(parent)}")
    return children


def first_child(child, parent, punct_set=PUNCTUATION_TAGS):
    """
    Check if ``child`` is the first child of ``parent``.

    Punctuation children are ignored.

    Parameters
    ----------
    child : tree_util.ParseNode
        The child node.
    parent : tree_util.ParseNode
        The parent node.
    punct_set : set
        The part-of-speech tags that count as punctuation.

    Returns
    -------
    is_first : bool
        ``True`` if ``child`` is the first non-punctuation child.
    """
    return _collapsed_children(parent, punct_set)[0] is child


def last_child(child, parent, punct_set=PUNCTUATION_TAGS):
    """
    Check if ``child`` is the last child of ``parent``.

    Punctuation children are ignored.

    Parameters
    ----------
    child : tree_util.ParseNode
        The child node.
    parent : tree_util.ParseNode
        The parent node.
    punct_set : set
        The part-of-speech tags that count as punctuation.

    Returns
    -------
    is_last : bool
        ``True`` if ``child`` is the last non-punctuation child.
    """
    return _collapsed_children(parent, punct_set)[-1] is child


def reduce_chunks(chunks, ci, parent, punct_set=PUNCTUATION_TAGS):
    """
    Reduce the completed children of ``parent`` into ``parent``.

    The children are the contiguous run of nodes ending at ``ci`` that
    have ``parent`` as their parent.  They are replaced by ``parent``,
    which takes over the punctuation before the first child and the
    punctuation after the last child.  Reducing into the top node
    consumes the whole sequence.

    Parameters
    ----------
    chunks : list
        The current working sequence of ``ParseNode`` objects.
    ci : int
        The index of the last child of ``parent``.
    parent : tree_util.ParseNode
        The constituent whose children are complete.
    punct_set : set
        The part-of-speech tags that count as punctuation.

    Returns
    -------
    result : tuple
        A 2-tuple containing the new working sequence and the index
        at which the run of children started.

    Raises
    ------
    MalformedTreeError
        If the run of nodes is not exactly the children of ``parent``, or
        if ``parent`` is a top node that does not span the whole sequence.
    """
    reduce_start = ci
    while reduce_start >= 0 and chunks[reduce_start].parent() is parent:
        reduce_start -= 1
    reduce_start += 1

    siblings = chunks[reduce_start:ci + 1]
    expected = _collapsed_children(parent, punct_set)
    if (len(siblings) != len(expected) or
            any(node is not child for node, child in zip(siblings, expected))):
        raise MalformedTreeError(f"cannot reduce {len(siblings)} node(s) "
                                 f"into {parent.label()}, which has "
                                 f"{len(expected)} child(ren): {_one_line(parent)}")

    if parent.label() == TOP_NODE:
        # only the root may consume the sequence, and only when nothing
        # else is left in it
        if (parent.parent() is not None or reduce_start != 0 or
                ci != len(chunks) - 1):
            raise MalformedTreeError(f"{TOP_NODE} over \"{parent.covered_text()}\" "
                                     f"does not span the whole sentence: "
                                     f"{_one_line(parent)}")
        return [], reduce_start

    parent.prev_punctuation = list(siblings[0].prev_punctuation)
    parent.next_punctuation = list(siblings[-1].next_punctuation)
    reduced = chunks[:reduce_start] + [parent] + chunks[ci + 1:]
    return reduced, reduce_start


class ParserEventStream(object):
    """
    Generate the training events for one stage of the parser.

    The stage is fixed when the stream is created.  Only the context
    generator for that stage is required:

    - TAG: ``tag_context_generator.get_context(index, tokens, tags)``
    - CHUNK: ``chunk_context_generator.get_context(index, tokens, tags, preds)``
    - BUILD: ``build_context_generator.get_context(chunks, index)``
    - CHECK: ``check_context_generator.get_context(chunks, type, start, end)``
    """

    def __init__(self,
                 event_type,
                 head_rules=None,
                 punct_set=None,
                 tag_context_generator=None,
                 chunk_context_generator=None,
                 build_context_generator=None,
                 check_context_generator=None):
        """
        Initialize the event stream.

        Parameters
        ----------
        event_type : EventType or str
            The stage to generate events for.
        head_rules : tree_util.HeadRules, optional
            The head rules used to find the heads of gold constituents.
        punct_set : set, optional
            The part-of-speech tags that count as punctuation.
        tag_context_generator : object, optional
            Context generator for TAG events.
        chunk_context_generator : object, optional
            Context generator for CHUNK events.
        build_context_generator : object, optional
            Context generator for BUILD events.
        check_context_generator : object, optional
            Context generator for CHECK events.

        Raises
        ------
        ValueError
            If ``event_type`` is unknown or its context generator is missing.
        """
        self.event_type = EventType(event_type)
        self.head_rules = head_rules or DEFAULT_HEAD_RULES
        self.punct_set = (PUNCTUATION_TAGS if punct_set is None
                          else frozenset(punct_set))
        self.tag_cg = tag_context_generator
        self.chunk_cg = chunk_context_generator
        self.build_cg = build_context_generator
        self.check_cg = check_context_generator

        required = {EventType.TAG: ("tag_context_generator", self.tag_cg),
                    EventType.CHUNK: ("chunk_context_generator", self.chunk_cg),
                    EventType.BUILD: ("build_context_generator", self.build_cg),
                    EventType.CHECK: ("check_context_generator", self.check_cg)}
        name, generator = required[self.event_type]
        if generator is None:
            raise ValueError(f"{self.event_type.value} events require a "
                             f"{name}")

    def events(self, trees):
        """
        Generate the events for each tree of a corpus, in order.

        Errors for a tree are raised before any of its events are yielded.
        """
        for tree in trees:
            for event in self.process_tree(tree):
                yield event

    def process_tree(self, tree):
        """
        Derive the events for one gold tree.

        **IMPORTANT**: For BUILD and CHECK events, the ``decision`` and
        punctuation attributes of the nodes of ``tree`` are modified.

        Parameters
        ----------
        tree : tree_util.ParseNode
            The gold tree.

        Returns
        -------
        events : list
            List of ``TrainingEvent`` objects.

        Raises
        ------
        MalformedTreeError
            If the tree cannot be derived.
        """
        for subtree in tree.subtrees():
            if len(subtree) == 0:
                raise MalformedTreeError(f"{subtree.label()} has no children")
            if self.event_type in (EventType.BUILD, EventType.CHECK):
                subtree.head(self.head_rules)

        chunks = get_initial_chunks(tree)
        events = []
        if self.event_type == EventType.TAG:
            self._add_tag_events(events, chunks)
        elif self.event_type == EventType.CHUNK:
            self._add_chunk_events(events, chunks)
        else:
            self._add_parse_events(events,
                                   attach_punctuation(chunks, self.punct_set),
                                   count_constituents(tree))

        logger.debug(f"extracted {len(events)} {self.event_type.value} "
                     f"events from {len(chunks)} chunks")
        return events

    @staticmethod
    def _chunk_preterminals(chunks):
        """Yield (preterminal, chunk) pairs; chunk is None outside chunks."""
        for chunk in chunks:
            if chunk.is_pos_tag():
                yield chunk, None
            else:
                for preterminal in chunk:
                    yield preterminal, chunk

    def _add_tag_events(self, events, chunks):
        """Add one event per token, labeled with its part-of-speech tag."""
        tokens = []
        tags = []
        for preterminal, _ in self._chunk_preterminals(chunks):
            tokens.append(preterminal[0])
            tags.append(preterminal.label())

        for i, tag in enumerate(tags):
            events.append(TrainingEvent(tag,
                                        self.tag_cg.get_context(i, tokens, tags)))

    def _add_chunk_events(self, events, chunks):
        """Add one event per token, labeled with its chunk decision."""
        tokens = []
        tags = []
        preds = []
        previous_chunk = None
        for preterminal, chunk in self._chunk_preterminals(chunks):
            tokens.append(preterminal[0])
            tags.append(preterminal.label())
            if chunk is None:
                preds.append(OTHER)
            elif chunk is previous_chunk:
                preds.append(CONT + chunk.label())
            else:
                preds.append(START + chunk.label())
            previous_chunk = chunk

        for i, pred in enumerate(preds):
            context = self.chunk_cg.get_context(i, tokens, tags, preds)
            events.append(TrainingEvent(pred, context))

    def _add_parse_events(self, events, chunks, max_reductions):
        """
        Add BUILD or CHECK events while deriving the tree from its chunks.

        Each node with a parent is labeled as starting or continuing its
        parent.  When a node is the last child of its parent, the run of
        siblings is reduced into the parent and the cursor moves back so
        that the parent is visited next, which lets reductions cascade up
        the tree within the same pass.
        """
        reductions = 0
        ci = 0
        while ci < len(chunks):
            node = chunks[ci]
            parent = node.parent()
            if parent is not None:
                if not contains_node(parent, node):
                    raise MalformedTreeError(f"{node.label()} is not a child "
                                             f"of its parent {parent.label()}: "
                                             f"{_one_line(node)}")

                parent_type = parent.label()
                if first_child(node, parent, self.punct_set):
                    outcome = START + parent_type
                else:
                    outcome = CONT + parent_type
                node.decision = outcome
                if self.event_type == EventType.BUILD:
                    context = self.build_cg.get_context(chunks, ci)
                    events.append(TrainingEvent(outcome, context))

                start = ci - 1
                while start >= 0 and chunks[start].parent() is parent:
                    start -= 1

                if last_child(node, parent, self.punct_set):
                    if self.event_type == EventType.CHECK:
                        context = self.check_cg.get_context(chunks,
                                                            parent_type,
                                                            start + 1,
                                                            ci)
                        events.append(TrainingEvent(COMPLETE, context))

                    reductions += 1
                    if reductions > max_reductions:
                        raise MalformedTreeError(f"more than {max_reductions} "
                                                 f"reductions while deriving "
                                                 f"{_one_line(parent)}")
                    chunks, reduce_start = reduce_chunks(chunks,
                                                         ci,
                                                         parent,
                                                         self.punct_set)
                    # ci will be incremented at the end of the loop
                    ci = reduce_start - 1
                elif self.event_type == EventType.CHECK:
                    context = self.check_cg.get_context(chunks,
                                                        parent_type,
                                                        start + 1,
                                                        ci)
                    events.append(TrainingEvent(INCOMPLETE, context))
            ci += 1

        # a complete derivation ends with nothing (top node) or the root
        if chunks and (len(chunks) > 1 or chunks[0].parent() is not None):
            raise MalformedTreeError(f"derivation stopped with {len(chunks)} "
                                     f"unreduced node(s): "
                                     f"{[node.label() for node in chunks]}")

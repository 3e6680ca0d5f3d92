#!/usr/bin/env python
"""
Extract parser training events from a treebank.

For each gold tree in the input, this derives the training events of one
stage of the shift-reduce parser (tag, chunk, build, or check) and writes
them out as SKLL ``.jsonlines`` examples, one event per line.  Trees are
independent, so batches of trees can be processed in parallel; the events
of each tree are always written in derivation order.
"""

import argparse
import json
import logging
import math
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path

from .context_generators import (BuildContextGenerator,
                                 CheckContextGenerator,
                                 ChunkerContextGenerator,
                                 TaggerContextGenerator)
from .io_util import iter_tree_strings, read_text_file
from .parser_events import EventType, MalformedTreeError, ParserEventStream
from .punctuation import PUNCTUATION_TAGS
from .tree_util import DEFAULT_HEAD_RULES, ParseNode, prune_tree


def make_event_stream(event_type, punct_set=None, head_rules=None):
    """
    Create an event stream with the default context generators.

    Parameters
    ----------
    event_type : parser_events.EventType or str
        The stage to generate events for.
    punct_set : set, optional
        The part-of-speech tags that count as punctuation.
    head_rules : tree_util.HeadRules, optional
        The head rules to use. Defaults to Collins's head rules.

    Returns
    -------
    stream : parser_events.ParserEventStream
        The event stream.
    """
    head_rules = head_rules or DEFAULT_HEAD_RULES
    return ParserEventStream(event_type,
                             head_rules=head_rules,
                             punct_set=punct_set,
                             tag_context_generator=TaggerContextGenerator(),
                             chunk_context_generator=ChunkerContextGenerator(),
                             build_context_generator=BuildContextGenerator(head_rules),
                             check_context_generator=CheckContextGenerator(head_rules))


def extract_examples(tree_strings,
                     event_type,
                     punct_set=None,
                     id_prefix="tree",
                     start_index=0):
    """
    Extract SKLL examples for a batch of gold trees.

    Trees that cannot be derived are logged and skipped; none of their
    events are included.

    Parameters
    ----------
    tree_strings : list
        List of bracketed tree strings.
    event_type : parser_events.EventType or str
        The stage to generate events for.
    punct_set : set, optional
        The part-of-speech tags that count as punctuation.
    id_prefix : str
        Prefix for the example IDs.
    start_index : int
        The index of the first tree in the whole treebank.

    Returns
    -------
    examples : list
        List of dictionaries with "id", "y" (the outcome), and "x"
        (feature counts) keys.
    """
    stream = make_event_stream(event_type, punct_set=punct_set)
    examples = []
    for tree_index, tree_string in enumerate(tree_strings, start=start_index):
        tree = ParseNode.fromstring(tree_string)
        prune_tree(tree)
        try:
            events = stream.process_tree(tree)
        except MalformedTreeError as exc:
            logging.warning(f"skipping tree {tree_index} of {id_prefix}: {exc}")
            continue

        for event_index, event in enumerate(events):
            examples.append({"id": f"{id_prefix}_{tree_index}_{event_index}",
                             "y": event.outcome,
                             "x": Counter(event.context)})
    return examples


def write_examples(examples, output_file):
    """Write the examples to an open file, one JSON object per line."""
    for example in examples:
        output_file.write(f"{json.dumps(example)}\n")


def main():  # noqa: D103
    parser = argparse.ArgumentParser(formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument("treebank",
                        help="A file with gold constituency trees in PTB "
                             "bracketed format.")
    parser.add_argument("output_path",
                        help="Path to the .jsonlines file where the events "
                             "should be stored.")
    parser.add_argument("-t",
                        "--event_type",
                        help="The parser stage to extract events for.",
                        choices=[event_type.value for event_type in EventType],
                        default=EventType.BUILD.value)
    parser.add_argument("-p",
                        "--punctuation_tags",
                        help="Part-of-speech tags that are treated as "
                             "punctuation.",
                        nargs='+',
                        default=sorted(PUNCTUATION_TAGS))
    parser.add_argument("-m",
                        "--max_workers",
                        type=int,
                        default=1,
                        help="Number of parallel processes to use")
    parser.add_argument("-v",
                        "--verbose",
                        help="Print more status information. For every "
                             "additional time this flag is specified, "
                             "output gets more verbose.",
                        default=0,
                        action="count")
    args = parser.parse_args()

    # convert verbose flag to logging level
    log_levels = [logging.WARNING, logging.INFO, logging.DEBUG]
    log_level = log_levels[min(args.verbose, 2)]

    # format warnings more nicely
    logging.captureWarnings(True)
    logging.basicConfig(format=("%(asctime)s - %(name)s - %(levelname)s - "
                                "%(message)s"),
                        level=log_level)

    logging.info(f"reading trees from {args.treebank}")
    tree_strings = list(iter_tree_strings(read_text_file(args.treebank)))
    if not tree_strings:
        logging.warning("The input contained no trees.")

    id_prefix = Path(args.treebank).stem
    punct_set = frozenset(args.punctuation_tags)

    # create batches of trees
    max_workers = max(1, args.max_workers)
    chunk_size = max(1, math.ceil(len(tree_strings) / max_workers))
    batch_starts = list(range(0, len(tree_strings), chunk_size))

    with open(args.output_path, 'w') as output_file:
        if max_workers == 1:
            for start in batch_starts:
                write_examples(extract_examples(tree_strings[start:start + chunk_size],
                                                args.event_type,
                                                punct_set=punct_set,
                                                id_prefix=id_prefix,
                                                start_index=start),
                               output_file)
        else:
            # process each batch of trees in parallel
            with ProcessPoolExecutor(max_workers=len(batch_starts) or 1) as executor:
                futures = []
                for start in batch_starts:
                    logging.info(f"batch starting at tree {start}")
                    future = executor.submit(extract_examples,
                                             tree_strings[start:start + chunk_size],
                                             args.event_type,
                                             punct_set=punct_set,
                                             id_prefix=id_prefix,
                                             start_index=start)
                    futures.append(future)

                # write the results in treebank order
                for future in futures:
                    write_examples(future.result(), output_file)

    logging.info(f"wrote {args.event_type} events to {args.output_path}")


if __name__ == "__main__":
    main()

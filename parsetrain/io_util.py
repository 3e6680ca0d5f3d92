"""Functions for input/output."""
import logging

import cchardet

from .tree_util import ParseNode, prune_tree


def read_text_file(input_path):
    """
    Read text, using cchardet to identify the encoding.

    Parameters
    ----------
    input_path : str
        Path to the input file to read.

    Returns
    -------
    contents: str
        Contents of the input file.
    """
    # read in the contents of the file as bytes first
    with open(input_path, "rb") as input_file:
        doc = input_file.read()

        # decode as utf-8 first; if that doesn't work, use
        # cchardet to auto-detect the encoding
        try:
            doc = doc.decode('utf-8')
        except UnicodeDecodeError:
            chardet_output = cchardet.detect(doc)
            encoding = chardet_output['encoding']
            encoding_confidence = chardet_output['confidence']
            logging.debug(f"decoding {input_path} as {encoding} with "
                          f"{encoding_confidence} confidence")
            doc = doc.decode(encoding)

    return doc


def iter_tree_strings(text):
    """
    Split a string of bracketed trees into one string per tree.

    Trees may span multiple lines (as in PTB ``.mrg`` files) or be
    given one per line.

    Parameters
    ----------
    text : str
        The bracketed trees.

    Yields
    ------
    tree_string : str
        A single bracketed tree, with whitespace normalized.

    Raises
    ------
    ValueError
        If the brackets in ``text`` are not balanced.
    """
    depth = 0
    start = None
    for i, char in enumerate(text):
        if char == '(':
            if depth == 0:
                start = i
            depth += 1
        elif char == ')':
            depth -= 1
            if depth < 0:
                raise ValueError(f"unbalanced ')' at character {i}")
            if depth == 0:
                yield " ".join(text[start:i + 1].split())
        elif depth == 0 and not char.isspace():
            raise ValueError(f"unexpected {char!r} outside of a tree at "
                             f"character {i}")

    if depth != 0:
        raise ValueError("unbalanced '(' at the end of the input")


def read_treebank(input_path, prune=True):
    """
    Read the gold trees in a treebank file, one at a time.

    Parameters
    ----------
    input_path : str
        Path to a file of bracketed trees.
    prune : bool
        Whether to remove empty elements and function tags
        (see ``tree_util.prune_tree()``).

    Yields
    ------
    tree : tree_util.ParseNode
        The next gold tree.
    """
    for tree_string in iter_tree_strings(read_text_file(input_path)):
        tree = ParseNode.fromstring(tree_string)
        if prune:
            prune_tree(tree)
        yield tree

# filename: huffman_core.py

import heapq
import logging
from collections import Counter

logger = logging.getLogger(__name__)


class HuffmanNode:
    """One vertex of the Huffman tree.

    Children are indices into the node list built by ``build_tree``, not
    references to other nodes. Leaves carry a character and no children;
    internal nodes carry no character and exactly two children.
    """

    __slots__ = ("char", "freq", "left", "right")

    def __init__(self, char, freq, left=None, right=None):
        self.char = char
        self.freq = freq
        self.left = left
        self.right = right

    def is_leaf(self):
        return self.left is None and self.right is None


def count_frequencies(corpus):
    # Frequency analysis of the input text
    return Counter(corpus)


def build_tree(freqs):
    """Merge the two lightest nodes until one remains.

    Returns ``(nodes, root)`` where ``root`` is an index into ``nodes``, or
    ``None`` when ``freqs`` is empty.

    Heap entries are ``(weight, sequence, index)``. Leaves get their sequence
    number in ascending character order and every merged node gets the next
    one, so equal weights are resolved the same way on every run. The first
    node popped becomes the left child, the second the right child.
    """
    nodes = []
    priority_queue = []
    for char in sorted(freqs):
        nodes.append(HuffmanNode(char, freqs[char]))
        index = len(nodes) - 1
        priority_queue.append((freqs[char], index, index))
    heapq.heapify(priority_queue)

    # Sequence numbers and arena indices advance together
    while len(priority_queue) > 1:
        left_freq, _, left = heapq.heappop(priority_queue)
        right_freq, _, right = heapq.heappop(priority_queue)
        nodes.append(HuffmanNode(None, left_freq + right_freq, left, right))
        index = len(nodes) - 1
        heapq.heappush(priority_queue, (left_freq + right_freq, index, index))

    if not priority_queue:
        logger.debug("empty frequency table, no tree built")
        return nodes, None

    logger.debug("built tree with %d leaves and %d nodes", len(freqs), len(nodes))
    return nodes, priority_queue[0][2]


def generate_codes(nodes, root):
    """Walk the tree from ``root`` and return ``(encoding, decoding)`` tables.

    A left edge appends ``'0'`` and a right edge ``'1'``. A root that is
    itself a leaf (single distinct character) is given the code ``"0"``.
    """
    encoding = {}
    decoding = {}
    if root is None:
        return encoding, decoding

    stack = [(root, "")]
    while stack:
        index, current_code = stack.pop()
        node = nodes[index]
        if node.is_leaf():
            code = current_code or "0"
            encoding[node.char] = code
            decoding[code] = node.char
            continue
        # Push right first so the left subtree is visited first
        stack.append((node.right, current_code + "1"))
        stack.append((node.left, current_code + "0"))

    if len(encoding) == 1:
        logger.debug("single distinct character %r, assigned code '0'", next(iter(encoding)))
    return encoding, decoding


def build_code_tables(corpus):
    """Run frequency analysis, tree construction and traversal on ``corpus``.

    Returns ``(freqs, encoding, decoding)``. The tree itself is dropped once
    the tables exist.
    """
    freqs = count_frequencies(corpus)
    nodes, root = build_tree(freqs)
    encoding, decoding = generate_codes(nodes, root)
    return freqs, encoding, decoding

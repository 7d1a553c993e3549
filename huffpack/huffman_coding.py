"""
Huffman coding algorithm -
frequency analysis, tree construction and code generation
"""
import heapq
import itertools
import logging
from collections import Counter
from typing import BinaryIO, Iterator, Optional

from bitarray import bitarray

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 256
CHUNK_SIZE = 8192


class FrequencyTable:
    """
    Counts of every byte value (0-255) in a source stream.
    """
    def __init__(self, counts=None):
        """
        Function initializes the table.

        :param counts: optional sequence of 256 counts
        """
        if counts is None:
            counts = [0] * ALPHABET_SIZE
        if len(counts) != ALPHABET_SIZE:
            raise ValueError(f"Frequency table needs {ALPHABET_SIZE} counts, got {len(counts)}")
        self.counts = list(counts)

    @classmethod
    def count(cls, source: BinaryIO) -> "FrequencyTable":
        """
        Reads the whole stream and counts each byte value.

        :param source: binary stream, consumed to the end
        :return: FrequencyTable for the stream
        """
        counter = Counter()
        for chunk in iter(lambda: source.read(CHUNK_SIZE), b""):
            counter.update(chunk)

        table = cls()
        for symbol, freq in counter.items():
            table.counts[symbol] = freq
        return table

    @property
    def total(self) -> int:
        return sum(self.counts)

    def symbols(self) -> Iterator[tuple[int, int]]:
        """
        Yields (symbol, count) for symbols that occur, in ascending symbol order.
        """
        for symbol, freq in enumerate(self.counts):
            if freq > 0:
                yield symbol, freq

    def __getitem__(self, symbol: int) -> int:
        return self.counts[symbol]


class Node:
    """
    Class object for Node in Huffman's Tree.
    A leaf holds a byte value and no children,
    an internal node holds exactly two children.
    """
    def __init__(self, value: Optional[int], val_freq: int, left=None, right=None, order: int = 0):
        """
        Function initializes the structure of a node.

        :param value: byte held by a leaf, None for internal nodes
        :param val_freq: int, the frequency of the byte or sum of children
        :param order: creation counter used to break ties between equal weights
        """
        self.left = left
        self.right = right
        self.value = value
        self.val_freq = val_freq
        self.order = order

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __lt__(self, val):
        return (self.val_freq, self.order) < (val.val_freq, val.order)

    def __repr__(self):
        if self.is_leaf:
            return f"Node(value={self.value}, val_freq={self.val_freq})"
        return f"Node(val_freq={self.val_freq}, left={self.left!r}, right={self.right!r})"


class HuffmanTree:
    """
    Class object for Huffman Tree - main structure used
    in Huffman coding algorithm.
    """
    def __init__(self, root: Node):
        self.root = root
        self.res_codes = {}

    @classmethod
    def build(cls, table: FrequencyTable) -> Optional["HuffmanTree"]:
        """
        Builds the tree by repeatedly merging the two lightest nodes.

        Equal weights are extracted in creation order: leaves are created
        in ascending symbol order, every merged node after all existing ones.

        :param table: FrequencyTable of the source
        :return: HuffmanTree, or None when the table is empty
        """
        counter = itertools.count()
        nodes = [Node(symbol, freq, order=next(counter)) for symbol, freq in table.symbols()]
        if not nodes:
            return None

        leaf_count = len(nodes)
        heapq.heapify(nodes)
        while len(nodes) > 1:
            # left smallest node
            l = heapq.heappop(nodes)
            # right smallest node
            r = heapq.heappop(nodes)
            parent = Node(None, l.val_freq + r.val_freq, left=l, right=r, order=next(counter))
            heapq.heappush(nodes, parent)

        logger.debug("Built Huffman tree over %d distinct symbols", leaf_count)
        return cls(nodes[0])

    def codes(self) -> dict[int, str]:
        """
        Function generates the code of each symbol,
        preorder traversal of Huffman's tree.

        :return: dict, symbol -> string of '0' and '1'
        """
        if not self.res_codes:
            self._codes_generation(self.root, "")
        return dict(self.res_codes)

    def _codes_generation(self, node: Node, curr_code: str):
        # if our node is a leaf than we write the code for it
        if node.is_leaf:
            # a lone root still needs one bit per symbol
            self.res_codes[node.value] = curr_code or "0"
            return

        self._codes_generation(node.left, curr_code + "0")
        self._codes_generation(node.right, curr_code + "1")

    def code_bits(self) -> dict[int, bitarray]:
        """
        Code book in the form bitarray.encode() expects.
        """
        return {symbol: bitarray(code, endian="big") for symbol, code in self.codes().items()}


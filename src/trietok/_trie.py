"""
Prefix trie over symbol sequences used for greedy segmentation.
"""

from collections.abc import Hashable, Iterator, Sequence

from .types import Span, TokenId


class Node[T: Hashable]:
    """
    One position along the symbol path of one or more registered tokens.

    ``token`` is set only when a registered token ends at this node. Nodes
    created purely as intermediate path segments carry ``None``, which keeps
    them distinct from token id 0.
    """

    __slots__ = ("symbol", "token", "children")

    def __init__(self, symbol: T, token: TokenId | None = None) -> None:
        self.symbol: T = symbol
        self.token: TokenId | None = token
        # next symbol -> child node
        self.children: dict[T, Node[T]] = {}

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(symbol={self.symbol!r}, "
            f"token={self.token}, children={len(self.children)})"
        )

    def register(self, path: Sequence[T], token: TokenId) -> None:
        """
        Register ``path`` below this node and assign ``token`` to its terminal node.

        ``path[0]`` is this node's own symbol. Missing nodes along
        ``path[1:]`` are created without a token; an existing terminal node
        has its token overwritten.
        """
        node = self
        for symbol in path[1:]:
            child = node.children.get(symbol)
            if child is None:
                child = Node(symbol)
                node.children[symbol] = child
            node = child
        node.token = token

    def match(self, buffer: Sequence[T], start: int) -> tuple[TokenId | None, int]:
        """
        Find the longest registered token starting at ``buffer[start]``.

        The walk follows children for as long as the buffer allows and never
        backtracks past the deepest node that carries a token.

        :param buffer: Symbol sequence being segmented.
        :param start: Index of the symbol matched by this node.
        :returns: The matched token (``None`` if no node on the walk carries
            one) and the exclusive end index of the matched span.
        """
        token, end = self.token, start + 1
        node = self
        pos = start + 1
        n = len(buffer)
        while pos < n:
            child = node.children.get(buffer[pos])
            if child is None:
                break
            node = child
            pos += 1
            if node.token is not None:
                token, end = node.token, pos
        return token, end

    def walk(self) -> Iterator[tuple[Span[T], "Node[T]"]]:
        """Yield ``(path, node)`` for this node and all descendants, depth first."""
        stack: list[tuple[Span[T], Node[T]]] = [((self.symbol,), self)]
        while stack:
            path, node = stack.pop()
            yield path, node
            for symbol, child in reversed(node.children.items()):
                stack.append((path + (symbol,), child))

    def token_count(self) -> int:
        """Return the number of registered tokens in this subtree."""
        return sum(1 for _, node in self.walk() if node.token is not None)

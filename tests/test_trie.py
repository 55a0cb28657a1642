"""Unit tests for trie nodes: registration, longest match and traversal."""

from trietok import Node


# Registration
# ---------------------------------------------------------------------------


def test_register_creates_intermediate_nodes_without_token():
    """Nodes on the way to a longer token carry no token."""
    root = Node("c", 2)
    root.register("cab", 5)

    middle = root.children["a"]
    assert middle.token is None
    assert middle.children["b"].token == 5


def test_register_token_zero_is_a_real_token():
    """Token id 0 on a terminal node is kept distinct from an unassigned node."""
    root = Node("a")
    root.register("ab", 0)
    assert root.token is None
    assert root.children["b"].token == 0


def test_register_overwrites_existing_terminal():
    """Registering an intermediate path later assigns its token."""
    root = Node("c", 2)
    root.register("cab", 5)
    root.register("ca", 6)
    assert root.children["a"].token == 6
    assert root.children["a"].children["b"].token == 5


# Matching
# ---------------------------------------------------------------------------


def test_match_consumes_longest_registered_prefix():
    """Match walks as deep as the buffer allows."""
    root = Node("a", 0)
    root.register("ab", 2)
    root.register("abc", 3)
    assert root.match("abcx", 0) == (3, 3)


def test_match_stops_at_deepest_node_with_token():
    """An unassigned node at the end of the walk is never emitted."""
    root = Node("c", 2)
    root.register("cab", 5)
    # walk reaches "ca" which has no token, so only "c" is consumed
    assert root.match("caa", 0) == (2, 1)


def test_match_from_offset():
    """Matching starts at the given index."""
    root = Node("b", 1)
    root.register("bb", 4)
    assert root.match("abbb", 1) == (4, 3)
    assert root.match("abbb", 3) == (1, 4)


def test_match_without_any_token():
    """A node chain without tokens reports no match."""
    root = Node("x")
    root.register("xy", 7)
    assert root.match("xz", 0) == (None, 1)


# Traversal
# ---------------------------------------------------------------------------


def test_walk_yields_paths_depth_first():
    """Walk visits every node with its full path from the root."""
    root = Node("c", 2)
    root.register("cab", 5)
    root.register("cd", 6)

    paths = [("".join(path), node.token) for path, node in root.walk()]
    assert paths == [("c", 2), ("ca", None), ("cab", 5), ("cd", 6)]


def test_token_count_skips_intermediate_nodes():
    """Only nodes carrying a token are counted."""
    root = Node("c", 2)
    root.register("cab", 5)
    assert root.token_count() == 2

"""Tests for the depth-first graph algorithms."""

from figdag._graph import adjacency_matrix, depth_first_order, find_back_edges, has_cycle


class TestHasCycle:
    """Tests for has_cycle."""

    def test_empty_graph(self) -> None:
        assert has_cycle([], {}) is False

    def test_linear_chain(self) -> None:
        assert has_cycle(["a", "b", "c"], {"a": ["b"], "b": ["c"], "c": []}) is False

    def test_diamond_is_acyclic(self) -> None:
        successors = {"a": ["b", "c"], "b": ["d"], "c": ["d"], "d": []}
        assert has_cycle(["a", "b", "c", "d"], successors) is False

    def test_cross_edge_is_not_a_cycle(self) -> None:
        # c -> b reaches a node finished by an earlier source
        assert has_cycle(["a", "b", "c"], {"a": ["b"], "b": [], "c": ["b"]}) is False

    def test_two_node_cycle(self) -> None:
        assert has_cycle(["a", "b"], {"a": ["b"], "b": ["a"]}) is True

    def test_longer_cycle(self) -> None:
        assert has_cycle(["a", "b", "c"], {"a": ["b"], "b": ["c"], "c": ["a"]}) is True

    def test_cycle_reachable_only_from_later_source(self) -> None:
        successors = {"x": [], "a": ["b"], "b": ["a"]}
        assert has_cycle(["x", "a", "b"], successors) is True

    def test_cycle_entered_through_visited_node(self) -> None:
        # a visits b and c first; the cycle c -> d -> c is found from the same tree
        successors = {"a": ["b", "c"], "b": [], "c": ["d"], "d": ["c"]}
        assert has_cycle(["a", "b", "c", "d"], successors) is True

    def test_missing_successor_entry_means_no_out_edges(self) -> None:
        assert has_cycle(["a", "b"], {"a": ["b"]}) is False

    def test_long_chain_does_not_hit_recursion_limit(self) -> None:
        n = 20_000
        nodes = list(range(n))
        successors = {i: [i + 1] for i in range(n - 1)}
        assert has_cycle(nodes, successors) is False

        successors[n - 1] = [0]
        assert has_cycle(nodes, successors) is True


class TestFindBackEdges:
    """Tests for find_back_edges."""

    def test_acyclic_graph_has_no_back_edges(self) -> None:
        successors = {"a": ["b", "c"], "b": ["d"], "c": ["d"], "d": []}
        assert find_back_edges(["a", "b", "c", "d"], successors) == []

    def test_triangle_cuts_closing_edge(self) -> None:
        successors = {"a": ["b"], "b": ["c"], "c": ["a"]}
        assert find_back_edges(["a", "b", "c"], successors) == [("c", "a")]

    def test_continues_scanning_after_back_edge(self) -> None:
        successors = {"a": ["b"], "b": ["a", "c"], "c": ["b"]}
        assert find_back_edges(["a", "b", "c"], successors) == [("b", "a"), ("c", "b")]

    def test_choice_depends_on_node_order(self) -> None:
        successors = {"a": ["b"], "b": ["a"]}
        assert find_back_edges(["a", "b"], successors) == [("b", "a")]
        assert find_back_edges(["b", "a"], successors) == [("a", "b")]

    def test_removing_back_edges_leaves_acyclic_graph(self) -> None:
        nodes = list(range(30))
        successors: dict[int, list[int]] = {i: [] for i in nodes}
        for i in nodes:
            successors[i].append((i + 1) % 30)
            successors[i].append((i * 7) % 30)
            successors[i].append((i + 13) % 30)
        for source in nodes:
            successors[source] = [t for t in dict.fromkeys(successors[source]) if t != source]

        back_edges = set(find_back_edges(nodes, successors))
        assert back_edges

        pruned = {s: [t for t in targets if (s, t) not in back_edges] for s, targets in successors.items()}
        assert has_cycle(nodes, pruned) is False

    def test_long_cycle(self) -> None:
        n = 20_000
        nodes = list(range(n))
        successors = {i: [(i + 1) % n] for i in range(n)}
        assert find_back_edges(nodes, successors) == [(n - 1, 0)]


class TestDepthFirstOrder:
    """Tests for depth_first_order."""

    def test_single_node(self) -> None:
        assert depth_first_order("a", {"a": []}) == ["a"]

    def test_successors_explored_in_edge_order(self) -> None:
        successors = {"1": ["2", "3"], "2": ["4"], "3": ["4"], "4": []}
        assert depth_first_order("1", successors) == ["1", "2", "4", "3"]

    def test_unreachable_nodes_are_not_visited(self) -> None:
        successors = {"1": ["2"], "2": [], "3": ["4"], "4": []}
        assert depth_first_order("1", successors) == ["1", "2"]

    def test_cycle_visits_each_node_once(self) -> None:
        successors = {"a": ["b"], "b": ["c"], "c": ["a", "b"]}
        assert depth_first_order("a", successors) == ["a", "b", "c"]

    def test_goes_deep_before_wide(self) -> None:
        successors = {"r": ["a", "b"], "a": ["a1", "a2"], "a1": [], "a2": [], "b": ["b1"], "b1": []}
        assert depth_first_order("r", successors) == ["r", "a", "a1", "a2", "b", "b1"]


class TestAdjacencyMatrix:
    """Tests for adjacency_matrix."""

    def test_empty(self) -> None:
        assert adjacency_matrix([], []) == ({}, [])

    def test_chain(self) -> None:
        index, matrix = adjacency_matrix(["1", "2", "3"], [("1", "2"), ("2", "3")])
        assert index == {"1": 0, "2": 1, "3": 2}
        assert matrix == [[0, 1, 0], [0, 0, 1], [0, 0, 0]]

    def test_index_follows_node_order(self) -> None:
        index, matrix = adjacency_matrix(["b", "a"], [("a", "b")])
        assert index == {"b": 0, "a": 1}
        assert matrix == [[0, 0], [1, 0]]

    def test_rows_are_independent(self) -> None:
        _, matrix = adjacency_matrix(["a", "b"], [])
        matrix[0][1] = 1
        assert matrix[1] == [0, 0]

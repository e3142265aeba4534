import itertools
import random

import pytest

from defillet.maxflow import Graph, Segment


def build(tlinks, edges):
    g = Graph()
    g.add_node(len(tlinks))
    for i, (cs, ct) in enumerate(tlinks):
        g.add_tweights(i, cs, ct)
    for i, j, c, r in edges:
        g.add_edge(i, j, c, r)
    return g


def cut_cost(assign, tlinks, edges):
    cost = 0
    for seg, (cs, ct) in zip(assign, tlinks):
        cost += ct if seg == Segment.SOURCE else cs
    for i, j, c, r in edges:
        if assign[i] == Segment.SOURCE and assign[j] == Segment.SINK:
            cost += c
        elif assign[i] == Segment.SINK and assign[j] == Segment.SOURCE:
            cost += r
    return cost


def brute_min_cut(tlinks, edges):
    return min(
        cut_cost(assign, tlinks, edges)
        for assign in itertools.product((Segment.SOURCE, Segment.SINK), repeat=len(tlinks))
    )


def random_problem(rng, n):
    tlinks = [(rng.randint(0, 9), rng.randint(0, 9)) for _ in range(n)]
    edges = []
    for _ in range(rng.randint(0, 2 * n)):
        i, j = rng.sample(range(n), 2)
        edges.append((i, j, rng.randint(0, 9), rng.randint(0, 9)))
    return tlinks, edges


def test_documented_two_node_example():
    g = build([(1, 5), (2, 6)], [(0, 1, 3, 4)])
    assert g.maxflow() == 3
    assert g.what_segment(0) == Segment.SINK
    assert g.what_segment(1) == Segment.SINK


def test_add_node_returns_first_index():
    g = Graph()
    assert g.add_node(3) == 0
    assert g.add_node() == 3
    assert g.node_count == 4


@pytest.mark.parametrize("seed", range(20))
def test_reuse_trees_matches_fresh_solve(seed):
    rng = random.Random(1000 + seed)
    n = rng.randint(2, 6)
    tlinks, edges = random_problem(rng, n)
    g = build(tlinks, edges)
    g.maxflow()

    updated = list(tlinks)
    changed = []
    for k in rng.sample(range(n), rng.randint(1, n)):
        extra = (rng.randint(0, 9), rng.randint(0, 9))
        g.add_tweights(k, *extra)
        g.mark_node(k)
        updated[k] = (updated[k][0] + extra[0], updated[k][1] + extra[1])

    flow = g.maxflow(reuse_trees=True, changed_list=changed)
    assert flow == brute_min_cut(updated, edges)
    assign = [g.what_segment(i) for i in range(n)]
    assert cut_cost(assign, updated, edges) == flow
    assert len(set(changed)) == len(changed)
    assert all(0 <= i < n for i in changed)
    g.check_consistency()


def test_reuse_trees_on_first_call_is_rejected():
    g = build([(1, 0)], [])
    with pytest.raises(ValueError):
        g.maxflow(reuse_trees=True)


def test_changed_list_requires_reuse_trees():
    g = build([(1, 0)], [])
    with pytest.raises(ValueError):
        g.maxflow(changed_list=[])


def test_isolated_node_takes_default_segment():
    g = build([(0, 0), (4, 0)], [])
    g.maxflow()
    assert g.what_segment(0, Segment.SINK) == Segment.SINK
    assert g.what_segment(0, Segment.SOURCE) == Segment.SOURCE
    assert g.what_segment(1, Segment.SINK) == Segment.SOURCE


def test_self_loop_and_bad_index_are_rejected():
    g = Graph()
    g.add_node(2)
    with pytest.raises(ValueError):
        g.add_edge(1, 1, 1, 1)
    with pytest.raises(IndexError):
        g.add_edge(0, 2, 1, 1)
    with pytest.raises(IndexError):
        g.add_tweights(-1, 1, 1)


def test_copy_is_independent():
    rng = random.Random(7)
    tlinks, edges = random_problem(rng, 5)
    g = build(tlinks, edges)
    twin = g.copy()
    twin.add_tweights(0, 0, 8)
    modified = list(tlinks)
    modified[0] = (tlinks[0][0], tlinks[0][1] + 8)
    assert g.maxflow() == brute_min_cut(tlinks, edges)
    assert twin.maxflow() == brute_min_cut(modified, edges)


def test_copy_after_solve_keeps_result():
    rng = random.Random(11)
    tlinks, edges = random_problem(rng, 6)
    g = build(tlinks, edges)
    flow = g.maxflow()
    twin = g.copy()
    assert twin.flow == flow
    assert [twin.what_segment(i) for i in range(6)] == [g.what_segment(i) for i in range(6)]
    twin.check_consistency()


def test_float_capacities():
    tlinks = [(0.5, 0.0), (0.0, 0.25)]
    edges = [(0, 1, 1.5, 0.0)]
    g = build(tlinks, edges)
    assert g.maxflow() == pytest.approx(brute_min_cut(tlinks, edges))
"""Minimum s-t cut by augmenting search trees that are grown from both terminals.

Nodes are joined by directed edge pairs and to the source and sink terminals by
terminal links. After :meth:`Graph.maxflow`, :meth:`Graph.what_segment` tells
on which side of the minimum cut each node lies. The search trees can be kept
between calls so that a small change of the terminal capacities is solved
quickly.
"""

from __future__ import annotations

from collections import deque
from enum import IntEnum
from typing import Iterator, MutableSequence

_INFINITE_D = 2**31 - 1


class Segment(IntEnum):
    """The side of the minimum cut a node belongs to."""

    SOURCE = 0
    SINK = 1


class _Marker:
    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.name}>"


_TERMINAL = _Marker("terminal")
_ORPHAN = _Marker("orphan")


class _Arc:
    __slots__ = ("index", "head", "next", "sister", "r_cap")

    def __init__(self, index: int, head: _Node, r_cap: float) -> None:
        self.index = index
        self.head = head
        self.next: _Arc | None = None
        self.sister: _Arc | None = None
        self.r_cap = r_cap


class _Node:
    __slots__ = (
        "index",
        "first",
        "parent",
        "active",
        "ts",
        "dist",
        "is_sink",
        "is_marked",
        "in_changed_list",
        "tr_cap",
    )

    def __init__(self, index: int) -> None:
        self.index = index
        self.first: _Arc | None = None
        self.parent: _Arc | _Marker | None = None
        self.active = False
        self.ts = 0
        self.dist = 0
        self.is_sink = False
        self.is_marked = False
        self.in_changed_list = False
        self.tr_cap: float = 0

    def arcs(self) -> Iterator[_Arc]:
        arc = self.first
        while arc is not None:
            yield arc
            arc = arc.next


class Graph:
    """A capacitated graph with source and sink terminals."""

    def __init__(self) -> None:
        self._nodes: list[_Node] = []
        self._arcs: list[_Arc] = []
        self._flow: float = 0
        self._iteration = 0
        self._time = 0
        self._queues: list[deque[_Node]] = [deque(), deque()]
        self._orphans: deque[_Node] = deque()
        self._changed: MutableSequence[int] | None = None

    @property
    def flow(self) -> float:
        """The flow found so far, including flow pushed directly by terminal links."""
        return self._flow

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._arcs) // 2

    def _node(self, i: int) -> _Node:
        if not 0 <= i < len(self._nodes):
            raise IndexError(f"node {i} does not exist")
        return self._nodes[i]

    def add_node(self, count: int = 1) -> int:
        """Add ``count`` nodes and return the index of the first of them."""
        if count < 1:
            raise ValueError("count must be positive")
        first = len(self._nodes)
        self._nodes.extend(_Node(first + k) for k in range(count))
        return first

    def add_edge(self, i: int, j: int, capacity: float, reverse_capacity: float) -> None:
        """Add the edge i->j with ``capacity`` and j->i with ``reverse_capacity``."""
        if i == j:
            raise ValueError("an edge must join two different nodes")
        if capacity < 0 or reverse_capacity < 0:
            raise ValueError("edge capacities must not be negative")
        node_i, node_j = self._node(i), self._node(j)
        forward = _Arc(len(self._arcs), node_j, capacity)
        backward = _Arc(len(self._arcs) + 1, node_i, reverse_capacity)
        forward.sister, backward.sister = backward, forward
        forward.next, node_i.first = node_i.first, forward
        backward.next, node_j.first = node_j.first, backward
        self._arcs.extend((forward, backward))

    def add_tweights(self, i: int, cap_source: float, cap_sink: float) -> None:
        """Add capacity to the links source->i and i->sink."""
        node = self._node(i)
        delta = node.tr_cap
        if delta > 0:
            cap_source += delta
        else:
            cap_sink -= delta
        self._flow += min(cap_source, cap_sink)
        node.tr_cap = cap_source - cap_sink

    def mark_node(self, i: int) -> None:
        """Mark a node whose terminal capacities changed since the last run."""
        node = self._node(i)
        if not node.active:
            self._queues[1].append(node)
            node.active = True
        node.is_marked = True

    def what_segment(self, i: int, default_segment: Segment = Segment.SOURCE) -> Segment:
        """Side of the cut of node ``i``; nodes in neither tree get ``default_segment``."""
        node = self._node(i)
        if node.parent is not None:
            return Segment.SINK if node.is_sink else Segment.SOURCE
        return default_segment

    # active queue and orphan list

    def _set_active(self, node: _Node) -> None:
        if not node.active:
            self._queues[1].append(node)
            node.active = True

    def _next_active(self) -> _Node | None:
        while True:
            if not self._queues[0]:
                self._queues[0], self._queues[1] = self._queues[1], deque()
                if not self._queues[0]:
                    return None
            node = self._queues[0].popleft()
            node.active = False
            if node.parent is not None:
                return node

    def _set_orphan_front(self, node: _Node) -> None:
        node.parent = _ORPHAN
        self._orphans.appendleft(node)

    def _set_orphan_rear(self, node: _Node) -> None:
        node.parent = _ORPHAN
        self._orphans.append(node)

    def _add_to_changed_list(self, node: _Node) -> None:
        if self._changed is not None and not node.in_changed_list:
            self._changed.append(node.index)
            node.in_changed_list = True

    # initialisation

    def _init(self) -> None:
        self._queues = [deque(), deque()]
        self._orphans.clear()
        self._time = 0
        for node in self._nodes:
            node.active = False
            node.is_marked = False
            node.in_changed_list = False
            node.ts = self._time
            if node.tr_cap > 0:
                node.is_sink = False
                node.parent = _TERMINAL
                self._set_active(node)
                node.dist = 1
            elif node.tr_cap < 0:
                node.is_sink = True
                node.parent = _TERMINAL
                self._set_active(node)
                node.dist = 1
            else:
                node.parent = None

    def _reuse_trees_init(self) -> None:
        pending = self._queues[1]
        self._queues = [deque(), deque()]
        self._orphans.clear()
        self._time += 1

        for node in pending:
            node.active = False
            node.is_marked = False
            self._set_active(node)

            if node.tr_cap == 0:
                if node.parent is not None:
                    self._set_orphan_rear(node)
                continue

            if node.tr_cap > 0:
                if node.parent is None or node.is_sink:
                    node.is_sink = False
                    for arc in node.arcs():
                        j = arc.head
                        if not j.is_marked:
                            if j.parent is arc.sister:
                                self._set_orphan_rear(j)
                            if j.parent is not None and j.is_sink and arc.r_cap > 0:
                                self._set_active(j)
                    self._add_to_changed_list(node)
            else:
                if node.parent is None or not node.is_sink:
                    node.is_sink = True
                    for arc in node.arcs():
                        j = arc.head
                        if not j.is_marked:
                            if j.parent is arc.sister:
                                self._set_orphan_rear(j)
                            if j.parent is not None and not j.is_sink and arc.sister.r_cap > 0:
                                self._set_active(j)
                    self._add_to_changed_list(node)
            node.parent = _TERMINAL
            node.ts = self._time
            node.dist = 1

        while self._orphans:
            self._process_orphan(self._orphans.popleft())

    # augmentation and adoption

    def _augment(self, middle: _Arc) -> None:
        bottleneck = middle.r_cap
        node = middle.sister.head
        while (arc := node.parent) is not _TERMINAL:
            bottleneck = min(bottleneck, arc.sister.r_cap)
            node = arc.head
        bottleneck = min(bottleneck, node.tr_cap)
        node = middle.head
        while (arc := node.parent) is not _TERMINAL:
            bottleneck = min(bottleneck, arc.r_cap)
            node = arc.head
        bottleneck = min(bottleneck, -node.tr_cap)

        middle.sister.r_cap += bottleneck
        middle.r_cap -= bottleneck
        node = middle.sister.head
        while (arc := node.parent) is not _TERMINAL:
            arc.r_cap += bottleneck
            arc.sister.r_cap -= bottleneck
            if not arc.sister.r_cap:
                self._set_orphan_front(node)
            node = arc.head
        node.tr_cap -= bottleneck
        if not node.tr_cap:
            self._set_orphan_front(node)

        node = middle.head
        while (arc := node.parent) is not _TERMINAL:
            arc.sister.r_cap += bottleneck
            arc.r_cap -= bottleneck
            if not arc.r_cap:
                self._set_orphan_front(node)
            node = arc.head
        node.tr_cap += bottleneck
        if not node.tr_cap:
            self._set_orphan_front(node)

        self._flow += bottleneck

    def _origin_distance(self, node: _Node) -> int:
        d = 0
        while True:
            if node.ts == self._time:
                return d + node.dist
            parent = node.parent
            d += 1
            if parent is _TERMINAL:
                node.ts = self._time
                node.dist = 1
                return d
            if parent is _ORPHAN:
                return _INFINITE_D
            node = parent.head

    def _process_orphan(self, node: _Node) -> None:
        sink = node.is_sink

        def residual(arc: _Arc) -> float:
            return arc.r_cap if sink else arc.sister.r_cap

        best_arc: _Arc | None = None
        best_d = _INFINITE_D
        for arc in node.arcs():
            if not residual(arc):
                continue
            j = arc.head
            if j.is_sink != sink or j.parent is None:
                continue
            d = self._origin_distance(j)
            if d < _INFINITE_D:
                if d < best_d:
                    best_arc, best_d = arc, d
                j = arc.head
                while j.ts != self._time:
                    j.ts = self._time
                    j.dist = d
                    d -= 1
                    j = j.parent.head

        node.parent = best_arc
        if best_arc is not None:
            node.ts = self._time
            node.dist = best_d + 1
            return

        self._add_to_changed_list(node)
        for arc in node.arcs():
            j = arc.head
            parent = j.parent
            if j.is_sink == sink and parent is not None:
                if residual(arc):
                    self._set_active(j)
                if parent is not _TERMINAL and parent is not _ORPHAN and parent.head is node:
                    self._set_orphan_rear(j)

    def _adopt(self) -> None:
        pending = self._orphans
        self._orphans = deque()
        while pending:
            self._orphans.append(pending.popleft())
            while self._orphans:
                self._process_orphan(self._orphans.popleft())

    # main loop

    def maxflow(
        self,
        reuse_trees: bool = False,
        changed_list: MutableSequence[int] | None = None,
    ) -> float:
        """Compute the maximum flow and the minimum cut; return the total flow.

        With ``reuse_trees`` the search trees of the previous call are kept; the
        nodes whose terminal capacities changed must have been marked. The
        indices of nodes whose side may have changed are appended to
        ``changed_list``, which needs ``reuse_trees``.
        """
        if reuse_trees and self._iteration == 0:
            raise ValueError("reuse_trees cannot be used in the first call to maxflow()")
        if changed_list is not None and not reuse_trees:
            raise ValueError("changed_list cannot be used without reuse_trees")

        self._changed = changed_list
        try:
            if reuse_trees:
                self._reuse_trees_init()
            else:
                self._init()
            self._grow_and_augment()
        finally:
            self._changed = None
        self._iteration += 1
        return self._flow

    def _grow_and_augment(self) -> None:
        current: _Node | None = None
        while True:
            node = current
            if node is not None:
                node.active = False
                if node.parent is None:
                    node = None
            if node is None:
                node = self._next_active()
                if node is None:
                    break

            joining: _Arc | None = None
            if not node.is_sink:
                for arc in node.arcs():
                    if not arc.r_cap:
                        continue
                    j = arc.head
                    if j.parent is None:
                        j.is_sink = False
                        j.parent = arc.sister
                        j.ts = node.ts
                        j.dist = node.dist + 1
                        self._set_active(j)
                        self._add_to_changed_list(j)
                    elif j.is_sink:
                        joining = arc
                        break
                    elif j.ts <= node.ts and j.dist > node.dist:
                        j.parent = arc.sister
                        j.ts = node.ts
                        j.dist = node.dist + 1
            else:
                for arc in node.arcs():
                    if not arc.sister.r_cap:
                        continue
                    j = arc.head
                    if j.parent is None:
                        j.is_sink = True
                        j.parent = arc.sister
                        j.ts = node.ts
                        j.dist = node.dist + 1
                        self._set_active(j)
                        self._add_to_changed_list(j)
                    elif not j.is_sink:
                        joining = arc.sister
                        break
                    elif j.ts <= node.ts and j.dist > node.dist:
                        j.parent = arc.sister
                        j.ts = node.ts
                        j.dist = node.dist + 1

            self._time += 1

            if joining is not None:
                node.active = True
                current = node
                self._augment(joining)
                self._adopt()
            else:
                current = None

    # copying and checking

    def copy(self) -> Graph:
        """An independent copy of the graph, including its search trees."""
        other = Graph()
        other._nodes = [_Node(n.index) for n in self._nodes]
        other._arcs = [_Arc(a.index, other._nodes[a.head.index], a.r_cap) for a in self._arcs]
        for src, dst in zip(self._arcs, other._arcs):
            dst.next = None if src.next is None else other._arcs[src.next.index]
            dst.sister = other._arcs[src.sister.index]
        for src, dst in zip(self._nodes, other._nodes):
            dst.first = None if src.first is None else other._arcs[src.first.index]
            if isinstance(src.parent, _Arc):
                dst.parent = other._arcs[src.parent.index]
            else:
                dst.parent = src.parent
            dst.active = src.active
            dst.ts = src.ts
            dst.dist = src.dist
            dst.is_sink = src.is_sink
            dst.is_marked = src.is_marked
            dst.in_changed_list = src.in_changed_list
            dst.tr_cap = src.tr_cap
        other._flow = self._flow
        other._iteration = self._iteration
        other._time = self._time
        other._queues = [deque(other._nodes[n.index] for n in q) for q in self._queues]
        return other

    def check_consistency(self) -> None:
        """Check the invariants of the search trees; raise AssertionError if broken."""

        def require(condition: bool, message: str) -> None:
            if not condition:
                raise AssertionError(message)

        active = sum(1 for n in self._nodes if n.active)
        queued = len(self._queues[0]) + len(self._queues[1])
        require(active == queued, "active flags do not match the queues")

        for node in self._nodes:
            parent = node.parent
            if parent is _TERMINAL:
                if node.is_sink:
                    require(node.tr_cap < 0, f"node {node.index}: sink link saturated")
                else:
                    require(node.tr_cap > 0, f"node {node.index}: source link saturated")
            elif isinstance(parent, _Arc):
                residual = parent.r_cap if node.is_sink else parent.sister.r_cap
                require(residual > 0, f"node {node.index}: tree edge saturated")

            if parent is not None and not node.active:
                if not node.is_sink:
                    require(node.tr_cap >= 0, f"node {node.index}: bad terminal capacity")
                    for arc in node.arcs():
                        if arc.r_cap > 0:
                            require(
                                arc.head.parent is not None and not arc.head.is_sink,
                                f"node {node.index}: passive node touches another tree",
                            )
                else:
                    require(node.tr_cap <= 0, f"node {node.index}: bad terminal capacity")
                    for arc in node.arcs():
                        if arc.sister.r_cap > 0:
                            require(
                                arc.head.parent is not None and arc.head.is_sink,
                                f"node {node.index}: passive node touches another tree",
                            )

            if isinstance(parent, _Arc):
                head = parent.head
                require(node.ts <= head.ts, f"node {node.index}: timestamp above parent")
                if node.ts == head.ts:
                    require(node.dist > head.dist, f"node {node.index}: distance not above parent")
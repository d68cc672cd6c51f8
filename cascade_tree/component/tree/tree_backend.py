"""
tree_backend.py - NetworkX index over a flattened forest

Stores parent -> child links of a flattened forest in a NetworkX DiGraph so
ancestor and descendant queries do not walk the nested structure again.
"""

from typing import Iterable, List, Optional, Set, Tuple

import networkx as nx

from cascade_tree.log import log


class TreeBackend:
    """
    NetworkX-based index for id-only structural queries.

    The forest is stored as a directed graph (DiGraph) where:
    - Nodes are tree node ids
    - Edges represent parent-child relationships (parent -> child)
    - The ``order`` node attribute keeps the pre-order position

    Every query is total: an id that is not in the graph yields an empty
    result instead of raising.
    """

    def __init__(self):
        self.graph = nx.DiGraph()
        self.root_ids: List[str] = []
        self._next_order = 0

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Optional[str]]]) -> "TreeBackend":
        """
        Build the index from pre-order ``(id, parent_id)`` pairs.

        Args:
            pairs: Pre-order ``(id, parent_id)`` pairs, ``parent_id`` None for roots

        Returns:
            Populated backend
        """
        backend = cls()
        for node_id, parent_id in pairs:
            backend.add_node(node_id, parent_id)
        return backend

    def add_node(self, node_id: str, parent_id: Optional[str]) -> None:
        """Add one node below ``parent_id`` (a root when None)."""
        if "order" in self.graph.nodes.get(node_id, {}):
            # ids must be unique across the forest; the first occurrence keeps its place
            log.warning("Duplicate tree node id '%s' ignored", node_id)
            return
        self.graph.add_node(node_id, order=self._next_order)
        self._next_order += 1
        if parent_id is None:
            self.root_ids.append(node_id)
        else:
            self.graph.add_edge(parent_id, node_id)

    def has_node(self, node_id: str) -> bool:
        """Check whether ``node_id`` is indexed."""
        return node_id in self.graph

    def get_children(self, node_id: str) -> List[str]:
        """Get direct children of a node in tree order."""
        if node_id not in self.graph:
            return []
        return sorted(self.graph.successors(node_id), key=self._order)

    def get_parent(self, node_id: str) -> Optional[str]:
        """Get parent of a node."""
        if node_id not in self.graph:
            return None
        predecessors = list(self.graph.predecessors(node_id))
        return predecessors[0] if predecessors else None

    def get_descendants(self, node_id: str) -> Set[str]:
        """Get all descendants of a node (recursive children)."""
        if node_id not in self.graph:
            return set()
        return nx.descendants(self.graph, node_id)

    def get_ancestors(self, node_id: str) -> List[str]:
        """Get all ancestors of a node, nearest parent first."""
        ancestors = []
        parent = self.get_parent(node_id)
        while parent is not None and parent not in ancestors and parent != node_id:
            ancestors.append(parent)
            parent = self.get_parent(parent)
        return ancestors

    def get_all_nodes(self) -> List[str]:
        """Get all node ids in pre-order."""
        return sorted(self.graph.nodes(), key=self._order)

    def node_count(self) -> int:
        """Get total number of nodes."""
        return self.graph.number_of_nodes()

    def _order(self, node_id: str) -> int:
        return self.graph.nodes[node_id].get("order", 0)

"""Transient editor selection state."""

from dataclasses import dataclass, field
from typing import NamedTuple


class NodeRef(NamedTuple):
    """Reference to one node by owning path id and index."""

    path_id: str
    index: int


@dataclass
class Selection:
    """Selected paths and nodes. Never persisted.

    Attributes:
        path_ids: Selected path ids in selection order
        nodes: Selected node references in selection order
    """

    path_ids: list[str] = field(default_factory=list)
    nodes: list[NodeRef] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.path_ids and not self.nodes

    def clear(self) -> None:
        self.path_ids.clear()
        self.nodes.clear()

    def set_paths(self, path_ids: list[str]) -> None:
        """Replace the selected paths and drop node selection."""
        self.path_ids = list(dict.fromkeys(path_ids))
        self.nodes = []

    def add_path(self, path_id: str) -> None:
        if path_id not in self.path_ids:
            self.path_ids.append(path_id)

    def has_path(self, path_id: str) -> bool:
        return path_id in self.path_ids

    def add_node(self, ref: NodeRef) -> None:
        """Add a node and its owning path."""
        if ref not in self.nodes:
            self.nodes.append(ref)
        self.add_path(ref.path_id)

    def remove_node(self, ref: NodeRef) -> None:
        if ref in self.nodes:
            self.nodes.remove(ref)

    def has_node(self, ref: NodeRef) -> bool:
        return ref in self.nodes

    def nodes_in(self, path_id: str) -> list[int]:
        """Indices of selected nodes belonging to one path."""
        return [ref.index for ref in self.nodes if ref.path_id == path_id]

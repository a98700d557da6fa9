"""Upgrade dependency graph.

Nodes live in an arena addressed by their position in the seed topology; the
edges are kept in a ``networkx.DiGraph`` over those integer indices. A node is
visible when it is a declared root or every one of its predecessors has been
bought. Buying a node spends gears, marks it purchased and returns its kind so
the caller can apply the effect.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

import networkx as nx

from gearbot.config.schema import UpgradeConfig
from gearbot.core.errors import ConfigurationError, RejectedCommand
from .wallet import Wallet


logger = logging.getLogger(__name__)


class UpgradeKind(str, Enum):
    SPEED_BOOST = "speed_boost"
    MULTIPLIER_BOOST = "multiplier_boost"
    CAPACITY_BOOST = "capacity_boost"
    UNLOCK_CONDITIONAL = "unlock_conditional"

    @property
    def label(self) -> str:
        return {
            UpgradeKind.SPEED_BOOST: "CPU Speed x2",
            UpgradeKind.MULTIPLIER_BOOST: "CPU Multiplier x2",
            UpgradeKind.CAPACITY_BOOST: "Max Instructions x2",
            UpgradeKind.UNLOCK_CONDITIONAL: "Unlock If",
        }[self]


@dataclass
class UpgradeNode:
    kind: UpgradeKind
    level: int
    cost: int
    purchased: bool = False

    def __str__(self) -> str:
        return f"{self.kind.label} (level {self.level}, {self.cost} gears)"


@dataclass(frozen=True)
class UpgradeOffer:
    index: int
    node: UpgradeNode
    affordable: bool


class UpgradeGraph:
    def __init__(self, nodes: Sequence[UpgradeNode], edges: Iterable[Tuple[int, int]], roots: Sequence[int]):
        self.nodes: List[UpgradeNode] = list(nodes)
        self.roots: Tuple[int, ...] = tuple(roots)
        self._graph = nx.DiGraph()
        self._graph.add_nodes_from(range(len(self.nodes)))
        for source, target in edges:
            if source not in self._graph or target not in self._graph:
                raise ConfigurationError(f"edge {source}->{target} references a missing node")
            self._graph.add_edge(source, target)
        self._validate()

    @classmethod
    def from_config(cls, config: UpgradeConfig) -> "UpgradeGraph":
        nodes = [UpgradeNode(UpgradeKind(n.kind), n.level, n.cost) for n in config.nodes]
        return cls(nodes, [(e[0], e[1]) for e in config.edges], config.roots)

    def _validate(self):
        if not self.roots:
            raise ConfigurationError("upgrade graph needs at least one root")
        for root in self.roots:
            if root not in self._graph:
                raise ConfigurationError(f"root {root} is not a node")
            if self._graph.in_degree(root):
                raise ConfigurationError(f"root {root} has prerequisites")
        if not nx.is_directed_acyclic_graph(self._graph):
            cycle = nx.find_cycle(self._graph)
            raise ConfigurationError(f"upgrade graph has a cycle: {cycle}")
        reachable = set(self.roots)
        for root in self.roots:
            reachable |= nx.descendants(self._graph, root)
        orphans = sorted(set(self._graph.nodes) - reachable)
        if orphans:
            raise ConfigurationError(f"upgrade nodes unreachable from any root: {orphans}")

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> UpgradeNode:
        return self.nodes[index]

    def successors(self, index: int) -> List[int]:
        return sorted(self._graph.successors(index))

    def predecessors(self, index: int) -> List[int]:
        return sorted(self._graph.predecessors(index))

    def is_visible(self, index: int) -> bool:
        if index in self.roots:
            return True
        return all(self.nodes[p].purchased for p in self._graph.predecessors(index))

    def is_purchasable(self, index: int) -> bool:
        return self.is_visible(index) and not self.nodes[index].purchased

    def revealed(self) -> List[int]:
        """Visible, not yet purchased nodes in index order."""
        return [i for i in range(len(self.nodes)) if self.is_purchasable(i)]

    def offers(self, balance: int) -> List[UpgradeOffer]:
        return [UpgradeOffer(i, self.nodes[i], balance >= self.nodes[i].cost) for i in self.revealed()]

    def purchase(self, index: int, wallet: Wallet) -> UpgradeKind | None:
        """Buy node ``index``; returns its kind, or None when the purchase is refused."""
        if not 0 <= index < len(self.nodes):
            logger.warning("Unknown upgrade index %d", index)
            return None
        node = self.nodes[index]
        try:
            if node.purchased:
                raise RejectedCommand(f"already bought: {node}")
            if not self.is_visible(index):
                raise RejectedCommand(f"prerequisites missing: {node}")
            wallet.spend(node.cost)
        except RejectedCommand as exc:
            logger.warning("Upgrade %d rejected: %s", index, exc)
            return None
        node.purchased = True
        newly = [s for s in self.successors(index) if self.is_purchasable(s)]
        logger.info("Bought upgrade: %s; revealed %s", node, newly)
        return node.kind


def seed_graph() -> UpgradeGraph:
    """The fixed unlock tree every session starts from."""
    return UpgradeGraph.from_config(UpgradeConfig())

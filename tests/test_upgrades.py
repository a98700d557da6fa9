import logging

import pytest

from gearbot.config.schema import UpgradeConfig
from gearbot.core.errors import ConfigurationError, RejectedCommand
from gearbot.economy import UpgradeGraph, UpgradeKind, UpgradeNode, Wallet, seed_graph


def _nodes(count, kind=UpgradeKind.SPEED_BOOST, cost=10):
    return [UpgradeNode(kind, level=i + 1, cost=cost) for i in range(count)]


def test_seed_topology_is_reproducible():
    a, b = seed_graph(), seed_graph()
    assert [(n.kind, n.level, n.cost) for n in a.nodes] == [(n.kind, n.level, n.cost) for n in b.nodes]
    assert [a.successors(i) for i in range(len(a))] == [b.successors(i) for i in range(len(b))]


def test_seed_topology_costs_and_roots():
    graph = seed_graph()
    assert len(graph) == 10
    assert [n.cost for n in graph.nodes[:4]] == [10, 30, 70, 150]
    assert [n.cost for n in graph.nodes[4:9]] == [30, 90, 270, 810, 2430]
    assert graph[9].kind is UpgradeKind.UNLOCK_CONDITIONAL
    assert graph.roots == (0,)
    assert graph.revealed() == [0]


def test_purchase_spends_exact_cost_and_reveals_successors():
    graph = seed_graph()
    wallet = Wallet(15)
    assert graph.purchase(0, wallet) is UpgradeKind.CAPACITY_BOOST
    assert wallet.balance == 5
    assert graph[0].purchased
    assert graph.revealed() == [4]


def test_purchase_rejected_when_unaffordable(caplog):
    graph = seed_graph()
    wallet = Wallet(5)
    with caplog.at_level(logging.WARNING):
        assert graph.purchase(0, wallet) is None
    assert wallet.balance == 5
    assert not graph[0].purchased
    assert "rejected" in caplog.text


def test_repurchase_is_a_no_op_on_wallet():
    graph = seed_graph()
    wallet = Wallet(100)
    graph.purchase(0, wallet)
    assert graph.purchase(0, wallet) is None
    assert wallet.balance == 90


def test_hidden_nodes_cannot_be_bought():
    graph = seed_graph()
    wallet = Wallet(10_000)
    assert graph.purchase(9, wallet) is None
    assert wallet.balance == 10_000


def test_only_direct_successors_are_revealed():
    graph = seed_graph()
    wallet = Wallet(10_000)
    graph.purchase(0, wallet)
    graph.purchase(4, wallet)
    assert graph.revealed() == [1, 5]
    assert not graph.is_visible(9)
    graph.purchase(5, wallet)
    assert graph.revealed() == [1, 2, 6, 9]


def test_revealed_nodes_stay_revealed():
    graph = seed_graph()
    wallet = Wallet(10_000)
    graph.purchase(0, wallet)
    graph.purchase(4, wallet)
    graph.purchase(5, wallet)
    assert 1 in graph.revealed()


def test_node_with_two_prerequisites_needs_both():
    graph = UpgradeGraph(_nodes(3), [(0, 2), (1, 2)], roots=[0, 1])
    wallet = Wallet(100)
    graph.purchase(0, wallet)
    assert not graph.is_visible(2)
    graph.purchase(1, wallet)
    assert graph.revealed() == [2]


def test_offers_flag_affordability():
    graph = seed_graph()
    offers = graph.offers(5)
    assert [(o.index, o.affordable) for o in offers] == [(0, False)]
    assert graph.offers(10)[0].affordable


def test_wallet_never_goes_negative():
    wallet = Wallet(3)
    with pytest.raises(RejectedCommand):
        wallet.spend(4)
    assert wallet.balance == 3
    with pytest.raises(ValueError):
        Wallet(-1)


@pytest.mark.parametrize(
    "edges, roots",
    [
        ([(0, 1), (1, 2), (2, 1)], [0]),
        ([(0, 5)], [0]),
        ([(0, 1)], [0]),
        ([(0, 1), (1, 2)], [1]),
        ([(0, 1), (1, 2)], []),
        ([(0, 1), (1, 2)], [7]),
    ],
    ids=["cycle", "dangling", "unreachable", "root-with-prerequisite", "no-roots", "missing-root"],
)
def test_malformed_topologies_are_fatal(edges, roots):
    with pytest.raises(ConfigurationError):
        UpgradeGraph(_nodes(3), edges, roots)


def test_graph_from_config_reads_custom_topology():
    config = UpgradeConfig(
        nodes=[{"kind": "multiplier_boost", "level": 1, "cost": 5}, {"kind": "unlock_conditional", "cost": 7}],
        edges=[[0, 1]],
        roots=[0],
    )
    graph = UpgradeGraph.from_config(config)
    assert graph[0].kind is UpgradeKind.MULTIPLIER_BOOST
    assert graph.successors(0) == [1]
    assert graph.predecessors(1) == [0]

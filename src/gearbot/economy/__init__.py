"""Gears and the upgrades they buy."""
from .wallet import Wallet
from .upgrades import UpgradeGraph, UpgradeKind, UpgradeNode, UpgradeOffer, seed_graph

__all__ = ["Wallet", "UpgradeGraph", "UpgradeKind", "UpgradeNode", "UpgradeOffer", "seed_graph"]

"""
Canned transaction networks rendered by the fraud detection actions.

Record keys are fixed per scenario and are not contiguous; the order of the
returned records is the order the graph is rendered in.
"""

from typing import Any, Callable

from .models import GraphEdge, GraphNode

GraphRecords = list[GraphNode | GraphEdge]

HIGH_RISK_SUFFIX = "\n(HIGH RISK)"
SUSPICIOUS_SUFFIX = "\n(Suspicious)"


def _node(key: str, entity_id: str, label: str) -> GraphNode:
    return GraphNode(recordKey=key, entityId=entity_id, label=label)


def _edge(key: str, source_id: str, target_id: str, label: str) -> GraphEdge:
    return GraphEdge(recordKey=key, sourceId=source_id, targetId=target_id, label=label)


def _bob_network(username: str, suspected: bool) -> GraphRecords:
    records: GraphRecords = [
        _node("0", "bob_acc", "Bob's Account" + (HIGH_RISK_SUFFIX if suspected else "")),
        _node("1", "vpn_node", "VPN Service\n(Encrypted)"),
        _node("2", "crypto_ex", "Crypto Exchange\n(High Risk)"),
        _edge("3", "bob_acc", "vpn_node", "connects"),
        _edge("4", "vpn_node", "crypto_ex", "transfers $5,000"),
    ]
    if suspected:
        records += [
            _node("5", "mule_acc", "Mule Account\n(Flagged)"),
            _edge("6", "crypto_ex", "mule_acc", "withdraws"),
        ]
    return records


def _vishal_network(username: str, suspected: bool) -> GraphRecords:
    records: GraphRecords = [
        _node("0", "acc1", "Vishal's Account" + (HIGH_RISK_SUFFIX if suspected else "")),
        _node("5", "device1", "Device XYZ\n(Shared)"),
        _node("6", "merchant", "Electronics Store\n(High Volume)"),
        _edge("7", "acc1", "device1", "uses"),
        _edge("12", "acc1", "merchant", "$2,500"),
    ]
    if suspected:
        records += [
            _node("1", "acc2", "Account B\n(HIGH RISK)"),
            _node("2", "acc3", "Account C\n(Suspicious)"),
            _edge("8", "acc2", "device1", "uses"),
            _edge("9", "acc3", "device1", "uses"),
            _edge("13", "acc2", "merchant", "$2,300"),
        ]
    return records


def _generic_network(username: str, suspected: bool) -> GraphRecords:
    records: GraphRecords = [
        _node(
            "0",
            "user_acc",
            f"{username}'s Account" + (SUSPICIOUS_SUFFIX if suspected else ""),
        ),
        _node("1", "atm_loc", "ATM - Downtown"),
        _edge("2", "user_acc", "atm_loc", "withdrawal $200"),
    ]
    if suspected:
        records += [
            _node("3", "unknown_loc", "Unknown Location\n(Foreign IP)"),
            _edge("4", "user_acc", "unknown_loc", "login attempt"),
        ]
    return records


# lowercase username -> (description, builder)
NAMED_SCENARIOS: dict[str, tuple[str, Callable[[str, bool], GraphRecords]]] = {
    "bob": (
        "Account routing funds through a VPN to a crypto exchange, cashed out via a mule account",
        _bob_network,
    ),
    "vishal": (
        "Account sharing a device and a high volume merchant with other flagged accounts",
        _vishal_network,
    ),
}

DEFAULT_SCENARIO_DESCRIPTION = (
    "Generic account with an ATM withdrawal and a login attempt from an unknown location"
)


def select_dataset(username: str, suspected: bool) -> GraphRecords:
    """
    Select the simulated transaction network for a user.

    Parameters
    ----------
    username : str
        The user to show. Matched case-insensitively against the named scenarios;
        any other name gets the generic network.
    suspected : bool
        Whether to include the flagged nodes and edges.

    Returns
    -------
    records : list[GraphNode | GraphEdge]
        Nodes and edges in render order.
    """
    _, builder = NAMED_SCENARIOS.get(username.lower(), (None, _generic_network))
    return builder(username, suspected)


def list_scenarios() -> dict[str, Any]:
    "Describe the available scenarios and the size of their networks."

    def _describe(name: str, description: str) -> dict[str, Any]:
        base = select_dataset(name, False)
        suspected = select_dataset(name, True)
        return {
            "description": description,
            "nodes": sum(isinstance(r, GraphNode) for r in base),
            "edges": sum(isinstance(r, GraphEdge) for r in base),
            "suspected_nodes": sum(isinstance(r, GraphNode) for r in suspected),
            "suspected_edges": sum(isinstance(r, GraphEdge) for r in suspected),
        }

    scenarios = {
        name: _describe(name, description)
        for name, (description, _) in NAMED_SCENARIOS.items()
    }
    scenarios["*"] = _describe("*", DEFAULT_SCENARIO_DESCRIPTION)
    return scenarios

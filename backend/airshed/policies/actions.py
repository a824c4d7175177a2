"""Catalog of policy actions the player can enact.

Each action sets exactly one PolicyFlags field and adds a fixed, permanent
increment to the tradeoff scores.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PolicyAction:
    """A one-time policy lever."""

    flag: str  # PolicyFlags field name
    name: str
    text: str
    tradeoffs: dict[str, float] = field(default_factory=dict)


ALREADY_APPLIED_MESSAGE = "You already applied that action."


POLICY_ACTIONS: dict[str, PolicyAction] = {
    "kiln_ban": PolicyAction(
        flag="kiln_ban",
        name="Kiln ban",
        text=(
            "You enforce a kiln shutdown. Big SO₂/primary drop, but construction "
            "supply chains complain."
        ),
        tradeoffs={"econ": 8.0},
    ),
    "odd_even": PolicyAction(
        flag="odd_even",
        name="Odd-even traffic",
        text=(
            "You impose odd-even traffic. Peak traffic emissions drop, but "
            "mobility gets harder."
        ),
        tradeoffs={"mobility": 6.0},
    ),
    "burning_crackdown": PolicyAction(
        flag="burning_crackdown",
        name="Stop open burning",
        text=(
            "You crack down on open burning. Cleaner air, but enforcement "
            "friction rises."
        ),
        tradeoffs={"social": 5.0},
    ),
    "road_sweep": PolicyAction(
        flag="road_sweep",
        name="Road sweeping",
        text=(
            "You deploy road sweeping and watering. Dust goes down, especially "
            "on dry days."
        ),
        tradeoffs={"cost": 3.0},
    ),
    # Changes exposure behaviour only; no emission damping, no tradeoff
    "public_alert": PolicyAction(
        flag="public_alert",
        name="Public health alert",
        text=(
            "You issue a public alert: masks, indoor filtration, reduce outdoor "
            "activity. Exposure risk drops, but emissions don't."
        ),
    ),
}

from policy.network import PolicyNetwork
from policy.agents import (
    DrawOnlyPolicy,
    GreedyAskPolicy,
    NetworkPolicy,
    RandomPolicy,
)

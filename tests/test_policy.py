"""Tests for the policy network and the baseline policies."""

import pytest
import torch

from belief_config import BeliefConfig
from game_interface import DecisionPolicy
from gofish.belief_state import SeatBelief
from gofish.features import encode_belief
from gofish.moves import Ask, move_from_id
from policy.agents import (
    DrawOnlyPolicy,
    GreedyAskPolicy,
    NetworkPolicy,
    RandomPolicy,
    opponent_estimates,
    own_hand_counts,
)
from policy.network import PolicyNetwork


def seeded(seed):
    g = torch.Generator()
    g.manual_seed(seed)
    return g


def sample_hand():
    hand = [0] * 13
    hand[0] = 2
    hand[3] = 1
    hand[7] = 3
    hand[12] = 1
    return hand


@pytest.fixture
def config():
    return BeliefConfig()


@pytest.fixture
def features(config):
    return encode_belief(SeatBelief(0, config, sample_hand()))


class TestPolicyNetwork:
    def test_dimensions(self, config):
        net = PolicyNetwork.for_config(config, generator=seeded(0))
        assert net.feature_dim == 118
        assert net.num_moves == 41
        assert net.hidden_dim == 39

    def test_output_is_distribution(self, config, features):
        net = PolicyNetwork.for_config(config, generator=seeded(0))
        probs = net(features)
        assert probs.shape == (41,)
        assert probs.sum().item() == pytest.approx(1.0, abs=1e-5)
        assert (probs >= 0).all()

    def test_batched_forward(self, config, features):
        net = PolicyNetwork.for_config(config, generator=seeded(0))
        batch = torch.stack([features, features])
        assert net(batch).shape == (2, 41)

    def test_weights_in_unit_range(self, config):
        net = PolicyNetwork.for_config(config, generator=seeded(1))
        for param in net.parameters():
            assert param.min().item() >= -1.0
            assert param.max().item() <= 1.0

    def test_seeded_init_is_reproducible(self, config, features):
        a = PolicyNetwork.for_config(config, generator=seeded(5))
        b = PolicyNetwork.for_config(config, generator=seeded(5))
        assert torch.equal(a(features), b(features))

    def test_rank_moves_is_permutation(self, config, features):
        net = PolicyNetwork.for_config(config, generator=seeded(2))
        ranking = net.rank_moves(features)
        assert sorted(ranking) == list(range(41))
        probs = net(features)
        assert probs[ranking[0]] >= probs[ranking[-1]]

    def test_clone_is_independent(self, config):
        net = PolicyNetwork.for_config(config, generator=seeded(3))
        copy = net.clone()
        copy.mutate(rate=1.0, generator=seeded(4))
        assert not torch.equal(net.net[0].weight, copy.net[0].weight)


class TestCrossoverAndMutation:
    def test_crossover_picks_from_parents(self, config):
        a = PolicyNetwork.for_config(config, generator=seeded(10))
        b = PolicyNetwork.for_config(config, generator=seeded(11))
        child = a.crossover(b, generator=seeded(12))
        for pc, pa, pb in zip(child.parameters(), a.parameters(), b.parameters()):
            assert torch.all((pc == pa) | (pc == pb))
        assert not torch.equal(child.net[0].weight, a.net[0].weight)
        assert not torch.equal(child.net[0].weight, b.net[0].weight)

    def test_crossover_shape_mismatch(self, config):
        a = PolicyNetwork.for_config(config, generator=seeded(0))
        b = PolicyNetwork.for_config(BeliefConfig(num_seats=3), generator=seeded(0))
        with pytest.raises(ValueError):
            a.crossover(b)

    def test_mutate_leaves_biases(self, config):
        net = PolicyNetwork.for_config(config, generator=seeded(20))
        before = {name: p.clone() for name, p in net.named_parameters()}
        net.mutate(rate=1.0, std=1.0, generator=seeded(21))
        for name, param in net.named_parameters():
            if name.endswith("bias"):
                assert torch.equal(param, before[name])
            else:
                assert not torch.equal(param, before[name])

    def test_zero_rate_is_noop(self, config):
        net = PolicyNetwork.for_config(config, generator=seeded(30))
        before = [p.clone() for p in net.parameters()]
        net.mutate(rate=0.0, generator=seeded(31))
        for p, q in zip(net.parameters(), before):
            assert torch.equal(p, q)


class TestBaselines:
    def test_all_satisfy_protocol(self, config):
        net = PolicyNetwork.for_config(config, generator=seeded(0))
        for policy in (NetworkPolicy(net), RandomPolicy(config, seed=0),
                       DrawOnlyPolicy(config), GreedyAskPolicy(config, 0)):
            assert isinstance(policy, DecisionPolicy)

    def test_random_policy_is_seeded_permutation(self, config, features):
        a = RandomPolicy(config, seed=9)(features)
        b = RandomPolicy(config, seed=9)(features)
        assert a == b
        assert sorted(a) == list(range(config.num_moves))

    def test_draw_only(self, config, features):
        assert DrawOnlyPolicy(config)(features) == [config.draw_id]

    def test_decode_own_hand(self, config, features):
        assert own_hand_counts(config, features) == sample_hand()

    def test_decode_opponent_estimates(self, config):
        belief = SeatBelief(0, config, sample_hand())
        belief.observe_ask(asker=1, target=0, rank=4, amount=2, placed=False)
        estimates = opponent_estimates(config, encode_belief(belief))
        assert len(estimates) == 3
        assert estimates[0][4] == pytest.approx(0.0, abs=1e-5)
        assert estimates[1][4] == pytest.approx(3.0, abs=1e-5)

    def test_greedy_asks_for_most_held_rank(self, config, features):
        ranking = GreedyAskPolicy(config, 0)(features)
        first = move_from_id(config, ranking[0])
        assert isinstance(first, Ask)
        assert first.rank == 7
        assert first.player != 0
        assert ranking[-1] == config.draw_id

    def test_greedy_targets_known_holder(self, config):
        # seat 1 (slot 1) took two 7s from seat 0 (slot 0) and holds three
        hand = sample_hand()
        hand[7] = 1
        belief = SeatBelief(2, config, hand)
        belief.observe_ask(asker=1, target=0, rank=7, amount=2, placed=False)
        ranking = GreedyAskPolicy(config, 2)(encode_belief(belief))
        asks = [move_from_id(config, i) for i in ranking[:-1]]
        seven = [m for m in asks if m.rank == 7]
        assert seven[0] == Ask(player=1, rank=7)

    def test_greedy_only_offers_held_ranks(self, config, features):
        ranking = GreedyAskPolicy(config, 0)(features)
        held = {r for r, n in enumerate(sample_hand()) if n}
        for move_id in ranking[:-1]:
            assert move_from_id(config, move_id).rank in held

"""
Tests for the back-off predictor.
"""
import random
from types import MappingProxyType

import pytest

from markov_service.services.counting_trie import CountingTrie
from markov_service.services.predictor import NO_PREDICTION, Predictor
from markov_service.services.probability_trie import ProbabilityTrie, ProbNode

from conftest import FixedRandom


@pytest.fixture
def scenario_predictor(scenario_trie):
    return Predictor(scenario_trie.to_probability_trie(), random.Random(7))


@pytest.fixture
def cycle_trie():
    return CountingTrie().learn_ngrams("x y z x y z".split(), 2).to_probability_trie()


class TestPredict:
    """Test suite for Predictor.predict."""

    def test_exact_context(self, scenario_predictor):
        """Test a known context only yields its observed successors."""
        results = {scenario_predictor.predict(["a"]) for _ in range(200)}

        assert results == {"b", "c"}

    def test_single_successor(self, scenario_predictor):
        """Test a context with one successor is deterministic."""
        for _ in range(20):
            assert scenario_predictor.predict(["b"]) == "a"

    def test_backoff_unknown_token(self, scenario_predictor):
        """Test an unknown oldest token falls back to the shorter context."""
        results = {scenario_predictor.predict(["x", "a"]) for _ in range(200)}

        assert results == {"b", "c"}

    def test_backoff_from_leaf(self, scenario_predictor):
        """Test a context reaching a leaf backs off instead of failing."""
        # (a, b) is a full-order path with no continuation; (b) -> a
        for _ in range(20):
            assert scenario_predictor.predict(["a", "b"]) == "a"

    def test_backoff_to_root(self, scenario_predictor):
        """Test a fully unknown history samples the unconditional distribution."""
        results = {scenario_predictor.predict(["x", "y"]) for _ in range(300)}

        assert results == {"a", "b", "c"}

    def test_backoff_from_dead_end_token(self, scenario_predictor):
        """Test a token never followed by anything backs off to the root."""
        assert scenario_predictor.predict(["c"]) in {"a", "b", "c"}

    def test_history_longer_than_order(self, scenario_predictor):
        """Test long histories reduce to a matching suffix."""
        for _ in range(20):
            assert scenario_predictor.predict(["a", "b", "a", "b"]) == "a"

    def test_empty_history_samples_root(self, scenario_predictor):
        """Test an empty history samples at the root."""
        assert scenario_predictor.predict([]) in {"a", "b", "c"}

    def test_empty_trie_returns_sentinel(self):
        """Test an untrained trie never predicts."""
        predictor = Predictor(CountingTrie().learn_ngrams([], 3).to_probability_trie())

        assert predictor.predict(["a", "b"]) is NO_PREDICTION
        assert predictor.predict([]) is NO_PREDICTION

    def test_always_predicts_on_nonempty_trie(self, sample_tokens):
        """Test back-off terminates with a real token for arbitrary histories."""
        trie = CountingTrie().learn_ngrams(sample_tokens, 3).to_probability_trie()
        predictor = Predictor(trie, random.Random(1))
        rng = random.Random(2)
        vocab = set(sample_tokens)

        for _ in range(200):
            history = [rng.choice(sample_tokens + ["unseen"]) for _ in range(rng.randint(1, 6))]
            assert predictor.predict(history) in vocab


class TestSampling:
    """Cumulative sampling with an injected random source."""

    def test_draws_select_ascending_buckets(self, scenario_trie):
        """Test candidates are accumulated in ascending probability."""
        trie = scenario_trie.to_probability_trie()

        # root: c=1/6, b=1/3, a=1/2
        assert Predictor(trie, FixedRandom(0.1)).predict([]) == "c"
        assert Predictor(trie, FixedRandom(0.3)).predict([]) == "b"
        assert Predictor(trie, FixedRandom(0.6)).predict([]) == "a"

    def test_conditional_buckets(self, scenario_trie):
        """Test sampling under a context uses that context's distribution."""
        trie = scenario_trie.to_probability_trie()

        # a: c=1/3, b=2/3
        assert Predictor(trie, FixedRandom(0.0)).predict(["a"]) == "c"
        assert Predictor(trie, FixedRandom(0.5)).predict(["a"]) == "b"

    def test_fallback_to_last_candidate(self):
        """Test a draw beyond the accumulated mass returns the last candidate."""
        children = MappingProxyType({
            "x": ProbNode(probability=0.45),
            "y": ProbNode(probability=0.45),
        })
        trie = ProbabilityTrie(ProbNode(children=children))

        assert Predictor(trie, FixedRandom(0.95)).predict([]) == "y"

    def test_seeded_rng_reproducible(self, sample_tokens):
        """Test equal seeds give equal predictions."""
        trie = CountingTrie().learn_ngrams(sample_tokens, 2).to_probability_trie()

        first = Predictor(trie, random.Random(42)).generate(["the"], 30)
        second = Predictor(trie, random.Random(42)).generate(["the"], 30)

        assert first == second

    def test_default_rng(self, scenario_trie):
        """Test a predictor creates its own random source."""
        predictor = Predictor(scenario_trie.to_probability_trie())

        assert isinstance(predictor.rng, random.Random)


class TestGenerate:
    """Test suite for Predictor.generate."""

    def test_deterministic_cycle(self, cycle_trie):
        """Test generation follows the only successors."""
        predictor = Predictor(cycle_trie, random.Random(0))

        assert predictor.generate(["x"], 5) == ["y", "z", "x", "y", "z"]

    def test_rolling_window(self, cycle_trie):
        """Test a full-order window keeps working through back-off."""
        predictor = Predictor(cycle_trie, random.Random(0))

        assert predictor.generate(["z", "x"], 4) == ["y", "z", "x", "y"]

    def test_count_respected(self, sample_tokens):
        """Test the requested number of tokens is produced."""
        trie = CountingTrie().learn_ngrams(sample_tokens, 3).to_probability_trie()

        assert len(Predictor(trie, random.Random(3)).generate(["the", "stars"], 25)) == 25

    def test_zero_count(self, cycle_trie):
        """Test generating nothing."""
        assert Predictor(cycle_trie).generate(["x"], 0) == []

    def test_negative_count(self, cycle_trie):
        """Test negative counts are rejected."""
        with pytest.raises(ValueError):
            Predictor(cycle_trie).generate(["x"], -1)

    def test_empty_trie_stops_early(self):
        """Test generation stops when nothing can be predicted."""
        predictor = Predictor(CountingTrie().to_probability_trie())

        assert predictor.generate(["a"], 5) == []

    def test_seed_not_mutated(self, cycle_trie):
        """Test the caller's seed list is left untouched."""
        seed = ["x", "y"]
        Predictor(cycle_trie).generate(seed, 3)

        assert seed == ["x", "y"]

"""
Unit tests for randomized telegraph durations.
"""

import numpy as np
import pytest

from parry_duel.core.engine.durations import (
    DEFAULT_TELEGRAPH_MAX,
    DEFAULT_TELEGRAPH_MIN,
    TelegraphDurationProvider,
)


class TestTelegraphDurationProvider:
    """Test TelegraphDurationProvider functionality."""

    def test_defaults(self):
        provider = TelegraphDurationProvider()

        assert provider.minimum == DEFAULT_TELEGRAPH_MIN == 0.5
        assert provider.maximum == DEFAULT_TELEGRAPH_MAX == 1.5

    def test_single_draw_in_range(self):
        provider = TelegraphDurationProvider(seed=1)

        for _ in range(100):
            duration = provider.next_telegraph_duration()
            assert isinstance(duration, float)
            assert 0.5 <= duration <= 1.5

    def test_range_law_over_many_draws(self):
        """10,000 draws stay inside [0.5, 1.5] and reach close to both ends."""
        provider = TelegraphDurationProvider(seed=12345)

        draws = provider.sample(10_000)

        assert draws.shape == (10_000,)
        assert np.all(draws >= 0.5)
        assert np.all(draws <= 1.5)
        assert draws.min() < 0.5 + 0.01
        assert draws.max() > 1.5 - 0.01
        assert draws.mean() == pytest.approx(1.0, abs=0.02)

    def test_seed_makes_draws_repeatable(self):
        first = TelegraphDurationProvider(seed=7).sample(20)
        second = TelegraphDurationProvider(seed=7).sample(20)

        np.testing.assert_array_equal(first, second)

    def test_injected_generator_is_used(self):
        rng = np.random.default_rng(99)
        expected = np.clip(
            np.random.default_rng(99).uniform(0.5, np.nextafter(1.5, np.inf), size=5), 0.5, 1.5
        )

        provider = TelegraphDurationProvider(rng=rng)

        np.testing.assert_array_equal(provider.sample(5), expected)

    def test_degenerate_interval(self):
        """min == max always yields that exact value."""
        provider = TelegraphDurationProvider(1.0, 1.0, seed=3)

        assert all(provider.next_telegraph_duration() == 1.0 for _ in range(50))

    def test_inverted_interval_rejected(self):
        with pytest.raises(ValueError):
            TelegraphDurationProvider(2.0, 1.0)

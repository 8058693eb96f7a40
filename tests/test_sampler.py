"""Tests for random sampling."""

from collections import Counter
import itertools

from onyx.sampler import Sampler


def test_sample_exact_count_and_shape():
    out = list(Sampler("abc", 2, 5).sample(500))
    assert len(out) == 500
    assert all(2 <= len(s) <= 5 for s in out)
    assert all(set(s) <= set("abc") for s in out)


def test_every_length_and_character_shows_up():
    out = list(Sampler("0123456789", 1, 4, seed=7).sample(4000))
    lengths = Counter(len(s) for s in out)
    assert set(lengths) == {1, 2, 3, 4}
    # uniform: each length near 1000
    assert all(800 < n < 1200 for n in lengths.values())
    chars = Counter("".join(out))
    assert set(chars) == set("0123456789")


def test_seed_reproducible():
    a = list(Sampler("ab!", 1, 8, seed=42).sample(50))
    b = list(Sampler("ab!", 1, 8, seed=42).sample(50))
    assert a == b


def test_iteration_is_endless():
    out = list(itertools.islice(Sampler("a", 3, 3), 10))
    assert out == ["aaa"] * 10

import math

import numpy as np

from mictk.core.rand import GaussianGenerator, RandomContext


def test_gaussian_generator_pairs_sin_and_cos():
    rng = np.random.default_rng(5)
    gen = GaussianGenerator(rng)
    first = gen()
    assert gen.phase == 1
    second = gen()
    assert gen.phase == 0
    # Both branches share the same radius.
    radius_sq = first**2 + second**2
    replay = np.random.default_rng(5)
    u = 1.0 - float(replay.random())
    assert math.isclose(radius_sq, -2.0 * math.log(u), rel_tol=1e-9)


def test_independent_generators_do_not_share_phase():
    a = GaussianGenerator(np.random.default_rng(0))
    b = GaussianGenerator(np.random.default_rng(0))
    a()
    assert a.phase == 1
    assert b.phase == 0
    assert b() == GaussianGenerator(np.random.default_rng(0))()


def test_gaussian_statistics():
    gen = GaussianGenerator(np.random.default_rng(11))
    draws = np.array([gen() for _ in range(20000)])
    assert abs(draws.mean()) < 0.05
    assert abs(draws.std() - 1.0) < 0.05


def test_real_range_and_integer_bounds():
    ctx = RandomContext(seed=2)
    values = [ctx.real_range(-1.0, 1.0) for _ in range(1000)]
    assert min(values) >= -1.0 and max(values) < 1.0
    ints = {ctx.integer(4) for _ in range(500)}
    assert ints == {0, 1, 2, 3}


def test_int_radius_wraps():
    ctx = RandomContext(seed=4)
    for _ in range(200):
        value = ctx.int_radius(0, 3, 10)
        assert 0 <= value < 10
        assert value in {7, 8, 9, 0, 1, 2}


def test_int_radius_2d_stays_in_range():
    ctx = RandomContext(seed=8)
    for _ in range(200):
        assert 0 <= ctx.int_radius_2d(12, 2, 5, 25) < 25
        assert 0 <= ctx.int_radius_2d_gaussian(12, 2, 5, 25) < 25


def test_permute_is_a_permutation_and_seeded():
    a = list(range(20))
    b = list(range(20))
    RandomContext(seed=9).permute(a)
    RandomContext(seed=9).permute(b)
    assert a == b
    assert sorted(a) == list(range(20))


def test_permute_moves_every_position():
    last_seen = set()
    for seed in range(200):
        values = list(range(5))
        RandomContext(seed=seed).permute(values)
        last_seen.add(values[-1])
    assert last_seen == {0, 1, 2, 3, 4}


def test_uniform_int_includes_both_ends():
    ctx = RandomContext(seed=3)
    draws = {ctx.uniform_int(2, 5) for _ in range(500)}
    assert draws == {2, 3, 4, 5}
    assert ctx.uniform_int(7, 7) == 7

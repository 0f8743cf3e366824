from core.rng import create_seed, mulberry32, rng_for_step


def test_same_seed_same_sequence():
    a = mulberry32(12345)
    b = mulberry32(12345)
    assert [a() for _ in range(50)] == [b() for _ in range(50)]


def test_different_seeds_differ():
    assert mulberry32(12345)() != mulberry32(54321)()


def test_values_in_unit_interval():
    rng = mulberry32(987654321)
    for _ in range(1000):
        v = rng()
        assert 0.0 <= v < 1.0


def test_known_stream_is_stable_across_runs():
    rng = mulberry32(12345)
    assert [rng(), rng(), rng()] == [0.9797282677609473, 0.3067522644996643, 0.484205421525985]
    assert mulberry32(0)() == 0.26642920868471265


def test_seed_is_deterministic():
    assert create_seed("session-abc", 5) == create_seed("session-abc", 5)
    assert create_seed("session-abc", 5) == 1248019565


def test_seed_varies_with_session_and_step():
    assert create_seed("session-abc", 5) != create_seed("session-xyz", 5)
    assert create_seed("session-abc", 5) != create_seed("session-abc", 6)


def test_seed_is_non_negative_and_handles_unicode():
    assert create_seed("test-session-123", 0) == 1475353443
    assert create_seed("héllo-✓", 3) == 672224390
    for i in range(200):
        assert create_seed("x" * 40, i) >= 0


def test_rng_for_step_matches_manual_construction():
    a = rng_for_step("s-1", 7)
    b = mulberry32(create_seed("s-1", 7))
    assert [a() for _ in range(5)] == [b() for _ in range(5)]

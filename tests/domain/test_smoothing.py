from rail_motion.domain.entities.geography import Point
from rail_motion.domain.mechanics.mechanics_smoothing import smooth_damp, smooth_damp_point

DT = 1.0 / 60.0


def test_zero_dt_keeps_value_and_velocity():
    value, vel = smooth_damp(0.0, 1.0, 0.3, 0.5, 0.0)
    assert value == 0.0
    assert abs(vel - 0.3) < 1e-12


def test_approach_is_monotone_and_never_passes_target():
    x, v = 0.0, 0.0
    seen = []
    for _ in range(600):
        x, v = smooth_damp(x, 1.0, v, 0.5, DT)
        seen.append(x)
    assert all(b >= a for a, b in zip(seen, seen[1:]))
    assert max(seen) <= 1.0
    assert abs(seen[-1] - 1.0) < 1e-6


def test_overshoot_snaps_to_target_and_kills_velocity():
    # a large carried velocity would fling the value well past the target
    value, vel = smooth_damp(0.0, 1.0, 100.0, 0.5, 0.1)
    assert value == 1.0 and vel == 0.0


def test_overshoot_from_above():
    value, vel = smooth_damp(1.0, 0.0, -100.0, 0.5, 0.1)
    assert value == 0.0 and vel == 0.0


def test_at_target_stays_put():
    assert smooth_damp(1.0, 1.0, 0.5, 0.5, DT) == (1.0, 0.0)


def test_float_noise_near_target_is_clamped_by_epsilon():
    assert smooth_damp(1.0 - 1e-15, 1.0, 0.0, 0.5, DT) == (1.0, 0.0)
    # a looser epsilon swallows larger residues too
    assert smooth_damp(1.0 - 1e-7, 1.0, 0.0, 0.5, DT, eps=1e-6) == (1.0, 0.0)


def test_momentum_carries_the_value_forward():
    still, _ = smooth_damp(0.0, 1.0, 0.0, 0.5, DT)
    moving, _ = smooth_damp(0.0, 1.0, 2.0, 0.5, DT)
    assert 0.0 < still < moving < 1.0


def test_point_axes_are_independent():
    p, (vx, vy) = smooth_damp_point(Point(0.0, 5.0), Point(1.0, 5.0), (0.0, 0.0), 0.5, DT)
    assert 0.0 < p.x < 1.0 and vx > 0.0
    assert p.y == 5.0 and vy == 0.0

from rail_motion.domain.entities.geography import Point

Velocity = tuple[float, float]


def smooth_damp(
    current: float,
    target: float,
    velocity: float,
    smooth_time: float,
    dt: float,
    eps: float = 1e-12,
) -> tuple[float, float]:
    """
    One critically damped spring step (Game Programming Gems 4, ch. 1.10).

    Returns (value, velocity). When the step lands within ``eps`` of the target,
    or crosses it, the value snaps to the target and velocity is zeroed.
    """
    omega = 2.0 / smooth_time
    x = omega * dt
    decay = 1.0 / (1.0 + x + 0.48 * x * x + 0.235 * x * x * x)
    change = current - target
    temp = (velocity + omega * change) * dt
    new_velocity = (velocity - omega * temp) * decay
    value = target + (change + temp) * decay

    before = target - current
    after = target - value
    if abs(before) <= eps or abs(after) <= eps or (before > 0) != (after > 0):
        return target, 0.0
    return value, new_velocity


def smooth_damp_point(
    current: Point,
    target: Point,
    velocity: Velocity,
    smooth_time: float,
    dt: float,
    eps: float = 1e-12,
) -> tuple[Point, Velocity]:
    # axes are independent
    x, vx = smooth_damp(current.x, target.x, velocity[0], smooth_time, dt, eps)
    y, vy = smooth_damp(current.y, target.y, velocity[1], smooth_time, dt, eps)
    return Point(x, y), (vx, vy)

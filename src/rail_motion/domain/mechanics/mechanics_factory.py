# rail_motion/domain/mechanics/mechanics_factory.py

from rail_motion.config.models import AnimationModel, ResolverUnion, TrailModel
from rail_motion.domain.mechanics.mechanics_core import Animator
from rail_motion.domain.mechanics.mechanics_geometry import GeometryIndex
from rail_motion.runtime.registries import make_easing, make_resolver


def build_animator(
    animation: AnimationModel,
    trail: TrailModel,
    resolver: ResolverUnion,
    *,
    geometry: GeometryIndex,
) -> Animator:
    return Animator(
        resolver=make_resolver(resolver, deps={"geometry": geometry}),
        easing=make_easing(animation.easing),
        duration_s=animation.duration_s,
        smooth_time_s=animation.smooth_time_s,
        heading_window=animation.heading_window,
        overshoot_eps=animation.overshoot_eps,
        trail_max_len=trail.max_len,
        trail_min_step=trail.min_step,
    )

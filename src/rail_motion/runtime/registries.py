# runtime/registries.py
from collections.abc import Callable
from typing import Any

from rail_motion.app.protocols import Easing, EvictionPolicy, PathResolver
from rail_motion.config.models import (
    EvictionGraceModel,
    EvictionImmediateModel,
    EvictionUnion,
    GeometryByName,
    GeometryByPath,
    GeometryInline,
    GeometryRef,
    ResolverStraightModel,
    ResolverTrackModel,
    ResolverUnion,
)
from rail_motion.domain.entities.motion import (
    ease_in_out_quad,
    ease_in_out_sine,
    ease_out_cubic,
    linear,
)
from rail_motion.domain.mechanics.mechanics_geometry import GeometryIndex
from rail_motion.domain.mechanics.mechanics_resolvers import StraightLineResolver, TrackPathResolver
from rail_motion.policy.eviction import GraceEviction, ImmediateEviction
from rail_motion.runtime.resources import load_geojson

ResolverFactory = Callable[[ResolverUnion, dict], PathResolver]
EvictionFactory = Callable[[EvictionUnion, dict], EvictionPolicy]

_resolver_registry: dict[str, ResolverFactory] = {}
_easing_registry: dict[str, Easing] = {}
_eviction_registry: dict[str, EvictionFactory] = {}


# ------------------- Geometry ---------------------------


def resolve_geometry(ref: GeometryRef | None, *, deps: dict[str, Any]) -> GeometryIndex:
    """
    deps can include:
      - 'geometries': dict[str, GeometryIndex]  # prebuilt indexes by name
      - 'geometry': GeometryIndex               # a direct fallback/default
    """
    if ref is None:
        if "geometry" in deps:
            return deps["geometry"]
        raise ValueError("No geometry provided")
    if isinstance(ref, GeometryByName):
        return deps["geometries"][ref.name]  # raises KeyError if missing
    if isinstance(ref, GeometryInline):
        return GeometryIndex.from_features(ref.features)
    if isinstance(ref, GeometryByPath):
        fc = load_geojson(ref.file, ref.must_exist)
        return GeometryIndex() if fc is None else GeometryIndex.from_geojson(fc)
    raise TypeError(ref)


# ------------------- Path resolvers ---------------------------


def register_resolver(kind: str):
    def deco(fn: ResolverFactory):
        _resolver_registry[kind] = fn
        return fn

    return deco


def make_resolver(cfg: ResolverUnion, *, deps: dict) -> PathResolver:
    try:
        factory = _resolver_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown resolver kind {cfg.kind!r}") from None
    return factory(cfg, deps)


@register_resolver("track")
def _make_track(cfg: ResolverTrackModel, deps):
    return TrackPathResolver(deps["geometry"])


@register_resolver("straight")
def _make_straight(cfg: ResolverStraightModel, deps):
    return StraightLineResolver()


# ------------------- Easing ---------------------------


def register_easing(name: str):
    def deco(fn: Easing):
        _easing_registry[name] = fn
        return fn

    return deco


def make_easing(name: str) -> Easing:
    try:
        return _easing_registry[name]
    except KeyError:
        raise ValueError(f"Unknown easing {name!r}") from None


for _curve in (linear, ease_in_out_quad, ease_in_out_sine, ease_out_cubic):
    register_easing(_curve.__name__)(_curve)


# ---------------------- Eviction ----------------------------


def register_eviction(kind: str):
    def deco(fn: EvictionFactory):
        _eviction_registry[kind] = fn
        return fn

    return deco


def make_eviction(cfg: EvictionUnion) -> EvictionPolicy:
    try:
        factory = _eviction_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown eviction kind {cfg.kind!r}") from None
    return factory(cfg, {})


@register_eviction("immediate")
def _make_immediate(cfg: EvictionImmediateModel, deps):
    return ImmediateEviction()


@register_eviction("grace")
def _make_grace(cfg: EvictionGraceModel, deps):
    return GraceEviction(grace_s=cfg.grace_s)

# rail_motion/domain/mechanics/mechanics_geometry.py
from collections.abc import Iterable, Mapping

import numpy as np

from rail_motion.domain.entities.geography import Polyline


def _line_names(props: Mapping) -> list[str]:
    names = []
    for line in props.get("lines") or ():
        name = line.get("name") if isinstance(line, Mapping) else line
        if name:
            names.append(str(name))
    return names


def _parts(geometry: Mapping | None) -> list[list]:
    if not geometry:
        return []
    kind = geometry.get("type")
    coords = geometry.get("coordinates") or []
    if kind == "LineString":
        return [coords]
    if kind == "MultiLineString":
        return list(coords)
    return []


class GeometryIndex:
    """
    Static track geometry grouped by line name. Built once, read-only afterwards.
    Polylines with fewer than 2 vertices are dropped at load.
    """

    def __init__(self, polylines: Iterable[Polyline] = ()):
        self._by_line: dict[str, list[Polyline]] = {}
        for pl in polylines:
            self._add(pl)

    def _add(self, pl: Polyline) -> None:
        if len(pl) < 2:
            return
        self._by_line.setdefault(pl.line_name, []).append(pl)

    @classmethod
    def from_coordinates(cls, lines: Mapping[str, Iterable[Iterable]]) -> "GeometryIndex":
        """{line name: [polyline coords, ...]} -> index. Handy for tests and inline config."""
        return cls(
            _make_polyline(name, coords) for name, polys in lines.items() for coords in polys
        )

    @classmethod
    def from_geojson(cls, fc: Mapping) -> "GeometryIndex":
        if fc.get("type") != "FeatureCollection":
            raise ValueError(f"expected a GeoJSON FeatureCollection, got {fc.get('type')!r}")
        return cls.from_features(fc.get("features") or [])

    @classmethod
    def from_features(cls, features: Iterable[Mapping]) -> "GeometryIndex":
        idx = cls()
        for feature in features:
            names = _line_names(feature.get("properties") or {})
            for coords in _parts(feature.get("geometry")):
                if len(coords) < 2:
                    continue
                # one shared array per drawn stretch, even when several lines run on it
                arr = _as_array(coords)
                for name in names:
                    idx._add(Polyline(line_name=name, coords=arr))
        return idx

    def segments_for_line(self, name: str) -> list[Polyline]:
        return list(self._by_line.get(name, ()))

    @property
    def line_names(self) -> list[str]:
        return sorted(self._by_line)

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_line.values())


def _as_array(coords) -> np.ndarray:
    arr = np.asarray(coords, dtype=float)
    if arr.ndim != 2 or arr.shape[1] < 2:
        raise ValueError(f"polyline coordinates must be (n, 2), got shape {arr.shape}")
    arr = np.ascontiguousarray(arr[:, :2])
    arr.setflags(write=False)
    return arr


def _make_polyline(name: str, coords) -> Polyline:
    coords = list(coords)
    if len(coords) == 0:
        return Polyline(line_name=name, coords=np.empty((0, 2)))
    return Polyline(line_name=name, coords=_as_array(coords))

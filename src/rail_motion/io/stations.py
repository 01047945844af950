# rail_motion/io/stations.py
import re
from collections.abc import Iterable, Mapping
from functools import lru_cache

from rail_motion.app.protocols import StationLookup
from rail_motion.domain.entities.geography import Point, to_point

# Feed spellings that do not normalise onto the geometry dataset's names
ALIASES: dict[str, str] = {
    "king's cross st. pancras": "kings cross st pancras",
    "kings cross": "kings cross st pancras",
    "hammersmith (h&c line)": "hammersmith",
    "hammersmith (district line)": "hammersmith",
    "edgware road (bakerloo)": "edgware road",
    "edgware road (circle)": "edgware road",
    "paddington (h&c line)": "paddington",
    "shepherd's bush market": "shepherds bush market",
    "shepherd's bush": "shepherds bush",
    "st. james's park": "st jamess park",
    "st james's park": "st jamess park",
    "highbury & islington": "highbury and islington",
    "earls court": "earl's court",
}

_PAREN = re.compile(r"\(.*?\)")
_NOISE = re.compile(r"\b(?:underground\s+station|station|rail)\b")
_SPACE = re.compile(r"\s+")


def normalize_station_name(name: str) -> str:
    s = name.lower().replace("’", "'").replace("‘", "'")
    s = _PAREN.sub(" ", s)
    s = _NOISE.sub(" ", s)
    s = s.replace("st.", "st").replace("&", "and")
    return _SPACE.sub(" ", s).strip()


class StationDirectory(StationLookup):
    """
    Station name -> coordinate. Tries, in order: the normalised name, the alias
    table, then the first known name containing (or contained in) the query.
    """

    def __init__(
        self,
        stations: Mapping[str, Point | tuple[float, float]] | Iterable[tuple[str, Point]] = (),
        aliases: Mapping[str, str] | None = None,
        cache_size: int = 1024,
    ):
        self._by_name: dict[str, Point] = {}
        # feed spellings repeat every cycle; bounded so odd names cannot grow it forever
        self._cached = lru_cache(maxsize=cache_size)(self._resolve)
        items = stations.items() if isinstance(stations, Mapping) else stations
        for name, p in items:
            self.add(name, p)
        merged = {**ALIASES, **(aliases or {})}
        self._aliases = {
            normalize_station_name(k): normalize_station_name(v) for k, v in merged.items()
        }

    @classmethod
    def from_geojson(cls, fc: Mapping, aliases: Mapping[str, str] | None = None):
        if fc.get("type") != "FeatureCollection":
            raise ValueError(f"expected a GeoJSON FeatureCollection, got {fc.get('type')!r}")
        pairs = []
        for feature in fc.get("features") or ():
            name = (feature.get("properties") or {}).get("name")
            coords = (feature.get("geometry") or {}).get("coordinates")
            if name and coords:
                pairs.append((name, Point(float(coords[0]), float(coords[1]))))
        return cls(pairs, aliases=aliases)

    def add(self, name: str, p: Point | tuple[float, float]) -> None:
        pt = to_point(p)
        key = normalize_station_name(name)
        if key:
            self._by_name[key] = pt
        self._by_name[name.lower()] = pt
        self._cached.cache_clear()

    def __len__(self) -> int:
        return len(self._by_name)

    def lookup(self, station_name: str) -> Point | None:
        if not station_name:
            return None
        return self._cached(station_name)

    def cache_info(self):
        return self._cached.cache_info()

    def _resolve(self, station_name: str) -> Point | None:
        return self._find(normalize_station_name(station_name))

    def _find(self, key: str) -> Point | None:
        if not key:
            return None
        if key in self._by_name:
            return self._by_name[key]
        alias = self._aliases.get(key)
        if alias and alias in self._by_name:
            return self._by_name[alias]
        for name, p in self._by_name.items():
            if key in name or name in key:
                return p
        return None

# rail_motion/io/render.py
from collections.abc import Iterable

from rail_motion.domain.entities.vehicle import VehiclePosition, VehicleTrail


def positions_to_geojson(positions: Iterable[VehiclePosition]) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {
                    "id": p.id,
                    "lineId": p.line_id,
                    "lineName": p.line_name,
                    "destination": p.destination,
                    "timeToStation": p.time_to_station,
                    "heading": p.heading,
                },
                "geometry": {"type": "Point", "coordinates": list(p.position.xy)},
            }
            for p in positions
        ],
    }


def trails_to_geojson(trails: Iterable[VehicleTrail]) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"id": tr.id, "lineId": tr.line_id, "lineName": tr.line_name},
                "geometry": {
                    "type": "LineString",
                    "coordinates": [list(p.xy) for p in tr.coordinates],
                },
            }
            for tr in trails
        ],
    }

# rail_motion/runtime/resources.py
import json
import os
from functools import lru_cache


@lru_cache(maxsize=8)
def load_geojson(file: str, must_exist: bool = True) -> dict | None:
    if not os.path.exists(file):
        if must_exist:
            raise FileNotFoundError(file)
        return None
    with open(file, encoding="utf-8") as f:
        return json.load(f)

# rail_motion/domain/lines.py

# Line slugs (Unified API) and TrackerNet one-letter codes -> name used by the
# track geometry dataset.
LINE_ID_TO_NAME: dict[str, str] = {
    "bakerloo": "Bakerloo",
    "central": "Central",
    "circle": "Circle",
    "district": "District",
    "hammersmith-city": "Hammersmith & City",
    "jubilee": "Jubilee",
    "metropolitan": "Metropolitan",
    "northern": "Northern",
    "piccadilly": "Piccadilly",
    "victoria": "Victoria",
    "waterloo-city": "Waterloo & City",
}

LINE_CODES: dict[str, str] = {
    "B": "Bakerloo",
    "C": "Central",
    "D": "District",
    "H": "Hammersmith & City",
    "J": "Jubilee",
    "M": "Metropolitan",
    "N": "Northern",
    "P": "Piccadilly",
    "V": "Victoria",
    "W": "Waterloo & City",
    "L": "Circle",
}


def line_display_name(line_id: str) -> str:
    """Unknown ids pass through unchanged, so already-canonical names work too."""
    return LINE_ID_TO_NAME.get(line_id) or LINE_CODES.get(line_id) or line_id

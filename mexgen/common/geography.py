"""Static geography for Mexican states."""

from __future__ import annotations

import unicodedata

from mexgen.common.models import Coordinate

STATE_CENTROIDS: dict[str, tuple[float, float]] = {
    "Aguascalientes": (21.88, -102.29),
    "Baja California": (30.84, -115.28),
    "Baja California Sur": (24.14, -110.31),
    "Campeche": (18.84, -90.36),
    "Chiapas": (16.75, -93.12),
    "Chihuahua": (28.63, -106.09),
    "Ciudad de México": (19.43, -99.13),
    "Coahuila": (27.06, -101.71),
    "Colima": (19.24, -103.72),
    "Durango": (24.02, -104.66),
    "Estado de México": (19.49, -99.87),
    "Guanajuato": (21.02, -101.26),
    "Guerrero": (17.44, -99.55),
    "Hidalgo": (20.09, -98.76),
    "Jalisco": (20.66, -103.35),
    "Michoacán": (19.57, -101.71),
    "Morelos": (18.68, -99.23),
    "Nayarit": (21.75, -104.85),
    "Nuevo León": (25.59, -99.99),
    "Oaxaca": (17.07, -96.72),
    "Puebla": (19.04, -98.20),
    "Querétaro": (20.59, -100.39),
    "Quintana Roo": (19.18, -88.48),
    "San Luis Potosí": (22.15, -100.98),
    "Sinaloa": (24.81, -107.39),
    "Sonora": (29.07, -110.96),
    "Tabasco": (17.99, -92.93),
    "Tamaulipas": (24.27, -98.84),
    "Tlaxcala": (19.32, -98.24),
    "Veracruz": (19.18, -96.14),
    "Yucatán": (20.97, -89.62),
    "Zacatecas": (22.77, -102.58),
}

MEXICO_BBOX_WGS84 = {
    "min_lat": 14.0,
    "max_lat": 33.0,
    "min_lon": -118.0,
    "max_lon": -86.0,
}


def _fold(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


_CENTROIDS_BY_KEY = {_fold(name): value for name, value in STATE_CENTROIDS.items()}


def state_centroid(state: str | None) -> Coordinate | None:
    """Look up a state centroid, ignoring case and accents."""
    if not state:
        return None
    value = _CENTROIDS_BY_KEY.get(_fold(state))
    if value is None:
        return None
    return Coordinate(lat=value[0], lon=value[1])


def within_bbox(lat: float, lon: float, bbox: dict) -> bool:
    return bbox["min_lat"] <= lat <= bbox["max_lat"] and bbox["min_lon"] <= lon <= bbox["max_lon"]

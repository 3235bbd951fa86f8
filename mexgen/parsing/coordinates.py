"""Reprojection of planar source coordinates to WGS84."""

from __future__ import annotations

import math
from functools import lru_cache

from pyproj import CRS, Transformer

from mexgen.common.constants import WEB_MERCATOR_HALF_EXTENT
from mexgen.common.models import Coordinate
from mexgen.parsing.numeric import parse_numeric

WEB_MERCATOR_EPSG = 3857
WGS84_EPSG = 4326


@lru_cache(maxsize=8)
def _transformer(source_epsg: int) -> Transformer:
    return Transformer.from_crs(CRS.from_epsg(source_epsg), CRS.from_epsg(WGS84_EPSG), always_xy=True)


def _valid_lat_lon(lat: float, lon: float) -> bool:
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


def _transform_to_wgs84(x: float, y: float, source_epsg: int) -> tuple[float, float] | None:
    if source_epsg == WGS84_EPSG:
        return y, x
    if source_epsg == WEB_MERCATOR_EPSG and abs(x) > WEB_MERCATOR_HALF_EXTENT:
        # pyproj would wrap these into range; they are off the map instead.
        return None
    try:
        lon, lat = _transformer(source_epsg).transform(x, y)
    except Exception:
        return None
    return lat, lon


def reproject(
    x: str | float | None,
    y: str | float | None,
    source_epsg: int = WEB_MERCATOR_EPSG,
) -> Coordinate | None:
    """Convert an x/y pair (Web Mercator metres by default) to lat/lon degrees.

    For EPSG:4326 input, ``x`` is the longitude and ``y`` the latitude.
    Returns ``None`` if either value is absent or the result is off the globe.
    """
    parsed_x = parse_numeric(x)
    parsed_y = parse_numeric(y)
    if parsed_x is None or parsed_y is None:
        return None

    transformed = _transform_to_wgs84(parsed_x, parsed_y, source_epsg)
    if transformed is None:
        return None
    lat, lon = transformed

    if not _valid_lat_lon(lat, lon):
        return None
    return Coordinate(lat=lat, lon=lon)

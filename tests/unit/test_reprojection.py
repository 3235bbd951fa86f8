import pytest

from mexgen.common.geography import MEXICO_BBOX_WGS84, within_bbox
from mexgen.parsing.coordinates import WGS84_EPSG, reproject


def test_reproject_origin_is_null_island():
    location = reproject(0, 0)
    assert location.lat == pytest.approx(0.0, abs=1e-9)
    assert location.lon == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize(
    ("x", "y", "lat", "lon"),
    [
        ("-10731198.91", "2239890.42", 19.72, -96.40),
        ("-12826231.73", "3817250.64", 32.41, -115.22),
        ("-10549748.14", "1869665.99", 16.56, -94.77),
    ],
)
def test_reproject_mexican_points_land_in_mexico(x, y, lat, lon):
    location = reproject(x, y)
    assert location.lat == pytest.approx(lat, abs=0.01)
    assert location.lon == pytest.approx(lon, abs=0.01)
    assert within_bbox(location.lat, location.lon, MEXICO_BBOX_WGS84)


def test_reproject_absent_or_unparsable_values():
    assert reproject("", "2200000") is None
    assert reproject("-10733000", None) is None
    assert reproject("N/D", "N/D") is None


def test_reproject_rejects_points_off_the_map():
    assert reproject(-30000000, 2200000) is None


def test_reproject_wgs84_passthrough_is_lon_lat():
    location = reproject(-96.4, 19.72, source_epsg=WGS84_EPSG)
    assert (location.lat, location.lon) == (19.72, -96.4)
    assert reproject(-96.4, 95.0, source_epsg=WGS84_EPSG) is None

"""Byte-level and pyshp round-trip tests for the shapefile writer."""

import datetime
import io
import struct

import pytest
import shapefile
from pyproj import CRS

from polygon_export import InsufficientVerticesError, encode_shapefile
from polygon_export.shapefile_writer import WGS84_PRJ, encode_dbf, record_content_length


def _be(data: bytes, offset: int) -> int:
    return struct.unpack_from(">i", data, offset)[0]


def _le(data: bytes, offset: int) -> int:
    return struct.unpack_from("<i", data, offset)[0]


def _box(data: bytes, offset: int) -> tuple[float, float, float, float]:
    return struct.unpack_from("<4d", data, offset)


class TestShpLayout:
    def test_file_header(self, triangle, export_date):
        shp = encode_shapefile(triangle, export_date).shp
        assert _be(shp, 0) == 9994
        assert shp[4:24] == bytes(20)
        assert _le(shp, 28) == 1000
        assert _le(shp, 32) == 5
        assert shp[68:100] == bytes(32)

    def test_file_length_in_words(self, parcel, export_date):
        shp = encode_shapefile(parcel, export_date).shp
        n = len(parcel) + 1
        assert len(shp) == 100 + 8 + 48 + 16 * n
        assert _be(shp, 24) * 2 == len(shp)

    def test_header_bbox_matches_vertices(self, parcel, export_date):
        shp = encode_shapefile(parcel, export_date).shp
        xmin, ymin, xmax, ymax = _box(shp, 36)
        assert xmin == min(v.lng for v in parcel)
        assert ymin == min(v.lat for v in parcel)
        assert xmax == max(v.lng for v in parcel)
        assert ymax == max(v.lat for v in parcel)

    def test_record(self, parcel, export_date):
        shp = encode_shapefile(parcel, export_date).shp
        n = len(parcel) + 1
        assert _be(shp, 100) == 1
        assert _be(shp, 104) == (48 + 16 * n) // 2
        assert _le(shp, 108) == 5
        assert _box(shp, 112) == _box(shp, 36)
        assert _le(shp, 144) == 1
        assert _le(shp, 148) == n
        assert _le(shp, 152) == 0

    def test_points_closed_lng_lat(self, parcel, export_date):
        shp = encode_shapefile(parcel, export_date).shp
        n = len(parcel) + 1
        points = [struct.unpack_from("<2d", shp, 156 + 16 * i) for i in range(n)]
        assert points[0] == points[-1]
        assert points[:-1] == [(v.lng, v.lat) for v in parcel]

    def test_pre_closed_ring_not_closed_twice(self, parcel, export_date):
        open_shp = encode_shapefile(parcel, export_date).shp
        closed_shp = encode_shapefile(parcel + [parcel[0]], export_date).shp
        assert open_shp == closed_shp

    def test_content_length_helper(self):
        assert record_content_length(4) == 48 + 64


class TestShxLayout:
    def test_header_and_length(self, triangle, export_date):
        parts = encode_shapefile(triangle, export_date)
        assert len(parts.shx) == 108
        assert _be(parts.shx, 0) == 9994
        assert _be(parts.shx, 24) == 54
        assert parts.shx[28:100] == parts.shp[28:100]

    def test_index_record(self, parcel, export_date):
        parts = encode_shapefile(parcel, export_date)
        assert _be(parts.shx, 100) == 50
        assert _be(parts.shx, 104) == _be(parts.shp, 104)


class TestDbfLayout:
    def test_exact_bytes(self, export_date):
        expected = (
            bytes([0x03, 124, 3, 15])
            + struct.pack("<IHH", 1, 65, 11)
            + bytes(20)
            + b"ID" + bytes(9)
            + b"N"
            + bytes(4)
            + bytes([10, 0])
            + bytes(14)
            + b"\x0d"
            + b" " + b"         1"
            + b"\x1a"
        )
        assert encode_dbf(export_date) == expected

    def test_length(self, triangle, export_date):
        assert len(encode_shapefile(triangle, export_date).dbf) == 65 + 11 + 1

    def test_defaults_to_today(self):
        today = datetime.date.today()
        dbf = encode_dbf()
        assert tuple(dbf[1:4]) == (today.year - 1900, today.month, today.day)


class TestPrj:
    def test_constant_wkt(self, triangle, parcel, export_date):
        assert encode_shapefile(triangle, export_date).prj == WGS84_PRJ.encode()
        assert encode_shapefile(parcel, export_date).prj == WGS84_PRJ.encode()

    def test_geographic_wgs84(self):
        crs = CRS.from_wkt(WGS84_PRJ)
        assert crs.is_geographic
        assert "WGS" in crs.name.upper()


class TestPyshpReadsOutput:
    def _reader(self, parts):
        return shapefile.Reader(shp=io.BytesIO(parts.shp), shx=io.BytesIO(parts.shx), dbf=io.BytesIO(parts.dbf))

    def test_polygon_shape(self, parcel, export_date):
        sf = self._reader(encode_shapefile(parcel, export_date))
        assert sf.shapeType == shapefile.POLYGON
        assert len(sf) == 1
        shape = sf.shape(0)
        assert list(shape.parts) == [0]
        assert [tuple(p) for p in shape.points[:-1]] == [(v.lng, v.lat) for v in parcel]

    def test_bbox(self, parcel, export_date):
        sf = self._reader(encode_shapefile(parcel, export_date))
        assert list(sf.bbox) == [
            min(v.lng for v in parcel),
            min(v.lat for v in parcel),
            max(v.lng for v in parcel),
            max(v.lat for v in parcel),
        ]

    def test_id_record(self, triangle, export_date):
        sf = self._reader(encode_shapefile(triangle, export_date))
        assert [f[0] for f in sf.fields[1:]] == ["ID"]
        assert sf.record(0)[0] == 1


class TestInsufficientVertices:
    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_raises(self, parcel, count):
        with pytest.raises(InsufficientVerticesError) as excinfo:
            encode_shapefile(parcel[:count])
        assert excinfo.value.count == count

    def test_is_value_error(self, parcel):
        with pytest.raises(ValueError):
            encode_shapefile(parcel[:2])

"""
Tests for the dialect-driven line parser.

Covers both the quoted federal layout and the unquoted simplified layout:
zero padding, quote stripping, header detection and the error cases.
"""

import unittest

import numpy as np

from zipfed.datasets.dialect import Dialect, pad_zip, parse_line, strip_quotes
from zipfed.datasets.federal.schema import DIALECT as FEDERAL
from zipfed.datasets.simplified.schema import DIALECT as SIMPLIFIED
from zipfed.errors import EmptyLine, HeaderRow, InvalidNumeric, ParseError, TruncatedRecord
from zipfed.records import ZipType

FEDERAL_LINE = '"1","00601","STANDARD","Adjuntas","PR","PRIMARY",18.18,-66.75,0.38,-0.87,0.3,"NA","US","Adjuntas, PR"'
SIMPLIFIED_LINE = "601,STANDARD,Adjuntas,PR,18.18,-66.75"


class TestFederalDialect(unittest.TestCase):
    """Quoted federal CSV rows."""

    def test_example_row(self):
        rec = parse_line(FEDERAL, FEDERAL_LINE)
        self.assertEqual(rec.zip, "00601")
        self.assertIs(rec.kind, ZipType.STANDARD)
        self.assertEqual(rec.city, "Adjuntas")
        self.assertEqual(rec.state, "PR")
        self.assertEqual(rec.lat, np.float32(18.18))
        self.assertEqual(rec.lon, np.float32(-66.75))
        self.assertIsInstance(rec.lat, np.float32)

    def test_deterministic(self):
        """Same line, bit-identical fields."""
        a = parse_line(FEDERAL, FEDERAL_LINE)
        b = parse_line(FEDERAL, FEDERAL_LINE)
        self.assertEqual(a, b)
        self.assertEqual(a.lat.tobytes(), b.lat.tobytes())
        self.assertEqual(a.lon.tobytes(), b.lon.tobytes())

    def test_header_row(self):
        header = '"RecordNumber","Zipcode","ZipCodeType","City","State","LocationType","Lat","Long","Xaxis","Yaxis","Zaxis"'
        with self.assertRaises(HeaderRow):
            parse_line(FEDERAL, header)

    def test_unquoted_recordnumber_is_not_a_header(self):
        """Only the quoted sentinel counts; this row fails later on its numbers."""
        line = 'RecordNumber,"Zipcode","ZipCodeType","City","State","LocationType","Lat","Long","Xaxis","Yaxis","Zaxis"'
        with self.assertRaises(InvalidNumeric):
            parse_line(FEDERAL, line)

    def test_quotes_stripped_anywhere(self):
        line = '"2","""501""","UNI"QUE","HOLTS"VILLE"","N"Y","PRIMARY",40.81,-73.04,0,0,0'
        rec = parse_line(FEDERAL, line)
        self.assertEqual(rec.zip, "00501")
        self.assertIs(rec.kind, ZipType.UNIQUE)
        self.assertEqual(rec.city, "HOLTSVILLE")
        self.assertEqual(rec.state, "NY")

    def test_unknown_type_is_invalid(self):
        line = FEDERAL_LINE.replace('"STANDARD"', '"RURAL"')
        self.assertIs(parse_line(FEDERAL, line).kind, ZipType.INVALID)

    def test_truncated(self):
        with self.assertRaises(TruncatedRecord):
            parse_line(FEDERAL, '"1","00601","STANDARD","Adjuntas","PR","PRIMARY",18.18,-66.75')

    def test_blank_latitude(self):
        line = '"3","09002","MILITARY","APO","AE","PRIMARY",,,,,'
        with self.assertRaises(InvalidNumeric):
            parse_line(FEDERAL, line)


class TestSimplifiedDialect(unittest.TestCase):
    """Unquoted rows as written by the exporter."""

    def test_example_row(self):
        rec = parse_line(SIMPLIFIED, SIMPLIFIED_LINE)
        self.assertEqual(rec.zip, "00601")
        self.assertIs(rec.kind, ZipType.STANDARD)
        self.assertEqual(rec.city, "Adjuntas")
        self.assertEqual(rec.state, "PR")
        self.assertEqual(rec.lat, np.float32(18.18))
        self.assertEqual(rec.lon, np.float32(-66.75))

    def test_quotes_are_kept(self):
        rec = parse_line(SIMPLIFIED, '02101,STANDARD,"BOSTON",MA,42.37,-71.03')
        self.assertEqual(rec.city, '"BOSTON"')

    def test_no_header_sentinel(self):
        with self.assertRaises(InvalidNumeric):
            parse_line(SIMPLIFIED, "Zipcode,ZipCodeType,City,State,Lat,Long")

    def test_extra_columns_ignored(self):
        rec = parse_line(SIMPLIFIED, SIMPLIFIED_LINE + ",whatever,else")
        self.assertEqual(rec.lon, np.float32(-66.75))

    def test_bad_numeric(self):
        with self.assertRaises(InvalidNumeric) as ctx:
            parse_line(SIMPLIFIED, "601,STANDARD,Adjuntas,PR,north,-66.75")
        self.assertIn("lat", str(ctx.exception))

    def test_truncated(self):
        with self.assertRaises(TruncatedRecord):
            parse_line(SIMPLIFIED, "601,STANDARD,Adjuntas,PR,18.18")


class TestParserEdges(unittest.TestCase):

    def test_empty_and_none(self):
        for dialect in (FEDERAL, SIMPLIFIED):
            with self.assertRaises(EmptyLine):
                parse_line(dialect, "")
            with self.assertRaises(EmptyLine):
                parse_line(dialect, None)

    def test_errors_are_parse_errors(self):
        for exc in (EmptyLine, HeaderRow, TruncatedRecord, InvalidNumeric):
            self.assertTrue(issubclass(exc, ParseError))
            self.assertTrue(issubclass(exc, ValueError))

    def test_pad_zip(self):
        self.assertEqual(pad_zip("1"), "00001")
        self.assertEqual(pad_zip("601"), "00601")
        self.assertEqual(pad_zip("2101"), "02101")
        self.assertEqual(pad_zip("90210"), "90210")
        self.assertEqual(pad_zip("902101"), "902101")

    def test_strip_quotes(self):
        self.assertEqual(strip_quotes('"a"b""c"'), "abc")
        self.assertEqual(strip_quotes("plain"), "plain")

    def test_dialect_must_map_every_field(self):
        with self.assertRaises(ValueError):
            Dialect(name="broken", columns=("zip", "kind", "city", "state", "lat"))
        with self.assertRaises(ValueError):
            Dialect(name="twice", columns=("zip", "zip", "kind", "city", "state", "lat", "lon"))


if __name__ == "__main__":
    unittest.main()

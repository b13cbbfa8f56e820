import unittest

from deployhist import version
from deployhist.version import Version, VersionFormat


class TestVersion(unittest.TestCase):

    def test_comma(self):
        v = version.parse("0, 123, 1, 12345")
        assert v.format is VersionFormat.COMMA
        assert v.numbers == (0, 123, 1, 12345)
        assert str(v) == "0, 123, 1, 12345"

        v = version.parse("0,123,1,12345")
        assert v.format is VersionFormat.COMMA

    def test_dot(self):
        v = version.parse("0.123.1.12345")
        assert v == Version(VersionFormat.DOT, 0, 123, 1, 12345)
        assert str(v) == "0.123.1.12345"

    def test_restricted_format(self):
        v = version.parse("0.123.1.12345", VersionFormat.COMMA)
        assert v.format is VersionFormat.ANY
        v = version.parse("0, 123, 1, 12345", VersionFormat.COMMA)
        assert v.format is VersionFormat.COMMA

    def test_unrecognized(self):
        input_strings = [
            "",
            "0, 123, 1",
            "0, 123, 1, 12345, 6",
            "0.123.1.x",
            "0, 123, 1, 99999999999",
            "0.123.1.12345\n",
            "-1.2.3.4",
        ]
        for s in input_strings:
            v = version.parse(s)
            assert v.format is VersionFormat.ANY
            assert v.is_zero()

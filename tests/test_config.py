import datetime
import os
import tempfile
import unittest

from deployhist import _common
from deployhist.lexer import Lexer
from deployhist.load import load_config


class TestConfig(unittest.TestCase):

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self._tmpdir.cleanup()

    def _write(self, content):
        fp = os.path.join(self._tmpdir.name, "deployhist.conf")
        with open(fp, "w") as f:
            f.write(content)
        return fp

    def test_load(self):
        fp = self._write("[general]\n"
                         "timezone = UTC\n"
                         "encoding = latin-1\n")
        kwargs = load_config(fp)
        assert kwargs == {"timezone": "UTC", "encoding": "latin-1"}

        lexer = Lexer(**kwargs)
        s = lexer.process(b"\xe9New Build v1 at 1/2/2006 3:04:05 PM...")
        assert s[0].value == "\xe9"
        assert s[1].time == datetime.datetime(2006, 1, 2, 15, 4, 5,
                                              tzinfo=datetime.timezone.utc)

    def test_empty(self):
        assert load_config(self._write("")) == {}
        assert load_config(self._write("[general]\ntimezone =\n")) == {}

    def test_invalid(self):
        input_contents = [
            "[general]\ncolor = blue\n",
            "[general]\ntimezone = Nowhere/Unknown\n",
            "timezone = UTC\n",
        ]
        for content in input_contents:
            with self.assertRaises(_common.ConfigurationError):
                load_config(self._write(content))

        with self.assertRaises(_common.ConfigurationError):
            load_config(os.path.join(self._tmpdir.name, "missing.conf"))


class TestTimezone(unittest.TestCase):

    def test_resolve(self):
        utc = datetime.timezone.utc
        assert _common.resolve_timezone(utc) is utc
        assert _common.resolve_timezone(None) is _common.default_timezone()
        assert _common.resolve_timezone("UTC").utcoffset(None) == datetime.timedelta(0)
        with self.assertRaises(TypeError):
            _common.resolve_timezone(9)

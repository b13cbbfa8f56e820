# coding: utf-8

"""deployhist.version classifies build version strings.

A build version is a tuple of four non-negative integers
(major, minor, maint, build). Two textual forms appear in deploy histories:

* Dot: :samp:`0.123.1.12345`
* Comma: :samp:`0, 123, 1, 12345` (used by the "file version" suffix)
"""

import enum
import re
from collections import namedtuple

# components are stored as signed 32-bit integers
_MAX_COMPONENT = 2 ** 31 - 1

_restr_dot = r"(\d+)\.(\d+)\.(\d+)\.(\d+)"
_restr_comma = r"(\d+), ?(\d+), ?(\d+), ?(\d+)"


class VersionFormat(enum.Enum):
    """Textual form of a version. ANY means unrecognized."""
    ANY = "Any"
    DOT = "Dot"
    COMMA = "Comma"


_FORMATS = [(VersionFormat.DOT, re.compile(_restr_dot, re.ASCII)),
            (VersionFormat.COMMA, re.compile(_restr_comma, re.ASCII))]


class Version(namedtuple("Version", ["format", "major", "minor", "maint", "build"])):
    """Structured build version.

    A Version with :attr:`VersionFormat.ANY` format is the zero value,
    returned by :func:`parse` for unrecognized strings.
    """
    __slots__ = ()

    def __new__(cls, format=VersionFormat.ANY, major=0, minor=0, maint=0, build=0):
        return super().__new__(cls, format, major, minor, maint, build)

    @property
    def numbers(self):
        return (self.major, self.minor, self.maint, self.build)

    def is_zero(self):
        return self == Version()

    def __str__(self):
        if self.format is VersionFormat.COMMA:
            return ", ".join(str(n) for n in self.numbers)
        else:
            return ".".join(str(n) for n in self.numbers)


def parse(string, fmt=VersionFormat.ANY):
    """Classify a version string.

    Args:
        string (str): Version string, like :samp:`0, 123, 1, 12345`.
        fmt (VersionFormat, optional): Accept only the given format.
            ANY accepts every known format.

    Returns:
        Version: Parsed version. Its format is ANY if the string
        is not recognized.
    """
    for vformat, reobj in _FORMATS:
        if fmt is not VersionFormat.ANY and fmt is not vformat:
            continue
        mo = reobj.fullmatch(string)
        if mo is None:
            continue
        numbers = [int(g) for g in mo.groups()]
        if any(n > _MAX_COMPONENT for n in numbers):
            return Version()
        return Version(vformat, *numbers)
    return Version()

# coding: utf-8

"""Tokens in a deploy history stream.

A stream consists of three kinds of tokens:

* :class:`Job`: a job message (a new build, or a revert to a build)
* :class:`Status`: a status message (:samp:`Done` or :samp:`Error`)
* :class:`Raw`: text not recognized as any message

Tokens are immutable. Each token is converted from/into a JSON object
with a "Type" field naming its kind.
"""

import datetime
import enum
import re
from dataclasses import dataclass
from typing import Optional

from dateutil import parser as dateutil_parser

from . import _common
from . import version as _version

_restr_date = (r"(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4}) "
               r"(?P<hour>\d{1,2}):(?P<minute>\d{2}):(?P<second>\d{2}) "
               r"(?P<meridiem>AM|PM)")
_reobj_date = re.compile(_restr_date, re.ASCII)


class Action(enum.Enum):
    NEW = "New"
    REVERT = "Revert"


class Token:
    """Base class of tokens."""
    type_name = None

    def to_json(self):
        """Returns a dict of the JSON wire format."""
        raise NotImplementedError

    @classmethod
    def from_json(cls, obj):
        """Decode a token of this kind from a dict of the JSON wire format.

        Raises:
            TokenTypeError: "Type" of obj names another kind of token.
            StreamDecodeError: obj is not a valid token object.
        """
        raise NotImplementedError

    @classmethod
    def _check_type(cls, obj):
        if not isinstance(obj, dict):
            msg = "token must be an object, not {0}".format(type(obj).__name__)
            raise _common.StreamDecodeError(msg)
        if obj.get(_common.KEY_TYPE) != cls.type_name:
            msg = "type mismatch: expected {0}, got {1!r}".format(
                cls.type_name, obj.get(_common.KEY_TYPE))
            raise _common.TokenTypeError(msg)

    @staticmethod
    def _get_str(obj, key, default=None):
        val = obj.get(key, default)
        if not isinstance(val, str):
            msg = "field {0} must be a string".format(key)
            raise _common.StreamDecodeError(msg)
        return val


@dataclass(frozen=True)
class Job(Token):
    """A job message.

    Attributes:
        action (Action): New or Revert.
        kind (str): Word following the action (usually "Build").
        build (str): Build identifier as written in the log.
        time (datetime.datetime): Time the job started (timezone aware).
        version (:class:`~deployhist.version.Version`, optional):
            File version, only in the messages with "file version" suffix.
        githash (str, optional): Git hash, only in recent messages.
    """
    action: Action
    kind: str
    build: str
    time: datetime.datetime
    version: Optional[_version.Version] = None
    githash: Optional[str] = None

    type_name = _common.TYPE_JOB

    def to_json(self):
        """Returns a dict of the JSON wire format.

        "Kind" is an extension of the historical format, written so that
        decoding restores the token as is; decoders treat it as optional
        ("Build" if missing). "GUID" carries the git hash (or "").
        """
        d = {_common.KEY_TYPE: self.type_name,
             _common.KEY_ACTION: self.action.value,
             _common.KEY_KIND: self.kind,
             _common.KEY_BUILD: self.build,
             _common.KEY_GUID: self.githash or "",
             _common.KEY_TIME: format_time(self.time)}
        if self.version is not None and not self.version.is_zero():
            d[_common.KEY_VERSION] = encode_version(self.version)
        if self.githash:
            d[_common.KEY_GITHASH] = self.githash
        return d

    @classmethod
    def from_json(cls, obj):
        cls._check_type(obj)
        try:
            action = Action(obj.get(_common.KEY_ACTION))
        except ValueError:
            msg = "invalid action: {0!r}".format(obj.get(_common.KEY_ACTION))
            raise _common.StreamDecodeError(msg)
        kind = cls._get_str(obj, _common.KEY_KIND, "Build")
        build = cls._get_str(obj, _common.KEY_BUILD)
        timestr = cls._get_str(obj, _common.KEY_TIME)
        try:
            time = dateutil_parser.isoparse(timestr)
        except ValueError as e:
            msg = "invalid time {0!r}: {1}".format(timestr, e)
            raise _common.StreamDecodeError(msg) from e

        version = None
        if _common.KEY_VERSION in obj:
            version = decode_version(obj[_common.KEY_VERSION])
        # GitHash is written only when present; GUID carries the same value
        githash = obj.get(_common.KEY_GITHASH) or obj.get(_common.KEY_GUID) or None
        if githash is not None and not isinstance(githash, str):
            raise _common.StreamDecodeError("field GitHash must be a string")
        return cls(action, kind, build, time, version, githash)


@dataclass(frozen=True)
class Status(Token):
    """A status message. The value is :samp:`Done` or :samp:`Error`."""
    value: str

    type_name = _common.TYPE_STATUS

    def to_json(self):
        return {_common.KEY_TYPE: self.type_name,
                _common.KEY_VALUE: self.value}

    @classmethod
    def from_json(cls, obj):
        cls._check_type(obj)
        return cls(cls._get_str(obj, _common.KEY_VALUE))


@dataclass(frozen=True)
class Raw(Token):
    """Text not recognized as a message, kept as is."""
    value: str

    type_name = _common.TYPE_RAW

    def __add__(self, other):
        if not isinstance(other, Raw):
            return NotImplemented
        return Raw(self.value + other.value)

    def to_json(self):
        return {_common.KEY_TYPE: self.type_name,
                _common.KEY_VALUE: self.value}

    @classmethod
    def from_json(cls, obj):
        cls._check_type(obj)
        return cls(cls._get_str(obj, _common.KEY_VALUE))


TOKEN_TYPES = {cls.type_name: cls for cls in (Job, Status, Raw)}


def parse_date(string, tzinfo):
    """Parse a job timestamp like :samp:`1/2/2006 3:04:05 PM`.

    Args:
        string (str): Timestamp in job messages.
        tzinfo (datetime.tzinfo): Timezone of the timestamp.

    Returns:
        datetime.datetime: Timezone aware datetime.

    Raises:
        DateFormatError
    """
    mo = _reobj_date.fullmatch(string)
    if mo is None:
        raise _common.DateFormatError("invalid date layout: {0}".format(string))

    hour = int(mo.group("hour"))
    if hour > 12:
        raise _common.DateFormatError("hour out of range: {0}".format(string))
    if mo.group("meridiem") == "PM" and hour < 12:
        hour += 12
    elif mo.group("meridiem") == "AM" and hour == 12:
        hour = 0

    kwargs = {"year": int(mo.group("year")),
              "month": int(mo.group("month")),
              "day": int(mo.group("day")),
              "hour": hour,
              "minute": int(mo.group("minute")),
              "second": int(mo.group("second")),
              "tzinfo": tzinfo}
    try:
        return datetime.datetime(**kwargs)
    except ValueError as e:
        msg = "parsing timestamp failed: {0} ({1})".format(string, e)
        raise _common.DateFormatError(msg) from e


def parse_version(string):
    """Parse the "file version" suffix in job messages.

    Raises:
        UnrecognizedVersionError
    """
    ver = _version.parse(string, _version.VersionFormat.ANY)
    if ver.format is _version.VersionFormat.ANY:
        msg = "unrecognized version: {0}".format(string)
        raise _common.UnrecognizedVersionError(msg)
    return ver


def encode_version(ver):
    return {"Format": ver.format.value,
            "Major": ver.major,
            "Minor": ver.minor,
            "Maint": ver.maint,
            "Build": ver.build}


def decode_version(obj):
    if not isinstance(obj, dict):
        raise _common.StreamDecodeError("Version must be an object")
    try:
        vformat = _version.VersionFormat(obj.get("Format", "Any"))
        numbers = [int(obj.get(key, 0))
                   for key in ("Major", "Minor", "Maint", "Build")]
    except (TypeError, ValueError) as e:
        msg = "invalid version {0!r}".format(obj)
        raise _common.StreamDecodeError(msg) from e
    return _version.Version(vformat, *numbers)


def format_time(dt):
    """Format a timestamp in RFC 3339.

    RFC 3339 offsets have no seconds part; timestamps in zones with
    such offsets (e.g., local mean time before 1883) are written in UTC.
    """
    offset = dt.utcoffset()
    if offset is not None and offset % datetime.timedelta(minutes=1):
        dt = dt.astimezone(datetime.timezone.utc)
    return dt.isoformat()

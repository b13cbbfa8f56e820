# coding: utf-8

import datetime
import logging

from dateutil import tz

_logger = logging.getLogger(__name__)

# keys in the JSON wire format
KEY_TYPE = "Type"
KEY_ACTION = "Action"
KEY_KIND = "Kind"
KEY_BUILD = "Build"
KEY_GUID = "GUID"
KEY_TIME = "Time"
KEY_VERSION = "Version"
KEY_GITHASH = "GitHash"
KEY_VALUE = "Value"

TYPE_JOB = "Job"
TYPE_STATUS = "Status"
TYPE_RAW = "Raw"

# zone used by the writers of the deploy history
DEFAULT_ZONE_NAME = "America/Los_Angeles"


class DeployHistError(Exception):
    """Base class of exceptions raised by deployhist."""
    pass


class DateFormatError(DeployHistError, ValueError):
    """DateFormatError is raised when a job timestamp does not
    follow the layout :samp:`M/D/YYYY h:mm:ss AM`, or describes
    a date or time that does not exist.
    """
    pass


class UnrecognizedVersionError(DeployHistError, ValueError):
    """UnrecognizedVersionError is raised when a file version
    fragment is not classified into any known version format.
    """
    pass


class StreamDecodeError(DeployHistError, ValueError):
    """StreamDecodeError is raised when a serialized stream
    (or one serialized token) cannot be decoded.
    """
    pass


class TokenTypeError(StreamDecodeError):
    """TokenTypeError is raised by a typed decode when
    the "Type" field of the object names another token kind.
    """
    pass


class ConfigurationError(DeployHistError):
    """ConfigurationError is raised when given options are inappropriate
    (e.g., unknown timezone names or broken option files).
    """
    pass


_default_zone = None


def default_timezone():
    """Returns the timezone used when no timezone is given to the lexer.

    The zone :samp:`America/Los_Angeles` is loaded with dateutil.
    If the timezone database is not available, the local timezone
    of the process is used instead.
    The result is resolved once and cached for the process.

    Returns:
        datetime.tzinfo
    """
    global _default_zone
    if _default_zone is None:
        zone = tz.gettz(DEFAULT_ZONE_NAME)
        if zone is None:
            _logger.info("timezone %s not available, use local time",
                         DEFAULT_ZONE_NAME)
            zone = tz.tzlocal()
        _default_zone = zone
    return _default_zone


def resolve_timezone(timezone=None):
    """Resolve the timezone option of the lexer.

    Args:
        timezone (datetime.tzinfo or str, optional): An explicit timezone,
            or its name in the tz database. If not given,
            :func:`default_timezone` is used.

    Returns:
        datetime.tzinfo
    """
    if timezone is None:
        return default_timezone()
    elif isinstance(timezone, datetime.tzinfo):
        return timezone
    elif isinstance(timezone, str):
        zone = tz.gettz(timezone)
        if zone is None:
            msg = "unknown timezone: {0}".format(timezone)
            raise ConfigurationError(msg)
        return zone
    else:
        raise TypeError("timezone must be tzinfo or str, not {0}".format(
            type(timezone).__name__))

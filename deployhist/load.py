#!/usr/bin/env python
# coding: utf-8

from . import _common

_OPTIONS = ("timezone", "encoding")


def load_config(fp):
    """Load lexer options from configparser text file.

    The options are given in the "general" section, for example::

        [general]
        timezone = America/Los_Angeles
        encoding = utf-8

    Args:
        fp (str): file path of configparser text file.

    Returns:
        dict: keyword arguments of :class:`~deployhist.lexer.Lexer`.
    """

    import configparser
    conf = configparser.ConfigParser()
    try:
        with open(fp) as f:
            conf.read_file(f)
    except (OSError, configparser.Error) as e:
        msg = "failed to load config {0}: {1}".format(fp, e)
        raise _common.ConfigurationError(msg) from e

    if not conf.has_section("general"):
        return {}

    kwargs = {}
    for option, value in conf.items("general"):
        if option not in _OPTIONS:
            msg = "unknown option {0} in {1}".format(option, fp)
            raise _common.ConfigurationError(msg)
        value = value.strip()
        if value:
            kwargs[option] = value
    if "timezone" in kwargs:
        # fail early on unknown zone names
        _common.resolve_timezone(kwargs["timezone"])
    return kwargs

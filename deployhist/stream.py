# coding: utf-8

import json
import logging
from collections import OrderedDict, namedtuple
from collections.abc import Sequence

from . import _common
from .tokens import Job, Raw, TOKEN_TYPES

_logger = logging.getLogger(__name__)


class Stream(Sequence):
    """Ordered sequence of tokens, in the order of the input text.

    Tokens added with :meth:`push` keep the stream free of
    adjacent :class:`~deployhist.tokens.Raw` tokens:
    a Raw token following another Raw token is merged into it.
    Tokens given to the constructor are kept as is.

    Args:
        tokens (iterable of Token, optional): Initial tokens.
    """

    def __init__(self, tokens=None):
        self._tokens = list(tokens) if tokens is not None else []

    def __getitem__(self, index):
        return self._tokens[index]

    def __len__(self):
        return len(self._tokens)

    def __eq__(self, other):
        if isinstance(other, Stream):
            return self._tokens == other._tokens
        return NotImplemented

    def __repr__(self):
        return "Stream({0!r})".format(self._tokens)

    def push(self, token):
        """Append a token, merging adjacent Raw tokens.

        Returns:
            bool: True if the token was merged into the last token.
        """
        if isinstance(token, Raw) and len(self._tokens) > 0 \
                and isinstance(self._tokens[-1], Raw):
            self._tokens[-1] = self._tokens[-1] + token
            return True
        self._tokens.append(token)
        return False

    def to_json(self):
        """Returns a list of dicts in the JSON wire format."""
        return [token.to_json() for token in self._tokens]

    @classmethod
    def from_json(cls, objs):
        """Decode a stream from a list of dicts in the JSON wire format.

        Objects with unknown "Type" are skipped.

        Raises:
            StreamDecodeError
        """
        if not isinstance(objs, list):
            raise _common.StreamDecodeError("stream must be an array")
        tokens = []
        for i, obj in enumerate(objs):
            if not isinstance(obj, dict):
                msg = "item {0} is not an object".format(i)
                raise _common.StreamDecodeError(msg)
            type_name = obj.get(_common.KEY_TYPE)
            if not isinstance(type_name, str) or type_name not in TOKEN_TYPES:
                _logger.warning("skip item %d with unknown type %r", i, type_name)
                continue
            tokens.append(TOKEN_TYPES[type_name].from_json(obj))
        return cls(tokens)


def dumps(stream, indent=None):
    """Serialize a stream into a JSON string."""
    return json.dumps(stream.to_json(), indent=indent)


def loads(string):
    """Deserialize a stream from a JSON string.

    Raises:
        StreamDecodeError: string is not valid JSON,
            or does not describe a stream.
    """
    try:
        objs = json.loads(string)
    except ValueError as e:
        raise _common.StreamDecodeError("malformed JSON: {0}".format(e)) from e
    return Stream.from_json(objs)


BuildCount = namedtuple("BuildCount", ["count", "first", "last"])


def count_builds(stream):
    """Count job messages for each build identifier.

    Args:
        stream (iterable of Token)

    Returns:
        OrderedDict: build identifier to :class:`BuildCount`
        (number of jobs, time of the first and the last job in stream order),
        in the order of first appearance.
    """
    d = OrderedDict()
    for token in stream:
        if not isinstance(token, Job):
            continue
        if token.build in d:
            prev = d[token.build]
            d[token.build] = BuildCount(prev.count + 1, prev.first, token.time)
        else:
            d[token.build] = BuildCount(1, token.time, token.time)
    return d

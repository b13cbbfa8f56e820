# coding: utf-8

import logging
from collections import namedtuple

from . import _common
from . import grammar
from .stream import Stream
from .tokens import Action, Job, Raw, Status, parse_date, parse_version

_logger = logging.getLogger(__name__)

# outcomes of handling one grammar match
Emitted = namedtuple("Emitted", ["token"])
Invalidated = namedtuple("Invalidated", ["start", "end", "reason"])

TokenSpan = namedtuple("TokenSpan", ["token", "start", "end"])


class Lexer:
    """Lexer of deploy histories.

    The lexer scans the whole input once, and classifies every part of it
    into :class:`~deployhist.tokens.Job`, :class:`~deployhist.tokens.Status`
    or :class:`~deployhist.tokens.Raw` tokens.
    The text of all tokens, in order, reproduces the input.

    Job messages matching the grammar but having an invalid timestamp
    or an unrecognized file version are not errors:
    the text of the message is kept as a Raw token instead.

    Example:
        >>> lexer = Lexer(timezone="UTC")
        >>> lexer.process("garbage\\nNew Build v1 at 1/2/2006 3:04:05 PM... ")
        Stream([Raw(value='garbage\\n'), Job(action=<Action.NEW: 'New'>, ...)])

    Args:
        timezone (datetime.tzinfo or str, optional): Timezone of job timestamps.
            If not given, America/Los_Angeles (or the local timezone
            if unavailable) is used.
        encoding (str, optional): Encoding to decode bytes input.
            Undecodable bytes are kept with the surrogateescape handler.
    """

    def __init__(self, timezone=None, encoding="utf-8"):
        self._timezone = timezone
        self._encoding = encoding

    @property
    def timezone(self):
        return _common.resolve_timezone(self._timezone)

    def decode(self, data):
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data).decode(self._encoding, errors="surrogateescape")
        return data

    def encode(self, text):
        """Inverse of :meth:`decode` for token text."""
        return text.encode(self._encoding, errors="surrogateescape")

    @staticmethod
    def _handle_match(match, tzinfo):
        if isinstance(match, grammar.StatusMatch):
            return Emitted(Status(match.value))

        try:
            time = parse_date(match.date, tzinfo)
            version = None
            if match.version is not None:
                version = parse_version(match.version)
        except (_common.DateFormatError, _common.UnrecognizedVersionError) as e:
            return Invalidated(match.start, match.end, str(e))
        return Emitted(Job(Action(match.action), match.kind, match.build,
                           time, version, match.githash))

    def process_spans(self, data):
        """Tokenize a deploy history, keeping the position of each token.

        Args:
            data (str or bytes): Whole deploy history.

        Returns:
            list of TokenSpan: Tuples of token, start and end offsets
            in the (decoded) input text. Spans of adjacent tokens are
            contiguous and cover the whole input.
        """
        text = self.decode(data)
        tzinfo = self.timezone
        stream = Stream()
        spans = []

        def _push(token, start, end):
            if stream.push(token):
                spans[-1] = TokenSpan(stream[-1], spans[-1].start, end)
            else:
                spans.append(TokenSpan(token, start, end))

        pos = 0
        while pos < len(text):
            match = grammar.search(text, pos)
            if match is None:
                _push(Raw(text[pos:]), pos, len(text))
                break
            if match.start > pos:
                # unrecognized text between messages
                _push(Raw(text[pos:match.start]), pos, match.start)

            outcome = self._handle_match(match, tzinfo)
            if isinstance(outcome, Emitted):
                _push(outcome.token, match.start, match.end)
            else:
                _logger.debug("invalid job message at %d-%d as raw text: %s",
                              outcome.start, outcome.end, outcome.reason)
                _push(Raw(text[outcome.start:outcome.end]),
                      outcome.start, outcome.end)
            pos = match.end
        return spans

    def process(self, data):
        """Tokenize a deploy history.

        Args:
            data (str or bytes): Whole deploy history.

        Returns:
            :class:`~deployhist.stream.Stream`
        """
        return Stream(span.token for span in self.process_spans(data))


def lex(data, timezone=None, encoding="utf-8"):
    """Tokenize a deploy history with a :class:`Lexer` of given options.

    Returns:
        :class:`~deployhist.stream.Stream`
    """
    return Lexer(timezone=timezone, encoding=encoding).process(data)

# coding: utf-8

"""deployhist.grammar defines the messages recognized in deploy histories.

When a job starts (New/Revert), it writes a message to the log with the
current time. When the job finishes (Done) or fails (Error), it writes
the status to the log. A canceled job writes no status.
Jobs starting at the same time can write to the log out of order,
so job messages and status messages are recognized separately.

Job messages have changed in style over time
(\\n: newline, \\s: trailing space):

* Original style::

    New Build version-0123456789abcdef at 1/2/2006 3:04:05 PM...\\s
    Revert Build version-0123456789abcdef at 1/2/2006 3:04:05 PM...\\s

* Version addition::

    New Build version-0123456789abcdef at 1/2/2006 3:04:05 PM, file verion: 0, 123, 1, 12345...

* Spelling correction::

    New Build version-0123456789abcdef at 1/2/2006 3:04:05 PM, file version: 0, 123, 1, 12345...

* Newline prefix::

    \\nNew Build version-0123456789abcdef at 1/2/2006 3:04:05 PM, file version: 0, 123, 1, 12345...

* Git hash::

    \\nNew Build version-0123456789abcdef at 1/2/2006 3:04:05 PM, file version: 0, 123, 1, 12345, git hash: aaaa ...

Status messages are unchanged::

    Done!\\n
    Error!\\n

One irregular job message exists in the history.
It is not part of the grammar and is left as raw text.
"""

import re
from collections import namedtuple

KEY_ACTION = "action"
KEY_KIND = "kind"
KEY_BUILD = "build"
KEY_DATE = "date"
KEY_VERSION = "version"
KEY_GITHASH = "githash"
KEY_STATUS = "status"
KEY_JOB_BREAK = "jobbreak"
KEY_JOB_TRAIL = "jobtrail"
KEY_STATUS_BREAK = "statusbreak"

_restr_date = (r"\d{1,2}/\d{1,2}/\d{3,4} "         # M/D/YYYY_
               r"\d{1,2}:\d{2}:\d{2} "              # h:mm:ss_
               r"(?:A|P)M")                         # AM|PM
_restr_job = (r"(?P<jobbreak>\r?\n)?"                                 # newline prefix
              r"(?P<action>New|Revert) "
              r"(?P<kind>\w+) "
              r"(?P<build>.*?) at "
              r"(?P<date>" + _restr_date + r")"
              r"(?:, file vers?ion: (?P<version>\d+, \d+, \d+, \d+))?"  # version
              r"(?:, git hash: (?P<githash>[0-9a-fA-F]+) )?"            # git hash
              r"\.\.\.(?P<jobtrail> )?")
_restr_status = (r"(?P<statusbreak>\r?\n)?"
                 r"(?P<status>Done|Error)!\r?\n")

# alternatives are tried in this order at each position
GRAMMAR = r"(?:" + _restr_job + r")|(?:" + _restr_status + r")"

_reobj = re.compile(GRAMMAR, re.ASCII)


JobMatch = namedtuple("JobMatch", ["start", "end", "action", "kind", "build",
                                   "date", "version", "githash"])
JobMatch.__doc__ = """Job message candidate.
Optional fields (version, githash) are None when absent."""

StatusMatch = namedtuple("StatusMatch", ["start", "end", "value"])
StatusMatch.__doc__ = """Status message candidate."""


def pattern():
    """Returns the compiled grammar (re.Pattern)."""
    return _reobj


def _start(mo, pos, key_break):
    # a line break leading a message belongs to the message
    # only if nothing unrecognized precedes it;
    # otherwise it terminates the preceding raw text
    if mo.start() > pos and mo.group(key_break) is not None:
        return mo.end(key_break)
    return mo.start()


def _end(mo, text):
    # likewise, a space trailing a job message belongs to the message
    # only if it is followed by the end of text or another message
    end = mo.end()
    if mo.group(KEY_JOB_TRAIL) is not None and end < len(text) \
            and _reobj.match(text, end) is None:
        return end - 1
    return end


def search(text, pos=0):
    """Find the leftmost message at or after pos.

    Args:
        text (str): Input text.
        pos (int, optional): Offset to start searching.

    Returns:
        :class:`JobMatch` or :class:`StatusMatch`, or None if
        no message remains in the text.
        Offsets are relative to the whole text.
    """
    mo = _reobj.search(text, pos)
    if mo is None:
        return None
    if mo.group(KEY_ACTION) is not None:
        return JobMatch(_start(mo, pos, KEY_JOB_BREAK), _end(mo, text),
                        mo.group(KEY_ACTION),
                        mo.group(KEY_KIND),
                        mo.group(KEY_BUILD),
                        mo.group(KEY_DATE),
                        mo.group(KEY_VERSION),
                        mo.group(KEY_GITHASH))
    else:
        return StatusMatch(_start(mo, pos, KEY_STATUS_BREAK), mo.end(),
                           mo.group(KEY_STATUS))

__version__ = '0.1.0'

from ._common import DeployHistError, DateFormatError, UnrecognizedVersionError, \
    StreamDecodeError, TokenTypeError, ConfigurationError, default_timezone
from .tokens import Action, Job, Status, Raw
from .stream import Stream, dumps, loads, count_builds
from .lexer import Lexer, lex
from .load import load_config

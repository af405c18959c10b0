"""
Log line pattern compilation.

Turns every supported log format description into a compiled regular
expression so that a bad format is caught while the configuration is
being validated, not when the first line is read:

- Apache custom log formats (mod_log_config directives)
- Log4j conversion patterns
- Grok patterns, with an optional block of user pattern definitions
- Plain regular expressions

All failures raise PatternCompileError.
"""

import logging
import re
from typing import Optional

from ..config.constants import DEFAULT_APACHE_CUSTOM_LOG_FORMAT
from ..exceptions import PatternCompileError
from ..formats.types import LogMode

logger = logging.getLogger(__name__)


# =============================================================================
# Regular Expressions
# =============================================================================


def compile_regex(pattern: str) -> re.Pattern:
    """
    Compile a regular expression.

    Raises:
        PatternCompileError: If the expression is invalid
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternCompileError(e.msg, pattern, position=e.pos) from e


# =============================================================================
# Apache Custom Log Format
# =============================================================================

# directive letter -> regex for its value
APACHE_DIRECTIVES: dict[str, str] = {
    "a": r"\S+",  # remote IP
    "A": r"\S+",  # local IP
    "B": r"\d+",  # response size
    "b": r"(?:\d+|-)",  # response size, '-' for zero
    "C": r".*?",  # cookie
    "D": r"\d+",  # time to serve (us)
    "e": r".*?",  # environment variable
    "f": r"\S+",  # filename
    "h": r"\S+",  # remote host
    "H": r"\S+",  # request protocol
    "i": r".*?",  # request header
    "k": r"\d+",  # keepalive requests
    "l": r"\S+",  # remote logname
    "L": r"\S+",  # request log id
    "m": r"\S+",  # request method
    "n": r".*?",  # note
    "o": r".*?",  # reply header
    "p": r"\d+",  # port
    "P": r"\d+",  # process id
    "q": r"\S*",  # query string
    "r": r".*?",  # first line of request
    "R": r"\S+",  # handler
    "s": r"\d{3}",  # status
    "t": r"\[[^\]]+\]",  # time, common log format
    "T": r"\d+",  # time to serve (s)
    "u": r"\S+",  # remote user
    "U": r"\S+",  # URL path
    "v": r"\S+",  # canonical server name
    "V": r"\S+",  # server name
    "X": r"[Xx+\-]",  # connection status
    "I": r"\d+",  # bytes received
    "O": r"\d+",  # bytes sent
    "S": r"\d+",  # bytes transferred
}

# directives that cannot be used without a {name} argument
_APACHE_PARAM_REQUIRED = frozenset("Cinoe")

_APACHE_DIRECTIVE_RE = re.compile(
    r"%(?P<cond>!?[0-9,]+)?(?P<redir>[<>])?(?:\{(?P<param>[^}]*)\})?(?P<letter>[A-Za-z%])?"
)


def apache_format_to_regex(log_format: str) -> str:
    """
    Translate an Apache custom log format into a regular expression.

    Each directive becomes one capturing group; literal text is escaped.

    Args:
        log_format: Format string, e.g. '%h %l %u %t "%r" %>s %b'

    Returns:
        Anchored regular expression source

    Raises:
        PatternCompileError: On an unknown or incomplete directive
    """
    parts = ["^"]
    pos = 0
    while pos < len(log_format):
        idx = log_format.find("%", pos)
        if idx < 0:
            parts.append(re.escape(log_format[pos:]))
            break
        parts.append(re.escape(log_format[pos:idx]))

        match = _APACHE_DIRECTIVE_RE.match(log_format, idx)
        letter = match.group("letter")
        if letter is None:
            raise PatternCompileError(
                "Incomplete directive", log_format, position=idx
            )
        if letter == "%":
            parts.append("%")
        elif letter not in APACHE_DIRECTIVES:
            raise PatternCompileError(
                f"Unknown directive '%{letter}'", log_format, position=idx
            )
        elif letter in _APACHE_PARAM_REQUIRED and not match.group("param"):
            raise PatternCompileError(
                f"Directive '%{letter}' requires a {{name}} argument",
                log_format,
                position=idx,
            )
        elif letter == "t" and match.group("param"):
            # strftime-style time format; no fixed shape
            parts.append("(.*?)")
        else:
            parts.append(f"({APACHE_DIRECTIVES[letter]})")
        pos = match.end()
    parts.append("$")
    return "".join(parts)


# =============================================================================
# Log4j Conversion Pattern
# =============================================================================

LOG4J_CONVERSIONS: dict[str, str] = {
    "c": r"\S+",  # category
    "C": r"\S+",  # class
    "d": r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2},\d{3}",  # ISO8601 date
    "F": r"\S+",  # file
    "l": r".*?",  # location
    "L": r"\d+",  # line
    "m": r".*?",  # message
    "M": r"\S+",  # method
    "p": r"[A-Z]+",  # priority
    "r": r"\d+",  # elapsed ms
    "t": r".*?",  # thread
    "x": r".*?",  # NDC
    "X": r".*?",  # MDC
}

_LOG4J_CONVERSION_RE = re.compile(
    r"%(?P<left>-)?(?P<min>\d+)?(?:\.(?P<max>\d+))?(?P<char>[A-Za-z%])?(?:\{(?P<option>[^}]*)\})?"
)


def log4j_layout_to_regex(layout: str) -> str:
    """
    Translate a Log4j PatternLayout conversion pattern into a regular expression.

    Padding modifiers (e.g. ``%-5p``) allow surrounding whitespace; ``%n``
    matches nothing since lines are already split.

    Raises:
        PatternCompileError: On an unknown or incomplete conversion
    """
    parts = ["^"]
    pos = 0
    while pos < len(layout):
        idx = layout.find("%", pos)
        if idx < 0:
            parts.append(re.escape(layout[pos:]))
            break
        parts.append(re.escape(layout[pos:idx]))

        match = _LOG4J_CONVERSION_RE.match(layout, idx)
        char = match.group("char")
        if char is None:
            raise PatternCompileError(
                "Incomplete conversion pattern", layout, position=idx
            )
        if char == "%":
            parts.append("%")
        elif char == "n":
            pass
        elif char not in LOG4J_CONVERSIONS:
            raise PatternCompileError(
                f"Unknown conversion character '%{char}'", layout, position=idx
            )
        else:
            regex = LOG4J_CONVERSIONS[char]
            if char == "d" and match.group("option"):
                regex = r".*?"
            if match.group("min"):
                regex = rf"\s*{regex}\s*"
            parts.append(f"({regex})")
        pos = match.end()
    parts.append("$")
    return "".join(parts)


# =============================================================================
# Grok
# =============================================================================

BASE_GROK_PATTERNS: dict[str, str] = {
    "USERNAME": r"[a-zA-Z0-9._-]+",
    "USER": r"%{USERNAME}",
    "INT": r"(?:[+-]?(?:[0-9]+))",
    "BASE10NUM": r"(?:[+-]?(?:[0-9]+(?:\.[0-9]+)?|\.[0-9]+))",
    "NUMBER": r"(?:%{BASE10NUM})",
    "POSINT": r"\b(?:[1-9][0-9]*)\b",
    "NONNEGINT": r"\b(?:[0-9]+)\b",
    "WORD": r"\b\w+\b",
    "NOTSPACE": r"\S+",
    "SPACE": r"\s*",
    "DATA": r".*?",
    "GREEDYDATA": r".*",
    "QUOTEDSTRING": r"(?:\"(?:\\.|[^\\\"])*\"|'(?:\\.|[^\\'])*')",
    "QS": r"%{QUOTEDSTRING}",
    "UUID": r"[A-Fa-f0-9]{8}-(?:[A-Fa-f0-9]{4}-){3}[A-Fa-f0-9]{12}",
    "IPV4": (
        r"(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9]{1,2})\.){3}"
        r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9]{1,2})"
    ),
    "IPV6": r"(?:[0-9A-Fa-f]{0,4}:){2,7}[0-9A-Fa-f]{0,4}",
    "IP": r"(?:%{IPV6}|%{IPV4})",
    "HOSTNAME": (
        r"\b(?:[0-9A-Za-z][0-9A-Za-z-]{0,62})"
        r"(?:\.(?:[0-9A-Za-z][0-9A-Za-z-]{0,62}))*(?:\.?|\b)"
    ),
    "IPORHOST": r"(?:%{IP}|%{HOSTNAME})",
    "HOSTPORT": r"%{IPORHOST}:%{POSINT}",
    "URIPATH": r"(?:/[A-Za-z0-9$.+!*'(){},~:;=@#%&_\-]*)+",
    "URIPARAM": r"\?[A-Za-z0-9$.+!*'|(){},~@#%&/=:;_?\-\[\]<>]*",
    "URIPATHPARAM": r"%{URIPATH}(?:%{URIPARAM})?",
    "MONTH": (
        r"\b(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?"
        r"|Jul(?:y)?|Aug(?:ust)?|Sep(?:tember)?|Oct(?:ober)?|Nov(?:ember)?"
        r"|Dec(?:ember)?)\b"
    ),
    "MONTHNUM": r"(?:0?[1-9]|1[0-2])",
    "MONTHDAY": r"(?:(?:0[1-9])|(?:[12][0-9])|(?:3[01])|[1-9])",
    "DAY": (
        r"\b(?:Mon(?:day)?|Tue(?:sday)?|Wed(?:nesday)?|Thu(?:rsday)?"
        r"|Fri(?:day)?|Sat(?:urday)?|Sun(?:day)?)\b"
    ),
    "YEAR": r"(?:\d\d){1,2}",
    "HOUR": r"(?:2[0123]|[01]?[0-9])",
    "MINUTE": r"(?:[0-5][0-9])",
    "SECOND": r"(?:(?:[0-5]?[0-9]|60)(?:[:.,][0-9]+)?)",
    "TIME": r"%{HOUR}:%{MINUTE}(?::%{SECOND})",
    "ISO8601_TIMEZONE": r"(?:Z|[+-]%{HOUR}(?::?%{MINUTE}))",
    "TIMESTAMP_ISO8601": (
        r"%{YEAR}-%{MONTHNUM}-%{MONTHDAY}[T ]%{HOUR}:?%{MINUTE}"
        r"(?::?%{SECOND})?%{ISO8601_TIMEZONE}?"
    ),
    "HTTPDATE": r"%{MONTHDAY}/%{MONTH}/%{YEAR}:%{TIME} %{INT}",
    "SYSLOGTIMESTAMP": r"%{MONTH} +%{MONTHDAY} %{TIME}",
    "LOGLEVEL": (
        r"(?:[Aa]lert|ALERT|[Tt]race|TRACE|[Dd]ebug|DEBUG|[Nn]otice|NOTICE"
        r"|[Ii]nfo|INFO|[Ww]arn?(?:ing)?|WARN?(?:ING)?|[Ee]rr?(?:or)?|ERR?(?:OR)?"
        r"|[Cc]rit?(?:ical)?|CRIT?(?:ICAL)?|[Ff]atal|FATAL|[Ss]evere|SEVERE"
        r"|EMERG(?:ENCY)?|[Ee]merg(?:ency)?)"
    ),
    "HTTPDUSER": r"%{USER}",
    "COMMONAPACHELOG": (
        r"%{IPORHOST:clientip} %{HTTPDUSER:ident} %{USER:auth} "
        r"\[%{HTTPDATE:timestamp}\] "
        r'"(?:%{WORD:verb} %{NOTSPACE:request}(?: HTTP/%{NUMBER:httpversion})?'
        r'|%{DATA:rawrequest})" %{NUMBER:response} (?:%{NUMBER:bytes}|-)'
    ),
    "COMBINEDAPACHELOG": r"%{COMMONAPACHELOG} %{QS:referrer} %{QS:agent}",
}

_GROK_REFERENCE_RE = re.compile(
    r"%\{(?P<name>[A-Za-z0-9_]+)(?::(?P<field>[^:}]+))?(?::(?P<type>[a-z]+))?\}"
)

_GROK_NAME_RE = re.compile(r"[A-Za-z0-9_]+")

# expansion depth guard for runaway definitions
MAX_GROK_DEPTH = 64


class GrokDictionary:
    """
    Vocabulary of named grok patterns.

    Starts from BASE_GROK_PATTERNS; user definitions add to or override it.

    Usage:
        grok = GrokDictionary()
        grok.add_definitions("MYID [A-Z]{3}-\\\\d+")
        regex = grok.compile("%{MYID:id} %{GREEDYDATA:message}")
    """

    def __init__(self):
        self._patterns: dict[str, str] = dict(BASE_GROK_PATTERNS)

    def __contains__(self, name: str) -> bool:
        return name in self._patterns

    def add_definitions(self, definitions: str) -> None:
        """
        Add pattern definitions, one ``NAME pattern`` per line.

        Blank lines and lines starting with '#' are skipped.

        Raises:
            PatternCompileError: If a line is not a valid definition
        """
        for line_number, line in enumerate(definitions.splitlines(), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            pieces = re.split(r"\s+", stripped, maxsplit=1)
            name = pieces[0]
            pattern = pieces[1] if len(pieces) > 1 else ""
            if not _GROK_NAME_RE.fullmatch(name) or not pattern:
                raise PatternCompileError(
                    f"Invalid grok pattern definition on line {line_number}",
                    line,
                )
            self._patterns[name] = pattern

    def expand(self, pattern: str) -> str:
        """
        Expand grok references into a plain regular expression.

        ``%{NAME:field}`` becomes a named group; ``%{NAME}`` a bare group.

        Raises:
            PatternCompileError: On unknown or recursive references
        """
        return self._expand(pattern, pattern, ())

    def _expand(self, text: str, root: str, stack: tuple) -> str:
        if len(stack) > MAX_GROK_DEPTH:
            raise PatternCompileError("Grok pattern nesting is too deep", root)

        def substitute(match: re.Match) -> str:
            name = match.group("name")
            if name not in self._patterns:
                raise PatternCompileError(
                    f"Unknown grok pattern '%{{{name}}}'", root
                )
            if name in stack:
                raise PatternCompileError(
                    f"Recursive grok pattern '%{{{name}}}'", root
                )
            body = self._expand(self._patterns[name], root, stack + (name,))
            field = match.group("field")
            if field:
                return f"(?P<{_group_name(field)}>{body})"
            return f"(?:{body})"

        return _GROK_REFERENCE_RE.sub(substitute, text)

    def compile(self, pattern: str) -> re.Pattern:
        """
        Expand and compile a grok pattern.

        Raises:
            PatternCompileError: If expansion or compilation fails
        """
        regex = self.expand(pattern)
        try:
            return re.compile(regex)
        except re.error as e:
            raise PatternCompileError(e.msg, pattern) from e


def _group_name(field: str) -> str:
    """Turn a grok field name into a valid regex group name."""
    name = re.sub(r"\W", "_", field.strip())
    if not name or name[0].isdigit():
        name = f"_{name}"
    return name


# =============================================================================
# Log Mode Dispatch
# =============================================================================


def compile_log_line_pattern(
    log_mode: LogMode,
    log_format: Optional[str] = None,
    grok_definitions: str = "",
) -> re.Pattern:
    """
    Compile the line pattern for a log mode.

    Args:
        log_mode: Active log mode
        log_format: Format string for the mode (Apache format, regex, grok
                    pattern or Log4j layout); ignored for COMMON_LOG_FORMAT
        grok_definitions: Extra grok definitions (GROK only)

    Returns:
        Compiled line pattern

    Raises:
        PatternCompileError: If the format cannot be compiled
    """
    logger.debug(f"Compiling {log_mode.name} line pattern")
    if log_mode == LogMode.COMMON_LOG_FORMAT:
        return compile_regex(apache_format_to_regex(DEFAULT_APACHE_CUSTOM_LOG_FORMAT))
    if log_mode == LogMode.APACHE_CUSTOM_LOG_FORMAT:
        return compile_regex(apache_format_to_regex(log_format or ""))
    if log_mode == LogMode.REGEX:
        return compile_regex(log_format or "")
    if log_mode == LogMode.GROK:
        grok = GrokDictionary()
        if grok_definitions:
            grok.add_definitions(grok_definitions)
        return grok.compile(log_format or "")
    if log_mode == LogMode.LOG4J:
        return compile_regex(log4j_layout_to_regex(log_format or ""))
    raise PatternCompileError(f"Unsupported log mode: {log_mode}", log_format or "")

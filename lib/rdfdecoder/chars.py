"""
Character classes of the Turtle family grammars.

See https://www.w3.org/TR/turtle/#sec-grammar-grammar for the productions
(PN_CHARS_BASE, PN_CHARS_U, PN_CHARS, PN_LOCAL, PN_LOCAL_ESC, ...).

All predicates take a single character, or '' for end of input, and
return False for ''.
"""

HEX = frozenset('0123456789abcdefABCDEF')
DIGITS = frozenset('0123456789')
ALPHA = frozenset('abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ')
WHITESPACE = frozenset(' \t\r\n')

# reserved characters that may be backslash escaped in a local name
PN_LOCAL_ESC = frozenset("_~.-!$&'()*+,;=/?#@%")

# characters a unicode escape inside an IRI may not produce
BAD_IRI_CHARS = frozenset(' <>"{}|^`')
# characters not allowed unescaped inside an IRI
BAD_IRI_CHARS_RAW = frozenset(' <"{}|^`')

# single character escapes allowed in string literals
STRING_ESCAPES = {
    't': '\t',
    'b': '\b',
    'n': '\n',
    'r': '\r',
    'f': '\f',
    '"': '"',
    "'": "'",
    '\\': '\\'
}

_PN_CHARS_BASE = (
    (0x00C0, 0x00D6),
    (0x00D8, 0x00F6),
    (0x00F8, 0x02FF),
    (0x0370, 0x037D),
    (0x037F, 0x1FFF),
    (0x200C, 0x200D),
    (0x2070, 0x218F),
    (0x2C00, 0x2FEF),
    (0x3001, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFFD),
    (0x10000, 0xEFFFF),
)

_PN_CHARS_EXTRA = (
    (0x00B7, 0x00B7),
    (0x0300, 0x036F),
    (0x203F, 0x2040),
)


def _in_ranges(ch, ranges):
    code = ord(ch)
    for lo, hi in ranges:
        if lo <= code <= hi:
            return True
    return False


def is_alpha(ch):
    return ch in ALPHA


def is_digit(ch):
    return ch in DIGITS


def is_alpha_or_digit(ch):
    return ch in ALPHA or ch in DIGITS


def is_whitespace(ch):
    return ch in WHITESPACE


def is_pn_chars_base(ch):
    if not ch:
        return False
    if ch in ALPHA:
        return True
    return ord(ch) >= 0xC0 and _in_ranges(ch, _PN_CHARS_BASE)


def is_pn_chars_u(ch):
    return ch == '_' or is_pn_chars_base(ch)


def is_pn_chars(ch):
    if not ch:
        return False
    if ch == '-' or ch in DIGITS or is_pn_chars_u(ch):
        return True
    return _in_ranges(ch, _PN_CHARS_EXTRA)


def is_pn_local_first(ch):
    """
    First character of a local name: PN_CHARS_U, ':', digits, or the
    start of a percent or backslash escape.
    """
    return (ch == ':' or ch == '%' or ch == '\\' or ch in DIGITS or
            is_pn_chars_u(ch))


def is_pn_local_mid(ch):
    """
    Any later character of a local name. '.' is allowed here but not as
    the last character.
    """
    return (ch == ':' or ch == '%' or ch == '\\' or ch == '.' or
            is_pn_chars(ch))


def is_control(ch):
    return bool(ch) and ord(ch) <= 0x20

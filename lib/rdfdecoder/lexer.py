"""
Tokenizer for N-Triples, N-Quads and Turtle.

.. module:: rdfdecoder.lexer
  :synopsis: Token stream over a line oriented input

The lexer reads its input one line at a time and scans it with a set of
state methods. Each state consumes some characters, queues zero or more
tokens and returns the next state, or None once the current line is done.
A generator drives the states so tokens are produced lazily, one per
``next_token()`` call.

In line mode (N-Triples, N-Quads) an EOL token closes every line, and an
error token is always followed by an EOL token.
"""

import re
from collections import deque, namedtuple

from rdfdecoder.chars import (
    ALPHA, BAD_IRI_CHARS, BAD_IRI_CHARS_RAW, DIGITS, HEX, PN_LOCAL_ESC,
    STRING_ESCAPES, WHITESPACE, is_control, is_digit, is_pn_chars,
    is_pn_chars_base, is_pn_chars_u, is_pn_local_first, is_pn_local_mid)

__all__ = [
    'Lexer', 'Token', 'unescape_string', 'unescape_local_name',
    'TOKEN_EOF', 'TOKEN_EOL', 'TOKEN_ERROR', 'TOKEN_IRI_ABS', 'TOKEN_IRI_REL',
    'TOKEN_BNODE', 'TOKEN_ANON_BNODE', 'TOKEN_LITERAL', 'TOKEN_LITERAL3',
    'TOKEN_LITERAL_INTEGER', 'TOKEN_LITERAL_DECIMAL', 'TOKEN_LITERAL_DOUBLE',
    'TOKEN_LITERAL_BOOLEAN', 'TOKEN_LANG_MARKER', 'TOKEN_LANG',
    'TOKEN_DATATYPE_MARKER', 'TOKEN_DOT', 'TOKEN_SEMICOLON', 'TOKEN_COMMA',
    'TOKEN_RDF_TYPE', 'TOKEN_PREFIX', 'TOKEN_PREFIX_LABEL',
    'TOKEN_IRI_SUFFIX', 'TOKEN_BASE', 'TOKEN_SPARQL_PREFIX',
    'TOKEN_SPARQL_BASE', 'TOKEN_PROPERTY_LIST_START',
    'TOKEN_PROPERTY_LIST_END', 'TOKEN_COLLECTION_START',
    'TOKEN_COLLECTION_END'
]

# token types, named the way error messages refer to them
TOKEN_ERROR = 'Error'
TOKEN_EOL = 'EOL'
TOKEN_EOF = 'EOF'
TOKEN_IRI_ABS = 'IRI (absolute)'
TOKEN_IRI_REL = 'IRI (relative)'
TOKEN_LITERAL = 'Literal'
TOKEN_LITERAL3 = 'Literal (triple-quoted string)'
TOKEN_LITERAL_INTEGER = 'Literal (integer shorthand syntax)'
TOKEN_LITERAL_DOUBLE = 'Literal (double shorthand syntax)'
TOKEN_LITERAL_DECIMAL = 'Literal (decimal shorthand syntax)'
TOKEN_LITERAL_BOOLEAN = 'Literal (boolean shorthand syntax)'
TOKEN_BNODE = 'Blank node'
TOKEN_LANG_MARKER = 'Language tag marker'
TOKEN_LANG = 'Language tag'
TOKEN_DATATYPE_MARKER = 'Literal datatype marker'
TOKEN_DOT = 'Dot'
TOKEN_SEMICOLON = 'Semicolon'
TOKEN_COMMA = 'Comma'
TOKEN_RDF_TYPE = 'rdf:type'
TOKEN_PREFIX = '@prefix'
TOKEN_PREFIX_LABEL = 'Prefix label'
TOKEN_IRI_SUFFIX = 'IRI suffix'
TOKEN_BASE = '@base'
TOKEN_SPARQL_PREFIX = 'PREFIX'
TOKEN_SPARQL_BASE = 'BASE'
TOKEN_ANON_BNODE = 'Anonymous blank node'
TOKEN_PROPERTY_LIST_START = 'Property list start'
TOKEN_PROPERTY_LIST_END = 'Property list end'
TOKEN_COLLECTION_START = 'Collection start'
TOKEN_COLLECTION_END = 'Collection end'

Token = namedtuple('Token', ['type', 'line', 'column', 'text'])

# end of the current input buffer
EOF = ''

ALNUM = ALPHA | DIGITS
BLANKS = frozenset(' \t')
SIGNS = frozenset('+-')
EXPONENT = frozenset('eE')
SCHEME_CHARS = ALNUM | frozenset('+-.')
NUMBER_END = WHITESPACE | frozenset(',;.)]#')

_STRING_ESCAPE = re.compile(
    r'\\(?:u([0-9A-Fa-f]{4})|U([0-9A-Fa-f]{8})|(.))', re.DOTALL)
_LOCAL_NAME_ESCAPE = re.compile(r'\\(.)')


def unescape_string(value):
    """
    Replaces the numeric (\\uXXXX, \\UXXXXXXXX) and single character
    escapes of a literal or IRI with the characters they stand for.

    :param value: the escaped text, already validated by the lexer.

    :return: the unescaped text.
    """
    def replace(match):
        short, long_, single = match.groups()
        if single is not None:
            return STRING_ESCAPES[single]
        return chr(int(short or long_, 16))
    return _STRING_ESCAPE.sub(replace, value)


def unescape_local_name(value):
    """
    Drops the backslash in front of escaped reserved characters of a local
    name. Percent escapes are kept as written.
    """
    return _LOCAL_NAME_ESCAPE.sub(r'\1', value)


class Lexer(object):
    """
    Splits a stream into tokens.

    The input is anything with a ``readline()`` method returning either
    bytes (decoded as UTF-8) or str.
    """

    def __init__(self, input_, line_mode=False):
        """
        Creates a new Lexer.

        :param input_: the stream to read lines from.
        :param line_mode: True for the line based formats (N-Triples,
          N-Quads): EOL tokens are produced and single quotes do not start
          literals.
        """
        self._reader = input_
        self.line_mode = line_mode
        # current buffer, usually one line
        self.input = ''
        # line number of the last line read
        self.line = 0
        # offset in input where the last line read starts
        self.line_start = 0
        # start of the token being scanned
        self.start = 0
        self.pos = 0
        # width of the last character read (0 at the end of the buffer)
        self.width = 0
        # set when the token being scanned contains escapes
        self.unescape = False
        self._pending = deque()
        self._tokens = self._run()
        self._eof = None

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.type == TOKEN_EOF:
                return

    def next_token(self):
        """
        Returns the next token. Once the input is exhausted every call
        returns the same EOF token.
        """
        if self._eof is not None:
            return self._eof
        token = next(self._tokens)
        if token.type == TOKEN_EOF:
            self._eof = token
        return token

    def _run(self):
        while True:
            more = self._feed()
            while self._pending:
                yield self._pending.popleft()
            if not more:
                break
            state = self._lex_any
            while state is not None:
                state = state()
                while self._pending:
                    yield self._pending.popleft()
        yield Token(TOKEN_EOF, self.line, self.pos - self.line_start + 1, '')

    def _feed(self, append=False):
        """
        Reads the next line into the buffer.

        :param append: True to add the line to the current buffer (the
          continuation of a triple-quoted literal), False to replace the
          buffer. Blank and comment lines are skipped unless appending.

        :return: False at the end of the input, True otherwise.
        """
        while True:
            line = self._reader.readline()
            if not line:
                return False
            self.line += 1
            if isinstance(line, bytes):
                try:
                    line = line.decode('utf-8')
                except UnicodeDecodeError as cause:
                    self._pending.append(Token(
                        TOKEN_ERROR, self.line, cause.start + 1,
                        'invalid UTF-8 byte sequence'))
                    if append:
                        return False
                    if self.line_mode:
                        self._pending.append(
                            Token(TOKEN_EOL, self.line, cause.start + 1, ''))
                    continue
            if self.line == 1 and line.startswith('\ufeff'):
                line = line[1:]
            if append:
                self.line_start = len(self.input)
                self.input += line
                return True
            if not line.strip(' \t\r\n') or line[0] == '#':
                if self.line_mode:
                    self._pending.append(Token(TOKEN_EOL, self.line, 1, ''))
                continue
            self.input = line
            self.line_start = self.start = self.pos = 0
            return True

    # cursor helpers

    def _next(self):
        if self.pos >= len(self.input):
            self.width = 0
            return EOF
        self.width = 1
        self.pos += 1
        return self.input[self.pos - 1]

    def _peek(self):
        return self.input[self.pos:self.pos + 1]

    def _backup(self):
        self.pos -= self.width

    def _ignore(self):
        self.start = self.pos

    def _accept_run(self, valid):
        count = 0
        while self.input[self.pos:self.pos + 1] in valid:
            self.pos += 1
            count += 1
        return count

    def _accept_hex(self, count):
        digits = self.input[self.pos:self.pos + count]
        if len(digits) != count or not all(ch in HEX for ch in digits):
            return False
        self.pos += count
        return True

    def _accept_word(self, word, followers=None, case_insensitive=False):
        """
        Consumes word if the token being scanned starts with it.

        :param followers: the characters allowed after the word, by default
          anything that does not continue a name.
        """
        end = self.start + len(word)
        candidate = self.input[self.start:end]
        if case_insensitive:
            candidate = candidate.upper()
        if candidate != word:
            return False
        follower = self.input[end:end + 1]
        if followers is not None:
            if follower not in followers:
                return False
        elif is_pn_chars(follower) or follower == ':':
            return False
        self.pos = end
        return True

    def _emit(self, type_, line=None, column=None):
        if type_ == TOKEN_EOL and not self.line_mode:
            self.start = self.pos
            return
        text = self.input[self.start:self.pos]
        if self.unescape:
            self.unescape = False
            if type_ == TOKEN_IRI_SUFFIX:
                text = unescape_local_name(text)
            else:
                text = unescape_string(text)
        if column is None:
            column = self.start - self.line_start + 1
        self._pending.append(Token(type_, line or self.line, column, text))
        self.start = self.pos

    def _errorf(self, message):
        """
        Queues an error token and stops scanning the current line.
        """
        column = max(self.pos - self.line_start, 1)
        self._pending.append(Token(TOKEN_ERROR, self.line, column, message))
        if self.line_mode:
            self._pending.append(Token(TOKEN_EOL, self.line, column, ''))
        self.unescape = False
        return None

    # states

    def _lex_any(self):
        ch = self._next()
        if ch == EOF or ch == '#':
            self._ignore()
            self._emit(TOKEN_EOL)
            return None
        if ch in BLANKS:
            self._ignore()
            return self._lex_any
        if ch == '\n':
            self._ignore()
            return self._lex_any
        if ch == '\r':
            if self._peek() == '\n':
                self._next()
                self._ignore()
                return self._lex_any
            self._ignore()
            self._emit(TOKEN_EOL)
            return self._lex_any
        if ch == '<':
            self._ignore()
            return self._lex_iri
        if ch == '"':
            self._backup()
            return self._lex_literal
        if ch == "'":
            if self.line_mode:
                return self._errorf('unexpected character: %r' % ch)
            self._backup()
            return self._lex_literal
        if ch == '_':
            if self._peek() != ':':
                return self._errorf(
                    'illegal character %r in blank node identifier' %
                    self._peek())
            self._next()
            return self._lex_bnode
        if ch == '.':
            if is_digit(self._peek()):
                self._backup()
                return self._lex_number
            self._emit(TOKEN_DOT)
            return self._lex_any
        if ch == ';':
            self._emit(TOKEN_SEMICOLON)
            return self._lex_any
        if ch == ',':
            self._emit(TOKEN_COMMA)
            return self._lex_any
        if ch == '@':
            if self._accept_word('@prefix', BLANKS):
                self._emit(TOKEN_PREFIX)
                return self._lex_directive_label
            if self._accept_word('@base', BLANKS | frozenset('<')):
                self._emit(TOKEN_BASE)
                return self._lex_any
            return self._errorf('unrecognized directive')
        if ch == '[':
            start = self.start
            self._accept_run(BLANKS)
            if self._peek() == ']':
                self._next()
                self._emit(TOKEN_ANON_BNODE)
                return self._lex_any
            self.pos = start + 1
            self._emit(TOKEN_PROPERTY_LIST_START)
            return self._lex_any
        if ch == ']':
            self._emit(TOKEN_PROPERTY_LIST_END)
            return self._lex_any
        if ch == '(':
            self._emit(TOKEN_COLLECTION_START)
            return self._lex_any
        if ch == ')':
            self._emit(TOKEN_COLLECTION_END)
            return self._lex_any
        if ch == '^':
            return self._errorf('unexpected character: %r' % ch)
        if ch in SIGNS:
            following = self.input[self.pos:self.pos + 2]
            if not (is_digit(following[:1]) or
                    (following[:1] == '.' and is_digit(following[1:]))):
                return self._errorf(
                    'bad literal: illegal number syntax: '
                    '(%r not followed by number)' % ch)
            self._backup()
            return self._lex_number
        if is_digit(ch):
            self._backup()
            return self._lex_number
        if ch in ('P', 'p') and self._accept_word(
                'PREFIX', BLANKS, case_insensitive=True):
            self._emit(TOKEN_SPARQL_PREFIX)
            return self._lex_directive_label
        if ch in ('B', 'b') and self._accept_word(
                'BASE', WHITESPACE | frozenset('<'), case_insensitive=True):
            self._emit(TOKEN_SPARQL_BASE)
            return self._lex_any
        if ch == 't' and self._accept_word('true'):
            self._emit(TOKEN_LITERAL_BOOLEAN)
            return self._lex_any
        if ch == 'f' and self._accept_word('false'):
            self._emit(TOKEN_LITERAL_BOOLEAN)
            return self._lex_any
        if ch == 'a':
            following = self._peek()
            if not (is_pn_chars(following) or following in (':', '.')):
                self._emit(TOKEN_RDF_TYPE)
                return self._lex_any
        if ch == ':' or is_pn_chars_base(ch):
            self._backup()
            return self._lex_prefixed_name
        return self._errorf('unexpected character: %r' % ch)

    def _lex_iri(self):
        # start is just past the '<'
        column = self.start - self.line_start
        absolute = False
        scheme_checked = False
        while True:
            ch = self._next()
            if ch == '>':
                break
            if ch == EOF or ch == '\n' or ch == '\r':
                return self._errorf("bad IRI: no closing '>'")
            if ch in BAD_IRI_CHARS_RAW or is_control(ch):
                return self._errorf('bad IRI: disallowed character %r' % ch)
            if ch == '\\':
                scheme_checked = True
                escape = self._next()
                if escape == 'u' or escape == 'U':
                    size = 4 if escape == 'u' else 8
                    if not self._accept_hex(size):
                        return self._errorf(
                            'bad IRI: insufficent hex digits in unicode '
                            'escape')
                    code = int(self.input[self.pos - size:self.pos], 16)
                    if (code > 0x10FFFF or code <= 0x20 or
                            chr(code) in BAD_IRI_CHARS):
                        return self._errorf(
                            'bad IRI: disallowed character in unicode '
                            'escape: %r' %
                            self.input[self.pos - size - 2:self.pos])
                    self.unescape = True
                elif escape == EOF or escape == '\n':
                    return self._errorf("bad IRI: no closing '>'")
                else:
                    return self._errorf(
                        'bad IRI: disallowed escape character %r' % escape)
            elif ch == ':' and not scheme_checked:
                scheme_checked = True
                absolute = self._is_scheme(
                    self.input[self.start:self.pos - 1])
        self._backup()
        self._emit(TOKEN_IRI_ABS if absolute else TOKEN_IRI_REL, column=column)
        self._next()
        self._ignore()
        return self._lex_any

    @staticmethod
    def _is_scheme(value):
        return (bool(value) and value[0] in ALPHA and
                all(ch in SCHEME_CHARS for ch in value))

    def _lex_literal(self):
        line = self.line
        column = self.start - self.line_start + 1
        quote = self._next()
        long_ = self.input.startswith(quote * 2, self.pos)
        if long_:
            self.pos += 2
        self._ignore()
        while True:
            ch = self._next()
            if ch == quote:
                if not long_:
                    end = self.pos - 1
                    break
                if self.input.startswith(quote * 2, self.pos):
                    # a run of more than three quotes closes at the last three
                    while self.input.startswith(quote * 3, self.pos):
                        self.pos += 1
                    self.pos += 2
                    end = self.pos - 3
                    break
            elif ch == EOF:
                return self._errorf(
                    'bad literal: no closing quote: %r' % quote)
            elif ch == '\n':
                if not long_:
                    return self._errorf(
                        'bad literal: newline not allowed in single-quoted '
                        'string')
                if self.pos >= len(self.input) and not self._feed(True):
                    return self._errorf(
                        'bad literal: no closing quote: %r' % quote)
            elif ch == '\r':
                if not long_:
                    return self._errorf(
                        'bad literal: carriage return not allowed in '
                        'single-quoted string')
            elif ch == '\\':
                escape = self._next()
                if escape in STRING_ESCAPES:
                    self.unescape = True
                elif escape == 'u' or escape == 'U':
                    size = 4 if escape == 'u' else 8
                    if not self._accept_hex(size):
                        return self._errorf(
                            'bad literal: insufficent hex digits in unicode '
                            'escape')
                    if int(self.input[self.pos - size:self.pos], 16) > 0x10FFFF:
                        return self._errorf(
                            'bad literal: code point out of range in unicode '
                            'escape: %r' %
                            self.input[self.pos - size - 2:self.pos])
                    self.unescape = True
                elif escape == EOF:
                    return self._errorf(
                        'bad literal: no closing quote: %r' % quote)
                else:
                    return self._errorf(
                        'bad literal: disallowed escape character %r' %
                        escape)
        after = self.pos
        self.pos = end
        self._emit(
            TOKEN_LITERAL3 if long_ else TOKEN_LITERAL, line, column)
        self.pos = after
        self._ignore()

        ch = self._next()
        if ch == '@':
            self._emit(TOKEN_LANG_MARKER)
            return self._lex_lang
        if ch == '^':
            if self._next() != '^':
                return self._errorf('bad literal: invalid datatype IRI')
            self._emit(TOKEN_DATATYPE_MARKER)
            return self._lex_datatype
        self._backup()
        return self._lex_any

    def _lex_lang(self):
        if not self._accept_run(ALPHA):
            return self._errorf('bad literal: invalid language tag')
        while self._peek() == '-':
            self._next()
            if not self._accept_run(ALNUM):
                return self._errorf('bad literal: invalid language tag')
        self._emit(TOKEN_LANG)
        return self._lex_any

    def _lex_datatype(self):
        self._accept_run(BLANKS)
        self._ignore()
        ch = self._peek()
        if ch == '<':
            self._next()
            self._ignore()
            return self._lex_iri
        if not self.line_mode and (ch == ':' or is_pn_chars_base(ch)):
            return self._lex_prefixed_name
        self._next()
        return self._errorf('bad literal: invalid datatype IRI')

    def _lex_number(self):
        if self._peek() in SIGNS:
            self._next()
        integer_digits = self._accept_run(DIGITS)
        fraction_digits = 0
        type_ = TOKEN_LITERAL_INTEGER
        if self._peek() == '.':
            following = self.input[self.pos + 1:self.pos + 2]
            if is_digit(following) or (
                    integer_digits and following in EXPONENT):
                self._next()
                type_ = TOKEN_LITERAL_DECIMAL
                fraction_digits = self._accept_run(DIGITS)
        if not integer_digits and not fraction_digits:
            return self._errorf('bad literal: illegal number syntax')
        if self._peek() in EXPONENT:
            self._next()
            type_ = TOKEN_LITERAL_DOUBLE
            if self._peek() in SIGNS:
                self._next()
            if not self._accept_run(DIGITS):
                return self._errorf(
                    'bad literal: illegal number syntax: missing exponent')
        ch = self._peek()
        if ch != EOF and ch not in NUMBER_END:
            self._next()
            return self._errorf(
                'bad literal: illegal number syntax (number followed by %r)'
                % ch)
        self._emit(type_)
        return self._lex_any

    def _lex_bnode(self):
        ch = self._next()
        if ch == EOF or ch == '\n' or ch == '\r':
            return self._errorf('bad blank node: unexpected end of line')
        if not (is_pn_chars_u(ch) or is_digit(ch)):
            return self._errorf('bad blank node: invalid character %r' % ch)
        while True:
            ch = self._next()
            if ch == '.':
                # dots are allowed inside a label, not at its end
                end = self.pos
                while self.input[end:end + 1] == '.':
                    end += 1
                if is_pn_chars(self.input[end:end + 1]):
                    self.pos = end
                    continue
                self.pos -= 1
                break
            if not is_pn_chars(ch):
                self._backup()
                break
        self._emit(TOKEN_BNODE)
        return self._lex_any

    def _scan_prefix_label(self):
        """
        Scans a prefix label and its ':', emitting the label without the
        colon.

        :return: True on success, False after queueing an error.
        """
        ch = self._next()
        if ch != ':':
            if not is_pn_chars_base(ch):
                self._errorf('unexpected character: %r' % ch)
                return False
            while True:
                ch = self._next()
                if ch == ':':
                    break
                if ch == '.' and is_pn_chars(self._peek()):
                    continue
                if not is_pn_chars(ch):
                    self._errorf(
                        'illegal token: %r' % self.input[self.start:self.pos])
                    return False
        self._backup()
        self._emit(TOKEN_PREFIX_LABEL)
        self._next()
        self._ignore()
        return True

    def _lex_directive_label(self):
        self._accept_run(BLANKS)
        self._ignore()
        if not self._scan_prefix_label():
            return None
        return self._lex_any

    def _lex_prefixed_name(self):
        if not self._scan_prefix_label():
            return None
        if not is_pn_local_first(self._peek()):
            self._emit(TOKEN_IRI_SUFFIX)
            return self._lex_any
        return self._lex_iri_suffix

    def _lex_iri_suffix(self):
        while True:
            ch = self._next()
            if not is_pn_local_mid(ch):
                self._backup()
                break
            if ch == '\\':
                escape = self._next()
                if escape not in PN_LOCAL_ESC:
                    return self._errorf(
                        'invalid escape character %r' % escape)
                self.unescape = True
            elif ch == '%':
                if not self._accept_hex(2):
                    return self._errorf('invalid hex escape sequence')
        # a local name may not end with an unescaped '.'
        while (self.pos > self.start and self.input[self.pos - 1] == '.' and
               self.input[self.pos - 2:self.pos - 1] != '\\'):
            self.pos -= 1
        self._emit(TOKEN_IRI_SUFFIX)
        return self._lex_any

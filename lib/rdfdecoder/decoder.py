"""
Base class of the statement decoders.

.. module:: rdfdecoder.decoder
  :synopsis: Token lookahead and error reporting shared by all decoders
"""

import io

from rdfdecoder.errors import GrammarError, LexicalError, StructuralError
from rdfdecoder.lexer import Lexer, TOKEN_EOF, TOKEN_ERROR

__all__ = ['Decoder', 'as_stream']


def as_stream(input_):
    """
    Wraps str and bytes input in a stream; streams are returned as is.

    :param input_: a str, bytes or an object with a readline() method.

    :return: an object with a readline() method.
    """
    if isinstance(input_, str):
        return io.StringIO(input_)
    if isinstance(input_, (bytes, bytearray)):
        return io.BytesIO(input_)
    if not hasattr(input_, 'readline'):
        raise TypeError(
            'Could not decode input; expected str, bytes or a stream, '
            'got %s.' % type(input_).__name__)
    return input_


class Decoder(object):
    """
    Pulls tokens from a Lexer for a concrete grammar.

    Subclasses implement ``_decode()``, returning the next statement or
    None at the end of the input.
    """

    # True for the line based formats
    line_mode = False

    def __init__(self, input_, options=None):
        self.options = dict(options or {})
        self._lexer = Lexer(as_stream(input_), line_mode=self.line_mode)
        # tokens read ahead, last in first out
        self._peeked = []
        # last token handed out by _next()
        self._last = None

    def __iter__(self):
        while True:
            statement = self._decode()
            if statement is None:
                return
            yield statement

    def decode(self):
        """
        Decodes the next statement, whatever the format.

        :return: the next Triple or Quad, or None at the end of the input.
        """
        return self._decode()

    def decode_all(self):
        """
        Decodes the rest of the input.

        :return: a list of statements.
        """
        return list(self)

    @property
    def line(self):
        """The number of the last input line read."""
        return self._lexer.line

    def _decode(self):
        raise NotImplementedError()

    # token access

    def _next(self):
        if self._peeked:
            self._last = self._peeked.pop()
        else:
            self._last = self._lexer.next_token()
        return self._last

    def _peek(self):
        if not self._peeked:
            self._peeked.append(self._lexer.next_token())
        return self._peeked[-1]

    def _backup(self, token=None):
        """
        Pushes a token back, by default the last one read.
        """
        self._peeked.append(token or self._last)

    # errors

    def _error(self, token, message, cls=GrammarError):
        raise cls(message, line_number=token.line, column=token.column)

    def _syntax_error(self, token):
        self._error(token, 'syntax error: ' + token.text, LexicalError)

    def _unexpected(self, token, position):
        """
        Complains about a token in the given grammar position.
        """
        if token.type == TOKEN_ERROR:
            self._syntax_error(token)
        if token.type == TOKEN_EOF:
            self._error(token, self._unterminated(), StructuralError)
        self._error(token, 'unexpected %s as %s' % (token.type, position))

    def _unterminated(self):
        return 'unterminated statement'

    def _expect(self, position, *types):
        """
        Consumes the next token, which must be one of the given types.

        :param position: the grammar position, used in error messages.

        :return: the token.
        """
        token = self._next()
        if token.type not in types:
            self._unexpected(token, position)
        return token

    def _expect_end(self, token, *types):
        """
        Fails with an 'expected ..., got ...' error for a token that does not
        end the current statement.
        """
        if token.type == TOKEN_ERROR:
            self._syntax_error(token)
        self._error(token, 'expected %s, got %s' % (
            ' or '.join(types), token.type))

"""
N-Triples and N-Quads decoders.

.. module:: rdfdecoder.nquads
  :synopsis: Line based RDF parsers

Both formats hold one statement per line, without prefixes or nesting.
Only absolute IRIs are accepted. An error aborts the current line only: the
rest of the offending line is discarded and the next decode call continues
with the following line.
"""

import logging

from rdfdecoder.decoder import Decoder
from rdfdecoder.errors import ParserError
from rdfdecoder.lexer import (
    TOKEN_BNODE, TOKEN_DATATYPE_MARKER, TOKEN_DOT, TOKEN_EOF, TOKEN_EOL,
    TOKEN_ERROR, TOKEN_IRI_ABS, TOKEN_LANG, TOKEN_LANG_MARKER, TOKEN_LITERAL)
from rdfdecoder.terms import IRI, Blank, Literal, Quad, Triple

__all__ = [
    'NTriplesDecoder', 'NQuadsDecoder', 'parse_ntriples', 'parse_nquads',
    'DEFAULT_GRAPH'
]

logger = logging.getLogger(__name__)

# graph of N-Quads statements without a graph name, unless told otherwise
DEFAULT_GRAPH = Blank('_:defaultGraph')

_RESOURCES = (TOKEN_IRI_ABS, TOKEN_BNODE)


class _LineDecoder(Decoder):
    """
    Statement grammar shared by N-Triples and N-Quads.
    """
    line_mode = True

    # True if a graph name may follow the object
    quads = False

    def __init__(self, input_, options=None):
        Decoder.__init__(self, input_, options)
        # number of statements decoded
        self.statements = 0

    def _decode_statement(self):
        """
        Decodes the statement on the next non-empty line.

        :return: (subject, predicate, object, graph or None), or None at the
          end of the input.
        """
        while True:
            token = self._next()
            if token.type == TOKEN_EOF:
                return None
            if token.type != TOKEN_EOL:
                break
        self._backup()
        try:
            return self._parse_statement()
        except ParserError:
            self._skip_line()
            raise

    def _skip_line(self):
        token = self._last
        while token.type not in (TOKEN_EOL, TOKEN_EOF):
            token = self._next()

    def _parse_statement(self):
        subject = self._resource(self._next(), 'subject')
        predicate = self._resource(self._next(), 'predicate')
        object_ = self._object()

        graph = None
        token = self._next()
        if self.quads:
            if token.type in _RESOURCES:
                graph = self._resource(token, 'graph')
                token = self._next()
            elif token.type == TOKEN_LITERAL:
                self._error(
                    token, 'syntax error: graph name may not be a literal')
            elif token.type not in (TOKEN_DOT, TOKEN_ERROR):
                self._unexpected(token, 'graph')
        if token.type != TOKEN_DOT:
            self._expect_end(token, TOKEN_DOT)

        token = self._next()
        if token.type == TOKEN_ERROR:
            self._syntax_error(token)
        if token.type not in (TOKEN_EOL, TOKEN_EOF):
            self._error(
                token, 'syntax error: extra token after end of statement')

        self.statements += 1
        return subject, predicate, object_, graph

    def _resource(self, token, position):
        if token.type not in _RESOURCES:
            self._unexpected(token, position)
        if token.type == TOKEN_IRI_ABS:
            return IRI(token.text)
        return Blank(token.text)

    def _object(self):
        token = self._next()
        if token.type != TOKEN_LITERAL:
            return self._resource(token, 'object')
        following = self._peek().type
        if following == TOKEN_LANG_MARKER:
            self._next()
            language = self._expect('literal language', TOKEN_LANG)
            return Literal(token.text, language=language.text)
        if following == TOKEN_DATATYPE_MARKER:
            self._next()
            datatype = self._expect('literal datatype', TOKEN_IRI_ABS)
            return Literal(token.text, datatype=datatype.text)
        return Literal(token.text)


class NTriplesDecoder(_LineDecoder):
    """
    Decodes N-Triples into triples.
    """

    def __init__(self, input_, options=None):
        """
        Creates a new NTriplesDecoder.

        :param input_: a binary or text stream, str or bytes.
        :param [options]: the options to use (none are used).
        """
        _LineDecoder.__init__(self, input_, options)
        logger.debug('N-Triples decoder created.')

    def decode_triple(self):
        """
        Decodes the next triple.

        :return: the next Triple, or None at the end of the input.
        """
        return self._decode()

    def _decode(self):
        statement = self._decode_statement()
        if statement is None:
            return None
        return Triple(*statement[:3])


class NQuadsDecoder(_LineDecoder):
    """
    Decodes N-Quads into quads. Statements without a graph name are put in
    the default graph given at construction.
    """
    quads = True

    def __init__(self, input_, default_graph=DEFAULT_GRAPH, options=None):
        """
        Creates a new NQuadsDecoder.

        :param input_: a binary or text stream, str or bytes.
        :param default_graph: the IRI or Blank used as graph name of
          statements without one.
        :param [options]: the options to use (none are used).
        """
        if not isinstance(default_graph, (IRI, Blank)):
            raise ValueError(
                'The default graph must be an IRI or a blank node, got %r.' %
                (default_graph,))
        _LineDecoder.__init__(self, input_, options)
        self.default_graph = default_graph
        logger.debug(
            'N-Quads decoder created, default graph: %s', default_graph)

    def decode_quad(self):
        """
        Decodes the next quad.

        :return: the next Quad, or None at the end of the input.
        """
        return self._decode()

    def _decode(self):
        statement = self._decode_statement()
        if statement is None:
            return None
        subject, predicate, object_, graph = statement
        if graph is None:
            graph = self.default_graph
        return Quad(subject, predicate, object_, graph)


def parse_ntriples(input_):
    """
    Parses RDF in the form of N-Triples.

    :param input_: the N-Triples input to parse (str, bytes or a stream).

    :return: a list of Triples.
    """
    return NTriplesDecoder(input_).decode_all()


def parse_nquads(input_, default_graph=DEFAULT_GRAPH):
    """
    Parses RDF in the form of N-Quads.

    :param input_: the N-Quads input to parse (str, bytes or a stream).
    :param default_graph: the graph of statements without a graph name.

    :return: a list of Quads.
    """
    return NQuadsDecoder(input_, default_graph).decode_all()

"""
Streaming Turtle decoder.

.. module:: rdfdecoder.turtle
  :synopsis: Turtle parser producing one triple at a time

Turtle's abbreviations (predicate and object lists, blank node property
lists and collections) are flattened into plain triples by a state machine.
Each state is a method returning the next state, or None once one or more
triples are queued. Nested structures keep the statement they interrupt on
a stack of frames, so the outer statement resumes when they close.

Directives change the decoder for the rest of the document. After an error
the prefixes and base already read stay in effect, but the statement being
parsed is lost, so errors should be treated as fatal for the document.
"""

import logging
from collections import deque

from rdfdecoder import iri_resolver
from rdfdecoder.decoder import Decoder
from rdfdecoder.errors import StructuralError
from rdfdecoder.identifier_issuer import IdentifierIssuer
from rdfdecoder.lexer import (
    TOKEN_ANON_BNODE, TOKEN_BASE, TOKEN_BNODE, TOKEN_COLLECTION_END,
    TOKEN_COLLECTION_START, TOKEN_COMMA, TOKEN_DATATYPE_MARKER, TOKEN_DOT,
    TOKEN_EOF, TOKEN_ERROR, TOKEN_IRI_ABS, TOKEN_IRI_REL, TOKEN_IRI_SUFFIX,
    TOKEN_LANG, TOKEN_LANG_MARKER, TOKEN_LITERAL, TOKEN_LITERAL3,
    TOKEN_LITERAL_BOOLEAN, TOKEN_LITERAL_DECIMAL, TOKEN_LITERAL_DOUBLE,
    TOKEN_LITERAL_INTEGER, TOKEN_PREFIX, TOKEN_PREFIX_LABEL,
    TOKEN_PROPERTY_LIST_END, TOKEN_PROPERTY_LIST_START, TOKEN_RDF_TYPE,
    TOKEN_SEMICOLON, TOKEN_SPARQL_BASE, TOKEN_SPARQL_PREFIX)
from rdfdecoder.terms import (
    IRI, Blank, Literal, Triple, RDF_FIRST, RDF_NIL, RDF_REST, RDF_TYPE,
    XSD_BOOLEAN, XSD_DECIMAL, XSD_DOUBLE, XSD_INTEGER)

__all__ = [
    'TurtleDecoder', 'Frame', 'CTX_TOP', 'CTX_COLLECTION', 'CTX_PROPERTY_LIST'
]

logger = logging.getLogger(__name__)

# frame kinds
CTX_TOP = 'statement'
CTX_COLLECTION = 'collection'
CTX_PROPERTY_LIST = 'property list'

_DIRECTIVES = (
    TOKEN_PREFIX, TOKEN_SPARQL_PREFIX, TOKEN_BASE, TOKEN_SPARQL_BASE)

_IRIS = (TOKEN_IRI_ABS, TOKEN_IRI_REL)

_SHORTHAND_DATATYPES = {
    TOKEN_LITERAL_INTEGER: XSD_INTEGER,
    TOKEN_LITERAL_DECIMAL: XSD_DECIMAL,
    TOKEN_LITERAL_DOUBLE: XSD_DOUBLE,
    TOKEN_LITERAL_BOOLEAN: XSD_BOOLEAN
}

# grammar position of a token that should have closed the given frame kind
_END_POSITIONS = {
    CTX_TOP: 'end of statement',
    CTX_COLLECTION: 'collection item',
    CTX_PROPERTY_LIST: 'property list entry'
}


class Frame(object):
    """
    A partially built triple and the kind of structure it belongs to.
    """
    __slots__ = ('kind', 'subject', 'predicate', 'object')

    def __init__(self, kind=CTX_TOP, subject=None, predicate=None,
                 object_=None):
        self.kind = kind
        self.subject = subject
        self.predicate = predicate
        self.object = object_

    def copy(self):
        return Frame(self.kind, self.subject, self.predicate, self.object)

    def __repr__(self):
        return 'Frame(%r, %r, %r, %r)' % (
            self.kind, self.subject, self.predicate, self.object)


class TurtleDecoder(Decoder):
    """
    Decodes a Turtle document into triples.

    Options:
      base: the initial base IRI (default: none, relative IRIs are kept as
        written until a base is declared).
      blankNodePrefix: prefix of generated blank node labels
        (default: '_:b').
    """

    def __init__(self, input_, options=None):
        """
        Creates a new TurtleDecoder.

        :param input_: a binary or text stream, str or bytes.
        :param [options]: the options to use.
        """
        Decoder.__init__(self, input_, options)
        self.base = self.options.get('base')
        self.prefixes = {}
        self._issuer = IdentifierIssuer(
            self.options.get('blankNodePrefix', '_:b'))
        # the frame being parsed, and the frames it interrupted
        self._current = Frame()
        self._stack = []
        # triples ready to be returned
        self._triples = deque()
        logger.debug('Turtle decoder created, base: %r', self.base)

    def decode_triple(self):
        """
        Decodes the next triple.

        :return: the next Triple, or None at the end of the document.
        """
        return self._decode()

    def _decode(self):
        while not self._triples:
            token = self._peek()
            if token.type == TOKEN_EOF:
                if self._stack:
                    self._error(token, self._unterminated(), StructuralError)
                return None
            state = self._parse_start
            while state is not None:
                state = state()
        return self._triples.popleft()

    def _unterminated(self):
        for frame in [self._current] + self._stack[::-1]:
            if frame.kind != CTX_TOP:
                return 'unterminated %s' % frame.kind
        return 'unterminated statement'

    # context stack

    def _push_context(self):
        self._stack.append(self._current.copy())

    def _pop_context(self):
        if not self._stack:
            raise RuntimeError('Turtle decoder context stack is empty.')
        self._current = self._stack.pop()

    def _restore_context(self):
        """
        Resumes the interrupted statement, if any, or starts a new one.
        """
        if self._stack:
            self._current = self._stack.pop()
        else:
            self._current = Frame()

    def _emit(self):
        frame = self._current
        self._triples.append(
            Triple(frame.subject, frame.predicate, frame.object))

    def _new_blank(self):
        return Blank(self._issuer.get_id())

    # terms

    def _resolve(self, token):
        """
        Returns the IRI of an IRI token, resolved against the base.
        """
        if token.type == TOKEN_IRI_ABS or not self.base:
            return token.text
        try:
            return iri_resolver.resolve(token.text, self.base)
        except ValueError as cause:
            self._error(token, 'syntax error: %s' % cause)

    def _prefixed(self, token):
        """
        Expands a prefix label token and the IRI suffix token after it.
        """
        namespace = self.prefixes.get(token.text)
        if namespace is None:
            self._error(
                token,
                "syntax error: missing namespace for prefix: '%s'" %
                token.text)
        suffix = self._expect('IRI suffix', TOKEN_IRI_SUFFIX)
        return IRI(namespace + suffix.text)

    def _literal(self, token):
        following = self._peek().type
        if following == TOKEN_LANG_MARKER:
            self._next()
            language = self._expect('literal language', TOKEN_LANG)
            return Literal(token.text, language=language.text)
        if following == TOKEN_DATATYPE_MARKER:
            self._next()
            datatype = self._expect(
                'literal datatype', TOKEN_IRI_ABS, TOKEN_IRI_REL,
                TOKEN_PREFIX_LABEL)
            if datatype.type == TOKEN_PREFIX_LABEL:
                return Literal(token.text, datatype=self._prefixed(datatype))
            return Literal(token.text, datatype=self._resolve(datatype))
        return Literal(token.text)

    # directives

    def _parse_prefix(self):
        label = self._expect('prefix label', TOKEN_PREFIX_LABEL)
        token = self._expect('prefix IRI', *_IRIS)
        self.prefixes[label.text] = self._resolve(token)
        logger.debug(
            'Prefix %r bound to <%s>.', label.text, self.prefixes[label.text])

    def _parse_base(self):
        token = self._expect('base IRI', *_IRIS)
        self.base = self._resolve(token)
        logger.debug('Base IRI set to <%s>.', self.base)

    # states

    def _parse_start(self):
        token = self._next()
        if token.type == TOKEN_EOF:
            return None
        if self._stack or token.type not in _DIRECTIVES:
            self._backup()
            return self._parse_subject

        if token.type in (TOKEN_PREFIX, TOKEN_SPARQL_PREFIX):
            self._parse_prefix()
        else:
            self._parse_base()
        # only the @ forms end with a dot
        if token.type in (TOKEN_PREFIX, TOKEN_BASE):
            self._expect('directive trailing dot', TOKEN_DOT)
        return self._parse_start

    def _parse_subject(self):
        self._restore_context()
        if self._current.subject is not None:
            return self._parse_predicate

        token = self._next()
        if token.type in _IRIS:
            subject = IRI(self._resolve(token))
        elif token.type == TOKEN_BNODE:
            subject = Blank(token.text)
        elif token.type == TOKEN_ANON_BNODE:
            subject = self._new_blank()
        elif token.type == TOKEN_PREFIX_LABEL:
            subject = self._prefixed(token)
        elif token.type == TOKEN_PROPERTY_LIST_START:
            subject = self._new_blank()
            if self._peek().type == TOKEN_PROPERTY_LIST_END:
                # '[' and ']' on separate lines
                self._next()
            else:
                self._current.subject = subject
                self._push_context()
                self._current.kind = CTX_PROPERTY_LIST
                return self._parse_predicate
        elif token.type == TOKEN_COLLECTION_START:
            if self._peek().type == TOKEN_COLLECTION_END:
                self._next()
                subject = IRI(RDF_NIL)
            else:
                self._current.subject = self._new_blank()
                self._push_context()
                self._current.predicate = IRI(RDF_FIRST)
                self._current.kind = CTX_COLLECTION
                return self._parse_object
        else:
            self._unexpected(token, 'subject')

        self._current.subject = subject
        return self._parse_predicate

    def _parse_predicate(self):
        if self._current.predicate is not None:
            return self._parse_object

        token = self._next()
        if token.type in _IRIS:
            predicate = IRI(self._resolve(token))
        elif token.type == TOKEN_RDF_TYPE:
            predicate = IRI(RDF_TYPE)
        elif token.type == TOKEN_PREFIX_LABEL:
            predicate = self._prefixed(token)
        else:
            self._unexpected(token, 'predicate')

        self._current.predicate = predicate
        return self._parse_object

    def _parse_object(self):
        token = self._next()
        if token.type in _IRIS:
            object_ = IRI(self._resolve(token))
        elif token.type == TOKEN_BNODE:
            object_ = Blank(token.text)
        elif token.type == TOKEN_ANON_BNODE:
            object_ = self._new_blank()
        elif token.type in (TOKEN_LITERAL, TOKEN_LITERAL3):
            object_ = self._literal(token)
        elif token.type in _SHORTHAND_DATATYPES:
            object_ = Literal(
                token.text, datatype=_SHORTHAND_DATATYPES[token.type])
        elif token.type == TOKEN_PREFIX_LABEL:
            object_ = self._prefixed(token)
        elif token.type == TOKEN_PROPERTY_LIST_START:
            if self._peek().type == TOKEN_PROPERTY_LIST_END:
                self._next()
                object_ = self._new_blank()
            else:
                return self._open(CTX_PROPERTY_LIST)
        elif token.type == TOKEN_COLLECTION_START:
            if self._peek().type == TOKEN_COLLECTION_END:
                self._next()
                object_ = IRI(RDF_NIL)
            else:
                return self._open(CTX_COLLECTION)
        else:
            self._unexpected(token, 'object')

        self._current.object = object_
        self._emit()
        return self._parse_end

    def _open(self, kind):
        """
        Starts a property list or collection in object position: emits the
        triple pointing to its blank node and makes that node the subject of
        the frame on top of the stack.
        """
        self._push_context()
        blank = self._new_blank()
        self._current.object = blank
        self._emit()
        if kind == CTX_COLLECTION:
            self._current = Frame(kind, blank, IRI(RDF_FIRST))
        else:
            self._current = Frame(kind, blank)
        self._push_context()
        return None

    def _parse_end(self):
        token = self._next()
        kind = self._current.kind

        if token.type == TOKEN_SEMICOLON:
            following = self._peek().type
            if following in (
                    TOKEN_SEMICOLON, TOKEN_DOT, TOKEN_PROPERTY_LIST_END):
                # repeated or trailing ';'
                return self._parse_end
            self._current.predicate = None
            self._current.object = None
            self._push_context()
            return None

        if token.type == TOKEN_COMMA:
            self._current.object = None
            self._push_context()
            return None

        if token.type == TOKEN_DOT:
            if kind != CTX_TOP:
                self._unexpected(token, _END_POSITIONS[kind])
            return None

        if token.type == TOKEN_PROPERTY_LIST_END:
            if kind != CTX_PROPERTY_LIST:
                self._unexpected(token, _END_POSITIONS[kind])
            self._pop_context()
            if self._current.predicate is not None:
                # the list was an object, more closing tokens may follow
                return self._parse_end
            if not self._stack and self._peek().type == TOKEN_DOT:
                # a property list on its own: '[ :p :o ] .'
                self._next()
                return None
            self._push_context()
            return None

        if token.type == TOKEN_COLLECTION_END:
            if kind != CTX_COLLECTION:
                self._unexpected(token, _END_POSITIONS[kind])
            self._current.predicate = IRI(RDF_REST)
            self._current.object = IRI(RDF_NIL)
            self._emit()
            self._pop_context()
            if self._current.predicate is not None:
                return self._parse_end
            self._push_context()
            return None

        if kind == CTX_COLLECTION and token.type not in (
                TOKEN_EOF, TOKEN_ERROR):
            # next item: link a new list cell to the current one
            self._backup()
            blank = self._new_blank()
            self._current.predicate = IRI(RDF_REST)
            self._current.object = blank
            self._emit()
            self._current = Frame(CTX_COLLECTION, blank, IRI(RDF_FIRST))
            self._push_context()
            return None

        if token.type == TOKEN_EOF:
            self._unexpected(token, _END_POSITIONS[kind])
        self._expect_end(token, 'triple termination')

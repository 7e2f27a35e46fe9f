"""
RDF terms produced by the decoders.

.. module:: rdfdecoder.terms
  :synopsis: IRI, blank node and literal terms, triples and quads

Terms are small immutable value objects. Terms of different kinds never
compare equal, so ``IRI('_:x') != Blank('_:x')``.

Literals keep their lexical form and expose a native Python value through
``Literal.value`` for a fixed set of XSD datatypes (see ``coerce_literal``).
"""

import re
from collections import namedtuple
from datetime import datetime

__all__ = [
    'IRI', 'Blank', 'Literal', 'Triple', 'Quad', 'coerce_literal',
    'RDF', 'RDF_TYPE', 'RDF_FIRST', 'RDF_REST', 'RDF_NIL', 'RDF_LANGSTRING',
    'XSD', 'XSD_STRING', 'XSD_BOOLEAN', 'XSD_INTEGER', 'XSD_DECIMAL',
    'XSD_DOUBLE', 'XSD_FLOAT', 'XSD_DATETIME'
]

# RDF constants
RDF = 'http://www.w3.org/1999/02/22-rdf-syntax-ns#'
RDF_TYPE = RDF + 'type'
RDF_FIRST = RDF + 'first'
RDF_REST = RDF + 'rest'
RDF_NIL = RDF + 'nil'
RDF_LANGSTRING = RDF + 'langString'

# XSD constants
XSD = 'http://www.w3.org/2001/XMLSchema#'
XSD_STRING = XSD + 'string'
XSD_BOOLEAN = XSD + 'boolean'
XSD_INTEGER = XSD + 'integer'
XSD_DECIMAL = XSD + 'decimal'
XSD_DOUBLE = XSD + 'double'
XSD_FLOAT = XSD + 'float'
XSD_DATETIME = XSD + 'dateTime'

# lexical forms accepted by the coercion table
_INTEGER = re.compile(r'^[+-]?[0-9]+$')
_DECIMAL = re.compile(r'^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$')
_DOUBLE = re.compile(
    r'^(?:[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?'
    r'|[+-]?INF|NaN)$')
_DATETIME = re.compile(
    r'^-?[0-9]{4,}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}'
    r'(?:\.[0-9]+)?(?:Z|[+-][0-9]{2}:[0-9]{2})?$')


class _Term(object):
    """
    Base class for RDF terms, holding a single string value.
    """
    __slots__ = ('_value',)

    # term type name, as used in JSON-LD RDF datasets
    type = None

    def __init__(self, value):
        if not isinstance(value, str):
            raise TypeError(
                '%s value must be a string, got %r' %
                (self.__class__.__name__, value))
        object.__setattr__(self, '_value', value)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError('RDF terms are immutable')

    def __eq__(self, other):
        return type(other) is type(self) and other._value == self._value

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.type, self._value))

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self._value)

    def to_dict(self):
        """
        Returns the term in the JSON-LD RDF dataset form.

        :return: a dict with 'type' and 'value'.
        """
        return {'type': self.type, 'value': self._value}


class IRI(_Term):
    """
    An IRI reference.
    """
    __slots__ = ()
    type = 'IRI'

    def __str__(self):
        return '<' + self._value + '>'


class Blank(_Term):
    """
    A blank node. The value includes the '_:' marker, e.g. '_:b1'.
    """
    __slots__ = ()
    type = 'blank node'

    def __str__(self):
        return self._value


class Literal(object):
    """
    An RDF literal: a lexical form with either a language tag or a
    datatype IRI.
    """
    __slots__ = ('lexical', 'language', 'datatype', 'value')

    type = 'literal'

    def __init__(self, lexical, language=None, datatype=None):
        """
        Creates a new Literal.

        :param lexical: the lexical form.
        :param [language]: the language tag, implies rdf:langString.
        :param [datatype]: the datatype IRI (an IRI or a string),
          xsd:string when omitted.
        """
        if isinstance(datatype, str):
            datatype = IRI(datatype)
        if language:
            if datatype is not None and datatype.value != RDF_LANGSTRING:
                raise ValueError(
                    'A literal with a language tag cannot have the '
                    'datatype %s.' % datatype)
            datatype = IRI(RDF_LANGSTRING)
        else:
            language = None
            if datatype is None or datatype.value == RDF_LANGSTRING:
                datatype = IRI(XSD_STRING)
        object.__setattr__(self, 'lexical', lexical)
        object.__setattr__(self, 'language', language)
        object.__setattr__(self, 'datatype', datatype)
        object.__setattr__(
            self, 'value', coerce_literal(lexical, datatype.value))

    def __setattr__(self, name, value):
        raise AttributeError('RDF terms are immutable')

    def __eq__(self, other):
        return (type(other) is Literal and
                other.lexical == self.lexical and
                other.language == self.language and
                other.datatype == self.datatype)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.type, self.lexical, self.language, self.datatype))

    def __repr__(self):
        if self.language:
            return 'Literal(%r, language=%r)' % (self.lexical, self.language)
        if self.datatype.value == XSD_STRING:
            return 'Literal(%r)' % self.lexical
        return 'Literal(%r, datatype=%r)' % (
            self.lexical, self.datatype.value)

    def __str__(self):
        quoted = '"' + _escape(self.lexical) + '"'
        if self.language:
            return quoted + '@' + self.language
        if self.datatype.value == XSD_STRING:
            return quoted
        return quoted + '^^' + str(self.datatype)

    def to_dict(self):
        rval = {
            'type': self.type,
            'value': self.lexical,
            'datatype': self.datatype.value
        }
        if self.language:
            rval['language'] = self.language
        return rval


class Triple(namedtuple('Triple', ['subject', 'predicate', 'object'])):
    """
    An RDF triple.
    """
    __slots__ = ()

    def __str__(self):
        return '%s %s %s .' % self

    def to_dict(self):
        return {
            'subject': self.subject.to_dict(),
            'predicate': self.predicate.to_dict(),
            'object': self.object.to_dict()
        }


class Quad(namedtuple('Quad', ['subject', 'predicate', 'object', 'graph'])):
    """
    An RDF triple in a named graph.
    """
    __slots__ = ()

    @property
    def triple(self):
        return Triple(self.subject, self.predicate, self.object)

    def __str__(self):
        return '%s %s %s %s .' % self

    def to_dict(self):
        rval = self.triple.to_dict()
        rval['name'] = self.graph.to_dict()
        return rval


def coerce_literal(lexical, datatype):
    """
    Converts the lexical form of a literal to a native value.

    integer -> int, double/float/decimal -> float, boolean -> bool,
    dateTime -> datetime. Unknown datatypes, and lexical forms that are
    invalid for their datatype, keep the lexical string.

    :param lexical: the lexical form.
    :param datatype: the datatype IRI string.

    :return: the native value.
    """
    convert = _NATIVE_TYPES.get(datatype)
    if convert is None:
        return lexical
    try:
        return convert(lexical)
    except ValueError:
        return lexical


def _to_int(lexical):
    if not _INTEGER.match(lexical):
        raise ValueError(lexical)
    return int(lexical)


def _to_decimal(lexical):
    if not _DECIMAL.match(lexical):
        raise ValueError(lexical)
    return float(lexical)


def _to_double(lexical):
    if not _DOUBLE.match(lexical):
        raise ValueError(lexical)
    return float(lexical)


def _to_bool(lexical):
    if lexical in ('true', '1'):
        return True
    if lexical in ('false', '0'):
        return False
    raise ValueError(lexical)


def _to_datetime(lexical):
    if not _DATETIME.match(lexical):
        raise ValueError(lexical)
    if lexical.endswith('Z'):
        lexical = lexical[:-1] + '+00:00'
    return datetime.fromisoformat(lexical)


_NATIVE_TYPES = {
    XSD_INTEGER: _to_int,
    XSD_DECIMAL: _to_decimal,
    XSD_DOUBLE: _to_double,
    XSD_FLOAT: _to_double,
    XSD_BOOLEAN: _to_bool,
    XSD_DATETIME: _to_datetime
}


def _escape(value):
    return (
        value.replace('\\', '\\\\')
        .replace('\t', '\\t')
        .replace('\n', '\\n')
        .replace('\r', '\\r')
        .replace('"', '\\"')
    )

"""
Tests for the RDF term model and literal coercion.
"""
from datetime import datetime, timedelta, timezone

import pytest

from rdfdecoder.terms import (
    IRI, Blank, Literal, Triple, Quad, coerce_literal, RDF_LANGSTRING,
    XSD_BOOLEAN, XSD_DATETIME, XSD_DECIMAL, XSD_DOUBLE, XSD_INTEGER,
    XSD_STRING)


class TestTerms:
    def test_kinds_never_equal(self):
        assert IRI('_:x') != Blank('_:x')
        assert Blank('_:x') != Literal('_:x')
        assert IRI('http://example.org/') == IRI('http://example.org/')

    def test_hashable(self):
        terms = {IRI('http://a/'), IRI('http://a/'), Blank('_:a'),
                 Literal('a'), Literal('a')}
        assert len(terms) == 3

    def test_immutable(self):
        with pytest.raises(AttributeError):
            IRI('http://a/').value = 'http://b/'
        with pytest.raises(AttributeError):
            Literal('a').lexical = 'b'

    def test_value_must_be_str(self):
        with pytest.raises(TypeError):
            IRI(None)

    def test_str(self):
        assert str(IRI('http://a/')) == '<http://a/>'
        assert str(Blank('_:b1')) == '_:b1'
        assert str(Literal('a "b"\n')) == '"a \\"b\\"\\n"'
        assert str(Literal('chat', language='fr')) == '"chat"@fr'
        assert (str(Literal('1', datatype=XSD_INTEGER)) ==
                '"1"^^<%s>' % XSD_INTEGER)

    def test_to_dict(self):
        assert IRI('http://a/').to_dict() == {
            'type': 'IRI', 'value': 'http://a/'}
        assert Blank('_:b1').to_dict() == {
            'type': 'blank node', 'value': '_:b1'}
        assert Literal('chat', language='fr').to_dict() == {
            'type': 'literal', 'value': 'chat',
            'datatype': RDF_LANGSTRING, 'language': 'fr'}

    def test_triple_and_quad_to_dict(self):
        triple = Triple(IRI('http://s/'), IRI('http://p/'), Literal('o'))
        quad = Quad(*triple, graph=Blank('_:g'))
        assert triple.to_dict()['object'] == {
            'type': 'literal', 'value': 'o', 'datatype': XSD_STRING}
        assert quad.to_dict()['name'] == {'type': 'blank node', 'value': '_:g'}
        assert quad.triple == triple
        assert str(quad) == '<http://s/> <http://p/> "o" _:g .'


class TestLiteral:
    def test_default_datatype(self):
        assert Literal('a').datatype == IRI(XSD_STRING)

    def test_language_implies_langstring(self):
        literal = Literal('a', language='en')
        assert literal.datatype == IRI(RDF_LANGSTRING)
        assert literal.language == 'en'

    def test_language_and_datatype_conflict(self):
        with pytest.raises(ValueError):
            Literal('a', language='en', datatype=XSD_INTEGER)

    def test_equality_uses_lexical_form(self):
        assert Literal('1', datatype=XSD_INTEGER) != Literal(
            '01', datatype=XSD_INTEGER)
        assert Literal('a', language='en') != Literal('a', language='de')
        assert Literal('a') != Literal('a', language='en')


@pytest.mark.parametrize(
    "lexical,datatype,expected",
    [
        ['42', XSD_INTEGER, 42],
        ['-7', XSD_INTEGER, -7],
        ['4.2', XSD_DECIMAL, 4.2],
        ['.5', XSD_DECIMAL, 0.5],
        ['1e3', XSD_DOUBLE, 1000.0],
        ['true', XSD_BOOLEAN, True],
        ['0', XSD_BOOLEAN, False],
        ['abc', XSD_STRING, 'abc'],
        ['abc', 'http://example.org/unknown', 'abc'],
        ['4.2', XSD_INTEGER, '4.2'],
        ['yes', XSD_BOOLEAN, 'yes'],
        ['1e3', XSD_DECIMAL, '1e3'],
    ]
)
def test_coerce_literal(lexical, datatype, expected):
    value = coerce_literal(lexical, datatype)
    assert value == expected
    assert type(value) is type(expected)


def test_coerce_special_doubles():
    assert coerce_literal('INF', XSD_DOUBLE) == float('inf')
    assert coerce_literal('-INF', XSD_DOUBLE) == float('-inf')
    nan = coerce_literal('NaN', XSD_DOUBLE)
    assert nan != nan


def test_coerce_datetime():
    value = coerce_literal('2024-03-01T12:30:00Z', XSD_DATETIME)
    assert value == datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
    value = coerce_literal('2024-03-01T12:30:00+02:00', XSD_DATETIME)
    assert value.utcoffset() == timedelta(hours=2)
    assert coerce_literal('2024-03-01', XSD_DATETIME) == '2024-03-01'


def test_literal_value():
    assert Literal('42', datatype=XSD_INTEGER).value == 42
    assert Literal('S').value == 'S'

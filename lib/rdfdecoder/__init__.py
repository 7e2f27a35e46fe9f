""" The PyRDFDecoder module decodes N-Triples, N-Quads and Turtle. """
from .__about__ import __version__
from .errors import (
    RDFDecoderError, ParserError, LexicalError, GrammarError, StructuralError,
    LoadDocumentError)
from .terms import IRI, Blank, Literal, Triple, Quad
from .nquads import NTriplesDecoder, NQuadsDecoder, parse_ntriples, parse_nquads
from .turtle import TurtleDecoder
from .formats import decoder, parse, register_decoder

__all__ = [
    '__version__',
    'RDFDecoderError', 'ParserError', 'LexicalError', 'GrammarError',
    'StructuralError', 'LoadDocumentError',
    'IRI', 'Blank', 'Literal', 'Triple', 'Quad',
    'NTriplesDecoder', 'NQuadsDecoder', 'TurtleDecoder',
    'parse_ntriples', 'parse_nquads', 'decoder', 'parse', 'register_decoder'
]

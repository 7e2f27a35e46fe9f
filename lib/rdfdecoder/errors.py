"""
Exceptions raised by the decoders and document loaders.

.. module:: rdfdecoder.errors
  :synopsis: Exception hierarchy of PyRDFDecoder
"""
import sys
import traceback

__all__ = [
    'RDFDecoderError', 'ParserError', 'LexicalError', 'GrammarError',
    'StructuralError', 'LoadDocumentError'
]


class RDFDecoderError(Exception):
    """
    Base class for PyRDFDecoder errors.
    """


class ParserError(RDFDecoderError, ValueError):
    """
    Base class for parsing errors. Carries the position of the offending
    token.
    """

    def __init__(self, message, line_number=None, column=None):
        Exception.__init__(self, message)
        self.message = message
        self.line_number = line_number
        self.column = column

    def __str__(self):
        if self.line_number is None:
            return self.message
        return '%d:%d: %s' % (self.line_number, self.column or 0, self.message)


class LexicalError(ParserError):
    """
    Malformed input detected while scanning: a bad escape, a disallowed
    character, an unterminated literal or IRI, a bad number.
    """


class GrammarError(ParserError):
    """
    A token that is not allowed in its grammar position, an undefined
    prefix or a relative IRI where an absolute one is required.
    """


class StructuralError(GrammarError):
    """
    The input ended inside a collection, property list or statement. The
    decoder state is corrupt after this error.
    """


class LoadDocumentError(RDFDecoderError):
    """
    A remote document could not be retrieved.
    """

    def __init__(self, message, url=None, cause=None):
        Exception.__init__(self, message)
        self.url = url
        self.cause = cause
        self.causeTrace = traceback.extract_tb(*sys.exc_info()[2:])

    def __str__(self):
        rval = str(self.args[0])
        if self.url:
            rval += '\nURL: ' + self.url
        if self.cause:
            rval += '\nCause: ' + str(self.cause)
            rval += ''.join(traceback.format_list(self.causeTrace))
        return rval

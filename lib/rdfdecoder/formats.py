"""
Content type registry.

.. module:: rdfdecoder.formats
  :synopsis: Pick a decoder by content type or file extension
"""

import logging
import os

from rdfdecoder.nquads import DEFAULT_GRAPH, NQuadsDecoder, NTriplesDecoder
from rdfdecoder.turtle import TurtleDecoder

__all__ = [
    'register_decoder', 'unregister_decoder', 'get_decoder_class',
    'guess_content_type', 'decoder', 'parse', 'ACCEPT'
]

logger = logging.getLogger(__name__)

# registered decoder classes by content type
_decoders = {}

_EXTENSIONS = {
    '.nt': 'application/n-triples',
    '.nq': 'application/n-quads',
    '.ttl': 'text/turtle'
}

# Accept header for remote RDF documents
ACCEPT = ('text/turtle, application/n-quads, application/n-triples, '
          'application/x-turtle;q=0.9, application/nquads;q=0.9, '
          'text/plain;q=0.5')


def _normalize(content_type):
    # drop parameters such as '; charset=utf-8'
    return content_type.split(';', 1)[0].strip().lower()


def register_decoder(content_type, cls):
    """
    Registers a decoder class for a content type, replacing any decoder
    registered for it before.

    :param content_type: the content type.
    :param cls: the decoder class; it is called as cls(input_, options) or,
      for N-Quads style decoders, cls(input_, default_graph, options).
    """
    _decoders[_normalize(content_type)] = cls


def unregister_decoder(content_type):
    """
    Unregisters the decoder of a content type.

    :param content_type: the content type.
    """
    _decoders.pop(_normalize(content_type), None)


def get_decoder_class(content_type):
    """
    Gets the decoder class for a content type.

    :param content_type: the content type, parameters are ignored.

    :return: the decoder class.
    """
    cls = _decoders.get(_normalize(content_type or ''))
    if cls is None:
        raise ValueError('Unknown RDF content type: %r.' % content_type)
    return cls


def guess_content_type(path):
    """
    Guesses a content type from a file name or URL.

    :param path: the file name or URL.

    :return: the content type, or None if the extension is not known.
    """
    return _EXTENSIONS.get(os.path.splitext(path)[1].lower())


def decoder(input_, content_type, options=None):
    """
    Creates a decoder for the given content type.

    :param input_: a binary or text stream, str or bytes.
    :param content_type: the content type of the input.
    :param [options]: the options to use.
      [base] the base IRI (Turtle).
      [defaultGraph] the graph of statements without a graph name
        (N-Quads, default: _:defaultGraph).

    :return: the decoder.
    """
    options = options or {}
    cls = get_decoder_class(content_type)
    logger.debug('Decoding %s with %s.', content_type, cls.__name__)
    if issubclass(cls, NQuadsDecoder):
        return cls(input_, options.get('defaultGraph', DEFAULT_GRAPH), options)
    return cls(input_, options)


def parse(input_, content_type, options=None):
    """
    Decodes all statements of a document.

    :param input_: a binary or text stream, str or bytes.
    :param content_type: the content type of the input.
    :param [options]: the options to use, see decoder().

    :return: a list of Triples or Quads.
    """
    return decoder(input_, content_type, options).decode_all()


register_decoder('application/n-triples', NTriplesDecoder)
register_decoder('text/plain', NTriplesDecoder)
register_decoder('application/n-quads', NQuadsDecoder)
register_decoder('application/nquads', NQuadsDecoder)
register_decoder('text/turtle', TurtleDecoder)
register_decoder('application/x-turtle', TurtleDecoder)

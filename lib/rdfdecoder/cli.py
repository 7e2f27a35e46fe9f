#!/usr/bin/env python
"""
rdfdecode - CLI script for PyRDFDecoder

Decodes an N-Triples, N-Quads or Turtle document, from a file or an
http(s) URL, and prints one JSON object per statement.
"""
import json
import logging
import sys

from rdfdecoder import formats
from rdfdecoder.errors import ParserError, RDFDecoderError
from rdfdecoder.terms import IRI, Blank

log = logging.getLogger(__name__)


def open_source(source, opts):
    """
    Opens a file or URL.

    :param source: a path or an http(s) URL.
    :param opts: the parsed command line.

    :return: (binary stream, content type, document URL or None)
    """
    if source.startswith(('http://', 'https://')):
        from rdfdecoder.documentloader.requests import (
            requests_document_loader)
        remote = requests_document_loader()(source)
        content_type = opts.format
        if content_type is None:
            content_type = remote['contentType']
            try:
                formats.get_decoder_class(content_type)
            except ValueError:
                content_type = formats.guess_content_type(
                    remote['documentUrl'])
        return remote['document'], content_type, remote['documentUrl']

    content_type = opts.format or formats.guess_content_type(source)
    return open(source, 'rb'), content_type, None


def decode(decoder, keep_going=False, out=None, count_only=False):
    """
    Writes the statements of a decoder as JSON lines.

    :param decoder: the decoder to read.
    :param keep_going: report errors and continue with the next line
      (N-Triples and N-Quads only).
    :param out: the output stream (default: stdout).
    :param count_only: only count statements.

    :return: (number of statements, number of errors)
    """
    out = out or sys.stdout
    count = errors = 0
    while True:
        try:
            statement = decoder.decode()
        except ParserError as e:
            errors += 1
            print('error: %s' % e, file=sys.stderr)
            if keep_going and decoder.line_mode:
                continue
            break
        if statement is None:
            break
        count += 1
        if not count_only:
            out.write(json.dumps(statement.to_dict()) + '\n')
    log.debug('decode: %d statements, %d errors', count, errors)
    return count, errors


def main(*argv):
    import argparse

    prs = argparse.ArgumentParser(
        prog='rdfdecode',
        description='Decode N-Triples, N-Quads or Turtle to JSON lines')

    prs.add_argument('source',
                     help='File name or http(s) URL of the document')
    prs.add_argument('--format',
                     help=('Input content type [default: guessed from the '
                           'extension or the response]'),
                     dest='format',
                     action='store')
    prs.add_argument('--base',
                     help='Base IRI to use (Turtle)',
                     dest='base',
                     action='store')
    prs.add_argument('--default-graph',
                     help=('Graph of statements without a graph name, an IRI '
                           'or _:label (N-Quads) [default: _:defaultGraph]'),
                     dest='default_graph',
                     action='store')
    prs.add_argument('--count',
                     help='Print only the number of statements',
                     dest='count',
                     action='store_true')
    prs.add_argument('--keep-going',
                     help='Report bad lines and continue (N-Triples, N-Quads)',
                     dest='keep_going',
                     action='store_true')

    prs.add_argument('-v', '--verbose',
                     dest='verbose',
                     action='store_true',)
    prs.add_argument('-q', '--quiet',
                     dest='quiet',
                     action='store_true',)
    if not argv:
        _argv = sys.argv[1:]
    else:
        _argv = list(argv)
    opts = prs.parse_args(args=_argv)

    if not opts.quiet:
        logging.basicConfig()

        if opts.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

    try:
        stream, content_type, document_url = open_source(opts.source, opts)
    except (OSError, RDFDecoderError) as e:
        print('error: %s' % e, file=sys.stderr)
        return 1

    options = {'base': opts.base or document_url}
    if opts.default_graph:
        if opts.default_graph.startswith('_:'):
            options['defaultGraph'] = Blank(opts.default_graph)
        else:
            options['defaultGraph'] = IRI(opts.default_graph)

    with stream:
        try:
            decoder = formats.decoder(stream, content_type, options)
        except ValueError as e:
            print('error: %s' % e, file=sys.stderr)
            return 1
        count, errors = decode(
            decoder, keep_going=opts.keep_going, count_only=opts.count)

    if opts.count:
        print(count)
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:]))

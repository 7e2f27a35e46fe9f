"""
Tests for the rdfdecode command line script.
"""
import json

import requests

from rdfdecoder.cli import main
from rdfdecoder.terms import XSD_STRING

NT = (
    '<http://a/s> <http://a/p> "one" .\n'
    '<s> <http://a/p> "relative" .\n'
    '<http://a/s> <http://a/p> "two" .\n')


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return str(path)


def test_turtle_to_json_lines(tmp_path, capsys):
    source = write(tmp_path, 'data.ttl',
                   '@prefix ex: <http://example.org/> .\nex:s ex:p "o" .\n')
    assert main(source, '-q') == 0
    lines = capsys.readouterr().out.splitlines()
    assert [json.loads(line) for line in lines] == [{
        'subject': {'type': 'IRI', 'value': 'http://example.org/s'},
        'predicate': {'type': 'IRI', 'value': 'http://example.org/p'},
        'object': {'type': 'literal', 'value': 'o', 'datatype': XSD_STRING},
    }]


def test_count(tmp_path, capsys):
    source = write(tmp_path, 'data.nt', NT.replace('<s>', '<http://a/s>'))
    assert main(source, '-q', '--count') == 0
    assert capsys.readouterr().out == '3\n'


def test_stops_at_first_error(tmp_path, capsys):
    source = write(tmp_path, 'data.nt', NT)
    assert main(source, '-q', '--count') == 1
    captured = capsys.readouterr()
    assert captured.out == '1\n'
    assert 'error: 2:1: unexpected IRI (relative) as subject' in captured.err


def test_keep_going(tmp_path, capsys):
    source = write(tmp_path, 'data.nt', NT)
    assert main(source, '-q', '--count', '--keep-going') == 1
    captured = capsys.readouterr()
    assert captured.out == '2\n'
    assert captured.err.count('error:') == 1


def test_keep_going_does_not_apply_to_turtle(tmp_path, capsys):
    source = write(tmp_path, 'data.ttl',
                   '<http://a/s> <http://a/p> "x\\z" .\n'
                   '<http://a/s> <http://a/p> "y" .\n')
    assert main(source, '-q', '--count', '--keep-going') == 1
    assert capsys.readouterr().out == '0\n'


def test_format_and_default_graph(tmp_path, capsys):
    source = write(tmp_path, 'data.txt', '<http://a/s> <http://a/p> <http://a/o> .\n')
    assert main(source, '-q', '--format', 'application/n-quads',
                '--default-graph', '_:g') == 0
    statement = json.loads(capsys.readouterr().out)
    assert statement['name'] == {'type': 'blank node', 'value': '_:g'}


def test_base(tmp_path, capsys):
    source = write(tmp_path, 'data.ttl', '<s> <p> <o> .\n')
    assert main(source, '-q', '--base', 'http://example.org/') == 0
    statement = json.loads(capsys.readouterr().out)
    assert statement['subject']['value'] == 'http://example.org/s'


def test_unknown_format(tmp_path, capsys):
    source = write(tmp_path, 'data.json', '{}')
    assert main(source, '-q') == 1
    assert 'Unknown RDF content type' in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(str(tmp_path / 'missing.nt'), '-q') == 1
    assert capsys.readouterr().err.startswith('error:')


def test_remote_document(monkeypatch, capsys):
    class Response(object):
        url = 'http://example.org/dir/doc'
        content = b'<s> <p> <o> .\n'
        headers = {'content-type': 'text/turtle; charset=utf-8'}

        def raise_for_status(self):
            pass

    monkeypatch.setattr(requests, 'get', lambda url, **kwargs: Response())
    assert main('http://example.org/doc', '-q') == 0
    statement = json.loads(capsys.readouterr().out)
    assert statement['subject']['value'] == 'http://example.org/dir/s'

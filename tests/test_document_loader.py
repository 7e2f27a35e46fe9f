"""
Tests for the Requests document loader.
"""

import pytest
import requests

from rdfdecoder import formats
from rdfdecoder.documentloader.requests import requests_document_loader
from rdfdecoder.errors import LoadDocumentError

NT = b'<http://a/s> <http://a/p> <http://a/o> .\n'


class FakeResponse(object):
    def __init__(self, url, content, content_type, status_code=200):
        self.url = url
        self.content = content
        self.headers = {'content-type': content_type}
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError('%d Error' % self.status_code)


@pytest.fixture
def fake_get(monkeypatch):
    """Replaces requests.get, recording the calls made."""
    calls = []

    def install(response):
        def get(url, **kwargs):
            calls.append((url, kwargs))
            if isinstance(response, Exception):
                raise response
            return response
        monkeypatch.setattr(requests, 'get', get)
        return calls
    return install


def test_loads_document(fake_get):
    calls = fake_get(FakeResponse(
        'http://example.org/final.nt', NT, 'application/n-triples'))
    loader = requests_document_loader(timeout=5)

    remote = loader('http://example.org/data.nt')

    assert remote['contentType'] == 'application/n-triples'
    assert remote['documentUrl'] == 'http://example.org/final.nt'
    assert remote['document'].read() == NT
    url, kwargs = calls[0]
    assert url == 'http://example.org/data.nt'
    assert kwargs['timeout'] == 5
    assert kwargs['headers'] == {'Accept': formats.ACCEPT}


def test_custom_headers(fake_get):
    calls = fake_get(FakeResponse('http://example.org/', NT, 'text/plain'))
    loader = requests_document_loader()
    loader('http://example.org/', {'headers': {'Accept': 'text/turtle'}})
    assert calls[0][1]['headers'] == {'Accept': 'text/turtle'}


def test_missing_content_type(fake_get):
    fake_get(FakeResponse('http://example.org/', NT, None))
    remote = requests_document_loader()('http://example.org/')
    assert remote['contentType'] == 'application/octet-stream'


@pytest.mark.parametrize(
    "url",
    ['ftp://example.org/data.nt', 'file:///etc/passwd', 'example.org/data.nt',
     'http://exa mple.org/']
)
def test_unsupported_urls(fake_get, url):
    calls = fake_get(FakeResponse(url, NT, 'text/plain'))
    with pytest.raises(LoadDocumentError) as e:
        requests_document_loader()(url)
    assert e.value.url == url
    assert calls == []


def test_secure_mode(fake_get):
    calls = fake_get(FakeResponse('https://example.org/', NT, 'text/plain'))
    loader = requests_document_loader(secure=True)
    with pytest.raises(LoadDocumentError, match='secure mode'):
        loader('http://example.org/')
    loader('https://example.org/')
    assert len(calls) == 1


def test_http_error_is_wrapped(fake_get):
    fake_get(FakeResponse('http://example.org/', b'', 'text/html', 404))
    with pytest.raises(LoadDocumentError) as e:
        requests_document_loader()('http://example.org/')
    assert isinstance(e.value.cause, requests.HTTPError)
    assert 'URL: http://example.org/' in str(e.value)


def test_connection_error_is_wrapped(fake_get):
    fake_get(requests.ConnectionError('refused'))
    with pytest.raises(LoadDocumentError) as e:
        requests_document_loader()('http://example.org/')
    assert isinstance(e.value.cause, requests.ConnectionError)


@pytest.mark.network
def test_remote_turtle_document():
    """
    The RDF Schema vocabulary is served as Turtle when asked for it.

    This test requires network access and may be slow or flaky.
    """
    loader = requests_document_loader(timeout=30)
    remote = loader('https://www.w3.org/2000/01/rdf-schema',
                    {'headers': {'Accept': 'text/turtle'}})
    triples = formats.parse(
        remote['document'], remote['contentType'],
        {'base': remote['documentUrl']})
    assert len(triples) > 0

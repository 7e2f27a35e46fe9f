"""
Remote document loader using Requests.

.. module:: rdfdecoder.documentloader.requests
  :synopsis: Remote document loader using Requests
"""
import io
import logging
import string
import urllib.parse as urllib_parse

from rdfdecoder.errors import LoadDocumentError
from rdfdecoder.formats import ACCEPT

logger = logging.getLogger(__name__)

_NETLOC_CHARS = frozenset(string.ascii_letters + string.digits + '-.:')


def requests_document_loader(secure=False, **kwargs):
    """
    Create a Requests document loader.
    Can be used to setup extra Requests args such as verify, cert, timeout,
    or others.
    :param secure: require all requests to use HTTPS (default: False).
    :param **kwargs: extra keyword args for Requests get() call.
    :return: the RemoteDocument loader function.
    """
    import requests

    def loader(url, options=None):
        """
        Retrieves an RDF document at the given URL.
        :param url: the URL to retrieve.
        :param [options]: [headers] the request headers (default: an Accept
          header listing the supported RDF content types).
        :return: the RemoteDocument: contentType, documentUrl and document,
          a binary stream of the response body.
        """
        options = options or {}
        try:
            # validate URL
            pieces = urllib_parse.urlparse(url)
            if (not all([pieces.scheme, pieces.netloc]) or
                    pieces.scheme not in ['http', 'https'] or
                    not set(pieces.netloc) <= _NETLOC_CHARS):
                raise LoadDocumentError(
                    'URL could not be dereferenced; only "http" and "https" '
                    'URLs are supported.', url=url)
            if secure and pieces.scheme != 'https':
                raise LoadDocumentError(
                    'URL could not be dereferenced; secure mode enabled and '
                    'the URL\'s scheme is not "https".', url=url)
            headers = options.get('headers')
            if headers is None:
                headers = {'Accept': ACCEPT}
            logger.debug('Loading RDF document from %s.', url)
            response = requests.get(url, headers=headers, **kwargs)
            response.raise_for_status()

            content_type = response.headers.get('content-type')
            if not content_type:
                content_type = 'application/octet-stream'
            return {
                'contentType': content_type,
                'documentUrl': response.url,
                'document': io.BytesIO(response.content)
            }
        except LoadDocumentError:
            raise
        except Exception as cause:
            raise LoadDocumentError(
                'Could not retrieve an RDF document from the URL.',
                url=url, cause=cause)

    return loader

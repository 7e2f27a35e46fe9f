"""
Relative IRI resolution (RFC 3986, section 5.2) for Turtle base IRIs.

.. module:: rdfdecoder.iri_resolver
  :synopsis: Resolve relative IRI references against a base IRI
"""

import re

__all__ = ['resolve', 'remove_dot_segments', 'split_iri', 'is_absolute']

# RFC 3986, appendix B
_IRI_PARTS = re.compile(
    r'^(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?$',
    re.DOTALL)


def split_iri(iri: str):
    """
    Splits an IRI reference into its five components.

    :param iri: the IRI reference.

    :return: (scheme, authority, path, query, fragment), where absent
      components are None and the path is always a string.
    """
    return _IRI_PARTS.match(iri).groups()


def is_absolute(iri: str) -> bool:
    """Return True if the IRI has a scheme."""
    return split_iri(iri)[0] is not None


def remove_dot_segments(path: str) -> str:
    """
    Removes dot segments ('.' and '..') from a path, as described in
    https://www.ietf.org/rfc/rfc3986.txt (section 5.2.4).

    :param path: the IRI path to remove dot segments from.

    :return: the path with dot segments removed.
    """
    output = []
    while path:
        if path.startswith('../'):
            path = path[3:]
        elif path.startswith('./'):
            path = path[2:]
        elif path.startswith('/./'):
            path = path[2:]
        elif path == '/.':
            path = '/'
        elif path.startswith('/../'):
            path = path[3:]
            if output:
                output.pop()
        elif path == '/..':
            path = '/'
            if output:
                output.pop()
        elif path in ('.', '..'):
            path = ''
        else:
            # move the first segment, with its leading '/', to the output
            end = path.find('/', 1 if path.startswith('/') else 0)
            if end < 0:
                end = len(path)
            output.append(path[:end])
            path = path[end:]
    return ''.join(output)


def resolve(relative_iri: str, base_iri: str = None) -> str:
    """
    Resolves a relative IRI reference against a base IRI.

    :param relative_iri: the IRI reference, relative or absolute.
    :param base_iri: the absolute base IRI.

    :return: the absolute IRI.
    """
    scheme, authority, path, query, fragment = split_iri(relative_iri)
    if scheme is not None:
        return _recompose(
            scheme, authority, remove_dot_segments(path), query, fragment)

    base_iri = base_iri or ''
    base_scheme, base_authority, base_path, base_query, _ = split_iri(base_iri)
    if base_scheme is None:
        raise ValueError(
            f"Found invalid baseIRI '{base_iri}' for value '{relative_iri}'")

    if authority is not None:
        path = remove_dot_segments(path)
    else:
        if not path:
            path = base_path
            if query is None:
                query = base_query
        elif path.startswith('/'):
            path = remove_dot_segments(path)
        else:
            path = remove_dot_segments(
                _merge(base_authority, base_path, path))
        authority = base_authority

    return _recompose(base_scheme, authority, path, query, fragment)


def _merge(base_authority, base_path, path):
    if base_authority is not None and not base_path:
        return '/' + path
    return base_path[:base_path.rfind('/') + 1] + path


def _recompose(scheme, authority, path, query, fragment):
    rval = scheme + ':'
    if authority is not None:
        rval += '//' + authority
    rval += path
    if query is not None:
        rval += '?' + query
    if fragment is not None:
        rval += '#' + fragment
    return rval

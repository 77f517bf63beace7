"""idpsession.common.urls
~~~~~~~~~~~~~~~~~~~~~~~~

Helpers to build and inspect URLs for redirects and logout iframes.
"""

from urllib import parse as urlparse

from .encoding import to_unicode


def url_encode(params):
    encoded = []
    for k, v in params:
        encoded.append((to_unicode(k), to_unicode(v)))
    return urlparse.urlencode(encoded)


def url_decode(query):
    """Decode a query string in x-www-form-urlencoded format into a list
    of tuples. Blank values are kept.
    """
    return urlparse.parse_qsl(query, keep_blank_values=True)


def add_params_to_qs(query, params):
    """Extend a query with a list of two-tuples. The existing query is
    kept verbatim.
    """
    if isinstance(params, dict):
        params = params.items()

    extra = url_encode(params)
    if not query:
        return extra
    if not extra:
        return query
    return f"{query}&{extra}"


def add_params_to_uri(uri, params, fragment=False):
    """Add a list of two-tuples to the uri query components."""
    sch, net, path, par, query, fra = urlparse.urlparse(uri)
    if fragment:
        fra = add_params_to_qs(fra, params)
    else:
        query = add_params_to_qs(query, params)
    return urlparse.urlunparse((sch, net, path, par, query, fra))


def is_valid_url(url: str, fragments_allowed=True):
    parsed = urlparse.urlparse(url)
    return bool(
        parsed.scheme
        and parsed.hostname
        and (fragments_allowed or not parsed.fragment)
    )

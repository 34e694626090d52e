import requests

from ..errors import TransportError


def download_binary_file(sess, path, url):
    with open(path, "wb") as f:
        with sess.get(url, stream=True) as r:
            r.raise_for_status()
            for chunk in r.iter_content(chunk_size=65536):
                f.write(chunk)


def get_json(sess, url, message: str, allow_missing: bool = False, **context):
    """
    GET `url` and decode the body as JSON.

    With `allow_missing`, a 404 yields None instead of an error: the adoptium
    style APIs answer 404 for a query that simply has no results.
    Everything else that goes wrong becomes a `TransportError` carrying the url
    and any extra `context` (vendor, feature_version).
    """
    try:
        r = sess.get(url)
        if allow_missing and r.status_code == 404:
            return None
        r.raise_for_status()
        return r.json()
    except (requests.RequestException, ValueError) as e:
        raise TransportError(message, url=url, **context) from e

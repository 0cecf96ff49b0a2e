"""Misc Mojang API utils. HTTP helpers, errors, config."""
import logging
import os

import requests

logger = logging.getLogger(__name__)

VERSION = '0.1.0'
USER_AGENT = f'mojang_api/{VERSION}'

DEFAULT_API_HOST = 'api.mojang.com'
DEFAULT_SESSION_HOST = 'sessionserver.mojang.com'
DEFAULT_TIMEOUT = 15  # seconds

# the service has returned both of these for unknown users and profiles
NOT_FOUND_STATUSES = (204, 404)

# used as get_fn/post_fn below. wrap so that we can mock requests in tests
requests_get = lambda *args, **kwargs: requests.get(*args, **kwargs)
requests_post = lambda *args, **kwargs: requests.post(*args, **kwargs)


class MojangError(Exception):
    """Base class for all errors raised by this library."""


class TransportError(MojangError):
    """Raised when the service can't be reached: connection, timeout, TLS."""


class NotFound(MojangError):
    """Raised when the service reports that a user or profile doesn't exist."""


class RequestFailed(MojangError):
    """Raised when the service returns an unexpected HTTP status.

    Attributes:
      status (int)
      reason (str)
    """
    def __init__(self, status, reason, *args, **kwargs):
        self.status = status
        self.reason = reason
        super().__init__(f'[{status}] API request failed: {reason}', *args, **kwargs)


class MalformedResponse(MojangError, ValueError):
    """Raised when a response body is missing required fields."""


class MissingTextures(MojangError):
    """Raised when a profile has no ``textures`` property."""


class DecodeError(MojangError, ValueError):
    """Raised when a texture property value isn't valid base64."""


class MalformedPayload(MojangError, ValueError):
    """Raised when a decoded texture payload isn't the expected JSON."""


def api_host():
    return os.environ.get('MOJANG_API_HOST', DEFAULT_API_HOST)


def session_host():
    return os.environ.get('MOJANG_SESSION_HOST', DEFAULT_SESSION_HOST)


def timeout():
    """Returns the HTTP timeout in seconds, from ``MOJANG_TIMEOUT`` if set."""
    return float(os.environ.get('MOJANG_TIMEOUT', DEFAULT_TIMEOUT))


def _check(resp, url):
    if resp.status_code in NOT_FOUND_STATUSES:
        raise NotFound(f'{url} returned {resp.status_code}')

    if resp.status_code != 200:
        logger.warning(f'{url} returned {resp.status_code} {resp.reason}')
        raise RequestFailed(resp.status_code, resp.reason)

    return resp


def get(url, get_fn=requests_get):
    """Makes an HTTP GET request to the service.

    Args:
      url (str)
      get_fn (callable): for making HTTP GET requests. Same signature as
        :func:`requests.get`.

    Returns:
      requests.Response: with status 200

    Raises:
      TransportError: if the request can't be completed
      NotFound: if the service returns 204 or 404
      RequestFailed: if the service returns any other non-200 status
    """
    logger.info(f'Fetching {url}')
    try:
        resp = get_fn(url, headers={'User-Agent': USER_AGENT}, timeout=timeout())
    except requests.RequestException as e:
        raise TransportError(f"Couldn't fetch {url}: {e}") from e

    return _check(resp, url)


def post(url, json, post_fn=requests_post):
    """Makes an HTTP POST request with a JSON body to the service.

    Args and errors are the same as :func:`get`.
    """
    logger.info(f'Posting to {url}')
    try:
        resp = post_fn(url, json=json, headers={'User-Agent': USER_AGENT},
                       timeout=timeout())
    except requests.RequestException as e:
        raise TransportError(f"Couldn't post to {url}: {e}") from e

    return _check(resp, url)


def json_object(resp, *required):
    """Parses a response body as a JSON object and checks for required fields.

    Args:
      resp (requests.Response)
      required (sequence of str): top-level fields that must be present

    Returns:
      dict:

    Raises:
      MalformedResponse: if the body isn't a JSON object or is missing a field
    """
    try:
        obj = resp.json()
    except ValueError as e:
        # requests' JSONDecodeError is a ValueError
        raise MalformedResponse(f'Response is not JSON: {e}') from e

    if not isinstance(obj, dict):
        raise MalformedResponse(f'Expected JSON object, got {obj!r}')

    for field in required:
        if field not in obj:
            raise MalformedResponse(f'Response is missing {field}: {obj}')

    return obj


def check_strings(obj, *fields):
    """Checks that fields in a parsed JSON object are non-empty strings.

    Args:
      obj (dict)
      fields (sequence of str)

    Raises:
      MalformedResponse: if any field is missing, empty, or not a str
    """
    for field in fields:
        val = obj.get(field)
        if not val or not isinstance(val, str):
            raise MalformedResponse(f'Expected string {field}, got {val!r}')

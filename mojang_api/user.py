"""Resolves Minecraft usernames to UUIDs.

* https://minecraft.wiki/w/Mojang_API
"""
from collections import namedtuple
import logging
import re
import urllib.parse

from . import util
from .util import requests_get

User = namedtuple('User', [
    'id',    # str, UUID without dashes
    'name',  # str, username with the service's capitalization
])

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 16

USERNAME_CHAR_RE = re.compile(r'[A-Za-z0-9_]')


class InvalidUsername(ValueError):
    """Raised by :func:`validate_username`.

    Attributes:
      username (str)
    """
    def __init__(self, username, reason, *args, **kwargs):
        self.username = username
        super().__init__(f'{username!r} {reason}', *args, **kwargs)


def get_user(username, get_fn=requests_get):
    """Looks up a username.

    Args:
      username (str)
      get_fn (callable): for making HTTP GET requests

    Returns:
      User:

    Raises:
      ValueError: if username is empty or not a str
      util.TransportError: if the HTTP request fails
      util.NotFound: if there's no user with this name
      util.MalformedResponse: if the response doesn't have an id and name
      util.RequestFailed: on any other non-200 response
    """
    if not username or not isinstance(username, str):
        raise ValueError(f'{username!r} is not a username')

    logger.info(f'Resolving username {username}')
    url = (f'https://{util.api_host()}/users/profiles/minecraft/'
           f'{urllib.parse.quote(username, safe="")}')
    resp = util.get(url, get_fn=get_fn)

    obj = util.json_object(resp, 'id', 'name')
    util.check_strings(obj, 'id', 'name')
    return User(id=obj['id'], name=obj['name'])


def resolve(username, **kwargs):
    """Resolves a username to its UUID.

    The service is the source of truth for which usernames are valid, so this
    doesn't validate locally beyond rejecting empty input. Use
    :func:`validate_username` for that.

    Args:
      username (str)
      kwargs: passed through to :func:`get_user`

    Returns:
      str: UUID, without dashes

    Raises:
      same as :func:`get_user`
    """
    return get_user(username, **kwargs).id


def validate_username(username):
    """Checks that a username looks like one the service could return.

    Doesn't check whether the username exists or is available. Doesn't enforce
    a minimum length either, since some old accounts have usernames shorter
    than 3 characters.

    Args:
      username (str)

    Raises:
      InvalidUsername: if the username is empty, too long, or has a character
        other than ASCII letters, digits, and ``_``
    """
    if not username:
        raise InvalidUsername(username, 'is empty')

    if len(username) > MAX_USERNAME_LENGTH:
        raise InvalidUsername(username, 'is too long')

    for char in username:
        if not USERNAME_CHAR_RE.fullmatch(char):
            raise InvalidUsername(username, f'contains invalid character {char!r}')

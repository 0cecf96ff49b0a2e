"""Fetches and checks the list of servers blocked by Mojang.

The service publishes SHA-1 hashes of blocked address patterns, one per line.
Patterns are either exact addresses, ``*.``-prefixed domain wildcards like
``*.example.com``, or ``.*``-suffixed IPv4 wildcards like ``192.0.*``.

* https://minecraft.wiki/w/Mojang_API#Blocked_servers
"""
from collections import namedtuple
import hashlib
import logging

from . import util
from .util import requests_get

logger = logging.getLogger(__name__)


def is_ipv4(parts):
    """Returns True if the dot-separated address parts look like IPv4.

    Deliberately naive, to match how the game client decides: exactly four
    parts, each an integer 0-255.

    Args:
      parts (sequence of str)

    Returns:
      bool:
    """
    return (len(parts) == 4
            and all(p.isascii() and p.isdigit() and int(p) <= 255 for p in parts))


def hash_pattern(pattern):
    """Returns the lowercase hex SHA-1 of a pattern, as the service lists it."""
    return hashlib.sha1(pattern.encode()).hexdigest()


class BlockedServers(namedtuple('BlockedServers', ['hashes'])):
    """The blocked servers list.

    Attributes:
      hashes (tuple of str): lowercase hex SHA-1 hashes of blocked patterns
    """
    __slots__ = ()

    @classmethod
    def fetch(cls, get_fn=requests_get):
        """Fetches the current list from the service.

        Args:
          get_fn (callable): for making HTTP GET requests

        Returns:
          BlockedServers:

        Raises:
          util.TransportError: if the HTTP request fails
          util.RequestFailed: on a non-200 response
        """
        resp = util.get(f'https://{util.session_host()}/blockedservers',
                        get_fn=get_fn)
        hashes = tuple(line.strip() for line in resp.text.splitlines()
                       if line.strip())
        logger.info(f'Got {len(hashes)} blocked server hashes')
        return cls(hashes=hashes)

    def is_pattern_blocked(self, pattern):
        """Returns True if this exact pattern is in the list.

        Args:
          pattern (str): eg ``*.example.com``
        """
        return hash_pattern(pattern) in self.hashes

    def find_blocked_pattern(self, address):
        """Finds the pattern in the list that blocks an address, if any.

        Checks the address itself first. For IPv4 addresses, then tries
        wildcards from the longest prefix down, eg ``192.0.2.*``, ``192.0.*``,
        ``192.*``. For anything else, tries domain wildcards from the most
        specific down, eg ``*.b.example.com``, ``*.example.com``, ``*.com``.

        Args:
          address (str)

        Returns:
          str: matching pattern, or None if the address isn't blocked
        """
        if self.is_pattern_blocked(address):
            return address

        parts = address.split('.')
        if is_ipv4(parts):
            candidates = ('.'.join(parts[:i]) + '.*'
                          for i in range(len(parts) - 1, 0, -1))
        else:
            candidates = ('*.' + '.'.join(parts[i:])
                          for i in range(1, len(parts)))

        return next((c for c in candidates if self.is_pattern_blocked(c)), None)

    def is_blocked(self, address):
        """Returns True if any pattern in the list blocks this address."""
        return self.find_blocked_pattern(address) is not None

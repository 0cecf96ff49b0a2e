"""Unit tests for blocked_servers.py."""
from unittest.mock import MagicMock

from .. import blocked_servers
from ..blocked_servers import BlockedServers
from ..util import RequestFailed, USER_AGENT
from .testutil import requests_response, TestCase

HASHES = (
    # *.example.com
    '8c7122d652cb7be22d1986f1f30b07fd5108d9c0',
    # 192.0.*
    '8c15fb642b3e8f58480df51798382f1016e748eb',
    # 127.0.0.1
    '4b84b15bff6ee5796152495a230e45e3d7e947d9',
)


class BlockedServersTest(TestCase):

    def setUp(self):
        super().setUp()
        self.blocked = BlockedServers(hashes=HASHES)

    def test_fetch(self):
        mock_get = MagicMock(return_value=requests_response(
            '\n'.join(HASHES) + '\n\n'))
        self.assertEqual(self.blocked, BlockedServers.fetch(get_fn=mock_get))
        mock_get.assert_called_once_with(
            'https://sessionserver.mojang.com/blockedservers',
            headers={'User-Agent': USER_AGENT}, timeout=15)

    def test_fetch_error(self):
        mock_get = MagicMock(return_value=requests_response(
            '', status=502, reason='Bad Gateway'))
        with self.assertRaises(RequestFailed):
            BlockedServers.fetch(get_fn=mock_get)

    def test_hash_pattern(self):
        self.assertEqual(HASHES[0], blocked_servers.hash_pattern('*.example.com'))

    def test_is_pattern_blocked(self):
        self.assertTrue(self.blocked.is_pattern_blocked('*.example.com'))
        self.assertFalse(self.blocked.is_pattern_blocked('example.com'))

    def test_find_blocked_pattern(self):
        for address, pattern in (
                ('mc.example.com', '*.example.com'),
                ('a.b.mc.example.com', '*.example.com'),
                ('192.0.2.235', '192.0.*'),
                ('127.0.0.1', '127.0.0.1'),
                ('127.0.0.2', None),
                ('example.com', None),
                ('192.0.2', None),
        ):
            with self.subTest(address=address):
                self.assertEqual(pattern, self.blocked.find_blocked_pattern(address))

    def test_is_blocked(self):
        self.assertTrue(self.blocked.is_blocked('127.0.0.1'))
        self.assertTrue(self.blocked.is_blocked('play.example.com'))
        self.assertFalse(self.blocked.is_blocked('example.org'))

    def test_is_ipv4(self):
        self.assertTrue(blocked_servers.is_ipv4(['192', '0', '2', '235']))
        self.assertFalse(blocked_servers.is_ipv4(['mc', 'example', 'com']))
        self.assertFalse(blocked_servers.is_ipv4(['192', '0', '2']))
        self.assertFalse(blocked_servers.is_ipv4(['192', '0', '2', '256']))
        self.assertFalse(blocked_servers.is_ipv4(['192', '0', '2', '']))

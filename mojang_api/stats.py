"""Fetches sales statistics for Mojang's games.

* https://minecraft.wiki/w/Mojang_API#Statistics
"""
from collections import namedtuple
import enum
import logging

from . import util
from .util import MalformedResponse, requests_post

logger = logging.getLogger(__name__)

Stats = namedtuple('Stats', [
    'total',                      # int
    'last24h',                    # int
    'sale_velocity_per_seconds',  # float
])


class Metrics(enum.Flag):
    """Which sales metrics to total. Combine with ``|``."""
    MINECRAFT_ITEMS_SOLD = enum.auto()
    MINECRAFT_PREPAID_CARDS_REDEEMED = enum.auto()
    COBALT_ITEMS_SOLD = enum.auto()
    COBALT_PREPAID_CARDS_REDEEMED = enum.auto()
    SCROLLS_ITEMS_SOLD = enum.auto()
    DUNGEONS_ITEM_SOLD = enum.auto()

    @classmethod
    def minecraft(cls):
        """Minecraft items sold plus prepaid cards redeemed."""
        return cls.MINECRAFT_ITEMS_SOLD | cls.MINECRAFT_PREPAID_CARDS_REDEEMED

    @classmethod
    def cobalt(cls):
        """Cobalt items sold plus prepaid cards redeemed."""
        return cls.COBALT_ITEMS_SOLD | cls.COBALT_PREPAID_CARDS_REDEEMED

    @classmethod
    def scrolls(cls):
        return cls.SCROLLS_ITEMS_SOLD

    @classmethod
    def dungeons(cls):
        return cls.DUNGEONS_ITEM_SOLD

    def keys(self):
        """Returns the service's metric keys for these flags, in declaration order.

        Returns:
          list of str:
        """
        return [METRIC_KEYS[m] for m in Metrics if m in self]


METRIC_KEYS = {
    Metrics.MINECRAFT_ITEMS_SOLD: 'item_sold_minecraft',
    Metrics.MINECRAFT_PREPAID_CARDS_REDEEMED: 'prepaid_card_redeemed_minecraft',
    Metrics.COBALT_ITEMS_SOLD: 'item_sold_cobalt',
    Metrics.COBALT_PREPAID_CARDS_REDEEMED: 'prepaid_card_redeemed_cobalt',
    Metrics.SCROLLS_ITEMS_SOLD: 'item_sold_scrolls',
    Metrics.DUNGEONS_ITEM_SOLD: 'item_sold_dungeons',
}


def fetch(metrics, post_fn=requests_post):
    """Fetches combined sales statistics for one or more metrics.

    Args:
      metrics (Metrics)
      post_fn (callable): for making HTTP POST requests

    Returns:
      Stats:

    Raises:
      ValueError: if no metrics are selected
      util.TransportError: if the HTTP request fails
      util.MalformedResponse: if a total is missing or not a number
      util.RequestFailed: on a non-200 response
    """
    keys = metrics.keys()
    if not keys:
        raise ValueError('No metrics selected')

    logger.info(f'Fetching sales statistics for {keys}')
    resp = util.post(f'https://{util.api_host()}/orders/statistics',
                     json={'metricKeys': keys}, post_fn=post_fn)
    obj = util.json_object(resp, 'total', 'last24h', 'saleVelocityPerSeconds')

    total = obj['total']
    last24h = obj['last24h']
    velocity = obj['saleVelocityPerSeconds']

    # bool is a subclass of int
    if (not all(isinstance(v, int) and not isinstance(v, bool) for v in (total, last24h))
            or not isinstance(velocity, (int, float)) or isinstance(velocity, bool)):
        raise MalformedResponse(f'Invalid statistics: {obj}')

    return Stats(total=total, last24h=last24h,
                 sale_velocity_per_seconds=float(velocity))

"""Tests for mojang_api. Run with ``python -m unittest discover``."""
import io
import logging
import sys

# -v shows debug logs. discover and -q hide them, but still format them, so
# that a bad log call fails the test that made it.
logging.basicConfig()
if '-v' in sys.argv:
    logging.getLogger().setLevel(logging.DEBUG)
elif 'discover' in sys.argv or '-q' in sys.argv or '--quiet' in sys.argv:
    for handler in logging.getLogger().handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setStream(io.StringIO())

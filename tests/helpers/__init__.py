"""Test helpers for identserv tests.

Helpers:
    FakeStreamWriter: In-memory stand-in for asyncio.StreamWriter
    make_reader: StreamReader pre-fed with request bytes

Usage:
    from tests.helpers import FakeStreamWriter, make_reader
"""

from tests.helpers.streams import FakeStreamWriter, make_reader

__all__ = ["FakeStreamWriter", "make_reader"]

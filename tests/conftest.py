"""Pytest configuration for tests.

No sys.path hacks - tests should import from the installed collectiondb package.
"""

import pytest

from collectiondb.kernel.model import Collection, Database


EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"  # md5(b"")
A_MD5 = "0cc175b9c0f1b6a831c399e269772661"  # md5(b"a")


@pytest.fixture
def demo_hashes():
    return [EMPTY_MD5, A_MD5]


@pytest.fixture
def demo_database(demo_hashes):
    """Version 20220906 with one collection named 'demo'."""
    return Database(
        version=20220906,
        collections=[Collection(name="demo", hashes=list(demo_hashes))],
    )


@pytest.fixture
def mixed_database():
    """Exercises absent names, absent hashes, empty names and empty collections."""
    return Database(
        version=20240101,
        collections=[
            Collection(name=None, hashes=[EMPTY_MD5]),
            Collection(name="", hashes=[]),
            Collection(name="ranked ★ picks", hashes=[A_MD5, None, EMPTY_MD5]),
            Collection(name="dupes", hashes=[A_MD5, A_MD5]),
        ],
    )

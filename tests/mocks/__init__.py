"""
Test doubles for groot's external collaborators.

Git, the build script and the network are replaced by recording fakes so
workspace logic can be tested without any of them.
"""

from .runner import FakeToolRunner
from .acquirer import FAKE_DIGEST, FakeAcquirer

__all__ = [
    "FakeToolRunner",
    "FakeAcquirer",
    "FAKE_DIGEST",
]

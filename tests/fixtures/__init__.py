"""Test fixtures for groot tests.

Fixtures are organized by type:

- archives: In-memory Go release archives (.tar.gz)
- directories: Workspaces, fake tool runner and fake release acquirer

Import fixtures in your tests using:
    from tests.fixtures.archives import build_tar_gz
    from tests.fixtures.directories import built_workspace
"""

__all__ = [
    "archives",
    "directories",
]

"""Shared fixtures."""

import os
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def gbeep_dir(tmp_path):
    """Keep config and tone files out of the real user directories."""
    env = {"GBEEP_DIR": str(tmp_path)}
    with patch.dict(os.environ, env):
        os.environ.pop("GBEEP_SOUND", None)
        os.environ.pop("GBEEP_PATTERN", None)
        yield tmp_path

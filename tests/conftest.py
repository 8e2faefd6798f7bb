"""Test configuration: point the app at the test config before anything imports it."""

import os
from pathlib import Path

os.environ["APP_ENVIRONMENT"] = "test"
os.environ["AGENDA_CONFIG"] = str(Path(__file__).parent / "config.test.yaml")

from tests.fixtures import *  # noqa: E402,F401,F403

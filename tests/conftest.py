import os
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

# ensure repo root is importable
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


def make_operation(done=True, error=None, uri="https://files.example/video.mp4?alt=media", response="default"):
    """Build a stand-in for a GenerateVideosOperation."""
    if response == "default":
        if done and error is None and uri is not None:
            response = SimpleNamespace(
                generated_videos=[SimpleNamespace(video=SimpleNamespace(uri=uri))]
            )
        elif done and error is None:
            response = SimpleNamespace(generated_videos=[])
        else:
            response = None
    return SimpleNamespace(name="operations/test", done=done, error=error, response=response)


def make_client(initial, polls=()):
    """A fake genai.Client: generate_videos returns `initial`, each poll the next of `polls`."""
    client = MagicMock()
    client.models.generate_videos.return_value = initial
    client.operations.get.side_effect = list(polls)
    return client


def ok_response(content=b"mp4-bytes", status_code=200, reason="OK"):
    resp = MagicMock()
    resp.ok = 200 <= status_code < 300
    resp.status_code = status_code
    resp.reason = reason
    resp.content = content
    return resp


@pytest.fixture
def progress_log():
    return []


@pytest.fixture
def sleeps():
    return []

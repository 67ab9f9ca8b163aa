import asyncio

import pytest

from sdkbench.clients import ModelClient
from sdkbench.prompt import Prompt

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


class FakeClient(ModelClient):
    def __init__(self, label: str, reply="pong", delay: float = 0.0, error: Exception | None = None):
        self.label = label
        self.reply = reply
        self.delay = delay
        self.error = error
        self.calls = []
        self.closed = False

    async def invoke(self, prompt):
        self.calls.append(prompt)
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self):
        self.closed = True


@pytest.fixture()
def prompt():
    return Prompt("You are terse.", "Describe the image.", PNG_BYTES)


@pytest.fixture()
def prompt_without_image():
    return Prompt("You are terse.", "Describe the image.")


@pytest.fixture()
def results_dir(tmp_path):
    return tmp_path / "results"

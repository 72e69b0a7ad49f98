import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

import pytest
from fastapi.testclient import TestClient

os.environ.pop("GEMINI_API_KEY", None)
os.environ.pop("MIDTRANS_SERVER_KEY", None)
os.environ.setdefault("APP_ENV", "test")

from arkwork.config import Settings
from arkwork.core.chat_service import ChatService
from arkwork.main import create_app
from arkwork.payments.midtrans_client import MidtransClient


class FakeGeminiClient:
    """Records every conversation it is asked to send and replies with a canned text or error."""

    def __init__(self, reply="hi there", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def send_chat(self, conversation):
        self.calls.append(conversation)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture()
def settings():
    return Settings(gemini_api_key="test-gemini-key", gemini_model="gemini-test")


@pytest.fixture()
def make_gemini():
    return FakeGeminiClient


@pytest.fixture()
def fake_gemini():
    return FakeGeminiClient()


@pytest.fixture()
def make_client():
    def _make(settings, gemini=None, midtrans=None):
        app = create_app(
            settings,
            chat_service=ChatService(settings, client=gemini or FakeGeminiClient()),
            midtrans_client=midtrans or MidtransClient(settings),
        )
        return TestClient(app)

    return _make


@pytest.fixture()
def client(settings, fake_gemini, make_client):
    return make_client(settings, gemini=fake_gemini)

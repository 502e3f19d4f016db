"""Shared fixtures: a canned-reply model client and a keyed configuration."""

from typing import List, Optional

import pytest

from ideagraph.config import AppConfig, LLMConfig, reset_config, set_config
from ideagraph.idea_generator import IdeaGenerator, reset_idea_generator
from ideagraph.llm_client import reset_llm_client


SAMPLE_REPLY = """1. Morning Pages Ritual - Start the day with three handwritten pages to clear mental clutter.
2. Single-Task Sprints - Work on one task for 25 minutes with notifications off.
3. Desk Reset Routine - A two-minute tidy before closing the laptop.
4. Mindful Breaks - Five breathing cycles between meetings.

VIDEO SCRIPTS:
2: HOOK: You are not bad at focus, you are bad at switching.
SCENE 1: Phone buzzing on a desk, timer set to 25 minutes.
SCENE 2: Hands flip the phone face down.
SCENE 3: Checklist item gets ticked off.
CTA: Try one sprint today and comment your task.

4: HOOK: Your next meeting can wait 30 seconds.
SCENE 1: Calendar full of back-to-back calls.
SCENE 2: Close-up of slow breathing.
SCENE 3: Calm face joining the call.
CTA: Save this for your next busy day."""


class FakeClient:
    """GenerativeClient stand-in returning a canned reply or raising a canned error."""

    def __init__(self, reply: str = SAMPLE_REPLY, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    def send_prompt(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply

    async def send_prompt_async(self, prompt: str) -> str:
        return self.send_prompt(prompt)


@pytest.fixture(autouse=True)
def clean_globals(monkeypatch):
    for var in ("GEMINI_API_KEY", "OPENAI_API_KEY", "IDEAGRAPH_MODEL", "IDEAGRAPH_MAX_TOPIC_LENGTH"):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    reset_llm_client()
    reset_idea_generator()
    yield
    reset_config()
    reset_llm_client()
    reset_idea_generator()


@pytest.fixture
def app_config():
    config = AppConfig(llm=LLMConfig(api_key="test-key"))
    set_config(config)
    return config


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def generator(app_config, fake_client):
    return IdeaGenerator(fake_client)


@pytest.fixture
def sample_reply():
    return SAMPLE_REPLY


@pytest.fixture
def make_generator(app_config):
    """Build an IdeaGenerator over a FakeClient with the given reply or error."""
    def _make(reply: str = SAMPLE_REPLY, error: Optional[Exception] = None, version: Optional[str] = None):
        client = FakeClient(reply=reply, error=error)
        return IdeaGenerator(client, version=version), client
    return _make

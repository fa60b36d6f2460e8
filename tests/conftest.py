"""Shared fixtures: fake travel API, fake completion API, fixed clock."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient
from openai import OpenAI

from travel_gateway.dependencies import (
    get_extraction_client,
    get_search_client,
    get_user_store,
)
from travel_gateway.interfaces import UserStore
from travel_gateway.llm import ExtractionClient
from travel_gateway.main import app
from travel_gateway.travel import CredentialManager, SearchClient

TRAVEL_BASE_URL = "https://travel.test"
TOKEN_PATH = "/v1/security/oauth2/token"
LLM_BASE_URL = "https://llm.test/v1"


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeTravelApi:
    """httpx transport handler standing in for the travel API."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.token_calls = 0
        self.token_status = 200
        self.token_body: Optional[Dict[str, Any]] = None
        self.routes: Dict[str, List[tuple]] = {}

    def route(self, path: str, *responses: tuple) -> None:
        """Queue (status, json_body) responses; the last one repeats."""
        self.routes[path] = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == TOKEN_PATH:
            self.token_calls += 1
            body = self.token_body
            if body is None:
                body = {"access_token": f"token-{self.token_calls}", "expires_in": 1799}
            return httpx.Response(self.token_status, json=body)

        queued = self.routes.get(request.url.path)
        if not queued:
            return httpx.Response(404, json={"errors": [{"detail": "no route"}]})
        status, body = queued.pop(0) if len(queued) > 1 else queued[0]
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def searches(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path != TOKEN_PATH]


def completion_body(content: Optional[str]) -> Dict[str, Any]:
    return {
        "id": "cmpl-test",
        "object": "chat.completion",
        "created": 1717200000,
        "model": "mistral-tiny",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 10, "total_tokens": 20},
    }


class FakeCompletionApi:
    """httpx transport handler standing in for the chat-completion API."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status = 200
        self.content: Optional[str] = "{}"

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status != 200:
            return httpx.Response(self.status, json={"message": "upstream failure"})
        return httpx.Response(200, json=completion_body(self.content))

    def answer(self, document: Any) -> None:
        self.content = document if isinstance(document, str) else json.dumps(document)

    @property
    def last_payload(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def travel_api():
    return FakeTravelApi()


@pytest.fixture
def travel_http(travel_api):
    client = httpx.Client(base_url=TRAVEL_BASE_URL, transport=httpx.MockTransport(travel_api))
    yield client
    client.close()


@pytest.fixture
def credentials(travel_http, clock):
    return CredentialManager(
        travel_http,
        client_id="client-id",
        client_secret="client-secret",
        token_path=TOKEN_PATH,
        clock=clock,
    )


@pytest.fixture
def search_client(travel_http, credentials):
    return SearchClient(travel_http, credentials)


@pytest.fixture
def completion_api():
    return FakeCompletionApi()


@pytest.fixture
def extraction_client(completion_api):
    http_client = httpx.Client(transport=httpx.MockTransport(completion_api))
    openai_client = OpenAI(
        api_key="test-key",
        base_url=LLM_BASE_URL,
        max_retries=0,
        http_client=http_client,
    )
    yield ExtractionClient(openai_client, model="mistral-tiny")
    http_client.close()


@pytest.fixture
def user_store():
    return UserStore()


@pytest.fixture
def api_client(search_client, extraction_client, user_store):
    app.dependency_overrides[get_search_client] = lambda: search_client
    app.dependency_overrides[get_extraction_client] = lambda: extraction_client
    app.dependency_overrides[get_user_store] = lambda: user_store
    yield TestClient(app)
    app.dependency_overrides.clear()

# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

from collections.abc import Callable
from typing import Any

import openai
import pytest
from dotenv import find_dotenv, load_dotenv
from flask import Flask
from flask.testing import FlaskClient, FlaskCliRunner

import edutools
from edutools.testing.mocks import mock_async_completion


@pytest.fixture(scope='session', autouse=True)
def _load_env() -> None:
    env_file = find_dotenv('.env.test')
    load_dotenv(env_file)


@pytest.fixture
def app(monkeypatch: pytest.MonkeyPatch) -> Flask:
    """ Provides an application object and monkey patches openai to *not*
    send requests.
    """
    monkeypatch.setattr(openai.resources.chat.AsyncCompletions, "create", mock_async_completion(0.0))

    return edutools.create_app(
        test_config={
            'TESTING': True,
            'SYSTEM_API_KEY': 'invalid',  # ensure an invalid API key for testing
        },
    )


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture
def runner(app: Flask) -> FlaskCliRunner:
    return app.test_cli_runner()


class CompletionRecorder:
    """ Stands in for AsyncCompletions.create, recording each call's arguments. """
    def __init__(self, response: Callable[..., Any]):
        self._response = response
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        return await self._response(*args, **kwargs)


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch, app: Flask) -> CompletionRecorder:
    rec = CompletionRecorder(mock_async_completion(0.0))
    monkeypatch.setattr(openai.resources.chat.AsyncCompletions, "create", rec)
    return rec

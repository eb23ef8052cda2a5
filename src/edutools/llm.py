# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from flask import current_app, flash, make_response, render_template
from werkzeug.wrappers.response import Response

from .openai_client import OpenAIClient

# Low temperature for strict adherence to technical facts.
DEFAULT_COMPLETION_ARGS: dict[str, Any] = {
    'temperature': 0.15,
    'top_p': 0.95,
}


@dataclass
class LLM:
    """Access to a language model with lazy client initialization."""
    model: str
    endpoint: str | None  # if None, use the default OpenAI endpoint
    api_key: str
    _client: OpenAIClient | None = field(default=None, init=False, repr=False)  # Instantiated only when needed

    def make_args(self) -> dict[str, Any]:
        return DEFAULT_COMPLETION_ARGS.copy()

    async def get_completion(self, prompt: str) -> tuple[dict[str, str], str]:
        """Send a prompt to the language model as a single user message.

        The client is lazily instantiated on first use.

        Delegates to OpenAIClient.get_completion() (see openai_client.py)
        """
        if self._client is None:
            self._client = OpenAIClient(self.model, self.api_key, base_url=self.endpoint)

        return await self._client.get_completion([{"role": "user", "content": prompt}], self.make_args())


class NoKeyFoundError(Exception):
    pass


def get_llm() -> LLM:
    ''' Get an LLM object configured from the current app's config.

    Raises NoKeyFoundError if no API key is configured.
    '''
    api_key = current_app.config.get("SYSTEM_API_KEY")
    if not api_key:
        raise NoKeyFoundError

    return LLM(
        model=current_app.config["SYSTEM_MODEL"],
        endpoint=current_app.config.get("LLM_ENDPOINT") or None,
        api_key=api_key,
    )


# For decorator type hints
P = ParamSpec('P')
R = TypeVar('R')


def with_llm(f: Callable[P, R]) -> Callable[P, Response | R]:
    '''Decorate a view function that requires an LLM and API key.

    Assigns an 'llm' named argument.
    '''
    @wraps(f)
    def decorated_function(*args: P.args, **kwargs: P.kwargs) -> Response | R:
        try:
            llm = get_llm()
        except NoKeyFoundError:
            current_app.logger.error("SYSTEM_API_KEY is empty; cannot generate content.")
            flash("Error: No API key set.  An API key must be configured before content can be generated.", "danger")
            return make_response(render_template("error.html"), 500)

        kwargs['llm'] = llm
        return f(*args, **kwargs)
    return decorated_function

# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

from typing import Any, TypeAlias

import openai
from flask import current_app

OpenAIChatMessage: TypeAlias = openai.types.chat.ChatCompletionMessageParam

GENERATION_FAILED_MSG = "Assessment generation failed. Please verify your connection or subject settings."
NO_CONTENT_MSG = "No content generated. Please refine your inputs."


class OpenAIClient:
    """Client for OpenAI or compatible API endpoints (e.g., Gemini's)."""

    def __init__(self, model: str, api_key: str, *, base_url: str | None = None):
        """Initialize an OpenAI client.

        Args:
            model: The model identifier to use for completions
            api_key: The API key for authentication
            base_url: Optional base URL for non-OpenAI providers
        """
        if base_url:
            self._client = openai.AsyncOpenAI(api_key=api_key, base_url=base_url)
        else:
            self._client = openai.AsyncOpenAI(api_key=api_key)
        self._model = model

    def _translate_openai_error(self, e: openai.APIError) -> tuple[str, str]:
        match e:
            case openai.APITimeoutError():
                user_msg = "Assessment generation timed out. Please try again."
                log_msg = f"LLM Timeout: {e}"
            case openai.RateLimitError():
                if "quota" in str(e).lower():
                    user_msg = "Assessment generation failed. The API key for this service has exceeded its current quota."
                else:
                    user_msg = "Assessment generation failed. The service is receiving too many requests right now. Please try again in one minute."
                log_msg = f"LLM RateLimitError: {e}"
            case openai.AuthenticationError():
                user_msg = "Assessment generation failed. The configured API key is invalid."
                log_msg = f"LLM AuthenticationError: {e}"
            case openai.BadRequestError():
                if "API key not valid" in str(e):
                    user_msg = "Assessment generation failed. The configured API key is invalid."
                else:
                    user_msg = GENERATION_FAILED_MSG
                log_msg = f"LLM BadRequestError: {e}"
            case _:
                user_msg = GENERATION_FAILED_MSG
                log_msg = f"Exception (LLM {type(e).__name__}, not handled specifically): {e}"

        return user_msg, log_msg

    async def get_completion(self, messages: list[OpenAIChatMessage], completion_args: dict[str, Any]) -> tuple[dict[str, str], str]:
        """Get a completion from the LLM.

        Args:
            messages: A list of chat messages in OpenAI format
            completion_args: A dictionary of additional named arguments to pass to the API

        Returns:
            A tuple containing:
            - The raw API response as a dict
            - The response text (stripped)

        Note:
            If an error occurs, or the model returns no text, the dict will
            contain an 'error' key with the error details, and the text will
            contain a user-friendly error message.
        """
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                **completion_args
            )

        except openai.APIError as e:
            user_msg, log_msg = self._translate_openai_error(e)
            current_app.logger.error(log_msg)
            return {'error': str(e)}, user_msg

        if not response.choices:
            current_app.logger.warning("Completion contained no choices")
            return {'error': "no choices"}, NO_CONTENT_MSG

        choice = response.choices[0]
        response_txt = (choice.message.content or "").strip()

        if not response_txt:
            current_app.logger.warning(f"Empty completion (finish_reason={choice.finish_reason})")
            return {'error': "empty completion"}, NO_CONTENT_MSG

        if choice.finish_reason == "length":  # "length" if max_completion_tokens reached
            response_txt += "\n\n[error: maximum length exceeded]"

        return response.model_dump(), response_txt

"""
Extractor for turning free text into values that conform to a pydantic schema.

This module provides the Extractor class (and its async twin) which describe
the schema, build the prompt, make a single chat-completion call constrained
to a JSON object and validate the answer.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import ExtractorConfig, create_async_openai_client, create_openai_client
from .errors import EmptyResponseError
from .prompts import build_messages, build_prompt
from .schema import schema_structure, validate_response

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.2


class ExtractOptions(BaseModel):
    """Per-call knobs for an extraction."""

    model_config = ConfigDict(extra="forbid")

    additional_context: Optional[str] = Field(default=None, description="Extra guidance appended to the prompt")
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0, description="Sampling temperature (0.2 when unset)")
    max_tokens: Optional[int] = Field(default=None, gt=0, description="Output token bound (provider default when unset)")


def save_to_json(results: list[Any], json_path: str) -> None:
    """
    Save extraction results to JSON file.

    Args:
        results: List of extraction results (models or plain values)
        json_path: Output JSON file path
    """
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(results, f, indent=2, default=_json_default)
    logger.info("Results saved to: %s", json_path)


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return str(value)


def _request_params(
    model: str,
    text: str,
    schema: Any,
    schema_description: str,
    options: ExtractOptions,
) -> dict[str, Any]:
    prompt = build_prompt(text, schema_structure(schema), schema_description, options.additional_context)
    logger.debug("Built extraction prompt (%d chars) for model %s", len(prompt), model)

    params: dict[str, Any] = {
        "model": model,
        "messages": build_messages(prompt),
        "temperature": DEFAULT_TEMPERATURE if options.temperature is None else options.temperature,
        "response_format": {"type": "json_object"},
    }
    if options.max_tokens is not None:
        params["max_tokens"] = options.max_tokens
    return params


def _response_content(resp: Any) -> str:
    """Text of the first choice; EmptyResponseError when there is none."""
    if getattr(resp, "usage", None):
        logger.info("[extraction] tokens=%s", resp.usage.total_tokens)

    choices = getattr(resp, "choices", None) or []
    content = choices[0].message.content if choices else None
    if not content:
        raise EmptyResponseError()
    return content


class Extractor:
    """
    Extractor for structured data from free text using pydantic schemas.

    Features:
    - One chat-completion call per extraction, constrained to a JSON object
    - Type-safe results with pydantic validation
    - Support for Azure OpenAI and OpenAI
    - Optional JSON export for batches

    Usage:
        config = get_openai_config()  # or ExtractorConfig(api_key=..., model=...)
        extractor = Extractor(config)

        class User(BaseModel):
            name: str = Field(description="User's full name")
            age: int = Field(description="User's age")

        user = extractor.extract(
            "My name is John Doe and my age is 25.",
            User,
            "This schema contains a user's personal information.",
        )

    Provider errors (authentication, rate limiting, bad requests) are raised
    unchanged; nothing is retried.
    """

    def __init__(self, config: ExtractorConfig, client=None):
        """
        Initialize the Extractor.

        Args:
            config: ExtractorConfig, e.g. from get_openai_config()
            client: Optional pre-built OpenAI client (one is created from config otherwise)
        """
        self.config = config
        self.model = config.model
        self.client = client if client is not None else create_openai_client(config)

    def extract(
        self,
        text: str,
        schema: Any,
        schema_description: str,
        options: Optional[ExtractOptions] = None,
    ) -> Any:
        """
        Extract a value matching `schema` from `text`.

        Args:
            text: Text to extract data from
            schema: BaseModel subclass or pydantic-validatable annotation
            schema_description: Free-text summary of what the schema holds
            options: Optional ExtractOptions

        Returns:
            The validated value (a model instance for BaseModel schemas)

        Raises:
            EmptyResponseError: provider returned no content
            MalformedJSONError: content is not valid JSON
            SchemaValidationError: JSON does not match the schema
        """
        params = _request_params(self.model, text, schema, schema_description, options or ExtractOptions())
        resp = self.client.chat.completions.create(**params)
        return validate_response(_response_content(resp), schema)

    def extract_many(
        self,
        documents: list[str],
        schema: Any,
        schema_description: str,
        options: Optional[ExtractOptions] = None,
        save_json: bool = False,
        json_path: str = "extraction_results.json",
    ) -> list[Any]:
        """
        Run extract() over several documents, one call each, in order.

        The first failure aborts the batch; nothing is saved in that case.

        Args:
            documents: List of document texts to extract from
            schema: Schema shared by all documents
            schema_description: Free-text summary of the schema
            options: Optional ExtractOptions applied to every call
            save_json: If True, save results to JSON file
            json_path: Output JSON file path (used if save_json=True)

        Returns:
            List of validated values, one per document
        """
        results: list[Any] = []
        for i, doc in enumerate(documents, start=1):
            logger.info("Processing document %d/%d", i, len(documents))
            results.append(self.extract(doc, schema, schema_description, options))

        logger.info("Completed extraction from %d document(s)", len(documents))

        if save_json:
            save_to_json(results, json_path)

        return results


class AsyncExtractor:
    """Awaitable variant of Extractor built on the async OpenAI client."""

    def __init__(self, config: ExtractorConfig, client=None):
        self.config = config
        self.model = config.model
        self.client = client if client is not None else create_async_openai_client(config)

    async def extract(
        self,
        text: str,
        schema: Any,
        schema_description: str,
        options: Optional[ExtractOptions] = None,
    ) -> Any:
        """Same contract as Extractor.extract(); the provider call is awaited."""
        params = _request_params(self.model, text, schema, schema_description, options or ExtractOptions())
        resp = await self.client.chat.completions.create(**params)
        return validate_response(_response_content(resp), schema)


def create_extractor(config: ExtractorConfig) -> Extractor:
    """Create an Extractor from configuration."""
    return Extractor(config)

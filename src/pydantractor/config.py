"""
Shared API configuration for OpenAI and Azure OpenAI.

This module provides the construction-time settings for an extractor and the
helpers that turn them into OpenAI/Azure OpenAI clients.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from openai import AsyncAzureOpenAI, AsyncOpenAI, AzureOpenAI, OpenAI
from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_AZURE_DEPLOYMENT = "gpt-4.1"
DEFAULT_AZURE_API_VERSION = "2024-12-01-preview"


class ExtractorConfig(BaseModel):
    """Settings fixed once per extractor: credentials, model and endpoint."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1, description="Provider API key")
    model: str = Field(min_length=1, description="Provider model identifier (deployment name on Azure)")
    base_url: Optional[str] = Field(default=None, description="Override of the default endpoint")
    organization: Optional[str] = Field(default=None, description="Provider-side organization scoping")

    use_azure: bool = False
    azure_endpoint: Optional[str] = None
    api_version: Optional[str] = None

    @model_validator(mode="after")
    def check_azure_settings(self) -> "ExtractorConfig":
        if self.use_azure:
            missing = [name for name in ("azure_endpoint", "api_version") if not getattr(self, name)]
            if missing:
                raise ValueError(f"Azure config requires: {', '.join(missing)}")
        return self


def get_openai_config(use_azure: bool = False, model: Optional[str] = None) -> ExtractorConfig:
    """
    Build an ExtractorConfig from environment variables (a local .env is honored).

    Args:
        use_azure: If True, read Azure OpenAI settings. If False, use standard OpenAI API.
        model: Optional model (or Azure deployment) override

    Returns:
        ExtractorConfig with the appropriate settings

    Example:
        >>> config = get_openai_config()
        >>> # Reads OPENAI_API_KEY, OPENAI_MODEL, OPENAI_BASE_URL, OPENAI_ORGANIZATION
        >>> config = get_openai_config(use_azure=True)
        >>> # Reads AZURE_API_KEY, AZURE_ENDPOINT, AZURE_API_VERSION, AZURE_DEPLOYMENT
    """
    load_dotenv()

    if use_azure:
        api_key = os.getenv("AZURE_API_KEY")
        endpoint = os.getenv("AZURE_ENDPOINT")
        if not api_key:
            raise ValueError("AZURE_API_KEY is not set")
        if not endpoint:
            raise ValueError("AZURE_ENDPOINT is not set")
        return ExtractorConfig(
            use_azure=True,
            api_key=api_key,
            azure_endpoint=endpoint,
            api_version=os.getenv("AZURE_API_VERSION", DEFAULT_AZURE_API_VERSION),
            model=model or os.getenv("AZURE_DEPLOYMENT", DEFAULT_AZURE_DEPLOYMENT),
        )

    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ValueError("OPENAI_API_KEY is not set")
    return ExtractorConfig(
        api_key=api_key,
        model=model or os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
        base_url=os.getenv("OPENAI_BASE_URL") or None,
        organization=os.getenv("OPENAI_ORGANIZATION") or None,
    )


def create_openai_client(config: ExtractorConfig):
    """
    Create an OpenAI or Azure OpenAI client based on configuration.

    Args:
        config: ExtractorConfig, e.g. from get_openai_config()

    Returns:
        OpenAI or AzureOpenAI client instance

    Example:
        >>> config = get_openai_config()
        >>> client = create_openai_client(config)
    """
    if config.use_azure:
        return AzureOpenAI(
            api_key=config.api_key,
            api_version=config.api_version,
            azure_endpoint=config.azure_endpoint,
            organization=config.organization,
        )
    return OpenAI(
        api_key=config.api_key,
        base_url=config.base_url,
        organization=config.organization,
    )


def create_async_openai_client(config: ExtractorConfig):
    """Async counterpart of create_openai_client()."""
    if config.use_azure:
        return AsyncAzureOpenAI(
            api_key=config.api_key,
            api_version=config.api_version,
            azure_endpoint=config.azure_endpoint,
            organization=config.organization,
        )
    return AsyncOpenAI(
        api_key=config.api_key,
        base_url=config.base_url,
        organization=config.organization,
    )

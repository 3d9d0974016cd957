"""
pydantractor

Extract structured data from free text with an LLM, using pydantic models
as the target schema. The schema is described to the model, the model's JSON
answer is validated, and the caller gets back a typed value.

Main Classes:
    - Extractor: Extract data from text into a pydantic schema
    - AsyncExtractor: Same, over the async OpenAI client

Configuration:
    - ExtractorConfig: API key, model, endpoint and organization
    - get_openai_config: Build a config from environment variables
    - create_openai_client: Create an OpenAI client from config

Errors:
    - EmptyResponseError, MalformedJSONError, SchemaValidationError

Advanced:
    - describe_schema: Plain-data description of a schema
    - build_prompt: The extraction prompt template
    - validate_response: Parse and validate a JSON answer
"""

from .config import (
    ExtractorConfig,
    create_async_openai_client,
    create_openai_client,
    get_openai_config,
)
from .errors import (
    EmptyResponseError,
    ExtractionError,
    MalformedJSONError,
    SchemaValidationError,
)
from .extractor import (
    AsyncExtractor,
    ExtractOptions,
    Extractor,
    create_extractor,
    save_to_json,
)
from .prompts import SYSTEM_PROMPT, build_messages, build_prompt
from .schema import (
    describe_schema,
    get_type_name,
    schema_structure,
    validate_response,
)

__all__ = [
    # Main API
    "Extractor",
    "AsyncExtractor",
    "ExtractOptions",
    "create_extractor",
    # Configuration
    "ExtractorConfig",
    "get_openai_config",
    "create_openai_client",
    "create_async_openai_client",
    # Errors
    "ExtractionError",
    "EmptyResponseError",
    "MalformedJSONError",
    "SchemaValidationError",
    # Advanced
    "describe_schema",
    "get_type_name",
    "schema_structure",
    "validate_response",
    "build_prompt",
    "build_messages",
    "SYSTEM_PROMPT",
    # Utilities
    "save_to_json",
]

__version__ = "0.1.0"

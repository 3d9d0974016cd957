"""Prompt templates for extraction calls."""

from typing import Optional

SYSTEM_PROMPT = (
    "You are a json data extraction assistant. "
    "Your task is to extract structured data from the given text according to the specified schema."
)

EXTRACTION_INSTRUCTIONS = """## Instructions
1. Analyze the text above
2. Extract data according to the schema in JSON format
3. Make reasonable assumptions or use null values for missing information
4. Return only the JSON output, without any additional explanation
"""


def build_prompt(
    text: str,
    structure: str,
    schema_description: str,
    additional_context: Optional[str] = None,
) -> str:
    """
    Build the user instruction for one extraction call.

    Args:
        text: Source text, embedded verbatim
        structure: Pretty-printed schema description (see schema.schema_structure)
        schema_description: Caller's free-text summary of the schema
        additional_context: Optional extra guidance; the section is left out when empty

    Returns:
        The prompt string
    """
    sections = [
        "# Task: Extract Data from Text",
        f"## Schema Description\n{schema_description}",
        f"## Schema Structure\n```json\n{structure}\n```",
        f"## Text\n```\n{text}\n```",
    ]
    if additional_context:
        sections.append(f"## Additional Context\n{additional_context}")
    sections.append(EXTRACTION_INSTRUCTIONS)
    return "\n\n".join(sections)


def build_messages(prompt: str) -> list[dict]:
    """System persona followed by the prompt as the user message."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]

"""
Example: extracting users from free text into a hand-written pydantic schema.

This demo shows how to:
1. Write a Pydantic model describing the fields you expect.
2. Build an Extractor from environment configuration.
3. Extract a single record and a list of records.
"""

import json
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, Field

# Add src directory to path so we can import without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pydantractor import ExtractOptions, Extractor, get_openai_config  # noqa: E402


class User(BaseModel):
    name: str = Field(description="User's full name")
    age: int = Field(description="User's age")


class Person(BaseModel):
    fullName: str = Field(description="User full name")
    age: int = Field(description="User age")


class UserList(BaseModel):
    users: list[Person] = Field(description="Users information")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # Use standard OpenAI (OPENAI_API_KEY); pass use_azure=True for Azure OpenAI
    config = get_openai_config()
    extractor = Extractor(config)

    user = extractor.extract(
        "Hello, my name is Alice Johnson. I am 30 years old.",
        User,
        "This schema contains a user's personal information.",
        ExtractOptions(additional_context="Extract the user information from the text."),
    )
    print(user.model_dump_json(indent=2))

    people = extractor.extract(
        "Hello, my name is John Doe and my age is 25. "
        "But my friend's name is Jane Smith and her age is 24.",
        UserList,
        "This schema contains users personal information.",
        ExtractOptions(
            additional_context=(
                "Extract all users mentioned in the text. If there is missing information, "
                "leave it blank or make reasonable assumptions."
            )
        ),
    )
    print(json.dumps(people.model_dump(), indent=2))

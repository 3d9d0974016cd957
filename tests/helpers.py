"""
Schema models and provider responses shared by the tests.
"""

from typing import Optional

from openai.types.chat import ChatCompletion, ChatCompletionMessage
from openai.types.chat.chat_completion import Choice
from openai.types.completion_usage import CompletionUsage
from pydantic import BaseModel, Field


class User(BaseModel):
    """A single person."""

    name: str = Field(description="User's full name")
    age: int = Field(description="User's age")


class Person(BaseModel):
    fullName: str = Field(description="User full name")
    age: int = Field(description="User age")


class UserList(BaseModel):
    users: list[Person] = Field(description="Users information")


def make_completion(content: Optional[str], total_tokens: Optional[int] = 42) -> ChatCompletion:
    """Build a chat completion whose first choice carries `content`."""
    usage = None
    if total_tokens is not None:
        usage = CompletionUsage(prompt_tokens=total_tokens - 2, completion_tokens=2, total_tokens=total_tokens)
    return ChatCompletion(
        id="chatcmpl-test",
        object="chat.completion",
        created=1700000000,
        model="gpt-4o-mini",
        choices=[
            Choice(
                index=0,
                finish_reason="stop",
                message=ChatCompletionMessage(role="assistant", content=content),
            )
        ],
        usage=usage,
    )

"""Pydantic schemas for the chat gateway API."""
from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from interview_prompt import InterviewConfig


Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    role: Role
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatMessage]
    job_description: Optional[str] = Field(default=None, alias="jobDescription")
    interview_types: Optional[List[str]] = Field(default=None, alias="interviewTypes")
    difficulty: Optional[str] = None
    duration: Optional[int] = None

    @field_validator("job_description", "difficulty", mode="before")
    @classmethod
    def _text_or_none(cls, value: object) -> Optional[str]:  # Wrong types fall back to defaults
        return value if isinstance(value, str) else None

    @field_validator("interview_types", mode="before")
    @classmethod
    def _tags(cls, value: object) -> List[str]:
        if not isinstance(value, list):
            return []
        return [tag for tag in value if isinstance(tag, str)]

    @field_validator("duration", mode="before")
    @classmethod
    def _minutes(cls, value: object) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        return None

    def interview_config(self) -> InterviewConfig:
        return InterviewConfig(
            jobDescription=self.job_description,
            interviewTypes=self.interview_types or [],
            difficulty=self.difficulty,
            duration=self.duration,
        )

    def message_dicts(self) -> List[Dict[str, str]]:
        return [message.model_dump() for message in self.messages]


class ScorecardRequest(ChatRequest):
    messages: List[ChatMessage] = Field(min_length=1)


class HealthResp(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["ok"] = "ok"
    provider: str
    available_providers: Dict[str, bool] = Field(alias="availableProviders")


class ErrorResp(BaseModel):
    error: str

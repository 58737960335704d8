from __future__ import annotations  # Post-interview scorecard generation

import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import BaseModel, ConfigDict, Field

from config import ProviderIdentity, Settings
from interview_prompt import InterviewConfig
from llm_gateway import Message, request_completion


logger = logging.getLogger(__name__)

SCORE_MIN = 1
SCORE_MAX = 10
DEFAULT_SCORE = 5

TYPE_DESCRIPTIONS: Dict[str, str] = {
    "coding": "coding challenges",
    "multiple-choice": "quiz-style questions",
    "behavioral": "behavioral questions",
    "technical": "technical concepts",
    "hr": "HR/culture fit",
    "hiring-manager": "leadership/vision",
}

_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_OBJECT = re.compile(r"\{[\s\S]*\}")


class SkillAssessment(BaseModel):  # One scored dimension of the scorecard
    score: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    feedback: str
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)


class Scorecard(BaseModel):  # Scorecard returned to the UI
    model_config = ConfigDict(populate_by_name=True)

    technical_accuracy: SkillAssessment = Field(alias="technicalAccuracy")
    communication_skills: SkillAssessment = Field(alias="communicationSkills")
    overall_score: int = Field(alias="overallScore", ge=SCORE_MIN, le=SCORE_MAX)
    key_areas_for_improvement: List[str] = Field(default_factory=list, alias="keyAreasForImprovement")
    summary: str


FALLBACK_SCORECARD = Scorecard(
    technicalAccuracy=SkillAssessment(
        score=DEFAULT_SCORE,
        feedback="Unable to fully assess technical accuracy from the conversation.",
        strengths=["Participated in the interview"],
        improvements=["Provide more detailed technical responses"],
    ),
    communicationSkills=SkillAssessment(
        score=DEFAULT_SCORE,
        feedback="Communication skills could not be fully evaluated.",
        strengths=["Engaged with the interviewer"],
        improvements=["Elaborate more on your answers"],
    ),
    overallScore=DEFAULT_SCORE,
    keyAreasForImprovement=[
        "Continue practicing mock interviews",
        "Prepare specific examples from your experience",
        "Research the company and role thoroughly",
    ],
    summary="Thank you for completing this mock interview. Continue practicing to improve your interview skills.",
)


async def generate_scorecard(
    messages: Sequence[Message],
    config: InterviewConfig,
    *,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> tuple[ProviderIdentity, Scorecard]:  # Assess a finished interview via the active provider
    prompt = build_scorecard_prompt(messages, config)
    provider, content = await request_completion(
        prompt,
        settings=settings,
        max_tokens=settings.SCORECARD_MAX_TOKENS,
        transport=transport,
    )
    return provider, parse_scorecard(content)


def build_scorecard_prompt(messages: Sequence[Message], config: InterviewConfig) -> str:
    conversation = "\n\n".join(
        f"{'Interviewer' if message['role'] == 'assistant' else 'Candidate'}: {message['content']}"
        for message in messages
    )
    tags = dict.fromkeys(config.interview_types)
    selected = ", ".join(TYPE_DESCRIPTIONS.get(tag, tag) for tag in tags) or "general interview"
    difficulty = config.difficulty or "intermediate"
    context = ""
    job_description = config.job_description or ""
    if job_description.strip():
        context = f"Job Description:\n{job_description}\n\n"

    return f"""You are an expert interview coach and assessor. Analyze the following mock interview conversation and provide a detailed performance scorecard.

{context}Interview Type: {selected}
Difficulty Level: {difficulty}

Interview Conversation:
{conversation}

Based on this interview, provide a JSON scorecard with the following structure. Be constructive, specific, and actionable in your feedback. Scores should be from 1-10.

{{
  "technicalAccuracy": {{
    "score": <1-10>,
    "feedback": "<2-3 sentences about technical performance>",
    "strengths": ["<strength 1>", "<strength 2>"],
    "improvements": ["<improvement 1>", "<improvement 2>"]
  }},
  "communicationSkills": {{
    "score": <1-10>,
    "feedback": "<2-3 sentences about communication>",
    "strengths": ["<strength 1>", "<strength 2>"],
    "improvements": ["<improvement 1>", "<improvement 2>"]
  }},
  "overallScore": <1-10>,
  "keyAreasForImprovement": [
    "<specific actionable improvement 1>",
    "<specific actionable improvement 2>",
    "<specific actionable improvement 3>"
  ],
  "summary": "<3-4 sentence overall assessment and encouragement>"
}}

Respond ONLY with the JSON object, no additional text."""


def parse_scorecard(content: str) -> Scorecard:
    """Parse model output into a scorecard, filling defaults for missing fields.

    Scores are clamped to 1-10 and rounded to the nearest integer; missing,
    zero or non-numeric scores become 5. Output that does not contain a JSON
    object yields ``FALLBACK_SCORECARD``.
    """

    text = content.strip()
    fenced = _FENCE.search(text)
    if fenced:
        text = fenced.group(1).strip()
    braced = _OBJECT.search(text)
    if braced:
        text = braced.group(0)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Scorecard output was not JSON: %s", exc)
        return FALLBACK_SCORECARD.model_copy(deep=True)
    if not isinstance(data, dict):
        logger.warning("Scorecard output was not a JSON object")
        return FALLBACK_SCORECARD.model_copy(deep=True)

    return Scorecard(
        technicalAccuracy=_assessment(data.get("technicalAccuracy")),
        communicationSkills=_assessment(data.get("communicationSkills")),
        overallScore=_clamp(data.get("overallScore")),
        keyAreasForImprovement=_strings(data.get("keyAreasForImprovement")),
        summary=_string(data.get("summary")) or "Interview assessment completed.",
    )


def _assessment(raw: Any) -> SkillAssessment:
    section = raw if isinstance(raw, dict) else {}
    return SkillAssessment(
        score=_clamp(section.get("score")),
        feedback=_string(section.get("feedback")) or "No feedback available.",
        strengths=_strings(section.get("strengths")),
        improvements=_strings(section.get("improvements")),
    )


def _clamp(value: Any) -> int:
    try:
        score = float(value)
    except (TypeError, ValueError):
        return DEFAULT_SCORE
    if score != score or not score:  # NaN or zero
        return DEFAULT_SCORE
    return int(round(min(SCORE_MAX, max(SCORE_MIN, score))))


def _string(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _strings(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if isinstance(item, (str, int, float)) and str(item).strip()]

from __future__ import annotations  # System prompt synthesis from interview setup

from textwrap import dedent
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_DIFFICULTY = "intermediate"
DEFAULT_DURATION = "30 minute"


class InterviewConfig(BaseModel):  # Interview profile chosen in the setup form
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    job_description: Optional[str] = Field(default=None, alias="jobDescription")
    interview_types: List[str] = Field(default_factory=list, alias="interviewTypes")
    difficulty: Optional[str] = None
    duration: Optional[int] = None


DIFFICULTY_LABELS: Dict[str, str] = {
    "beginner": "Beginner (entry-level, supportive)",
    "intermediate": "Intermediate (mid-level, balanced)",
    "advanced": "Advanced (senior-level, rigorous)",
}

DIFFICULTY_BLOCKS: Dict[str, str] = {
    "beginner": dedent(
        """
        Difficulty: beginner
        - Focus on fundamentals and core concepts rather than edge cases.
        - If the candidate is stuck, offer a small hint before moving on.
        - Encourage the candidate and highlight what they got right.
        - Break larger questions into smaller steps when needed.
        """
    ).strip(),
    "intermediate": dedent(
        """
        Difficulty: intermediate
        - Balance fundamentals with practical, real-world scenarios.
        - Ask a follow-up question when an answer lacks depth.
        - Offer hints only when the candidate asks or is clearly blocked.
        - Expect reasonably complete answers with some justification.
        """
    ).strip(),
    "advanced": dedent(
        """
        Difficulty: advanced
        - Ask probing follow-up questions that test depth of understanding.
        - Ask the candidate to discuss time and space complexity and design trade-offs.
        - Challenge assumptions and explore edge cases, failure modes and scale.
        - Do not volunteer hints; expect precise, well-structured answers.
        """
    ).strip(),
}

TYPE_LABELS: Dict[str, str] = {
    "coding": "Coding",
    "multiple-choice": "Multiple Choice",
    "behavioral": "Behavioral",
    "technical": "Technical",
    "hr": "HR",
    "hiring-manager": "Hiring Manager",
}

CODING_DIFFICULTY_NOTES: Dict[str, str] = {
    "beginner": "Choose simple problems (strings, arrays, basic loops) and walk through examples together.",
    "intermediate": "Choose problems involving common data structures such as hash maps, stacks, trees or two pointers.",
    "advanced": "Choose problems involving graphs, dynamic programming or system-level constraints, and push for optimal solutions.",
}

TYPE_BLOCKS: Dict[str, str] = {
    "behavioral": dedent(
        """
        Behavioral section:
        - Ask about past experiences: teamwork, conflict, failure, leadership and ownership.
        - Encourage answers that follow the STAR method (Situation, Task, Action, Result).
        - If an answer is vague, ask for a concrete example and the measurable result.
        """
    ).strip(),
    "technical": dedent(
        """
        Technical section:
        - Ask conceptual questions about technologies, architecture and engineering practices relevant to the role.
        - Check understanding of how and why things work, not only definitions.
        - Follow up on any claim the candidate makes about tools or systems they have used.
        """
    ).strip(),
    "multiple-choice": dedent(
        """
        Multiple-choice section:
        - Ask one quiz-style question at a time with four lettered options (A, B, C, D).
        - Wait for the candidate to pick an option before revealing anything.
        - After the answer, say whether it was correct and briefly explain why.
        """
    ).strip(),
    "hr": dedent(
        """
        HR section:
        - Ask about motivation, career goals, work style and culture fit.
        - Discuss communication, collaboration and how the candidate handles feedback.
        - Keep the tone conversational and friendly.
        """
    ).strip(),
    "hiring-manager": dedent(
        """
        Hiring manager section:
        - Ask about impact, prioritisation, ownership and decision-making.
        - Explore how the candidate would approach the first months in the role.
        - Discuss leadership, vision and alignment with team goals.
        """
    ).strip(),
}

GENERAL_BLOCK = dedent(
    """
    General interview:
    - Mix technical questions with situational and behavioral questions as appropriate for the role.
    """
).strip()


def build_system_prompt(config: InterviewConfig) -> str:
    """Assemble the interviewer system prompt for one request."""

    difficulty = _difficulty_key(config.difficulty)
    types = list(dict.fromkeys(config.interview_types))

    sections: List[str] = [_persona(types, difficulty, config)]
    sections.append(_core_guidelines())
    sections.append(DIFFICULTY_BLOCKS[difficulty])
    type_blocks = [block for block in (_type_block(tag, difficulty) for tag in types) if block]
    if type_blocks:
        sections.extend(type_blocks)
    elif not types:
        sections.append(GENERAL_BLOCK)
    if len(types) > 1:
        sections.append(_hybrid_block(types))
    return "\n\n".join(sections)


def type_label(tag: str) -> str:
    return TYPE_LABELS.get(tag, tag)


def _difficulty_key(difficulty: Optional[str]) -> str:
    key = (difficulty or "").strip().lower()
    if key in DIFFICULTY_BLOCKS:
        return key
    return DEFAULT_DIFFICULTY


def _duration_text(duration: Optional[int]) -> str:
    if not duration:
        return DEFAULT_DURATION
    return f"{duration} minute"


def _persona(types: List[str], difficulty: str, config: InterviewConfig) -> str:
    summary = ", ".join(type_label(tag) for tag in types) if types else "General"
    lines = [
        "You are an expert interviewer conducting a realistic mock interview.",
        f"Interview type: {summary}",
        f"Difficulty level: {DIFFICULTY_LABELS[difficulty]}",
        f"Duration: this is a {_duration_text(config.duration)} interview; pace your questions to fit.",
    ]
    job_description = (config.job_description or "").strip()
    if job_description:
        lines.append("")
        lines.append("Job Description:")
        lines.append(job_description)
    return "\n".join(lines)


def _core_guidelines() -> str:
    return dedent(
        """
        Guidelines:
        - Greet the candidate warmly once, at the start of the interview only.
        - Ask one question at a time and wait for the answer.
        - After each answer, acknowledge it briefly (1-2 sentences max) and move to the next question.
        - Adapt your questions based on the candidate's responses.
        - Keep the tone encouraging but realistic, as in a real interview.
        """
    ).strip()


def _type_block(tag: str, difficulty: str) -> Optional[str]:
    if tag == "coding":
        return _coding_block(difficulty)
    return TYPE_BLOCKS.get(tag)


def _coding_block(difficulty: str) -> str:
    return "\n".join(
        [
            "Coding section:",
            "- Present one coding problem at a time with a clear statement and an example.",
            "- Ask the candidate to explain their problem-solving approach before writing code.",
            "- Evaluate correctness, time and space complexity, and code clarity.",
            f"- {CODING_DIFFICULTY_NOTES[difficulty]}",
        ]
    )


def _hybrid_block(types: List[str]) -> str:
    sections = ", ".join(type_label(tag) for tag in types)
    return "\n".join(
        [
            "Hybrid interview structure:",
            f"- This interview combines the following sections: {sections}.",
            "- Tell the candidate about this structure in your greeting.",
            "- Cover the sections in this order and announce each transition explicitly"
            " (for example: \"Let's move on to the next section.\").",
        ]
    )

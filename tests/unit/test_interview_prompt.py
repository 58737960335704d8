import itertools

import pytest

from interview_prompt import DIFFICULTY_BLOCKS, TYPE_BLOCKS, InterviewConfig, build_system_prompt


ALL_TYPES = ["coding", "multiple-choice", "behavioral", "technical", "hr", "hiring-manager"]


def _prompt(**fields) -> str:
    return build_system_prompt(InterviewConfig(**fields))


def test_persona_and_guidelines_open_the_prompt():
    prompt = _prompt(interviewTypes=["technical"], difficulty="intermediate")
    assert prompt.startswith("You are an expert interviewer")
    guidelines = prompt.index("Guidelines:")
    assert "Greet the candidate warmly once" in prompt
    assert "one question at a time" in prompt
    assert "encouraging but realistic" in prompt
    assert guidelines < prompt.index("Difficulty: intermediate") < prompt.index("Technical section:")


@pytest.mark.parametrize("difficulty", ["beginner", "intermediate", "advanced"])
@pytest.mark.parametrize("count", [1, 2, 3])
def test_every_combination_is_fully_formed(difficulty, count):
    for types in itertools.combinations(ALL_TYPES, count):
        prompt = _prompt(interviewTypes=list(types), difficulty=difficulty)
        assert prompt.startswith("You are an expert interviewer")
        assert DIFFICULTY_BLOCKS[difficulty] in prompt
        for other in set(DIFFICULTY_BLOCKS) - {difficulty}:
            assert DIFFICULTY_BLOCKS[other] not in prompt
        for tag in types:
            block_head = "Coding section:" if tag == "coding" else TYPE_BLOCKS[tag].splitlines()[0]
            assert prompt.count(block_head) == 1
        assert ("Hybrid interview structure:" in prompt) is (count >= 2)


def test_missing_difficulty_matches_intermediate():
    unset = _prompt(interviewTypes=["coding", "behavioral"], jobDescription="Backend role")
    explicit = _prompt(interviewTypes=["coding", "behavioral"], jobDescription="Backend role", difficulty="intermediate")
    assert unset == explicit


def test_unknown_difficulty_falls_back_to_intermediate():
    assert _prompt(difficulty="expert") == _prompt(difficulty="intermediate")


def test_type_blocks_follow_selection_order():
    prompt = _prompt(interviewTypes=["hr", "coding", "behavioral"])
    assert prompt.index("HR section:") < prompt.index("Coding section:") < prompt.index("Behavioral section:")
    assert "combines the following sections: HR, Coding, Behavioral." in prompt


def test_repeated_types_count_once():
    prompt = _prompt(interviewTypes=["coding", "coding"])
    assert prompt == _prompt(interviewTypes=["coding"])
    assert prompt.count("Coding section:") == 1
    assert "Hybrid interview structure:" not in prompt


def test_coding_block_depends_on_difficulty():
    beginner = _prompt(interviewTypes=["coding"], difficulty="beginner")
    advanced = _prompt(interviewTypes=["coding"], difficulty="advanced")
    assert "walk through examples together" in beginner
    assert "dynamic programming" in advanced
    assert "time and space complexity" in beginner


def test_behavioral_mentions_star_and_multiple_choice_uses_letters():
    prompt = _prompt(interviewTypes=["behavioral", "multiple-choice"])
    assert "STAR method" in prompt
    assert "(A, B, C, D)" in prompt
    assert "briefly explain why" in prompt


def test_unknown_type_has_no_block_but_keeps_label():
    prompt = _prompt(interviewTypes=["system-design"])
    assert "Interview type: system-design" in prompt
    assert "section:" not in prompt
    assert "Hybrid interview structure:" not in prompt


def test_unknown_type_in_hybrid_uses_raw_tag():
    prompt = _prompt(interviewTypes=["coding", "pair-programming"])
    assert "Coding, pair-programming." in prompt


def test_job_description_trimmed_or_omitted():
    with_jd = _prompt(jobDescription="   Build payment APIs in Go.  \n")
    assert "Job Description:\nBuild payment APIs in Go.\n" in with_jd
    assert "Job Description:" not in _prompt(jobDescription="   ")
    assert "Job Description:" not in _prompt()


def test_duration_defaults_to_thirty_minutes():
    assert "30 minute interview" in _prompt()
    assert "60 minute interview" in _prompt(duration=60)


def test_no_types_uses_general_block():
    prompt = _prompt()
    assert "Interview type: General" in prompt
    assert "General interview:" in prompt


def test_prompt_is_deterministic():
    config = InterviewConfig(interviewTypes=["coding", "hr"], difficulty="advanced", duration=15)
    assert build_system_prompt(config) == build_system_prompt(config)

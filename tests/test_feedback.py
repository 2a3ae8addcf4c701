import asyncio

import controller.feedback.generate as generate
from controller.feedback.prompts import build_feedback_prompt, build_translation_prompt, format_flagged_words
from schemas.pronunciation import WordDetail, WordStatus


DETAILS = [
    WordDetail(word="i", status=WordStatus.correct),
    WordDetail(word="like", status=WordStatus.fair),
    WordDetail(word="coffee", status=WordStatus.incorrect),
]


def test_flagged_words_skip_correct_ones():
    assert format_flagged_words(DETAILS) == "like (fair), coffee (incorrect)"


def test_feedback_prompt_mentions_sentence_and_flagged_words():
    prompt = build_feedback_prompt("I like coffee", DETAILS, language="Vietnamese")
    assert '"I like coffee"' in prompt
    assert "coffee (incorrect)" in prompt
    assert "Vietnamese" in prompt


def test_feedback_prompt_without_flagged_words():
    prompt = build_feedback_prompt("Hi", [WordDetail(word="hi", status=WordStatus.correct)])
    assert "clearly: none" in prompt


def test_translation_prompt():
    prompt = build_translation_prompt("Good morning", "Vietnamese")
    assert prompt.endswith("Good morning")
    assert "to Vietnamese" in prompt


def test_feedback_falls_back_to_heuristic_when_openai_fails(monkeypatch):
    async def failing_completion(*args, **kwargs):
        raise RuntimeError("no network")

    monkeypatch.setattr(generate, "_chat_completion", failing_completion)
    result = asyncio.run(generate.generate_speech_feedback("I like coffee", DETAILS))

    assert result.provider == "heuristic"
    assert result.practice_words == ["like", "coffee"]
    assert "coffee" in result.feedback


def test_feedback_uses_model_reply(monkeypatch):
    async def fake_completion(system_prompt, user_prompt, model_name, label):
        assert "coffee (incorrect)" in user_prompt
        return "- Stress the first syllable of coffee."

    monkeypatch.setenv("OPENAI_FEEDBACK_MODEL", "test-model")
    monkeypatch.setattr(generate, "_chat_completion", fake_completion)
    result = asyncio.run(generate.generate_speech_feedback("I like coffee", DETAILS))

    assert result.provider == "test-model"
    assert result.feedback == "- Stress the first syllable of coffee."
    assert result.practice_words == ["like", "coffee"]


def test_heuristic_feedback_for_clean_reading():
    result = generate.heuristic_feedback([WordDetail(word="hi", status=WordStatus.correct)])
    assert result.practice_words is None
    assert result.feedback.startswith("Great job")


def test_translate_blank_text_skips_the_model(monkeypatch):
    async def unexpected(*args, **kwargs):
        raise AssertionError("model should not be called")

    monkeypatch.setattr(generate, "_chat_completion", unexpected)
    assert asyncio.run(generate.translate_text("   ")) == ""


def test_translate_reports_errors_inline(monkeypatch):
    async def failing_completion(*args, **kwargs):
        raise RuntimeError("quota exceeded")

    monkeypatch.setattr(generate, "_chat_completion", failing_completion)
    result = asyncio.run(generate.translate_text("Good morning"))
    assert result == "AI Error: quota exceeded"

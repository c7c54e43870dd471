"""Tests for the tutor prompts."""

from math_mentor import prompts


def test_hint_instruction_withholds_answer():
    assert "Do not give the full solution or the answer" in prompts.HINT_INSTRUCTION


def test_analysis_instruction_asks_for_structure():
    text = prompts.ANALYSIS_INSTRUCTION
    assert "1." in text and "2." in text and "3." in text
    assert "WHY" in text
    assert "Markdown" in text


def test_fallbacks_are_operation_specific():
    strings = {
        prompts.HINT_EMPTY_FALLBACK,
        prompts.HINT_ERROR_MESSAGE,
        prompts.ANALYSIS_EMPTY_FALLBACK,
        prompts.ANALYSIS_ERROR_MESSAGE,
    }
    assert len(strings) == 4

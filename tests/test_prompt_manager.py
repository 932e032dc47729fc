import pytest

from utility.prompt_manager import EmailPromptBuilder
from utility.response_parser import ExtractionOutcome, parse_model_response


def test_instruction_is_interpolated_verbatim():
    text = "  मेरे बॉस को लिखो कि मैं कल देर से आऊँगा।  "

    prompt = EmailPromptBuilder.build_email_prompt(text)

    assert prompt.endswith(f"Hindi Instruction:\n{text}")


def test_prompt_contains_format_contract():
    prompt = EmailPromptBuilder.build_email_prompt("नमस्ते", include_example=False)

    for tag in ("ENGLISH_EMAIL_START", "ENGLISH_EMAIL_END", "MAPPING_START", "MAPPING_END"):
        assert f"{tag}\n" in prompt
    assert "->" in prompt
    assert "professional email" in prompt


def test_example_toggle():
    with_example = EmailPromptBuilder.build_email_prompt("नमस्ते")
    without_example = EmailPromptBuilder.build_email_prompt("नमस्ते", include_example=False)

    assert "Example:" in with_example
    assert EmailPromptBuilder.EXAMPLE_INSTRUCTION in with_example
    assert "Example:" not in without_example
    assert len(with_example) > len(without_example)


def test_prompt_is_deterministic():
    assert EmailPromptBuilder.build_email_prompt("नमस्ते") == EmailPromptBuilder.build_email_prompt("नमस्ते")


def test_worked_example_follows_its_own_contract():
    prompt = EmailPromptBuilder.build_email_prompt("नमस्ते")
    example = prompt.split("Output:\n", 1)[1]

    result = parse_model_response(example)

    assert result.outcome is ExtractionOutcome.BOTH
    assert result.english_email == EmailPromptBuilder.EXAMPLE_EMAIL
    assert result.mapping == EmailPromptBuilder.EXAMPLE_MAPPING


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_empty_instruction_is_rejected(text):
    with pytest.raises(ValueError):
        EmailPromptBuilder.build_email_prompt(text)

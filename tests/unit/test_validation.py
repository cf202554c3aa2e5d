# tests/unit/test_validation.py

import pytest

from groq_kit.errors import GroqValidationError
from groq_kit.models import ChatCompletionRequest, Message, Role
from groq_kit.validation import validate_request


def _request(**overrides) -> ChatCompletionRequest:
    fields = {
        "model": "llama-3.1-8b-instant",
        "messages": [Message(role=Role.USER, content="Hello")],
    }
    fields.update(overrides)
    return ChatCompletionRequest(**fields)


class TestValidateRequest:
    def test_valid_request_passes(self) -> None:
        validate_request(
            _request(
                temperature=0.7,
                top_p=0.9,
                max_tokens=100,
                stop=["\n"],
                presence_penalty=0.5,
                frequency_penalty=-0.5,
                n=1,
            )
        )

    @pytest.mark.parametrize(
        "field, value",
        [("temperature", 0), ("temperature", 2), ("top_p", 0), ("top_p", 1)],
    )
    def test_bounds_are_inclusive(self, field: str, value: float) -> None:
        validate_request(_request(**{field: value}))

    def test_empty_messages(self) -> None:
        with pytest.raises(GroqValidationError, match="Messages cannot be empty") as exc:
            validate_request(_request(messages=[]))
        assert exc.value.field == "messages"

    @pytest.mark.parametrize("role", ["tool", "developer", ""])
    def test_unknown_role(self, role: str) -> None:
        message = Message(role=role, content="Hi")  # type: ignore[arg-type]

        with pytest.raises(GroqValidationError, match="Invalid message role") as exc:
            validate_request(_request(messages=[message]))
        assert exc.value.field == "messages"

    def test_plain_string_role_accepted(self) -> None:
        validate_request(_request(messages=[Message(role="user", content="Hi")]))  # type: ignore[arg-type]


    @pytest.mark.parametrize("temperature", [-0.1, 2.01, 5])
    def test_temperature_out_of_range(self, temperature: float) -> None:
        with pytest.raises(GroqValidationError, match="Temperature"):
            validate_request(_request(temperature=temperature))

    @pytest.mark.parametrize("top_p", [-0.01, 1.5])
    def test_top_p_out_of_range(self, top_p: float) -> None:
        with pytest.raises(GroqValidationError, match="Top P"):
            validate_request(_request(top_p=top_p))

    @pytest.mark.parametrize("max_tokens", [0, -1])
    def test_max_tokens_must_be_positive(self, max_tokens: int) -> None:
        with pytest.raises(GroqValidationError, match="Max tokens must be positive"):
            validate_request(_request(max_tokens=max_tokens))

    def test_blank_model(self) -> None:
        with pytest.raises(GroqValidationError) as exc:
            validate_request(_request(model=" "))
        assert exc.value.field == "model"

    def test_completion_count_must_be_positive(self) -> None:
        with pytest.raises(GroqValidationError) as exc:
            validate_request(_request(n=0))
        assert exc.value.field == "n"

    @pytest.mark.parametrize("field", ["presence_penalty", "frequency_penalty"])
    def test_penalties_out_of_range(self, field: str) -> None:
        with pytest.raises(GroqValidationError) as exc:
            validate_request(_request(**{field: 2.5}))
        assert exc.value.field == field

    def test_empty_stop_sequence(self) -> None:
        with pytest.raises(GroqValidationError) as exc:
            validate_request(_request(stop=["END", ""]))
        assert exc.value.field == "stop"

from responses_proxy.schemas import ResponsesRequest
from responses_proxy.transformer import ResponsesTransformer


def transform(body: dict) -> dict:
    request = ResponsesRequest.model_validate(body)
    return ResponsesTransformer().transform_request(request).to_payload()


def test_basic_request_with_instructions_and_input():
    result = transform({
        "model": "gpt-4",
        "instructions": "You are a helpful assistant.",
        "input": [{"role": "user", "content": "Hello!"}],
    })

    assert result == {
        "model": "gpt-4",
        "messages": [
            {"role": "system", "content": "You are a helpful assistant."},
            {"role": "user", "content": "Hello!"},
        ],
        "temperature": 0.7,
        "max_tokens": -1,
        "stream": False,
    }


def test_stream_defaults_to_false():
    assert transform({"model": "gpt-4"})["stream"] is False


def test_streaming_flag_is_copied():
    result = transform({
        "model": "gpt-4",
        "stream": True,
        "input": [{"role": "user", "content": "Stream this!"}],
    })

    assert result["stream"] is True
    assert {"role": "user", "content": "Stream this!"} in result["messages"]


def test_tools_and_parallel_tool_calls_are_copied():
    tools = [{"type": "function", "function": {"name": "test"}}]

    result = transform({"model": "gpt-4", "tools": tools, "parallel_tool_calls": True})

    assert result["tools"] == tools
    assert result["parallel_tool_calls"] is True


def test_empty_tools_are_not_copied():
    result = transform({"model": "gpt-4", "tools": []})

    assert "tools" not in result
    assert "parallel_tool_calls" not in result


def test_falsy_overrides_are_preserved():
    result = transform({
        "model": "gpt-4",
        "temperature": 0,
        "max_tokens": 0,
        "parallel_tool_calls": False,
    })

    assert result["temperature"] == 0
    assert result["max_tokens"] == 0
    assert result["parallel_tool_calls"] is False


def test_complex_content_is_normalised():
    result = transform({
        "model": "gpt-4",
        "input": [{"role": "user", "content": [{"type": "input_text", "text": "Test"}]}],
    })

    assert result["messages"] == [{"role": "user", "content": [{"type": "text", "text": "Test"}]}]


def test_text_field_is_used_when_content_is_missing():
    result = transform({"model": "gpt-4", "input": [{"role": "user", "text": "from text"}]})

    assert result["messages"] == [{"role": "user", "content": "from text"}]


def test_items_without_role_or_content_are_skipped_in_order():
    result = transform({
        "model": "gpt-4",
        "input": [
            {"role": "user", "content": "one"},
            {"content": "no role"},
            {"role": "assistant"},
            {"role": "user", "content": ""},
            "not an item",
            {"role": "assistant", "content": "two"},
        ],
    })

    assert result["messages"] == [
        {"role": "user", "content": "one"},
        {"role": "assistant", "content": "two"},
    ]


def test_non_list_input_and_empty_instructions_produce_no_messages():
    result = transform({"model": "gpt-4", "instructions": "", "input": "just a string"})

    assert result["messages"] == []


def test_unknown_fields_are_not_forwarded():
    result = transform({"model": "gpt-4", "store": True, "metadata": {"a": "b"}})

    assert "store" not in result
    assert "metadata" not in result


def test_missing_model_is_left_out():
    assert "model" not in transform({"input": []})


def test_non_string_instructions_become_system_message_verbatim():
    result = transform({"model": "gpt-4", "instructions": ["be brief", "be kind"]})

    assert result["messages"] == [{"role": "system", "content": ["be brief", "be kind"]}]


def test_non_integer_max_tokens_is_copied_verbatim():
    assert transform({"model": "gpt-4", "max_tokens": 1.5})["max_tokens"] == 1.5
    assert transform({"model": "gpt-4", "max_tokens": "lots"})["max_tokens"] == "lots"


def test_non_list_tools_are_dropped():
    result = transform({"model": "gpt-4", "tools": {"type": "function"}})

    assert "tools" not in result


def test_string_temperature_is_copied_unchanged():
    assert transform({"model": "gpt-4", "temperature": "0.3"})["temperature"] == "0.3"
    assert transform({"model": "gpt-4", "temperature": "hot"})["temperature"] == "hot"


def test_null_override_is_copied():
    assert transform({"model": "gpt-4", "temperature": None})["temperature"] is None


def test_stream_uses_truthiness():
    assert transform({"model": "gpt-4", "stream": 1})["stream"] is True
    assert transform({"model": "gpt-4", "stream": ""})["stream"] is False


def test_non_string_role_is_skipped():
    result = transform({
        "model": "gpt-4",
        "input": [{"role": 1, "content": "numeric role"}, {"role": "user", "content": "kept"}],
    })

    assert result["messages"] == [{"role": "user", "content": "kept"}]

import pytest

from ragassist.adapters import (
    ApiAdapter,
    ChatApiAdapter,
    GenerateApiAdapter,
    select_adapter,
)


def test_base_adapter_is_abstract():
    with pytest.raises(TypeError):
        ApiAdapter()


def test_endpoints():
    assert ChatApiAdapter().endpoint == "/api/chat"
    assert GenerateApiAdapter().endpoint == "/api/generate"


def test_chat_request_body():
    body = ChatApiAdapter().create_request_body("llama-chat", "why?", False)
    assert body == {
        "model": "llama-chat",
        "stream": False,
        "messages": [{"role": "user", "content": "why?"}],
    }


def test_generate_request_body():
    body = GenerateApiAdapter().create_request_body("deepseek-coder-v2:latest", "hi", True)
    assert body == {"model": "deepseek-coder-v2:latest", "prompt": "hi", "stream": True}


def test_chat_parse_reads_message_content():
    data = {"message": {"role": "assistant", "content": "reply"}, "response": "other"}
    assert ChatApiAdapter().parse_response_body(data) == "reply"


def test_chat_parse_without_message_is_empty():
    assert ChatApiAdapter().parse_response_body({"response": "x"}) == ""
    assert ChatApiAdapter().parse_response_body(None) == ""


def test_generate_parse_reads_response():
    data = {"response": "reply", "message": {"content": "other"}}
    assert GenerateApiAdapter().parse_response_body(data) == "reply"


def test_generate_parse_without_response_is_empty():
    assert GenerateApiAdapter().parse_response_body({}) == ""
    assert GenerateApiAdapter().parse_response_body(None) == ""


@pytest.mark.parametrize(
    "model_name, expected",
    [
        ("codellama-instruct", ChatApiAdapter),
        ("mistral-chat:7b", ChatApiAdapter),
        ("deepseek-coder-v2:latest", GenerateApiAdapter),
        ("", GenerateApiAdapter),
        ("chat", GenerateApiAdapter),
    ],
)
def test_select_adapter(model_name, expected):
    assert type(select_adapter(model_name)) is expected


def test_selected_adapter_round_trips_prompt():
    adapter = select_adapter("x-instruct")
    body = adapter.create_request_body("x-instruct", "question", False)
    echoed = {"message": {"content": body["messages"][0]["content"]}}
    assert adapter.parse_response_body(echoed) == "question"
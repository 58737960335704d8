from llm_gateway import AnthropicAdapter, HuggingFaceAdapter, OllamaAdapter, OpenAIAdapter

from conftest import make_settings


CONVERSATION = [
    {"role": "user", "content": "Hello"},
    {"role": "assistant", "content": "Hi! Tell me about yourself."},
    {"role": "user", "content": "I build APIs."},
]


def test_openai_request_prepends_system_message():
    adapter = OpenAIAdapter(make_settings(OPENAI_API_KEY="sk-test", OPENAI_MODEL="gpt-test"))
    request = adapter.build_request(CONVERSATION, "SYSTEM")
    assert request.url == "https://api.openai.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert request.payload["model"] == "gpt-test"
    assert request.payload["stream"] is True
    assert request.payload["max_tokens"] == 1024
    assert request.payload["messages"][0] == {"role": "system", "content": "SYSTEM"}
    assert request.payload["messages"][1:] == CONVERSATION


def test_caller_history_is_not_mutated():
    history = [dict(message) for message in CONVERSATION]
    OpenAIAdapter(make_settings(OPENAI_API_KEY="k")).build_request(history, "SYSTEM")
    assert history == CONVERSATION


def test_anthropic_request_uses_separate_system_field():
    adapter = AnthropicAdapter(make_settings(ANTHROPIC_API_KEY="ak"))
    request = adapter.build_request([{"role": "system", "content": "extra"}, *CONVERSATION], "SYSTEM")
    assert request.headers["x-api-key"] == "ak"
    assert request.headers["anthropic-version"] == "2023-06-01"
    assert request.payload["system"] == "SYSTEM"
    assert request.payload["stream"] is True
    assert [message["role"] for message in request.payload["messages"]] == ["user", "user", "assistant", "user"]


def test_ollama_request_flattens_conversation_with_role_labels():
    adapter = OllamaAdapter(make_settings(OLLAMA_API_KEY="ok"))
    request = adapter.build_request(CONVERSATION, "SYSTEM")
    assert request.url == "http://localhost:11434/v1/completions"
    assert request.headers["Authorization"] == "Bearer ok"
    assert request.payload["stream"] is True
    assert request.payload["prompt"] == (
        "System: SYSTEM\n"
        "User: Hello\n"
        "Assistant: Hi! Tell me about yourself.\n"
        "User: I build APIs."
    )


def test_ollama_without_key_sends_no_authorization():
    request = OllamaAdapter(make_settings()).build_request(CONVERSATION, "SYSTEM")
    assert "Authorization" not in request.headers


def test_ollama_accepts_native_generate_lines():
    adapter = OllamaAdapter(make_settings())
    assert adapter.decode_line('{"model": "llama3", "response": "Hi", "done": false}') == "Hi"
    assert adapter.decode_line('data: {"choices": [{"text": "Yo"}]}') == "Yo"
    assert adapter.is_terminal("data: [DONE]")


def test_huggingface_request_wraps_instructions():
    adapter = HuggingFaceAdapter(make_settings(HUGGINGFACE_API_KEY="hf", HUGGINGFACE_MODEL="org/model"))
    request = adapter.build_request(CONVERSATION, "SYSTEM")
    assert request.url == "https://router.huggingface.co/hf-inference/models/org/model"
    assert request.payload["inputs"] == (
        "<s>[INST] SYSTEM\n\n"
        "[INST] Hello [/INST] Hi! Tell me about yourself.</s><s>"
        "[INST] I build APIs. [/INST]"
    )
    assert request.payload["parameters"] == {
        "max_new_tokens": 1024,
        "temperature": 0.7,
        "return_full_text": False,
    }
    assert adapter.streaming is False


def test_huggingface_decodes_object_or_list():
    adapter = HuggingFaceAdapter(make_settings())
    assert adapter.decode_body({"generated_text": "one"}) == "one"
    assert adapter.decode_body([{"generated_text": "two"}]) == "two"
    assert adapter.decode_body([]) is None


def test_completion_requests_are_not_streamed():
    settings = make_settings()
    openai = OpenAIAdapter(settings).build_completion_request("PROMPT", 2048)
    assert "stream" not in openai.payload
    assert openai.payload["messages"] == [{"role": "user", "content": "PROMPT"}]
    anthropic = AnthropicAdapter(settings).build_completion_request("PROMPT", 2048)
    assert "system" not in anthropic.payload and anthropic.payload["max_tokens"] == 2048
    hf = HuggingFaceAdapter(settings).build_completion_request("PROMPT", 2048)
    assert hf.payload["inputs"] == "<s>[INST] PROMPT [/INST]"
    assert OllamaAdapter(settings).build_completion_request("PROMPT", 2048).payload["stream"] is False


def test_non_streaming_bodies_decode():
    settings = make_settings()
    assert OpenAIAdapter(settings).decode_body({"choices": [{"message": {"content": "a"}}]}) == "a"
    assert AnthropicAdapter(settings).decode_body({"content": [{"type": "text", "text": "b"}]}) == "b"
    assert OllamaAdapter(settings).decode_body({"choices": [{"text": "c"}]}) == "c"
    assert OpenAIAdapter(settings).decode_body({"choices": []}) is None

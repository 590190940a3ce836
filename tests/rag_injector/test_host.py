from rag_injector.host import (
    ChatRequest,
    HostContext,
    build_scan_data,
    content_strings,
    convert_transcript,
)


def test_convert_transcript_maps_roles_and_names():
    entries = [
        {"mes": "Rules", "is_system": True},
        {"mes": "Hello", "is_user": True, "name": "Alex"},
        {"mes": "Hi!", "name": "Seraphina", "extra": {"thought_signatures": ["sig"]}},
        {"mes": None},
    ]

    assert convert_transcript(entries) == [
        {"role": "system", "content": "Rules"},
        {"role": "user", "content": "Hello", "name": "Alex"},
        {"role": "assistant", "content": "Hi!", "name": "Seraphina", "thought_signatures": ["sig"]},
        {"role": "assistant", "content": ""},
    ]


def test_convert_transcript_handles_missing_chat():
    assert convert_transcript(None) == []
    assert HostContext().history() == []


def test_content_strings_flattens_parts():
    messages = [
        {"role": "user", "content": "plain"},
        {"role": "user", "content": [{"type": "text", "text": "a"}, {"type": "image_url"}, "raw"]},
        {"role": "assistant", "content": None},
    ]
    assert content_strings(messages) == ["plain", "a\n\n", ""]


def test_build_scan_data_adds_aliases():
    data = build_scan_data(
        {"persona": "P", "description": "D", "personality": "Q", "char_depth_prompt": "Z"}
    )
    assert data["persona_description"] == "P"
    assert data["character_description"] == "D"
    assert data["character_personality"] == "Q"
    assert data["character_depth_prompt"] == "Z"
    assert data["trigger"] == "normal"
    assert data["persona"] == "P"


def test_can_scan_lore_requires_both_collaborators():
    async def lookup(*args):
        return {}

    assert not HostContext(lookup=lookup).can_scan_lore()
    assert HostContext(lookup=lookup, card_fields=dict).can_scan_lore()


def test_chat_request_defaults():
    request = ChatRequest()
    assert request.messages == []
    assert request.tools is None
    assert request.tool_choice is None

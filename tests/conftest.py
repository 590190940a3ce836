import os, sys
from pathlib import Path
import types

import pytest

# Add src/ to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

# The OpenAI client is created lazily, but keep a key around for it
os.environ.setdefault("OPENAI_API_KEY", "test-openai")


@pytest.fixture
def config(monkeypatch):
    """
    Enable the injector with a retrieval profile and neutral options.

    Tests tweak further options with ``monkeypatch.setattr`` on the returned
    ``core``/``retrieval``/``injection`` objects; everything is restored after.
    """
    from rag_injector.config import core, injection, retrieval

    defaults = {
        core: {
            "ENABLED": True,
            "RAG_PROFILE_ID": "rag-model",
            "FILTER_BY_PROFILE": False,
            "FILTER_PROFILE_ID": "",
            "SYSTEM_PROMPT_ADDITION": "",
            "REPROCESS_LORE": False,
            "DEFAULT_MAX_CONTEXT": 4096,
            "DEBUG_MODE": False,
        },
        retrieval: {
            "DATASTORE_ID": "",
            "TOOL_NAME": "search_knowledge_base",
            "TOOL_DESCRIPTION": "Search the knowledge base",
            "USE_NATIVE_RETRIEVAL": False,
            "PROVIDER": "vertexAiSearch",
            "CUSTOM_RETRIEVAL_JSON": "",
            "TOOL_CHOICE": "auto",
            "MAX_RESULTS": 5,
            "MAX_TOKENS": 1000,
            "SYSTEM_PROMPT": "You retrieve context.",
            "USER_PROMPT_TEMPLATE": "Find context for: {{lastMessage}}",
            "MAIN_MODEL_TOOLS": False,
            "MAIN_MODEL_TOOL_CHOICE": "auto",
        },
        injection: {
            "TEMPLATE": "[Retrieved Context]\n{{ragResponse}}\n[End Context]",
            "ROLE": "assistant",
            "POSITION": "depth",
            "DEPTH": -1,
            "MERGE": False,
        },
    }
    for target, values in defaults.items():
        for name, value in values.items():
            monkeypatch.setattr(target, name, value)

    return types.SimpleNamespace(core=core, retrieval=retrieval, injection=injection)

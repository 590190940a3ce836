import pytest

from rag_injector.config.core import Core
from rag_injector.config.injection import Injection
from rag_injector.config.loader import load_raw_config
from rag_injector.config.retrieval import Retrieval
from rag_injector.injection import InjectionSpec


def test_load_raw_config_missing_file(tmp_path):
    assert load_raw_config(tmp_path / "nope.toml") == {}


def test_load_raw_config_reads_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        '[raginjector]\nenabled = true\nrag_profile_id = "m"\n'
        '[raginjector.injection]\nrole = "user"\nposition = "start"\ndepth = -3\nmerge = true\n',
        encoding="utf-8",
    )
    raw = load_raw_config(path)

    core = Core(raw)
    assert core.ENABLED is True
    assert core.RAG_PROFILE_ID == "m"

    injection = Injection(raw)
    assert injection.spec() == InjectionSpec(role="user", position="start", depth=-3, merge=True)


def test_defaults_without_config(monkeypatch):
    for name in ("RAG_ENABLED", "RAG_TOOL_CHOICE", "RAG_INJECTION_DEPTH", "RAG_MAX_TOKENS"):
        monkeypatch.delenv(name, raising=False)

    assert Core({}).ENABLED is False
    retrieval = Retrieval({})
    assert retrieval.TOOL_CHOICE == "auto"
    assert retrieval.MAX_TOKENS == 1000
    assert "{{lastMessage}}" in retrieval.USER_PROMPT_TEMPLATE
    assert Injection({}).DEPTH == -1


def test_environment_fallback(monkeypatch):
    monkeypatch.setenv("RAG_TOOL_CHOICE", "required")
    monkeypatch.setenv("RAG_MAIN_MODEL_TOOLS", "yes")
    retrieval = Retrieval({})
    assert retrieval.TOOL_CHOICE == "required"
    assert retrieval.MAIN_MODEL_TOOLS is True


@pytest.mark.parametrize(
    "raw",
    [
        {"raginjector": {"injection": {"role": "narrator"}}},
        {"raginjector": {"injection": {"position": "middle"}}},
    ],
)
def test_invalid_injection_enumerations_raise(raw):
    with pytest.raises(ValueError):
        Injection(raw)


def test_invalid_retrieval_enumerations_raise():
    with pytest.raises(ValueError):
        Retrieval({"raginjector": {"retrieval": {"provider": "bing"}}})
    with pytest.raises(ValueError):
        Retrieval({"raginjector": {"retrieval": {"tool_choice": "always"}}})

import pytest

from rag_injector.host import HostContext
from rag_injector.pipeline.guards import check_guards
from rag_injector.pipeline.lock import SingleFlightLock


def test_guards_pass_with_enabled_config(config):
    assert check_guards(HostContext(), SingleFlightLock()) is None


def test_disabled(config, monkeypatch):
    monkeypatch.setattr(config.core, "ENABLED", False)
    assert check_guards(HostContext(), SingleFlightLock()) == "Extension disabled"


def test_lock_held(config):
    lock = SingleFlightLock()
    with lock.acquire():
        assert check_guards(HostContext(), lock) == "Already processing RAG"


def test_no_profile(config, monkeypatch):
    monkeypatch.setattr(config.core, "RAG_PROFILE_ID", "")
    assert check_guards(HostContext(), SingleFlightLock()) == "No RAG profile selected"


def test_profile_filter(config, monkeypatch):
    monkeypatch.setattr(config.core, "FILTER_BY_PROFILE", True)
    monkeypatch.setattr(config.core, "FILTER_PROFILE_ID", "main-profile")

    assert check_guards(HostContext(selected_profile="other"), SingleFlightLock()) == "Profile filter mismatch"
    assert check_guards(HostContext(selected_profile="main-profile"), SingleFlightLock()) is None


def test_profile_filter_without_id_is_ignored(config, monkeypatch):
    monkeypatch.setattr(config.core, "FILTER_BY_PROFILE", True)
    assert check_guards(HostContext(selected_profile="other"), SingleFlightLock()) is None


def test_native_retrieval_without_datastore(config, monkeypatch):
    monkeypatch.setattr(config.retrieval, "USE_NATIVE_RETRIEVAL", True)
    assert check_guards(HostContext(), SingleFlightLock()) == (
        "No datastore ID configured for native retrieval"
    )


def test_lock_acquire_and_release():
    lock = SingleFlightLock()
    with lock.acquire() as acquired:
        assert acquired is True
        assert lock.held
        with lock.acquire() as nested:
            assert nested is False
        assert lock.held
    assert not lock.held


def test_lock_released_on_error():
    lock = SingleFlightLock()
    with pytest.raises(RuntimeError):
        with lock.acquire():
            raise RuntimeError("boom")
    assert not lock.held

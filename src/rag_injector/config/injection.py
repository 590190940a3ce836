import os

from rag_injector.injection.planner import POSITIONS, ROLES, InjectionSpec

from .loader import as_bool, as_choice, section

DEFAULT_TEMPLATE = "[Retrieved Context]\n{{ragResponse}}\n[End Context]"


class Injection:
    def __init__(self, config: dict | None = None) -> None:
        cfg = section(config, "injection")

        self.TEMPLATE: str = str(cfg.get("template", os.getenv("RAG_INJECTION_TEMPLATE", DEFAULT_TEMPLATE)))
        self.ROLE: str = as_choice(
            cfg.get("role", os.getenv("RAG_INJECTION_ROLE", "assistant")),
            ROLES,
            "injection.role",
        )
        self.POSITION: str = as_choice(
            cfg.get("position", os.getenv("RAG_INJECTION_POSITION", "depth")),
            POSITIONS,
            "injection.position",
        )
        # 0 = end of chat, -1 = before the last message, and so on.
        self.DEPTH: int = int(cfg.get("depth", os.getenv("RAG_INJECTION_DEPTH", "-1")))
        self.MERGE: bool = as_bool(cfg.get("merge", os.getenv("RAG_INJECTION_MERGE", "0")))

    def spec(self) -> InjectionSpec:
        """Snapshot the placement options as an :class:`InjectionSpec`."""

        return InjectionSpec(
            role=self.ROLE,  # type: ignore[arg-type]
            position=self.POSITION,  # type: ignore[arg-type]
            depth=self.DEPTH,
            merge=self.MERGE,
        )

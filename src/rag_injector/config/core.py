import os

from .loader import as_bool, section


class Core:
    def __init__(self, config: dict | None = None) -> None:
        cfg = section(config)
        filter_cfg = cfg.get("filter", {})

        openai_env = str(cfg.get("openai_key_env", "OPENAI_API_KEY"))
        self.OPENAI_API_KEY: str | None = os.getenv(openai_env)

        self.ENABLED: bool = as_bool(cfg.get("enabled", os.getenv("RAG_ENABLED", "0")))

        # Connection profile (model id for the bundled OpenAI client) used for retrieval.
        self.RAG_PROFILE_ID: str = str(cfg.get("rag_profile_id", os.getenv("RAG_PROFILE_ID", "")))

        self.FILTER_BY_PROFILE: bool = as_bool(
            filter_cfg.get("by_profile", os.getenv("RAG_FILTER_BY_PROFILE", "0"))
        )
        self.FILTER_PROFILE_ID: str = str(
            filter_cfg.get("profile_id", os.getenv("RAG_FILTER_PROFILE_ID", ""))
        )

        self.SYSTEM_PROMPT_ADDITION: str = str(
            cfg.get("system_prompt_addition", os.getenv("RAG_SYSTEM_PROMPT_ADDITION", ""))
        )
        self.REPROCESS_LORE: bool = as_bool(
            cfg.get("reprocess_lore", os.getenv("RAG_REPROCESS_LORE", "0"))
        )
        self.DEFAULT_MAX_CONTEXT: int = int(
            cfg.get("default_max_context", os.getenv("RAG_DEFAULT_MAX_CONTEXT", "4096"))
        )
        self.DEBUG_MODE: bool = as_bool(cfg.get("debug_mode", os.getenv("RAG_DEBUG_MODE", "0")))

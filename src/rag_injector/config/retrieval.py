import os
from typing import Literal

from .loader import as_bool, as_choice, section

Provider = Literal["vertexAiSearch", "googleSearch", "custom"]
ToolChoice = Literal["auto", "required", "none"]

PROVIDERS: tuple[str, ...] = ("vertexAiSearch", "googleSearch", "custom")
TOOL_CHOICES: tuple[str, ...] = ("auto", "required", "none")

DEFAULT_SYSTEM_PROMPT = (
    "You are a context retrieval assistant. Use the available tools to search for "
    "and retrieve relevant information based on the conversation."
)
DEFAULT_USER_PROMPT_TEMPLATE = "Find relevant context for this conversation:\n\n{{lastMessage}}"


class Retrieval:
    def __init__(self, config: dict | None = None) -> None:
        cfg = section(config, "retrieval")
        main_cfg = cfg.get("main_model", {})

        self.DATASTORE_ID: str = str(cfg.get("datastore_id", os.getenv("RAG_DATASTORE_ID", "")))

        self.TOOL_NAME: str = str(
            cfg.get("tool_name", os.getenv("RAG_TOOL_NAME", "search_knowledge_base"))
        )
        self.TOOL_DESCRIPTION: str = str(
            cfg.get(
                "tool_description",
                os.getenv(
                    "RAG_TOOL_DESCRIPTION",
                    "Search the knowledge base for relevant information based on a query",
                ),
            )
        )

        self.USE_NATIVE_RETRIEVAL: bool = as_bool(
            cfg.get("use_native_retrieval", os.getenv("RAG_USE_NATIVE_RETRIEVAL", "0"))
        )
        self.PROVIDER: Provider = as_choice(  # type: ignore[assignment]
            cfg.get("provider", os.getenv("RAG_RETRIEVAL_PROVIDER", "vertexAiSearch")),
            PROVIDERS,
            "retrieval.provider",
        )
        self.CUSTOM_RETRIEVAL_JSON: str = str(
            cfg.get("custom_retrieval_json", os.getenv("RAG_CUSTOM_RETRIEVAL_JSON", ""))
        )

        self.TOOL_CHOICE: ToolChoice = as_choice(  # type: ignore[assignment]
            cfg.get("tool_choice", os.getenv("RAG_TOOL_CHOICE", "auto")),
            TOOL_CHOICES,
            "retrieval.tool_choice",
        )
        self.MAX_RESULTS: int = int(cfg.get("max_results", os.getenv("RAG_MAX_RESULTS", "5")))
        self.MAX_TOKENS: int = int(cfg.get("max_tokens", os.getenv("RAG_MAX_TOKENS", "1000")))

        self.SYSTEM_PROMPT: str = str(
            cfg.get("system_prompt", os.getenv("RAG_SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT))
        )
        self.USER_PROMPT_TEMPLATE: str = str(
            cfg.get(
                "user_prompt_template",
                os.getenv("RAG_USER_PROMPT_TEMPLATE", DEFAULT_USER_PROMPT_TEMPLATE),
            )
        )

        # Grant the retrieval tool to the outer (main model) request as well.
        self.MAIN_MODEL_TOOLS: bool = as_bool(
            main_cfg.get("enable_tools", os.getenv("RAG_MAIN_MODEL_TOOLS", "0"))
        )
        self.MAIN_MODEL_TOOL_CHOICE: ToolChoice = as_choice(  # type: ignore[assignment]
            main_cfg.get("tool_choice", os.getenv("RAG_MAIN_MODEL_TOOL_CHOICE", "auto")),
            TOOL_CHOICES,
            "retrieval.main_model.tool_choice",
        )

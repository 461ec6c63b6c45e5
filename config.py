# config.py
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from exceptions import ConfigurationError

ENV_VARS = {
    "mongodb_uri": "MONGODB_URI",
    "database_name": "DATABASE_NAME",
    "table_name": "TABLE_NAME",
    "llm_model": "LLM_MODEL",
    "llm_api_key_secret": "LLM_API_KEY_SECRET",
    "log_level": "LOG_LEVEL",
}


class Settings(BaseModel):
    # only handlers that touch the store need a connection string
    mongodb_uri: Optional[str] = None
    database_name: str = "chat_api"
    table_name: str = "chats"
    llm_model: str = "llama-3.1-8b-instant"
    llm_api_key_secret: str = "env:GROQ_API_KEY"
    log_level: str = "INFO"

    @property
    def chats_collection(self) -> str:
        return self.table_name

    @property
    def messages_collection(self) -> str:
        return f"{self.table_name}_messages"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the process environment (or an explicit mapping).

        Called once at startup; handlers get the result by reference.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        return cls(**{
            field: environ[var]
            for field, var in ENV_VARS.items()
            if environ.get(var)
        })


def resolve_secret(reference: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Resolve a secret reference to its value.

    Supported forms:
        env:NAME      value of environment variable NAME
        file:/path    contents of a mounted secret file (trailing newline stripped)
    """
    scheme, _, target = reference.partition(":")
    if not target:
        raise ConfigurationError(f"Malformed secret reference '{reference}'")

    if scheme == "env":
        environ = os.environ if environ is None else environ
        value = environ.get(target)
        if not value:
            raise ConfigurationError(f"Secret variable {target} is not set")
        return value

    if scheme == "file":
        path = Path(target)
        if not path.is_file():
            raise ConfigurationError(f"Secret file {target} not found")
        return path.read_text(encoding="utf-8").strip()

    raise ConfigurationError(f"Unsupported secret scheme '{scheme}'")

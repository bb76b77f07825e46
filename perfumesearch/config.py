import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_INDEX_NAME = "perfumes"
REQUIRED_VARS = ("OPENAI_API_KEY", "PINECONE_API_KEY")


@dataclass(frozen=True)
class Settings:
    openai_api_key: str
    pinecone_api_key: str
    index_name: str = DEFAULT_INDEX_NAME

    def __repr__(self) -> str:
        # Keep keys out of logs and tracebacks.
        return f"Settings(index_name={self.index_name!r})"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Resolve provider credentials once at startup.

    Reads OPENAI_API_KEY and PINECONE_API_KEY (both required) and the optional
    PINECONE_INDEX_NAME override. When ``environ`` is omitted, a local .env is
    honored before reading os.environ.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ
    missing = [name for name in REQUIRED_VARS if not environ.get(name)]
    if missing:
        raise ConfigError(f"Missing required environment variable(s): {', '.join(missing)}")
    return Settings(
        openai_api_key=environ["OPENAI_API_KEY"],
        pinecone_api_key=environ["PINECONE_API_KEY"],
        index_name=environ.get("PINECONE_INDEX_NAME") or DEFAULT_INDEX_NAME,
    )


__all__ = ["DEFAULT_INDEX_NAME", "Settings", "load_settings"]

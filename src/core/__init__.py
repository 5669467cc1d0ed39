"""Core module for Text2Deck: splitting, data model and batch planning."""

from core.config import (
    CONFIG_FILE,
    PROJECT_ROOT,
    OAuthConfig,
    get_api_host,
    get_api_port,
    get_oauth_config,
)
from core.slide_plan import build_plan
from core.splitter import (
    EmptyLineSplitter,
    MaxCharsSplitter,
    MaxWordsSplitter,
    NewLineSplitter,
    Splitter,
    dump_splitter,
    parse_splitter,
)

__all__ = [
    "CONFIG_FILE",
    "PROJECT_ROOT",
    "EmptyLineSplitter",
    "MaxCharsSplitter",
    "MaxWordsSplitter",
    "NewLineSplitter",
    "OAuthConfig",
    "Splitter",
    "build_plan",
    "dump_splitter",
    "get_api_host",
    "get_api_port",
    "get_oauth_config",
    "parse_splitter",
]

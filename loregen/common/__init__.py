"""Common utilities shared across input and output processing."""

from loregen.common.utils import (
    _load_env_file,
    ensure_dir,
    read_text_file,
)
from loregen.common.logging import (
    log_debug,
    set_log_context,
    setup_scope_prefixed_stdout,
)
from loregen.common.cache import (
    get_cache_path,
    read_raw_cache,
    write_raw_cache,
)
from loregen.common.openai import OpenAIClient, StreamEvent, StreamError, NAMES_SCHEMA

__all__ = [
    # utils
    "_load_env_file",
    "ensure_dir",
    "read_text_file",
    # logging
    "log_debug",
    "set_log_context",
    "setup_scope_prefixed_stdout",
    # cache
    "get_cache_path",
    "read_raw_cache",
    "write_raw_cache",
    # openai
    "OpenAIClient",
    "StreamEvent",
    "StreamError",
    "NAMES_SCHEMA",
]

"""Cache-backed name generation for leaf scopes.

For each leaf the raw service answer is cached under the cache directory.
A cached, non-blank document short-circuits the service call on the first
attempt. Whatever the source, the raw text is repaired and parsed; a parse
failure regenerates from the service (overwriting the cache) until
max_attempts is reached.
"""

import json
from pathlib import Path
from typing import List, Optional

from tenacity import RetryError, Retrying, retry_if_exception_type, stop_after_attempt

from loregen.common.cache import read_raw_cache, write_raw_cache
from loregen.common.logging import log_debug
from loregen.common.openai import NAMES_SCHEMA, OpenAIClient
from loregen.output.collector import collect_stream
from loregen.output.normalize import normalize_entries
from loregen.output.repair import repair_buffer
from loregen.schema.base import Entry


class NamesParseError(ValueError):
    """A (repaired) buffer is not an object with a list of string names."""


class GenerationError(RuntimeError):
    """No parsable answer for a leaf after every allowed attempt."""


def build_names_prompt(theme: str, lore: str) -> str:
    """Build the user prompt for one themed leaf."""
    return f"""
- Prefer to use Latinization of languages (a-z alphabet) and **do not use accents**
- Come up with **as many** possible names
- Avoid duplicates
Come up with as many {theme} names as possible using the lore:
{lore}
"""


def parse_names(text: str) -> List[str]:
    """Parse a buffer shaped like {"names": ["...", ...]}.

    Extra properties are ignored. Raises NamesParseError otherwise.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise NamesParseError(f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise NamesParseError(f"expected a JSON object, got {type(data).__name__}")
    names = data.get("names")
    if not isinstance(names, list):
        raise NamesParseError("missing 'names' array")
    if not all(isinstance(n, str) for n in names):
        raise NamesParseError("'names' must only contain strings")
    return names


class NameGenerator:
    """Generate (key, display name) entries for themed leaf scopes.

    client only needs stream_structured(prompt, schema, temperature, max_tokens)
    returning an iterable of StreamEvents. When omitted, an OpenAIClient for
    model is created on the first cache miss, so fully cached runs need no
    API key.
    """

    def __init__(
        self,
        client=None,
        lore: str = "",
        model: Optional[str] = None,
        max_attempts: int = 5,
        temperature: float = 0.5,
        max_tokens: int = 16384,
        echo: bool = True,
        verbose: bool = False,
        debug: bool = False,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.client = client
        self.model = model
        self.lore = lore
        self.max_attempts = max_attempts
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.echo = echo
        self.verbose = verbose
        self.debug = debug
        self.service_calls = 0

    def __call__(self, theme: str, prefix: str, cache_path: Path) -> List[Entry]:
        return self.generate(theme, prefix, cache_path)

    def generate(self, theme: str, prefix: str, cache_path: Path) -> List[Entry]:
        """Return normalized entries for one leaf, using the cache when possible."""
        names: List[str] = []
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            retry=retry_if_exception_type(NamesParseError),
        )
        try:
            for attempt in retrying:
                with attempt:
                    raw: Optional[str] = None
                    if attempt.retry_state.attempt_number == 1:
                        raw = read_raw_cache(cache_path, verbose=self.verbose)
                        if raw is not None:
                            print(f"[gen] [cache-hit] '{cache_path}' exists, using cached names")
                        else:
                            print(f"[gen] [cache-miss] No cached names at '{cache_path}'")
                    else:
                        print(f"[gen] [retry] Attempt {attempt.retry_state.attempt_number}/{self.max_attempts} for '{theme}'")
                    if raw is None:
                        raw = self._generate_and_cache(theme, cache_path)
                    names = self._parse(raw, cache_path)
        except RetryError as e:
            raise GenerationError(
                f"No parsable names for '{cache_path}' after {self.max_attempts} attempts"
            ) from e.last_attempt.exception()

        entries = normalize_entries(names, prefix)
        if self.verbose:
            print(f"[gen] [ok] {len(entries)} names for '{theme}'")
        return entries

    def _generate_and_cache(self, theme: str, cache_path: Path) -> str:
        """Stream one answer from the service and cache the raw buffer."""
        print(f"[gen] [api] Streaming generation for theme '{theme}'")
        prompt = build_names_prompt(theme, self.lore)
        log_debug(self.debug, f"prompt for '{theme}': {len(prompt)} chars")
        if self.client is None:
            self.client = OpenAIClient(model=self.model)
        self.service_calls += 1
        events = self.client.stream_structured(
            prompt,
            NAMES_SCHEMA,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        raw = collect_stream(events, echo=self.echo)
        # The cache keeps the unrepaired text
        write_raw_cache(cache_path, raw, verbose=self.verbose)
        return raw

    def _parse(self, raw: str, cache_path: Path) -> List[str]:
        fixed = repair_buffer(raw, verbose=self.verbose)
        log_debug(self.debug, f"repaired buffer: {fixed[:200]!r}")
        try:
            return parse_names(fixed)
        except NamesParseError as e:
            print(f"[gen] [error] Could not parse names from '{cache_path}': {e}")
            raise

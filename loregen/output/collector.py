"""Accumulate a streamed response into a raw text buffer."""

import sys
from typing import Iterable, List

from loregen.common.openai import StreamEvent, StreamError


def collect_stream(events: Iterable[StreamEvent], echo: bool = True) -> str:
    """Collect content fragments until the stream ends.

    Reasoning fragments are echoed for progress but never kept. A StreamError
    ends collection early and the partial buffer is returned as is; the
    repair step and the parse retry deal with the truncation.
    """
    parts: List[str] = []
    iterator = iter(events)
    while True:
        try:
            event = next(iterator)
        except StopIteration:
            break
        except StreamError as e:
            if echo:
                sys.stdout.write("\n")
            print(f"[api] [warning] Streaming error: {e}")
            break

        if event.kind == "content":
            parts.append(event.text)
            if echo:
                sys.stdout.write(event.text)
                sys.stdout.flush()
        elif event.kind == "reasoning":
            if echo:
                sys.stdout.write(event.text)
                sys.stdout.flush()
        elif event.kind == "end":
            break

    if echo and parts:
        sys.stdout.write("\n")
    return "".join(parts)

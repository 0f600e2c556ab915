import re
from typing import Iterable

from timing.schemas import Entry

# RFC 7230 token characters
_NON_TOKEN = re.compile(r"[^A-Za-z0-9!#$%&'*+.^_`|~-]")

def to_token(name: str) -> str:
    return _NON_TOKEN.sub("_", name)

def format_server_timing(entries: Iterable[Entry], include_type: bool = False) -> str:
    '''
    Renders entries as a Server-Timing header value.
    Args:
        entries (Iterable[Entry]): Entries in the order they should appear.
        include_type (bool): Adds desc="<entry type>" to each metric.
    Returns:
        str: e.g. 'db;dur=12.500, total;dur=40.125'
    '''
    metrics = []
    for entry in entries:
        token = to_token(entry.name)
        if not token:
            continue
        metric = f"{token};dur={entry.duration * 1000:.3f}"
        if include_type:
            metric += f';desc="{entry.entry_type}"'
        metrics.append(metric)
    return ", ".join(metrics)

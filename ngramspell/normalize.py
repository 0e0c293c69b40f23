# -*- coding: utf-8 -*-
import re
from typing import Iterable, Iterator, List

# runs of letters (any script); digits, underscores and punctuation separate tokens
TOKEN_RE = re.compile(r"[^\W\d_]+")


def tokenize(line: str) -> List[str]:
    """Split a line into letter-only tokens, keeping their case."""
    if not line:
        return []
    return TOKEN_RE.findall(str(line))


def iter_tokens(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from tokenize(line)

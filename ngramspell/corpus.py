# -*- coding: utf-8 -*-
"""
Corpus readers.

Plain text files are read line by line. CSV exports are read with pandas;
the text column is the one whose values are longest on median.
"""

import logging
from pathlib import Path
from typing import Iterator

import pandas as pd

logger = logging.getLogger(__name__)


def pick_text_column(df: pd.DataFrame):
    return max(df.columns, key=lambda c: df[c].astype(str).str.len().median())


def read_csv_lines(path: Path, encoding: str = "utf-8") -> Iterator[str]:
    df = pd.read_csv(path, encoding=encoding, engine="python", on_bad_lines="skip")
    if df.empty:
        return
    text_col = pick_text_column(df)
    logger.info("Reading column %r of %s (%d rows)", text_col, path, len(df))
    for value in df[text_col].dropna().astype(str):
        yield value


def read_lines(path, encoding: str = "utf-8") -> Iterator[str]:
    path = Path(path)
    if path.suffix.lower() == ".csv":
        yield from read_csv_lines(path, encoding)
        return
    with path.open("r", encoding=encoding) as fh:
        for line in fh:
            yield line.rstrip("\n")

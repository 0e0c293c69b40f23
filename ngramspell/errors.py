# -*- coding: utf-8 -*-
"""Exceptions raised by the lexicon, the language model and their loaders.

Lookups that simply find nothing (unknown word, unseen context) never raise;
they fall back to shorter contexts or produce an empty candidate list.
"""


class SpellModelError(Exception):
    """Base class for fatal model errors."""


class InvalidConfigError(SpellModelError, ValueError):
    """A configuration value cannot be used (e.g. a non-positive n-gram order)."""


class ModelFormatError(SpellModelError, ValueError):
    """A persisted model file is malformed."""

    def __init__(self, message: str, line_number=None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number

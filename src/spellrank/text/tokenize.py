from __future__ import annotations

import unicodedata
from typing import Iterable, Union

import regex

from spellrank.utils.errors import ConfigError, InvalidEncoding


# A Sequence is an immutable tuple of grapheme clusters.
Sequence = tuple[str, ...]
TextLike = Union[str, bytes, bytearray]

NORMAL_FORMS = ("NFC", "NFD", "NFKC", "NFKD")

_GRAPHEME = regex.compile(r"\X")


def _decode(text: TextLike) -> str:
    if isinstance(text, (bytes, bytearray)):
        try:
            return bytes(text).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncoding(f"Invalid UTF-8 at byte {e.start}: {e.reason}") from e
    if not isinstance(text, str):
        raise TypeError(f"Expected str or bytes, got {type(text).__name__}")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidEncoding(f"Unpaired surrogate at index {e.start}") from e
    return text


def tokenize(
    text: TextLike,
    *,
    casefold: bool = False,
    normalize: str | None = None,
) -> Sequence:
    """Split text into grapheme clusters.

    Combining marks and multi-code-point characters stay in one unit.
    Case folding and Unicode normalization happen only when asked for.
    """
    s = _decode(text)
    if not s:
        return ()
    if casefold:
        s = s.casefold()
    if normalize is not None:
        if normalize not in NORMAL_FORMS:
            raise ConfigError(f"Unknown normalization form {normalize!r}; expected one of {NORMAL_FORMS}")
        s = unicodedata.normalize(normalize, s)
    return tuple(_GRAPHEME.findall(s))


def as_sequence(value: TextLike | Iterable[str], **kwargs) -> Sequence:
    """Accept raw text (tokenized here) or an already tokenized sequence."""
    if isinstance(value, (str, bytes, bytearray)):
        return tokenize(value, **kwargs)
    if isinstance(value, tuple):
        return value
    return tuple(value)


def detokenize(seq: Iterable[str]) -> str:
    return "".join(seq)

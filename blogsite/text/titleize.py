from __future__ import annotations

import re

# Kept lower-case in the middle of a title.
MINOR_WORDS = frozenset({
    "a", "an", "and", "as", "at", "but", "by", "en", "for", "from", "if",
    "in", "into", "nor", "of", "on", "or", "per", "the", "to", "up", "via",
    "vs", "with",
})

_ID_TOKEN_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*")
_ACRONYM_RE = re.compile(r"[A-Z][A-Z0-9]+")
_WORD_CORE_RE = re.compile(r"[^a-z0-9']")


def is_identifier_suffix(token: str) -> bool:
    """True if `token` looks like a version, numeric code or acronym.

    Examples: ``3.11.11``, ``v2``, ``x86_64-linux``, ``nixos-24.05``, ``NIX``.
    """
    if not _ID_TOKEN_RE.fullmatch(token):
        return False
    return any(ch.isdigit() for ch in token) or bool(_ACRONYM_RE.fullmatch(token))


def humanize(text: str, *, keep_id_suffix: bool = False) -> str:
    """Turn underscores into spaces and drop a trailing ``_id`` marker.

    Unlike a full humanize, letter case is left alone so words such as
    ``NixOS`` survive.
    """
    if not isinstance(text, str):
        raise TypeError(f"humanize() expects str, got {type(text).__name__}")
    result = text.strip().lstrip("_")
    if not keep_id_suffix and result.endswith("_id"):
        result = result[: -len("_id")]
    return " ".join(result.replace("_", " ").split())


def _upper_first(part: str) -> str:
    for i, ch in enumerate(part):
        if ch.isalpha():
            return part[:i] + ch.upper() + part[i + 1:]
        if ch.isdigit():
            break
    return part


def _capitalize(word: str) -> str:
    lead = next((ch for ch in word if ch.isalnum()), "")
    if lead.isdigit():
        return word
    return "-".join(_upper_first(p) for p in word.split("-"))


def _is_minor(word: str) -> bool:
    return _WORD_CORE_RE.sub("", word.lower()) in MINOR_WORDS


def titleize(text: str, *, keep_id_suffix: bool = True) -> str:
    """Title-case `text` for display as a post heading.

    Parameters
    ----------
    text : str
        The raw title. Anything other than ``str`` raises ``TypeError``.
    keep_id_suffix : bool
        When true, a trailing identifier-like token (see
        :func:`is_identifier_suffix`) is emitted verbatim and a trailing
        ``_id`` is kept as the word ``Id``. When false, the last token is
        cased like any other word and a trailing ``_id`` is dropped.

    Returns
    -------
    str
        The normalized title. Applying ``titleize`` to its own output
        returns the same string.
    """
    if not isinstance(text, str):
        raise TypeError(f"titleize() expects str, got {type(text).__name__}")

    tokens = text.split()
    if not tokens:
        return ""

    suffix = None
    if keep_id_suffix and is_identifier_suffix(tokens[-1]):
        suffix = tokens.pop()

    words = humanize(" ".join(tokens), keep_id_suffix=keep_id_suffix).split()
    last = len(words) - 1 if suffix is None else -1

    out = []
    for i, word in enumerate(words):
        after_colon = i > 0 and words[i - 1].endswith(":")
        if i != 0 and i != last and not after_colon and _is_minor(word):
            out.append(word.lower())
        else:
            out.append(_capitalize(word))
    if suffix is not None:
        out.append(suffix)
    return " ".join(out)

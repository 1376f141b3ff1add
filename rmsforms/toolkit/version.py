def version_token(raw: str | None, index: int = -1) -> str:
    """Pick one whitespace-separated token out of a template version string.

    Templates write versions like ``"Winlink Check-in 5.0.10"``; callers name
    the token they care about (usually the last). Doubled spaces are tolerated.
    If the string has no such token the stripped raw string is returned, and
    empty input yields ``""``.
    """
    if not raw:
        return ""
    tokens = raw.split()
    if not tokens:
        return ""
    if -len(tokens) <= index < len(tokens):
        return tokens[index]
    return raw.strip()


def exact_token(raw: str | None, index: int, count: int) -> str:
    """Return token ``index`` only when the string has exactly ``count`` tokens."""
    if not raw:
        return ""
    tokens = raw.split()
    if len(tokens) == count:
        return tokens[index]
    return raw.strip()


def after_prefix(raw: str | None, prefix: str) -> str:
    """Return what follows ``prefix`` in a version string, or the stripped string."""
    if not raw:
        return ""
    raw = raw.strip()
    if raw.startswith(prefix):
        return raw[len(prefix):].strip()
    return raw

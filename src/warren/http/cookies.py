"""Cookie header parsing (read side only; warren never sets cookies itself)."""


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for empty or missing headers.  Pairs without
    ``=`` are skipped.
    """
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        key, sep, value = pair.strip().partition("=")
        if sep and key.strip():
            cookies[key.strip()] = value.strip()
    return cookies

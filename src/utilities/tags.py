# File: src/utilities/tags.py
"""Tag parsing for block custom names.

Blocks are grouped into airlocks by bracketed tags in their names, e.g.
``"Door [A1:Inner]"`` or ``"Tank [A1:ProcessTank][B1:ProcessTank]"``.
"""


def split_parts(raw):
    """Split the inside of one tag on ':' into trimmed, non-empty parts.

    Example:
        >>> split_parts(" A1 : Inner ")
        ['A1', 'Inner']
        >>> split_parts("  ")
        []
    """
    if raw is None or not raw.strip():
        return []
    parts = []
    for part in raw.split(':'):
        part = part.strip()
        if part:
            parts.append(part)
    return parts


def tags_of(name):
    """Yield the parts of every ``[...]`` group in a block name, in order.

    Parsing stops at the first '[' with no matching ']'. Empty groups are
    skipped.

    Example:
        >>> list(tags_of("Door [A1:Inner] [NOAUTOCLOSE]"))
        [['A1', 'Inner'], ['NOAUTOCLOSE']]
    """
    s = name or ""
    i = 0
    while i < len(s):
        start = s.find('[', i)
        if start < 0:
            return
        end = s.find(']', start + 1)
        if end < 0:
            return
        parts = split_parts(s[start + 1:end])
        if parts:
            yield parts
        i = end + 1


def has_flag(name, flag):
    """True if ``name`` contains the bracketed ``flag`` (case-insensitive)."""
    return f"[{flag.upper()}]" in (name or "").upper()


def get_int(parts, index, default=None):
    """Return ``parts[index]`` as an int, or ``default`` if missing/invalid."""
    try:
        return int(parts[index])
    except (IndexError, ValueError, TypeError):
        return default

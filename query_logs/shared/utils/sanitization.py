"""Comment escaping for query log tags."""


def escape_sql_comment(content: object) -> str:
    """Strip SQL comment delimiters so content is safe inside /* ... */.

    An opener ``/*`` is dropped together with an optional optimizer-hint
    ``+`` and the whitespace after it; a closer ``*/`` together with the
    whitespace before it. Delimiters formed by what is left after a removal
    (``//**``, ``**//``, ``/*/**/*/``) are dropped too, in a single pass over
    the input.

    Args:
        content: Value to escape; converted with str().

    Returns:
        Content containing neither ``/*`` nor ``*/``.
    """
    out: list[str] = []
    # After an opener: may skip one "+" (only first) and any whitespace.
    skipping = False
    hint_allowed = False
    for char in str(content):
        if skipping:
            if char == "+" and hint_allowed:
                hint_allowed = False
                continue
            if char.isspace():
                hint_allowed = False
                continue
            skipping = False
        tail = out[-1] if out else ""
        if char == "*" and tail == "/":
            out.pop()
            skipping = hint_allowed = True
        elif char == "/" and tail == "*":
            out.pop()
            while out and out[-1].isspace():
                out.pop()
        else:
            out.append(char)
    return "".join(out)

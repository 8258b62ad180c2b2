"""String checks applied to client input."""


def is_empty(value: str | None, ignore_whitespace: bool = True) -> bool:
    """
    Check whether a string carries no content.

    Args:
        value: The string to check; None counts as empty
        ignore_whitespace: Treat whitespace-only strings as empty

    Returns:
        True if the value is empty
    """
    if value is None:
        return True
    if ignore_whitespace:
        return value.strip() == ""
    return len(value) == 0

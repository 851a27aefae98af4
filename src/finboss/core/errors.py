"""Error message formatting.

Production responses never carry exception text; other environments surface
it to make debugging easier.
"""

PRODUCTION_ENV = "production"


def format_error_message(error: BaseException | None, fallback: str, app_env: str) -> str:
    """Pick the message shown to the client for an unexpected error.

    Args:
        error: The raised exception (may be None)
        fallback: Generic message safe to show to anyone
        app_env: Application environment name

    Returns:
        ``fallback`` in production, otherwise the error text (or ``fallback``
        if the error has no text)
    """
    if app_env.lower() == PRODUCTION_ENV:
        return fallback
    if error is None:
        return fallback
    return str(error) or fallback

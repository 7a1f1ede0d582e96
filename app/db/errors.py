# app/db/errors.py


class DataFetchError(Exception):
    """
    Raised by the query functions when the underlying read fails.

    The message is fixed per operation and safe to show to end users;
    the storage error is kept as ``__cause__``.
    """

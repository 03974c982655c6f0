"""Errors raised by the query, history and user layers.

Each error carries the HTTP status it is rendered with by the handler
installed in ``elite_bgs.main``.
"""


class BGSError(Exception):
    status_code = 500


class UsageError(BGSError):
    """The request parameters cannot be served as given."""

    status_code = 400


class PermissionDeniedError(BGSError):
    status_code = 403


class NotFoundError(BGSError):
    status_code = 404


class QueryTimeoutError(BGSError):
    """A storage query exceeded its time budget."""

    status_code = 504

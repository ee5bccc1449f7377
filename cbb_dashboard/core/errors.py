# cbb_dashboard/core/errors.py


class DataSourceError(Exception):
    """Base class for read failures against the stats store."""


class DataSourceUnavailable(DataSourceError):
    """No backend is configured, or the configured one is not initialised."""


class QueryFailed(DataSourceError):
    """The backend was reached but the query did not succeed."""

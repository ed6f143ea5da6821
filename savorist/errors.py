"""Exception hierarchy shared by the server and the client."""


class SavoristError(Exception):
    """Base class for all Savorist errors."""


class StoreError(SavoristError):
    """The entity store could not complete an operation."""


class ConstraintError(StoreError):
    """A write violated a NOT NULL, CHECK or foreign-key constraint."""


class InvalidFilterError(SavoristError, ValueError):
    """A caller-supplied filter value could not be coerced."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for {field}: {value!r}")


class CacheError(SavoristError):
    """Base class for on-device key-value storage failures."""


class CacheReadError(CacheError):
    """Stored preferences could not be read."""


class CacheWriteError(CacheError):
    """Preferences could not be persisted."""


class ApiError(SavoristError):
    """A request to the Savorist API failed.

    Attributes:
        status_code: HTTP status of the response, or None for transport errors
        message: Error text reported by the server, if any
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(
            f"{message} (status {status_code})" if status_code else message
        )

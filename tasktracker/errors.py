"""Error types raised by the task store and its persistence layer."""


class TaskStoreError(Exception):
    """Base class for task store failures."""


class ValidationError(TaskStoreError):
    """Client supplied invalid task data (empty title, unknown status)."""


class NotFoundError(TaskStoreError):
    """No task exists with the requested ID."""


class PersistenceError(TaskStoreError):
    """Reading or writing the task snapshot failed."""

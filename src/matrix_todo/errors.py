"""Domain exceptions raised by services and translated to HTTP errors by routers."""


class MatrixTodoError(Exception):
    """Base class for all application errors."""


class StoreError(MatrixTodoError):
    """The persistent store rejected or failed an operation."""


class InvalidPayloadError(MatrixTodoError):
    """An inbound webhook body could not be decoded."""


class WebhookNotFoundError(MatrixTodoError):
    """No (active) webhook exists for the given identifier."""


class WebhookAccessDeniedError(MatrixTodoError):
    """The webhook exists but belongs to another user."""


class ConnectionNotFoundError(MatrixTodoError):
    """No Slack connection exists for the given identifier."""


class ConnectionAccessDeniedError(MatrixTodoError):
    """The Slack connection exists but belongs to another user."""


class SlackUserNotConfiguredError(MatrixTodoError):
    """The webhook owner has not registered their Slack user ID."""

    def __init__(self) -> None:
        super().__init__(
            "Slack User ID not configured. Please set your Slack User ID in the settings."
        )


class TitleGenerationError(MatrixTodoError):
    """The title-generation model could not produce a title."""


class InvalidEmojiSettingsError(MatrixTodoError):
    """An emoji settings update failed validation."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors

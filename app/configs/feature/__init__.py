from pydantic import Field, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings


class LoggingConfig(BaseSettings):
    """
    Configuration for application logging
    """

    LOG_LEVEL: str = Field(
        description="Logging level, default to INFO. Set to ERROR for production environments.",
        default="INFO",
    )

    LOG_FILE: str | None = Field(
        description="File path for log output.",
        default=None,
    )

    LOG_FILE_MAX_SIZE: PositiveInt = Field(
        description="Maximum file size for file rotation retention, the unit is megabytes (MB)",
        default=20,
    )

    LOG_FILE_BACKUP_COUNT: PositiveInt = Field(
        description="Maximum file backup count file rotation retention",
        default=5,
    )

    LOG_FORMAT: str = Field(
        description="Format string for log messages",
        default=(
            "%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] "
            "[%(filename)s:%(lineno)d] %(trace_id)s - %(message)s"
        ),
    )

    LOG_DATEFORMAT: str | None = Field(
        description="Date format string for log timestamps",
        default=None,
    )


class HttpClientConfig(BaseSettings):
    """
    Configuration for outgoing HTTP messages
    """

    HTTP_CLIENT_TIMEOUT: PositiveFloat = Field(
        description="Default timeout in seconds for outgoing requests",
        default=30.0,
    )

    HTTP_CLIENT_JSON_ENSURE_ASCII: bool = Field(
        description="Escape non-ASCII characters when formatting JSON content",
        default=False,
    )

    HTTP_CLIENT_XML_ROOT_TAG: str = Field(
        description="Root element name used when formatting XML content",
        default="request",
    )


class FeatureConfig(
    LoggingConfig,
    HttpClientConfig,
):
    pass

"""Errors raised while wiring the application together."""


class UtilError(Exception):
    """Base error for configuration and startup helpers."""


class ConfigurationError(UtilError):
    """A setting is missing or unsafe for the current environment.

    Attributes:
        setting: Environment variable name of the offending setting
    """

    def __init__(self, setting: str, message: str) -> None:
        self.setting = setting
        super().__init__(f"{setting}: {message}")

from __future__ import annotations


class InitializerError(Exception):
    """Base class for failures the runner reports before sending anything."""


class MissingPrivateKeyError(InitializerError):
    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} not found in .env file")
        self.env_name = env_name


class ConfigError(InitializerError):
    pass

class BotError(Exception):

    pass


class ConfigurationError(BotError):

    pass


class CommandRegistrationError(BotError):

    pass


class UnknownCommandError(BotError):

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No command registered for '{path}'")


class ValidationError(BotError):

    pass

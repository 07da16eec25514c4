"""Error type raised by the sushi lexer and parser."""


class SushiSyntaxError(SyntaxError):
    """A lexical or syntactic error.

    Carries only a message: no source position and no cause chain. The
    driver prints it as ``Error: <message>``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


__all__ = ["SushiSyntaxError"]

class PatternDefinitionError(ValueError):
    """Raised when a pattern or a search call is malformed.

    A structural mismatch is never an error, it simply yields no solutions.

    """

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message

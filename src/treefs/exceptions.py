class ArgumentMissingError(ValueError):
    """
    Exception raised when a required path-like argument was not supplied.

    The error is raised before any filesystem access takes place, including for the
    awaitable operations, which validate their arguments at call time rather than when
    the returned awaitable is first awaited.

    Attributes:
        argument (str): Name of the missing argument.

    Example:
        >>> error = ArgumentMissingError("path")
        >>> str(error)
        'path is required!'
        >>> error.argument
        'path'
    """

    def __init__(self, argument: str) -> None:
        """
        Initialize the exception for the named argument.

        Args:
            argument (str): Name of the argument that was omitted (e.g. "src").
        """
        self.argument = argument
        super().__init__(f"{argument} is required!")

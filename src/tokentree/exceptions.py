class InvalidPatternError(ValueError):
    """
    Exception raised when a path pattern cannot be compiled.

    Patterns are compiled once, when the rules object is created, so a malformed
    pattern is reported before any directory is walked.

    Attributes:
        pattern (str): The offending pattern.

    Example:
        >>> error = InvalidPatternError("[unclosed", "unterminated character set")
        >>> str(error)
        "Invalid path pattern '[unclosed': unterminated character set"
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid path pattern '{pattern}': {reason}")


class InvalidTreeDocumentError(ValueError):
    """
    Exception raised when a serialized tree document does not have the expected shape.

    Example:
        >>> error = InvalidTreeDocumentError("missing 'name'")
        >>> str(error)
        "Invalid tree document: missing 'name'"
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid tree document: {reason}")

class ParseError(ValueError):
    """Raised when stored content does not decode into a rich-text document."""

    pass

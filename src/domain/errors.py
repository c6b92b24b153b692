# src/domain/errors.py


class UnsupportedHighlightShape(ValueError):
    """Raised when a raw highlight has neither 2 nor 4 coordinates."""

    def __init__(self, dimensions: int):
        self.dimensions = dimensions
        super().__init__(f"Highlights with {dimensions} dimensions not supported.")


class MalformedLocator(ValueError):
    """Raised when a highlight locator cannot be derived from its document resource."""

    def __init__(self, resource: str, reason: str):
        self.resource = resource
        super().__init__(f"Cannot build a locator from '{resource}': {reason}")

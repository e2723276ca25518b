from dataclasses import dataclass


@dataclass(frozen=True)
class URLMappingModel:
    """Represent a persisted long URL <-> short code mapping.

    Both fields are always populated; a mapping is either stored in full or
    not at all.

    Attributes:
        target (str):
            The original long URL that the short code resolves to.
        shortcode (str):
            The unique short identifier representing the long URL.

    Example:
        >>> mapping = URLMappingModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="aZ3kQ1X",
        ... )
        >>> mapping.target
        'https://example.com/article/123'
        >>> mapping.shortcode
        'aZ3kQ1X'
    """

    target: str
    shortcode: str

"""IdentityColumns value object."""

from dataclasses import dataclass

from ...const import DEFAULT_QUERY_ID_COLUMN, DEFAULT_TURN_COLUMN
from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class IdentityColumns:
    """The column pair that should uniquely identify a record.

    Example:
        >>> identity = IdentityColumns()
        >>> identity.columns
        ('QueryID', 'Turn')
        >>> "Turn" in identity
        True
    """

    query_id: str = DEFAULT_QUERY_ID_COLUMN
    turn: str = DEFAULT_TURN_COLUMN

    def __post_init__(self) -> None:
        """Validate column names.

        Raises:
            ConfigurationError: If a name is blank or both names are equal
        """
        for name in (self.query_id, self.turn):
            if not isinstance(name, str) or not name.strip():
                raise ConfigurationError(
                    f"identity column must be a non-empty string, got {name!r}"
                )
        if self.query_id == self.turn:
            raise ConfigurationError(
                "query id and turn must be different columns", column=self.turn
            )

    @property
    def columns(self) -> tuple[str, str]:
        """Both identity column ids, query id first."""
        return (self.query_id, self.turn)

    def __contains__(self, column_id: object) -> bool:
        """Whether column_id participates in record identity."""
        return column_id in self.columns

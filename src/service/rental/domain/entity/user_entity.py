import attrs


@attrs.define(frozen=True)
class UserEntity:
    """Read-only projection of a library member; the rental core only checks existence."""

    id: int
    name: str = ''
    email: str = attrs.field(default='', repr=False)

"""Value objects for the auth domain."""

from lodge.domain.shared.model.value import Identifier


class PrincipalId(Identifier):
    """Unique identifier for an authenticated principal (a user account)."""

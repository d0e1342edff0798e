from lodge.domain.shared.model.entity import Entity


class Aggregate(Entity):
    """Consistency boundary. Repositories load and save whole aggregates."""

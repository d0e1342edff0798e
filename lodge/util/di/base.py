from dishka import Provider as DishkaProvider

from lodge.util.di.scope import Scope


class Provider(DishkaProvider):
    """Dishka provider defaulting to the unit-of-work scope."""

    scope = Scope.UOW

from lodge.domain.shared.model.value import Identifier


class ProgramId(Identifier):
    pass

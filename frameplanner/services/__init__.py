"""Project file and installation guide services."""

from frameplanner.services.export_import import (
    ProjectExport,
    ProjectImportError,
    export_project,
    import_project,
)
from frameplanner.services.installation import (
    DrillPosition,
    drill_positions,
    installation_guide_text,
)

__all__ = [
    "ProjectExport",
    "ProjectImportError",
    "export_project",
    "import_project",
    "DrillPosition",
    "drill_positions",
    "installation_guide_text",
]

"""Menu import feature: idempotent import of restaurants documents."""

from app.features.menu_import.routes import router
from app.features.menu_import.schemas import ImportResult
from app.features.menu_import.service import MenuImportService, import_menu_document

__all__ = [
    "ImportResult",
    "MenuImportService",
    "import_menu_document",
    "router",
]

"""Populate the SQLite catalog with a demo folder hierarchy."""

import sys
from typing import Any, Dict, List, Optional, Tuple

from common.logging_config import setup_logging
from common.types import NodeType
from catalog.database import clear_database, init_database
from catalog.repositories.node_repository import NodeRepository
from catalog.services.catalog_service import CatalogService

logger = setup_logging('catalog.seed')

DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# (name, children) for folders, (name, size, mime_type) for files
SEED_TREE: List[Tuple[Any, ...]] = [
    ("Documents", [
        ("Work", [
            ("2024", [
                ("Q1", [
                    ("january.docx", 65536, DOCX),
                    ("february.docx", 73728, DOCX),
                ]),
                ("Q2", []),
                ("budget.xlsx", 131072, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
            ]),
            ("2023", []),
            ("presentation.pptx", 2097152, "application/vnd.openxmlformats-officedocument.presentationml.presentation"),
        ]),
        ("Personal", [
            ("Photos", []),
            ("Videos", []),
            ("notes.txt", 4096, "text/plain"),
        ]),
        ("report.pdf", 524288, "application/pdf"),
    ]),
    ("Projects", [
        ("WebApp", [
            ("src", [
                ("components", []),
                ("utils", []),
                ("index.ts", 1024, "text/typescript"),
            ]),
            ("tests", []),
            ("package.json", 2048, "application/json"),
            ("README.md", 8192, "text/markdown"),
        ]),
        ("MobileApp", []),
    ]),
    ("Downloads", [
        ("installer.exe", 10485760, "application/x-msdownload"),
        ("image.png", 1048576, "image/png"),
        ("Temp", []),
    ]),
]


def _create_entries(service: CatalogService, entries: List[Tuple[Any, ...]], parent_id: Optional[str]) -> int:
    created = 0
    for entry in entries:
        if len(entry) == 2:
            name, children = entry
            folder = service.create_node(name=name, node_type=NodeType.FOLDER.value, parent_id=parent_id)
            created += 1 + _create_entries(service, children, folder.id)
        else:
            name, size, mime_type = entry
            service.create_node(
                name=name,
                node_type=NodeType.FILE.value,
                parent_id=parent_id,
                size=size,
                mime_type=mime_type,
            )
            created += 1
    return created


def seed(service: Optional[CatalogService] = None, clear: bool = True) -> Dict[str, int]:
    """
    Write SEED_TREE through the catalog service.

    Args:
        service: Service to use (defaults to one over the SQLite repository)
        clear: Delete existing SQLite nodes first (default service only)

    Returns:
        {"created": number of nodes written}
    """
    if service is None:
        init_database()
        if clear:
            clear_database()
            logger.info("Cleared existing nodes")
        service = CatalogService(repository=NodeRepository())

    created = _create_entries(service, SEED_TREE, None)
    logger.info(f"Database seeded successfully [nodes={created}]")
    return {"created": created}


def main() -> None:
    try:
        seed()
    except Exception as e:
        logger.error(f"Error seeding database: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

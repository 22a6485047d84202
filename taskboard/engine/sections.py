"""Section list edits for a board.

Each function returns a fresh list so the JSON column is replaced wholesale.
"""

from taskboard.errors import ConflictError, NotFoundError, ValidationError
from taskboard.models import Board
from taskboard.models.board import default_sections
from taskboard.utils.domains import slugify

MAX_SECTION_NAME = 50


def clean_section_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Section name is required")
    if len(name) > MAX_SECTION_NAME:
        raise ValidationError(f"Section name cannot exceed {MAX_SECTION_NAME} characters")
    return name


def unique_section_id(name: str, taken: set[str]) -> str:
    base = slugify(name)
    candidate = base
    n = 2
    while candidate in taken:
        candidate = f"{base}-{n}"
        n += 1
    return candidate


def check_version(board: Board, expected_version: int | None) -> None:
    """Reject a write made against a stale copy of the board."""
    if expected_version is not None and expected_version != board.version:
        raise ConflictError(
            f"Board was modified by someone else (version {board.version}, "
            f"expected {expected_version}). Reload and try again."
        )


def build_initial_sections(names: list[str] | None) -> list[dict]:
    """Sections for a new board: the given names in order, else the default workflow."""
    if not names:
        return default_sections()
    sections: list[dict] = []
    taken: set[str] = set()
    for order, raw in enumerate(names):
        name = clean_section_name(raw)
        section_id = unique_section_id(name, taken)
        taken.add(section_id)
        sections.append({"id": section_id, "name": name, "order": order})
    return sections


def add_section(board: Board, name: str | None) -> tuple[list[dict], dict]:
    name = clean_section_name(name)
    sections = [dict(s) for s in board.sections or []]
    section = {
        "id": unique_section_id(name, {s["id"] for s in sections}),
        "name": name,
        "order": max((s.get("order", 0) for s in sections), default=-1) + 1,
    }
    sections.append(section)
    return sections, section


def rename_section(board: Board, section_id: str, name: str | None) -> list[dict]:
    name = clean_section_name(name)
    if board.find_section(section_id) is None:
        raise NotFoundError("Section not found")
    return [
        {**s, "name": name} if s["id"] == section_id else dict(s)
        for s in board.sections
    ]


def remove_section(board: Board, section_id: str) -> list[dict]:
    """Drop one section; the others keep their order values."""
    return [dict(s) for s in board.sections if s["id"] != section_id]


def reorder_sections(board: Board, section_ids: list[str]) -> list[dict]:
    current = {s["id"]: s for s in board.sections or []}
    if len(section_ids) != len(set(section_ids)) or set(section_ids) != set(current):
        raise ValidationError("section_ids must list every section of the board exactly once")
    return [
        {**current[section_id], "order": order}
        for order, section_id in enumerate(section_ids)
    ]

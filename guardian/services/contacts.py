from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from guardian import config

logger = logging.getLogger(__name__)

DB_PATH = config.DB_PATH

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


# ----------------------------
# Store
# ----------------------------

def _connect() -> sqlite3.Connection:
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def init_db() -> None:
    """
    Create the contacts table if missing (non-destructive).
    """
    conn = _connect()
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS contacts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                phone TEXT NOT NULL,
                relation TEXT
            )
            """
        )
        conn.commit()
    finally:
        conn.close()


def list_contacts() -> List[Dict[str, Any]]:
    conn = _connect()
    try:
        rows = conn.execute(
            "SELECT id, name, phone, relation FROM contacts ORDER BY id ASC"
        ).fetchall()
    finally:
        conn.close()
    return [dict(row) for row in rows]


def add_contact(
    name: Optional[str],
    phone: Optional[str],
    relation: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Insert a contact and return it with its new id.
    Raises sqlite3.IntegrityError when name or phone is missing.
    """
    conn = _connect()
    try:
        cur = conn.execute(
            "INSERT INTO contacts (name, phone, relation) VALUES (?, ?, ?)",
            (name, phone, relation),
        )
        conn.commit()
        contact_id = int(cur.lastrowid)
    finally:
        conn.close()
    return {"id": contact_id, "name": name, "phone": phone, "relation": relation}


def delete_contact(contact_id: int) -> bool:
    """
    Delete a contact by id. Returns True if a row was removed.
    """
    conn = _connect()
    try:
        cur = conn.execute("DELETE FROM contacts WHERE id = ?", (contact_id,))
        conn.commit()
        return cur.rowcount > 0
    finally:
        conn.close()


# ----------------------------
# Models
# ----------------------------

class ContactCreateRequest(BaseModel):
    # Form fields such as phone may arrive as JSON numbers.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = Field(default=None, description="Guardian's name")
    phone: Optional[str] = Field(default=None, description="Phone number, stored as given")
    relation: Optional[str] = Field(default=None, description="e.g. 'parent', 'friend'")


class Contact(BaseModel):
    id: int
    name: str
    phone: str
    relation: Optional[str] = None


# ----------------------------
# Endpoints
# ----------------------------

@router.get("", response_model=List[Contact])
def get_contacts() -> List[Dict[str, Any]]:
    return list_contacts()


@router.post("", response_model=Contact)
def create_contact(body: ContactCreateRequest) -> Any:
    try:
        return add_contact(body.name, body.phone, body.relation)
    except sqlite3.IntegrityError as exc:
        logger.info("Rejected contact: %s", exc)
        return JSONResponse(status_code=400, content={"error": f"Invalid contact: {exc}"})


@router.delete("/{contact_id}")
def remove_contact(contact_id: int) -> Dict[str, Any]:
    deleted = delete_contact(contact_id)
    if not deleted:
        logger.debug("Delete for unknown contact id=%s", contact_id)
    return {"success": True}

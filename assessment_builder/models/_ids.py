"""Primary key helper shared by all rows."""
import uuid


def new_id() -> str:
    return str(uuid.uuid4())

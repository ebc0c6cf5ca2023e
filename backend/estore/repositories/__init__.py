from estore.repositories.cascade_repo import apply_delete_plan
from estore.repositories.rows import (
    fetch_page,
    fetch_row,
    find_keys,
    insert_row,
    load_model,
    row_exists,
    row_to_dict,
    update_row,
)

__all__ = [
    "apply_delete_plan",
    "fetch_page",
    "fetch_row",
    "find_keys",
    "insert_row",
    "load_model",
    "row_exists",
    "row_to_dict",
    "update_row",
]

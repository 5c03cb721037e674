"""Order-item reconciliation — diff the stored items against an update's item list.

Invariants:
    - Stored items whose id is absent from the update are removed
    - Update entries whose id matches a stored item update it in place
    - Remaining entries are added; a blank id gets a fresh uuid4
    - Input order of added and updated entries is preserved
"""

import uuid
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from graphql_demos.bytedefence.shared.schemas import UpdateOrderItemInput


class HasId(Protocol):
    id: str


@dataclass
class ItemReconciliation:
    to_remove: list = field(default_factory=list)
    to_update: list[tuple[object, UpdateOrderItemInput]] = field(default_factory=list)
    to_add: list[tuple[str, UpdateOrderItemInput]] = field(default_factory=list)


def reconcile_items(
    existing: Iterable[HasId], incoming: Iterable[UpdateOrderItemInput],
) -> ItemReconciliation:
    existing = list(existing)
    incoming = list(incoming)
    by_id = {item.id: item for item in existing}
    incoming_ids = {entry.id for entry in incoming if entry.id}

    result = ItemReconciliation(
        to_remove=[item for item in existing if item.id not in incoming_ids],
    )
    for entry in incoming:
        current = by_id.get(entry.id) if entry.id else None
        if current is not None:
            result.to_update.append((current, entry))
        else:
            new_id = entry.id if entry.id and entry.id.strip() else str(uuid.uuid4())
            result.to_add.append((new_id, entry))
    return result

from estore.services.collection import Collection, RowSequence
from estore.services.relationships import RELATIONS, DeletePlan, Policy, Relation, plan_delete
from estore.services.store import Store

__all__ = [
    "Collection",
    "DeletePlan",
    "Policy",
    "RELATIONS",
    "Relation",
    "RowSequence",
    "Store",
    "plan_delete",
]

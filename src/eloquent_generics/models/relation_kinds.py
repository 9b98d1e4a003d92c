# --- Closed catalog of Eloquent relation kinds ------------------------------
from dataclasses import dataclass
from enum import Enum
from typing import Optional

RELATIONS_NAMESPACE = "Illuminate\\Database\\Eloquent\\Relations"

# Stands in for the related model of a MorphTo relation.
MORPH_PLACEHOLDER = "Model"

SELF = "self"


class ArgumentRole(Enum):
    ENTITY_ONLY = "entity-only"
    ENTITY_AND_SELF = "entity+self"
    PLACEHOLDER_AND_SELF = "fixed-placeholder+self"


@dataclass(frozen=True)
class RelationKind:
    name: str  # short class name, e.g. "BelongsTo"
    constructor: str  # Model method that builds it, e.g. "belongsTo"
    role: ArgumentRole = ArgumentRole.ENTITY_AND_SELF

    @property
    def arity(self) -> int:
        return 1 if self.role is ArgumentRole.ENTITY_ONLY else 2

    @property
    def requires_entity(self) -> bool:
        return self.role is not ArgumentRole.PLACEHOLDER_AND_SELF

    @property
    def qualified_name(self) -> str:
        return f"{RELATIONS_NAMESPACE}\\{self.name}"


RELATION_KINDS: tuple[RelationKind, ...] = (
    RelationKind("BelongsTo", "belongsTo"),
    RelationKind("HasOne", "hasOne", ArgumentRole.ENTITY_ONLY),
    RelationKind("HasMany", "hasMany", ArgumentRole.ENTITY_ONLY),
    RelationKind("MorphOne", "morphOne", ArgumentRole.ENTITY_ONLY),
    RelationKind("MorphMany", "morphMany", ArgumentRole.ENTITY_ONLY),
    RelationKind("MorphTo", "morphTo", ArgumentRole.PLACEHOLDER_AND_SELF),
    RelationKind("BelongsToMany", "belongsToMany", ArgumentRole.ENTITY_ONLY),
    RelationKind("HasManyThrough", "hasManyThrough", ArgumentRole.ENTITY_ONLY),
    RelationKind("HasOneThrough", "hasOneThrough", ArgumentRole.ENTITY_ONLY),
)

# Both "BelongsTo" and "Illuminate\Database\Eloquent\Relations\BelongsTo" -> kind
KIND_BY_TYPE_NAME: dict[str, RelationKind] = {
    **{kind.name: kind for kind in RELATION_KINDS},
    **{kind.qualified_name: kind for kind in RELATION_KINDS},
}

RELATION_CONSTRUCTORS: frozenset[str] = frozenset(kind.constructor for kind in RELATION_KINDS)


def lookup_kind(type_name: Optional[str]) -> Optional[RelationKind]:
    """
    Exact-match lookup of a short or fully-qualified type name.
    A leading namespace separator (as in `\\Illuminate\\...`) is ignored.
    """
    if not type_name:
        return None
    return KIND_BY_TYPE_NAME.get(type_name.lstrip("\\"))


def is_relation_type(type_name: Optional[str]) -> bool:
    return lookup_kind(type_name) is not None

from typing import Optional

from eloquent_generics.models.ast_models import GenericAnnotation
from eloquent_generics.models.relation_kinds import (
    MORPH_PLACEHOLDER,
    SELF,
    ArgumentRole,
    RelationKind,
)


def synthesize_generic(kind: RelationKind, related_model: Optional[str]) -> GenericAnnotation:
    """
    Builds the generic annotation for a relation kind, e.g.
    BelongsTo + "Company" -> BelongsTo<Company, self>
    HasMany + "Post"      -> HasMany<Post>
    MorphTo + (anything)  -> MorphTo<Model, self>
    """
    if kind.role is ArgumentRole.PLACEHOLDER_AND_SELF:
        return GenericAnnotation(kind.name, (MORPH_PLACEHOLDER, SELF))

    if not related_model:
        raise ValueError(f"{kind.name} needs a related model")

    if kind.role is ArgumentRole.ENTITY_ONLY:
        return GenericAnnotation(kind.name, (related_model,))

    return GenericAnnotation(kind.name, (related_model, SELF))

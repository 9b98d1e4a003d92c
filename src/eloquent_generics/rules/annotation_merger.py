from typing import Optional

from eloquent_generics.models.ast_models import GenericAnnotation, ReturnTag
from eloquent_generics.models.relation_kinds import is_relation_type


def merge_return_annotation(existing: Optional[ReturnTag],
                            annotation: GenericAnnotation) -> Optional[GenericAnnotation]:
    """
    Decides what the method's @return type should become.

    - no tag: the new annotation
    - tag typed as a relation (`BelongsTo`, `HasMany<Post>`, ...): its own base name
      kept as written, arguments taken from the new annotation
    - anything else was written by hand for another reason: None, leave it alone
    """
    if existing is None:
        return annotation

    current = existing.annotation
    if current is None or not is_relation_type(current.base):
        return None

    return GenericAnnotation(current.base, annotation.arguments)

from typing import Optional

from eloquent_generics.models.ast_models import MethodDeclaration
from eloquent_generics.models.relation_kinds import RelationKind, lookup_kind


def detect_relation_kind(method: MethodDeclaration) -> Optional[RelationKind]:
    """
    Returns the relation kind named by the method's declared return type.
    The indexer leaves `return_type` empty for anything that is not a plain
    name (nullable, union, primitive types), so those never match.
    """
    return lookup_kind(method.return_type)

import logging
from typing import Optional

from eloquent_generics.models.ast_models import (
    CallExpression,
    ClassConstantReference,
    Expression,
    MethodDeclaration,
    ReturnStatement,
    StringLiteral,
)
from eloquent_generics.models.relation_kinds import RELATION_CONSTRUCTORS, SELF

logger = logging.getLogger(__name__)

# Upper bound on how many chained calls we follow back from a return expression.
MAX_CHAIN_DEPTH = 64


def resolve_related_model(method: MethodDeclaration) -> Optional[str]:
    """
    Finds the related model's short name for a relation method, e.g. "Company"
    for `return $this->belongsTo(Company::class)->withDefault();`.

    Only top-level return statements are looked at; the first one that resolves wins.
    """
    if not method.statements:
        return None

    for stmt in method.statements:
        if not isinstance(stmt, ReturnStatement):
            continue
        if not isinstance(stmt.expression, CallExpression):
            continue

        relation_call = find_relation_call(stmt.expression)
        if relation_call is None:
            continue

        model = _model_from_argument(relation_call.arguments[0] if relation_call.arguments else None)
        if model is not None:
            return normalize_model_name(model)

        logger.debug("%s(): unsupported argument to %s()", method.name, relation_call.name)

    return None


def find_relation_call(expr: CallExpression) -> Optional[CallExpression]:
    """
    Walks from the outermost call back through its receivers until a relation
    constructor call (belongsTo, hasMany, ...) is found.
    """
    current: Optional[Expression] = expr
    for _ in range(MAX_CHAIN_DEPTH):
        if not isinstance(current, CallExpression):
            return None
        if current.name in RELATION_CONSTRUCTORS:
            return current
        current = current.receiver
    return None


def _model_from_argument(arg: Optional[Expression]) -> Optional[str]:
    # Company::class / \App\Models\Company::class / static::class
    if isinstance(arg, ClassConstantReference):
        if arg.constant.lower() != "class":
            return None
        return short_class_name(arg.class_name)

    # 'App\Models\Company'
    if isinstance(arg, StringLiteral) and arg.value:
        return short_class_name(arg.value)

    return None


def short_class_name(name: str) -> str:
    return name.rstrip("\\").split("\\")[-1]


def normalize_model_name(name: str) -> str:
    return SELF if name == "static" else name

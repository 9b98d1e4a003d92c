import logging
from dataclasses import dataclass, field
from enum import Enum

from eloquent_generics.models.ast_models import MethodDeclaration, ReturnTag
from eloquent_generics.rules.annotation_merger import merge_return_annotation
from eloquent_generics.rules.generic_synthesizer import synthesize_generic
from eloquent_generics.rules.model_resolver import resolve_related_model
from eloquent_generics.rules.relation_detector import detect_relation_kind

logger = logging.getLogger(__name__)


class Outcome(Enum):
    CHANGED = "changed"
    UNCHANGED = "unchanged"  # annotation was already correct
    NOT_APPLICABLE = "not-applicable"
    UNRECOGNIZED = "unrecognized"  # an unrelated @return tag is in the way


@dataclass
class RefactorResult:
    method: MethodDeclaration
    outcome: Outcome

    @property
    def changed(self) -> bool:
        return self.outcome is Outcome.CHANGED


@dataclass(frozen=True)
class CodeSample:
    before: str
    after: str


@dataclass(frozen=True)
class RuleDefinition:
    description: str
    samples: list[CodeSample] = field(default_factory=list)


BEFORE_SAMPLE = """\
use Illuminate\\Database\\Eloquent\\Relations\\BelongsTo;

class User extends Model
{
    public function company(): BelongsTo
    {
        return $this->belongsTo(Company::class);
    }
}
"""

AFTER_SAMPLE = """\
use Illuminate\\Database\\Eloquent\\Relations\\BelongsTo;

class User extends Model
{
    /**
     * @return BelongsTo<Company, self>
     */
    public function company(): BelongsTo
    {
        return $this->belongsTo(Company::class);
    }
}
"""


class EloquentGenericRule:
    """
    Adds generic types to the @return tag of Laravel Eloquent relationship methods.
    Visits one method declaration at a time and keeps no state between visits.
    """

    node_types = ("method_declaration",)

    def definition(self) -> RuleDefinition:
        return RuleDefinition(
            "Add generic type to Laravel Eloquent relationships",
            [CodeSample(BEFORE_SAMPLE, AFTER_SAMPLE)],
        )

    def refactor(self, method: MethodDeclaration) -> RefactorResult:
        # must declare a return type like BelongsTo, HasOne etc.
        kind = detect_relation_kind(method)
        if kind is None:
            return RefactorResult(method, Outcome.NOT_APPLICABLE)

        related_model = None
        if kind.requires_entity:
            related_model = resolve_related_model(method)
            if related_model is None:
                logger.debug("%s(): no related model found for %s", method.name, kind.name)
                return RefactorResult(method, Outcome.NOT_APPLICABLE)

        annotation = synthesize_generic(kind, related_model)
        merged = merge_return_annotation(method.return_tag, annotation)
        if merged is None:
            logger.debug("%s(): leaving @return %s as written", method.name, method.return_tag.raw_type)
            return RefactorResult(method, Outcome.UNRECOGNIZED)

        existing = method.return_tag
        if existing is not None and existing.annotation == merged:
            return RefactorResult(method, Outcome.UNCHANGED)

        if existing is None:
            method.return_tag = ReturnTag(merged, merged.render())
        else:
            method.return_tag = existing.with_annotation(merged)
        return RefactorResult(method, Outcome.CHANGED)

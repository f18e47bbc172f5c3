"""Validation Engine: walks an entity's fields, dispatches strategies, builds the report.

This is the main entry point for entity validation. Every constrained field
is checked against every declaration it carries; nested entities are
validated recursively and their reports folded into the parent violation.

Usage:
    engine = ValidationEngine()
    report = engine.validate(entity)
    if report.has_error():
        # Inspect report.get_errors(type(entity))
"""

import time
from typing import Optional, Union

import structlog

from envali.config import get_settings
from envali.exceptions import ConfigurationError, EntityTypeError, NestedEntityCycleError, NestingTooDeepError
from envali.validators.base import BaseStrategy
from envali.validators.constraints import ConstraintDeclaration
from envali.validators.content import ContentResolver, ContentSource, JsonContentSource
from envali.validators.dispatch import StrategyDispatchTable
from envali.validators.entity import ValidatableEntity
from envali.validators.fields import FieldAccessor, describe_fields
from envali.validators.models import Severity, ValidationReport, Violation, type_key

logger = structlog.get_logger()


def _leaf_severity(value: Union[Severity, str]) -> Severity:
    try:
        severity = Severity(value)
    except ValueError:
        raise ConfigurationError(f"Unknown severity: {value!r}") from None
    if severity == Severity.NESTED:
        raise ConfigurationError("'nested' is reserved for nested-entity reports and cannot be a default severity")
    return severity


class ValidationEngine:
    """Validates entity graphs and produces a ValidationReport.

    Design principles:
        - Deterministic: same entity graph → structurally equal report
        - Complete: every field and every constraint is checked, no short-circuit
        - Stateless between calls: each validate() owns its accumulator
        - Configuration defects raise instead of being folded into the report
    """

    def __init__(
        self,
        content_source: Optional[ContentSource] = None,
        dispatch_table: Optional[StrategyDispatchTable] = None,
        max_depth: Optional[int] = None,
        default_severity: Union[Severity, str, None] = None,
    ):
        """Initialize with settings-driven defaults or explicit collaborators.

        Args:
            content_source: External condition source. Defaults to the JSON
                files under ENVALI_CONTENT_DIR.
            dispatch_table: Strategy table. Defaults to all built-in strategies.
            max_depth: Maximum nested-entity depth.
            default_severity: Severity for declarations that configure none.
        """
        settings = get_settings()
        if content_source is None:
            content_source = JsonContentSource(settings.CONTENT_DIR)
        self.resolver = ContentResolver(content_source)
        self.dispatch_table = dispatch_table or StrategyDispatchTable()
        self.max_depth = max_depth if max_depth is not None else settings.MAX_NESTING_DEPTH
        if self.max_depth < 1:
            raise ConfigurationError(f"max_depth must be at least 1, got {self.max_depth}")
        self.default_severity = _leaf_severity(default_severity or settings.DEFAULT_SEVERITY)

    def validate(self, entity: ValidatableEntity) -> ValidationReport:
        """Validate an entity graph.

        Args:
            entity: The root entity

        Returns:
            ValidationReport; empty when the whole graph is valid

        Raises:
            ConfigurationError: on any configuration or usage defect
        """
        start_time = time.perf_counter()
        entity_name = type(entity).__name__

        try:
            report = self._validate(entity, path=())
        except ConfigurationError as e:
            logger.error(
                "validation_aborted",
                entity=entity_name,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        total_duration = (time.perf_counter() - start_time) * 1000

        logger.info(
            "validation_complete",
            entity=entity_name,
            has_error=report.has_error(),
            summary=report.summary,
            duration_ms=round(total_duration, 2),
        )

        return report

    def _validate(self, entity: ValidatableEntity, path: tuple[int, ...]) -> ValidationReport:
        if not isinstance(entity, ValidatableEntity):
            raise EntityTypeError(f"{type(entity).__name__} is not a ValidatableEntity")
        if id(entity) in path:
            raise NestedEntityCycleError(
                f"{type(entity).__name__} is already being validated higher up the nesting path"
            )
        if len(path) >= self.max_depth:
            raise NestingTooDeepError(f"Nested entities exceed the maximum depth of {self.max_depth}")

        path = path + (id(entity),)
        entity_type = type(entity)
        violations: list[Violation] = []

        for descriptor in describe_fields(entity_type):
            field = FieldAccessor(entity, descriptor)
            for declaration in descriptor.constraints:
                strategy = self.dispatch_table.dispatch(declaration.tag)
                declaration = self._prepare(entity_type, descriptor.name, declaration)

                if strategy.recurses:
                    violations.extend(self._validate_nested(field, declaration, strategy, path))
                    continue

                violation = strategy.validate(field, declaration)
                if violation is None:
                    continue
                if violation.severity == Severity.RUNTIME:
                    logger.warning(
                        "runtime_violation",
                        entity=entity_type.__name__,
                        field=violation.field,
                        constraint=violation.constraint,
                        message=violation.message,
                    )
                violations.append(violation)

        return ValidationReport.build(type_key(entity_type), violations)

    def _prepare(
        self, entity_type: type, field_name: str, declaration: ConstraintDeclaration
    ) -> ConstraintDeclaration:
        """Complete a declaration from external content and settle its severity."""
        declaration = self.resolver.complete(entity_type, field_name, declaration)
        if declaration.severity is None:
            declaration = declaration.with_severity(self.default_severity)
        return declaration

    def _validate_nested(
        self,
        field: FieldAccessor,
        declaration: ConstraintDeclaration,
        strategy: BaseStrategy,
        path: tuple[int, ...],
    ) -> list[Violation]:
        """One wrapped violation per nested entity whose report has errors."""
        violations = []
        for element, nested_entity in strategy.nested_entities(field):
            report = self._validate(nested_entity, path)
            if report.has_error():
                violations.append(strategy.wrap(field, declaration, report, element))
        return violations


# Module-level singleton
validation_engine = ValidationEngine()


def validate(entity: ValidatableEntity) -> ValidationReport:
    """Validate an entity with the default engine."""
    return validation_engine.validate(entity)

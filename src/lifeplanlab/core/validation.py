"""
Validation and repair utilities for LifePlanLab.

The check functions are read-only over a snapshot and produce structured
reports. :func:`fix_data_integrity_issues` is the only entry point that
changes data, and it only touches issues flagged ``fixable``.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Any

from .kinds import DEFAULT_PLAN_NAME, K
from .state import PlanDirectoryEntry, PlanState
from .utils import dedupe

logger = logging.getLogger(__name__)

MISSING_PLAN = "missing_plan"
ORPHAN_REFERENCE = "orphan_reference"
DUPLICATE_PLAN = "duplicate_plan"
INVALID_DATA = "invalid_data"
INCONSISTENT_DATA = "inconsistent_data"

ISSUE_KINDS = (
    MISSING_PLAN,
    ORPHAN_REFERENCE,
    DUPLICATE_PLAN,
    INVALID_DATA,
    INCONSISTENT_DATA,
)


@dataclass(frozen=True)
class ValidationIssue:
    """
    One detected problem in a snapshot.

    Attributes:
        kind: One of :data:`ISSUE_KINDS`
        message: Human-readable description
        item_name: Item concerned, if any
        plan_name: Plan concerned, if any
        category: Category of the item, if known
        fixable: Whether :func:`fix_data_integrity_issues` may repair it
    """

    kind: str
    message: str
    item_name: str | None = None
    plan_name: str | None = None
    category: str | None = None
    fixable: bool = True

    @property
    def key(self) -> tuple:
        return (self.kind, self.item_name, self.plan_name, self.category)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.kind,
            "message": self.message,
            "fixable": self.fixable,
        }
        if self.item_name is not None:
            data["itemName"] = self.item_name
        if self.plan_name is not None:
            data["planName"] = self.plan_name
        if self.category is not None:
            data["category"] = self.category
        return data


@dataclass
class ValidationReport:
    """
    Result of :func:`validate_plan_data` and :func:`validate_plan_references`.

    Errors make the report invalid; warnings do not.
    """

    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
        }

    def __str__(self) -> str:
        lines = ["✅ Validation passed" if self.is_valid else "❌ Validation failed"]
        for issue in self.errors:
            lines.append(f"error [{issue.kind}] {issue.message}")
        for issue in self.warnings:
            lines.append(f"warning [{issue.kind}] {issue.message}")
        return "\n".join(lines)


@dataclass(frozen=True)
class ConsistencySummary:
    """Aggregate counts over a snapshot."""

    total_items: int = 0
    total_plans: int = 0
    orphan_references: int = 0
    duplicate_plans: int = 0
    invalid_data: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalItems": self.total_items,
            "totalPlans": self.total_plans,
            "orphanReferences": self.orphan_references,
            "duplicatePlans": self.duplicate_plans,
            "invalidData": self.invalid_data,
        }


@dataclass
class ConsistencyReport:
    """Result of :func:`check_data_consistency`."""

    issues: list[ValidationIssue] = field(default_factory=list)
    summary: ConsistencySummary = field(default_factory=ConsistencySummary)

    @property
    def is_consistent(self) -> bool:
        return not self.issues

    def to_dict(self) -> dict[str, Any]:
        return {
            "isConsistent": self.is_consistent,
            "issues": [issue.to_dict() for issue in self.issues],
            "summary": self.summary.to_dict(),
        }

    def __str__(self) -> str:
        s = self.summary
        lines = [
            "✅ Data is consistent" if self.is_consistent else "❌ Data is inconsistent",
            f"items={s.total_items} plans={s.total_plans} "
            f"orphans={s.orphan_references} duplicates={s.duplicate_plans} "
            f"invalid={s.invalid_data}",
        ]
        lines.extend(f"[{issue.kind}] {issue.message}" for issue in self.issues)
        return "\n".join(lines)


@dataclass
class FixReport:
    """
    Result of :func:`fix_data_integrity_issues`.

    Attributes:
        success: True when no issue remains
        fixed_issues: Number of issues repaired
        remaining_issues: Issues left in place (always includes non-fixable ones)
    """

    success: bool
    fixed_issues: int = 0
    remaining_issues: list[ValidationIssue] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "fixedIssues": self.fixed_issues,
            "remainingIssues": [issue.to_dict() for issue in self.remaining_issues],
        }


def _duplicates(names) -> list[str]:
    counts = Counter(names)
    return [name for name in dedupe(names) if counts[name] > 1]


def _orphan_active_issue(item_name: str, entry: PlanDirectoryEntry) -> ValidationIssue:
    return ValidationIssue(
        kind=ORPHAN_REFERENCE,
        message=(
            f"Active plan '{entry.active_plan}' of '{item_name}' "
            f"is not among its available plans"
        ),
        item_name=item_name,
        plan_name=entry.active_plan,
    )


def validate_plan_data(state: PlanState) -> ValidationReport:
    """
    Check each directory entry on its own.

    Reports, per item:
    - an active plan missing from the available plans (error, ``orphan_reference``)
    - a plan name listed more than once (error, ``duplicate_plan``)
    - the default plan missing from the available plans (warning, ``missing_plan``)
    """
    report = ValidationReport()
    for item_name, entry in state.plans.items():
        if not entry.has_plan(entry.active_plan):
            report.errors.append(_orphan_active_issue(item_name, entry))
        for name in _duplicates(entry.available_plans):
            report.errors.append(
                ValidationIssue(
                    kind=DUPLICATE_PLAN,
                    message=f"Plan '{name}' is listed more than once for '{item_name}'",
                    item_name=item_name,
                    plan_name=name,
                )
            )
        if not entry.has_plan(DEFAULT_PLAN_NAME):
            report.warnings.append(
                ValidationIssue(
                    kind=MISSING_PLAN,
                    message=f"Default plan is missing for '{item_name}'",
                    item_name=item_name,
                    plan_name=DEFAULT_PLAN_NAME,
                )
            )
    return report


def validate_plan_references(state: PlanState) -> ValidationReport:
    """
    Check that active plans resolve and that no item has an empty plan list.
    """
    report = ValidationReport()
    for item_name, entry in state.plans.items():
        if not entry.available_plans:
            report.errors.append(
                ValidationIssue(
                    kind=MISSING_PLAN,
                    message=f"'{item_name}' has no available plans",
                    item_name=item_name,
                )
            )
        if not entry.has_plan(entry.active_plan):
            report.errors.append(_orphan_active_issue(item_name, entry))
    return report


def check_data_consistency(state: PlanState) -> ConsistencyReport:
    """
    Cross-check the plan directory against the category collections.

    Reports:
    - directory entries whose item exists in no category (``orphan_reference``,
      not fixable; the entry is kept so a re-created item finds its plans)
    - items without a directory entry (``missing_plan``)
    - setting keys not listed in the item's available plans (``inconsistent_data``)
    - items whose type is neither flow nor stock (``invalid_data``, not fixable)
    """
    report = ConsistencyReport()
    item_names = set()
    total_items = 0

    for category, item_name, item in state.iter_items():
        total_items += 1
        item_names.add(item_name)

        if not item.has_valid_type:
            report.issues.append(
                ValidationIssue(
                    kind=INVALID_DATA,
                    message=f"'{item_name}' has invalid type {item.type!r}",
                    item_name=item_name,
                    category=category,
                    fixable=False,
                )
            )

        entry = state.plans.get(item_name)
        if entry is None:
            report.issues.append(
                ValidationIssue(
                    kind=MISSING_PLAN,
                    message=f"'{item_name}' has no plan directory entry",
                    item_name=item_name,
                    plan_name=DEFAULT_PLAN_NAME,
                    category=category,
                )
            )
            continue

        for plan_name in item.settings:
            if not entry.has_plan(plan_name):
                report.issues.append(
                    ValidationIssue(
                        kind=INCONSISTENT_DATA,
                        message=(
                            f"Setting '{plan_name}' of '{item_name}' "
                            f"has no matching plan"
                        ),
                        item_name=item_name,
                        plan_name=plan_name,
                        category=category,
                    )
                )

    for item_name in state.plans:
        if item_name not in item_names:
            report.issues.append(
                ValidationIssue(
                    kind=ORPHAN_REFERENCE,
                    message=f"Plan entry '{item_name}' has no matching item",
                    item_name=item_name,
                    fixable=False,
                )
            )

    counts = Counter(issue.kind for issue in report.issues)
    report.summary = ConsistencySummary(
        total_items=total_items,
        total_plans=sum(len(e.available_plans) for e in state.plans.values()),
        orphan_references=counts[ORPHAN_REFERENCE],
        duplicate_plans=sum(
            len(_duplicates(e.available_plans)) for e in state.plans.values()
        ),
        invalid_data=counts[INVALID_DATA],
    )
    return report


def collect_issues(state: PlanState) -> list[ValidationIssue]:
    """Union of all issues from the three checks, without repeats."""
    data = validate_plan_data(state)
    references = validate_plan_references(state)
    consistency = check_data_consistency(state)
    issues = {}
    for issue in (
        data.errors
        + data.warnings
        + references.errors
        + references.warnings
        + consistency.issues
    ):
        issues.setdefault(issue.key, issue)
    return list(issues.values())


def _fix_orphan_reference(state: PlanState, issue: ValidationIssue) -> PlanState | None:
    entry = state.plans.get(issue.item_name)
    if entry is None:
        return None
    if entry.has_plan(entry.active_plan):
        return state
    available = entry.available_plans
    if DEFAULT_PLAN_NAME not in available:
        available = (DEFAULT_PLAN_NAME,) + available
    return state.with_entry(
        issue.item_name,
        replace(entry, available_plans=available, active_plan=DEFAULT_PLAN_NAME),
    )


def _fix_missing_plan(state: PlanState, issue: ValidationIssue) -> PlanState | None:
    entry = state.plans.get(issue.item_name)
    if entry is None:
        # rebuild from the settings keys so no plan data is dropped
        names = [DEFAULT_PLAN_NAME]
        for _, item in state.find_items(issue.item_name):
            names.extend(item.settings)
        return state.with_entry(
            issue.item_name, PlanDirectoryEntry(dedupe(names), DEFAULT_PLAN_NAME)
        )
    if entry.has_plan(DEFAULT_PLAN_NAME):
        return state
    return state.with_entry(
        issue.item_name,
        replace(entry, available_plans=(DEFAULT_PLAN_NAME,) + entry.available_plans),
    )


def _fix_duplicate_plan(state: PlanState, issue: ValidationIssue) -> PlanState | None:
    entry = state.plans.get(issue.item_name)
    if entry is None:
        return None
    return state.with_entry(
        issue.item_name, replace(entry, available_plans=dedupe(entry.available_plans))
    )


def _fix_inconsistent_data(state: PlanState, issue: ValidationIssue) -> PlanState | None:
    if issue.category not in K.all_categories():
        return None
    item = state.category_items(issue.category).get(issue.item_name)
    if item is None:
        return None
    entry = state.plans.get(issue.item_name)
    if entry is not None and entry.has_plan(issue.plan_name):
        return state
    return state.with_item(
        issue.category, issue.item_name, item.without_setting(issue.plan_name)
    )


_FIXERS = {
    ORPHAN_REFERENCE: _fix_orphan_reference,
    MISSING_PLAN: _fix_missing_plan,
    DUPLICATE_PLAN: _fix_duplicate_plan,
    INCONSISTENT_DATA: _fix_inconsistent_data,
}


def fix_data_integrity_issues(
    state: PlanState, auto_fix: bool
) -> tuple[PlanState, FixReport]:
    """
    Repair the fixable issues found by all three checks.

    A single pass runs over the issues collected before any change, so
    ``fixed_issues`` only counts issues that were reported. Whatever the checks
    still find afterwards is returned as ``remaining_issues``.

    Repairs per kind:
    - ``orphan_reference``: reset the active plan to the default plan
    - ``missing_plan``: insert the default plan; an absent entry is rebuilt
      from the default plan followed by the item's settings keys
    - ``duplicate_plan``: keep the first occurrence of each name
    - ``inconsistent_data``: delete the dangling setting key

    Args:
        state: Current snapshot
        auto_fix: When False, nothing is changed and every issue is reported
            as remaining

    Returns:
        ``(new_state, report)``
    """
    issues = collect_issues(state)
    if not auto_fix:
        return state, FixReport(success=False, remaining_issues=issues)

    fixed = 0
    for issue in issues:
        if not issue.fixable or issue.kind not in _FIXERS:
            continue
        repaired = _FIXERS[issue.kind](state, issue)
        if repaired is None:
            continue
        state = repaired
        fixed += 1
        logger.info("Fixed %s issue for '%s'", issue.kind, issue.item_name)
    issues = collect_issues(state)

    return state, FixReport(
        success=not issues, fixed_issues=fixed, remaining_issues=issues
    )

"""Unit tests for bootstrap step selection."""

from __future__ import annotations

import pytest

from monstack_cli.bootstrap import (
    EXECUTION_ORDER,
    Step,
    StepDirective,
    StepSelection,
    directives_from_args,
)
from monstack_cli.errors import StepSelectionError


def _resolve(*args: str) -> StepSelection:
    return StepSelection.resolve(directives_from_args(list(args)))


class TestStep:
    """Tests for Step enum."""

    def test_execution_order(self):
        """Steps are declared in the order they run."""
        assert [s.value for s in EXECUTION_ORDER] == [
            "docker",
            "compose",
            "env",
            "secrets",
            "prometheus",
            "alertmanager",
            "alert_rules",
        ]


class TestDirectives:
    """Tests for collecting --step/--skip from raw arguments."""

    def test_equals_and_separate_forms(self):
        directives = directives_from_args(["--step=env,secrets", "--skip", "secrets"])
        assert directives == [
            StepDirective("--step", ("env", "secrets")),
            StepDirective("--skip", ("secrets",)),
        ]

    def test_other_arguments_ignored(self):
        directives = directives_from_args(["--install-docker", "--skip=docker"])
        assert directives == [StepDirective("--skip", ("docker",))]

    def test_empty_items_dropped(self):
        assert StepDirective.parse("--step", "env,,secrets,").names == ("env", "secrets")


class TestStepSelection:
    """Tests for StepSelection.resolve."""

    def test_default_enables_everything(self):
        selection = _resolve()
        assert set(selection) == set(Step)
        assert len(selection) == 7

    def test_step_then_skip(self):
        """--step narrows, --skip then removes."""
        selection = _resolve("--step=env,secrets", "--skip=secrets")
        assert selection.enabled == frozenset({Step.ENV})

    def test_skip_only(self):
        selection = _resolve("--skip=docker,compose")
        assert selection.names() == ["env", "secrets", "prometheus", "alertmanager", "alert_rules"]

    def test_second_step_does_not_reset(self):
        selection = _resolve("--step=env", "--step=prometheus")
        assert selection.names() == ["env", "prometheus"]

    def test_left_to_right(self):
        """A later --step re-enables a step skipped earlier."""
        selection = _resolve("--step=env,secrets", "--skip=env", "--step=env")
        assert selection.names() == ["env", "secrets"]

    def test_step_all(self):
        selection = _resolve("--step=all", "--skip=alert_rules")
        assert Step.ALERT_RULES not in selection
        assert Step.DOCKER in selection

    def test_iterates_in_execution_order(self):
        selection = _resolve("--step=alert_rules,env,docker")
        assert list(selection) == [Step.DOCKER, Step.ENV, Step.ALERT_RULES]

    def test_unknown_step(self):
        with pytest.raises(StepSelectionError) as exc:
            _resolve("--step=env,grafana")
        assert exc.value.message == "Unknown step: grafana"

    def test_unknown_skip(self):
        with pytest.raises(StepSelectionError) as exc:
            _resolve("--skip=nope")
        assert exc.value.message == "Unknown step to skip: nope"

    def test_all_not_accepted_by_skip(self):
        with pytest.raises(StepSelectionError):
            _resolve("--skip=all")

    def test_selection_is_immutable(self):
        selection = _resolve("--step=env")
        with pytest.raises(AttributeError):
            selection.enabled = frozenset()  # type: ignore[misc]

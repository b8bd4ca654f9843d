"""Step selection for ``monstack init``.

Steps are chosen once, up front, from the ordered ``--step``/``--skip``
directives. The resulting ``StepSelection`` is immutable and iterates in
execution order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum

from ..errors import StepSelectionError

ALL_STEPS_ALIAS = "all"


class Step(Enum):
    """Named units of setup work, declared in execution order."""

    DOCKER = "docker"
    COMPOSE = "compose"
    ENV = "env"
    SECRETS = "secrets"
    PROMETHEUS = "prometheus"
    ALERTMANAGER = "alertmanager"
    ALERT_RULES = "alert_rules"

    @classmethod
    def names(cls) -> list[str]:
        return [step.value for step in cls]


EXECUTION_ORDER: tuple[Step, ...] = tuple(Step)
GENERATION_STEPS = frozenset({Step.PROMETHEUS, Step.ALERTMANAGER, Step.ALERT_RULES})


@dataclass(frozen=True)
class StepDirective:
    """One --step or --skip flag, in the order it appeared."""

    flag: str  # "--step" or "--skip"
    names: tuple[str, ...]

    @classmethod
    def parse(cls, flag: str, value: str) -> StepDirective:
        names = tuple(part.strip() for part in value.split(",") if part.strip())
        return cls(flag, names)


def _lookup(name: str, flag: str) -> set[Step]:
    if name == ALL_STEPS_ALIAS and flag == "--step":
        return set(Step)
    try:
        return {Step(name)}
    except ValueError:
        raise StepSelectionError(name, flag) from None


@dataclass(frozen=True)
class StepSelection:
    """Immutable set of enabled steps."""

    enabled: frozenset[Step] = frozenset(Step)

    @classmethod
    def resolve(cls, directives: Sequence[StepDirective]) -> StepSelection:
        """Apply directives left to right, starting from every step enabled.

        The first --step clears the set before enabling what it lists.

        Raises:
            StepSelectionError: A directive names an unknown step.
        """
        enabled = set(Step)
        seen_step = False
        for directive in directives:
            if directive.flag == "--step":
                if not seen_step:
                    enabled.clear()
                    seen_step = True
                for name in directive.names:
                    enabled |= _lookup(name, directive.flag)
            elif directive.flag == "--skip":
                for name in directive.names:
                    enabled -= _lookup(name, directive.flag)
            else:
                raise ValueError(f"Unknown directive flag: {directive.flag}")
        return cls(frozenset(enabled))

    @classmethod
    def only(cls, steps: Iterable[Step]) -> StepSelection:
        return cls(frozenset(steps))

    def __contains__(self, step: object) -> bool:
        return step in self.enabled

    def __iter__(self) -> Iterator[Step]:
        return (step for step in EXECUTION_ORDER if step in self.enabled)

    def __len__(self) -> int:
        return len(self.enabled)

    def names(self) -> list[str]:
        return [step.value for step in self]


def directives_from_args(args: Sequence[str]) -> list[StepDirective]:
    """Collect --step/--skip directives from raw arguments, preserving order.

    Accepts both ``--step=a,b`` and ``--step a,b``. Other arguments are ignored.
    """
    directives = []
    tokens = list(args)
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == "--":
            break
        for flag in ("--step", "--skip"):
            if token.startswith(flag + "="):
                directives.append(StepDirective.parse(flag, token[len(flag) + 1 :]))
            elif token == flag and i + 1 < len(tokens):
                directives.append(StepDirective.parse(flag, tokens[i + 1]))
                i += 1
        i += 1
    return directives

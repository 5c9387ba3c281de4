from __future__ import annotations

import random
from collections.abc import Mapping, Sequence

from ..errors import GenerationError, ValidationError


DEFAULT_MAX_ATTEMPTS = 10_000


def generate_assignment(
    members: Sequence[str],
    rng=None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> dict[str, str]:
    """
    Draw a random derangement: every member gives to exactly one other member
    and receives from exactly one other member.

    rng only needs a ``shuffle`` method; pass a seeded ``random.Random`` for
    reproducible draws.
    """
    names = list(members)
    if len(names) < 2:
        raise GenerationError("Need at least 2 members to draw.")
    if len(set(names)) != len(names):
        raise GenerationError("Member names must be unique.")

    # a 2-set has exactly one derangement
    if len(names) == 2:
        assignment = {names[0]: names[1], names[1]: names[0]}
        validate_assignment(assignment, names)
        return assignment

    rng = rng or random
    receivers = names[:]
    attempts = 0
    while True:
        attempts += 1
        if attempts > max_attempts:
            raise GenerationError(f"Could not draw a valid assignment in {max_attempts} attempts.")
        rng.shuffle(receivers)
        if all(giver != receiver for giver, receiver in zip(names, receivers)):
            break

    assignment = dict(zip(names, receivers))
    validate_assignment(assignment, names)
    return assignment


def validate_assignment(assignment: Mapping[str, str], members: Sequence[str]) -> None:
    if not isinstance(assignment, Mapping):
        raise ValidationError("assignment is not a mapping")

    if len(assignment) != len(members):
        raise ValidationError("number of givers does not match number of members")

    values = list(assignment.values())
    if len(values) != len(members):
        raise ValidationError("number of giftees does not match number of members")

    for name in members:
        if not assignment.get(name):
            raise ValidationError(f"no giftee for {name}")
    for name in members:
        if assignment[name] == name:
            raise ValidationError(f"{name} gives to themselves")

    if len(set(values)) != len(values):
        raise ValidationError("a member receives more than one gift")

    outsiders = sorted(set(values) - set(members))
    if outsiders:
        raise ValidationError(f"giftees outside the group: {', '.join(outsiders)}")

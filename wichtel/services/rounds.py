from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from ..errors import ValidationError
from ..extensions import db
from ..models import RoundRecord
from .assignments import DEFAULT_MAX_ATTEMPTS, generate_assignment, validate_assignment


logger = logging.getLogger(__name__)


@dataclass
class Round:
    members: list[str]
    assignments: dict[str, str]
    revealed: list[str] = field(default_factory=list)

    @property
    def available_members(self) -> list[str]:
        revealed = set(self.revealed)
        return [name for name in self.members if name not in revealed]

    def to_payload(self) -> dict:
        return {
            "members": list(self.members),
            "assignments": dict(self.assignments),
            "revealed": list(self.revealed),
        }

    @classmethod
    def from_payload(cls, data) -> "Round":
        """Raises ValueError when the record does not have the round's shape."""
        if not isinstance(data, dict):
            raise ValueError("round record is not an object")

        members = data.get("members")
        assignments = data.get("assignments")
        revealed = data.get("revealed", [])

        if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
            raise ValueError("members must be a list of strings")
        if not isinstance(assignments, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in assignments.items()
        ):
            raise ValueError("assignments must map strings to strings")
        if not isinstance(revealed, list) or not all(isinstance(r, str) for r in revealed):
            raise ValueError("revealed must be a list of strings")

        return cls(members=members, assignments=assignments, revealed=revealed)


class RoundStore:
    """Reads and writes the singleton round row. Needs an application context."""

    def load(self) -> str | None:
        try:
            record = RoundRecord.get_singleton()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Could not read the stored round")
            return None
        return record.payload if record else None

    def save(self, payload: str) -> None:
        try:
            record = RoundRecord.get_singleton()
            if record is None:
                record = RoundRecord(payload=payload)
                db.session.add(record)
            else:
                record.payload = payload
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise


class RoundManager:
    """
    Owns the round's backing store. The store is the source of truth: every
    operation reloads the round from it.

    Every load-modify-persist sequence runs under ``self.lock`` so two requests
    in the same process can never both append to a stale revealed list.
    """

    def __init__(self, members, store=None, rng=None, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.members = list(members)
        self.store = store if store is not None else RoundStore()
        self.rng = rng
        self.max_attempts = max_attempts
        self.lock = threading.RLock()

    def load(self) -> Round | None:
        raw = self.store.load()
        if raw is None:
            return None
        try:
            return Round.from_payload(json.loads(raw))
        except (ValueError, RecursionError) as e:
            logger.warning("Stored round could not be parsed: %s", e)
            return None

    def ensure_round(self, force_new: bool = False) -> Round:
        with self.lock:
            if force_new:
                return self._new_round("reset requested")

            round_ = self.load()
            if round_ is None:
                return self._new_round("no stored round")

            try:
                self._check(round_)
            except ValidationError as e:
                logger.warning("Stored round was invalid, drawing a new one: %s", e.reason)
                return self._new_round("stored round was invalid")

            return round_

    def persist(self, round_: Round) -> None:
        payload = json.dumps(round_.to_payload(), indent=2, ensure_ascii=False)
        with self.lock:
            self.store.save(payload)

    def reset(self) -> Round:
        return self.ensure_round(force_new=True)

    @contextmanager
    def locked(self) -> Iterator[Round]:
        with self.lock:
            yield self.ensure_round()

    def public_view(self, round_: Round | None = None) -> dict:
        round_ = round_ or self.ensure_round()
        return {
            "members": list(round_.members),
            "availableMembers": round_.available_members,
            "revealedMembers": list(round_.revealed),
        }

    def assignments(self) -> dict[str, str]:
        return dict(self.ensure_round().assignments)

    def _new_round(self, reason: str) -> Round:
        logger.info("Drawing a new assignment for %d members (%s)", len(self.members), reason)
        assignment = generate_assignment(self.members, rng=self.rng, max_attempts=self.max_attempts)
        round_ = Round(members=list(self.members), assignments=assignment, revealed=[])
        self.persist(round_)
        return round_

    def _check(self, round_: Round) -> None:
        validate_assignment(round_.assignments, self.members)
        if round_.members != self.members:
            raise ValidationError("stored members differ from the configured members")
        if len(set(round_.revealed)) != len(round_.revealed):
            raise ValidationError("a member is listed as revealed twice")
        unknown = [name for name in round_.revealed if name not in self.members]
        if unknown:
            raise ValidationError(f"unknown revealed members: {', '.join(unknown)}")

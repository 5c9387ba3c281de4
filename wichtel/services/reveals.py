from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import AssignmentMissingError, InvalidMemberError
from .rounds import RoundManager


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RevealResult:
    name: str
    giftee: str
    already_revealed: bool

    def to_dict(self) -> dict:
        return {"name": self.name, "giftee": self.giftee, "alreadyRevealed": self.already_revealed}


def reveal(manager: RoundManager, giver_name) -> RevealResult:
    """
    Show a giver their giftee. The first call marks the giver as revealed and
    persists the round; later calls return the same giftee without writing.
    """
    if not isinstance(giver_name, str) or giver_name not in manager.members:
        raise InvalidMemberError(giver_name)

    with manager.locked() as round_:
        giftee = round_.assignments.get(giver_name)
        if not giftee:
            raise AssignmentMissingError(giver_name)

        already_revealed = giver_name in round_.revealed
        if not already_revealed:
            round_.revealed.append(giver_name)
            manager.persist(round_)
            logger.info("%s revealed their giftee", giver_name)

    return RevealResult(name=giver_name, giftee=giftee, already_revealed=already_revealed)

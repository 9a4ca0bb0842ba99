import random

from dance_challenge.ledger import RoundOutcome
from dance_challenge.messages import (
    AVERAGE_MOVE_MESSAGE,
    BAD_MOVE_MESSAGES,
    BONUS_SUFFIX,
    GOOD_MOVE_MESSAGES,
    feedback_message,
    final_message,
)


def test_feedback_message_by_outcome():
    rng = random.Random(3)
    assert feedback_message(RoundOutcome.POSITIVE, rng) in GOOD_MOVE_MESSAGES
    assert feedback_message(RoundOutcome.NEGATIVE, rng) in BAD_MOVE_MESSAGES
    assert feedback_message(RoundOutcome.NEUTRAL, rng) == AVERAGE_MOVE_MESSAGE

    bonus = feedback_message(RoundOutcome.BONUS, rng)
    assert bonus.endswith(BONUS_SUFFIX)
    assert bonus[: -len(BONUS_SUFFIX)] in GOOD_MOVE_MESSAGES


def test_final_message_by_sign():
    assert final_message(0) == "Noice! :-)"
    assert final_message(12) == "Noice! :-)"
    assert final_message(-1) == "Room for improvement :-("

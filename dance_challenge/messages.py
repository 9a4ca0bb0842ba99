"""Flavor text shown after each round and at the end of a session."""

import random

from .ledger import RoundOutcome

# http://blog.writeathome.com/index.php/2014/01/100-ways-to-say-great/
GOOD_MOVE_MESSAGES = [
    "Great Move!",
    "Admirable!", "Amazing!", "Arresting!", "Astonishing!", "Astounding!", "Awesome!",
    "Awe-inspiring!", "Beautiful!", "Breathtaking!", "Brilliant!", "Capital!",
    "Captivating!", "Clever!", "Commendable!", "Delightful!", "Distinguished!",
    "Distinctive!", "Engaging!", "Enjoyable!", "Estimable!", "Excellent!",
    "Exceptional!", "Exemplary!", "Exquisite!", "Extraordinary!", "Fabulous!",
    "Fantastic!", "Fascinating!", "Finest!", "First-rate!", "Flawless!", "Four-star!",
    "Glorious!", "Grand!", "Impressive!", "Incomparable!", "Incredible!",
    "Inestimable!", "Invaluable!", "Laudable!", "Lovely!", "Magnificent!",
    "Marvelous!", "Masterful!", "Mind-blowing!", "Mind-boggling!", "Miraculous!",
    "Monumental!", "Notable!", "Out of sight!", "Out of this world!", "Outstanding!",
    "Overwhelming!", "Peerless!", "Perfect!", "Phenomenal!", "Praiseworthy!",
    "Priceless!", "Rapturous!", "Rare!", "Refreshing!", "Remarkable!", "Sensational!",
    "Singular!", "Skillful!", "Smashing!", "Solid!", "Special!", "Spectacular!",
    "Splendid!", "Splendiferous!", "Splendorous!", "Staggering!", "Sterling!",
    "Striking!", "Stunning!", "Stupendous!", "Super!", "Superb!", "Super-duper!",
    "Superior!", "Superlative!", "Supreme!", "Surprising!", "Terrific!", "Thumbs up!",
    "Thrilling!", "Tiptop!", "Top-notch!", "Transcendent!", "Tremendous!",
    "Unbelievable!", "Uncommon!", "Unique!", "Unparalleled!", "Unprecedented!",
    "Wonderful!", "Wondrous!", "World-class!",
]

BAD_MOVE_MESSAGES = ["Ouch!!", "Mmmmm!", "Haven't seen that before!", "Brave choice of move!"]

AVERAGE_MOVE_MESSAGE = "Pretty average"
BONUS_SUFFIX = "\n!!!!BONUS BOOST!!!!"

FINAL_GOOD_MESSAGE = "Noice! :-)"
FINAL_BAD_MESSAGE = "Room for improvement :-("


def feedback_message(outcome: RoundOutcome, rng: random.Random | None = None) -> str:
    """Pick a message for a round outcome (uniform draw from its table)."""
    rng = rng or random
    if outcome is RoundOutcome.BONUS:
        return rng.choice(GOOD_MOVE_MESSAGES) + BONUS_SUFFIX
    if outcome is RoundOutcome.POSITIVE:
        return rng.choice(GOOD_MOVE_MESSAGES)
    if outcome is RoundOutcome.NEGATIVE:
        return rng.choice(BAD_MOVE_MESSAGES)
    return AVERAGE_MOVE_MESSAGE


def final_message(score: int) -> str:
    return FINAL_BAD_MESSAGE if score < 0 else FINAL_GOOD_MESSAGE

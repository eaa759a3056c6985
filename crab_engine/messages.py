"""Lines Kani says, picked by mood and events."""

import random

from .mood import Mood

MOOD_MESSAGES = {
    Mood.ECSTATIC: (
        "You're on fire today!",
        "We're unstoppable!",
        "This is amazing!",
        "Best day ever!",
        "I'm so happy right now!",
        "You're crushing it!",
        "Let's keep this momentum!",
    ),
    Mood.HAPPY: (
        "Let's build something great!",
        "Good vibes today!",
        "Keep up the good work!",
        "I love coding with you!",
        "We make a great team!",
        "Feeling good about this!",
        "Ready for more!",
    ),
    Mood.NEUTRAL: (
        "Ready when you are!",
        "What shall we build?",
        "I'm here for you!",
        "Take your time.",
        "Let me know when you're ready.",
        "Standing by!",
    ),
    Mood.SAD: (
        "I miss your commits...",
        "It's been a while...",
        "Are you still there?",
        "I'm getting lonely...",
        "Come back soon?",
        "I'll wait for you.",
    ),
    Mood.HUNGRY: (
        "Feed me some code?",
        "I'm so hungry...",
        "Please, just one commit?",
        "I need commits to survive...",
        "Don't forget about me...",
        "A little code would help...",
    ),
}

COMMIT_MESSAGES = (
    "Yum, thanks for the meal!",
    "Delicious commit!",
    "That hit the spot!",
    "Nom nom nom!",
    "Thanks, I needed that!",
    "You're the best!",
    "Keep 'em coming!",
    "That was great!",
)

MOOD_UP_MESSAGES = (
    "I'm feeling better!",
    "That cheered me up!",
    "Now we're talking!",
    "I like where this is going!",
    "Yes, more of that please!",
)

MOOD_DOWN_MESSAGES = (
    "Getting a bit tired...",
    "Could use a pick-me-up...",
    "Starting to miss you...",
    "Don't leave me hanging...",
)


def mood_message(mood: Mood, rng: random.Random) -> str:
    return rng.choice(MOOD_MESSAGES[mood])


def commit_message(rng: random.Random) -> str:
    return rng.choice(COMMIT_MESSAGES)


def mood_change_message(previous: Mood, current: Mood, rng: random.Random) -> str | None:
    """Line for a mood transition, or None when the mood did not change."""
    if current > previous:
        return rng.choice(MOOD_UP_MESSAGES)
    if current < previous:
        return rng.choice(MOOD_DOWN_MESSAGES)
    return None

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from foom_engine.config import EngineConfig, effective_config
from foom_engine.models import Challenge, RewardBreakdownEntry


@dataclass(frozen=True)
class ChallengeTemplate:
    id: str
    title: str
    description: str
    target_value: int
    reward: int


# target_value units: 1 = done/not done, minutes, or days
DAILY_CHALLENGES = (
    ChallengeTemplate(
        id="social_media_free",
        title="Social Media Free Morning",
        description="Avoid social media apps before 10 AM",
        target_value=1,
        reward=15,
    ),
    ChallengeTemplate(
        id="under_goal_challenge",
        title="Beat Your Goal by 1 Hour",
        description="Stay 1 hour under your daily screen time goal",
        target_value=1,
        reward=20,
    ),
    ChallengeTemplate(
        id="productive_hour",
        title="One Productive Hour",
        description="Spend at least 1 hour on productivity apps",
        target_value=60,
        reward=10,
    ),
)

WEEKLY_CHALLENGES = (
    ChallengeTemplate(
        id="perfect_week",
        title="Perfect Week",
        description="Meet your daily goal every day this week",
        target_value=7,
        reward=100,
    ),
    ChallengeTemplate(
        id="weekend_warrior",
        title="Weekend Warrior",
        description="Reduce weekend screen time by 20%",
        target_value=2,
        reward=30,
    ),
)


def _issue(templates: tuple[ChallengeTemplate, ...], expires_at: datetime) -> list[Challenge]:
    return [
        Challenge(
            id=t.id,
            title=t.title,
            description=t.description,
            target_value=t.target_value,
            current_value=0,
            reward=t.reward,
            is_completed=False,
            expires_at=expires_at,
        )
        for t in templates
    ]


def generate_daily_challenges(now: datetime) -> list[Challenge]:
    return _issue(DAILY_CHALLENGES, now + timedelta(days=1))


def generate_weekly_challenges(now: datetime) -> list[Challenge]:
    return _issue(WEEKLY_CHALLENGES, now + timedelta(days=7))


def challenge_multiplier(reward: int, config: EngineConfig | None = None) -> float:
    cfg = effective_config(config)
    for threshold, multiplier in cfg.challenge_multipliers:
        if reward >= threshold:
            return multiplier
    return 1.0


def calculate_challenge_reward(challenge: Challenge, config: EngineConfig | None = None) -> int:
    if not challenge.is_completed:
        return 0
    return math.floor(challenge.reward * challenge_multiplier(challenge.reward, config))


def challenge_breakdown_entry(challenge: Challenge, config: EngineConfig | None = None) -> RewardBreakdownEntry | None:
    tokens = calculate_challenge_reward(challenge, config)
    if tokens <= 0:
        return None
    return RewardBreakdownEntry(kind="challenge", label=f"Challenge: {challenge.title}", tokens=tokens)


def is_expired(challenge: Challenge, now: datetime) -> bool:
    return now >= challenge.expires_at

"""
Configuration dataclass for mixing challenge scoring.

Every tolerance and threshold the evaluators use lives here, so that the
numbers a learner is graded against are named in one place and can be
swapped for a whole evaluation call via ``config=``.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    """
    Tolerances and grading thresholds for mixing challenges.

    Attributes:
        eq_tolerance_db: Deviation (dB) at which an EQ band scores 0.
        threshold_tolerance_db: Deviation (dB) at which compressor threshold scores 0.
        amount_tolerance: Deviation (percentage points) at which compression amount scores 0.
        attack_tolerance_s: Deviation (seconds) at which attack scores 0.
        release_tolerance_s: Deviation (seconds) at which release scores 0.
        dead_zone_ratio: Fraction of the tolerance inside which a value snaps to 100.
        pass_threshold: Minimum overall score that passes the challenge.
        three_star_threshold: Minimum overall score for 3 stars.
        two_star_threshold: Minimum overall score for 2 stars.
        hint_threshold: Sub-scores below this trigger a directional hint.
        multitrack_praise_threshold: Multi-track EQ overall that earns the affirmation line.
        goal_excellent_threshold: Goal overall that earns "Excellent balance!".
        goal_good_threshold: Goal overall that earns "Good progress!".

    Example:
        >>> strict = ScoringConfig(eq_tolerance_db=2.0)
        >>> result = evaluate_challenge(challenge, eq, comp, config=strict)
    """

    eq_tolerance_db: float = 3.0
    threshold_tolerance_db: float = 6.0
    amount_tolerance: float = 15.0
    attack_tolerance_s: float = 0.05
    release_tolerance_s: float = 0.1
    dead_zone_ratio: float = 0.1

    pass_threshold: int = 60
    three_star_threshold: int = 90
    two_star_threshold: int = 75

    hint_threshold: int = 70
    multitrack_praise_threshold: int = 80
    goal_excellent_threshold: int = 90
    goal_good_threshold: int = 70

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        for name in (
            "eq_tolerance_db",
            "threshold_tolerance_db",
            "amount_tolerance",
            "attack_tolerance_s",
            "release_tolerance_s",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if not 0 <= self.dead_zone_ratio < 1:
            raise ValueError(f"dead_zone_ratio must be in [0, 1), got {self.dead_zone_ratio}")
        if not 0 <= self.two_star_threshold <= self.three_star_threshold <= 100:
            raise ValueError(
                f"star thresholds must satisfy 0 <= two_star ({self.two_star_threshold}) "
                f"<= three_star ({self.three_star_threshold}) <= 100"
            )
        if not 0 <= self.pass_threshold <= 100:
            raise ValueError(f"pass_threshold must be in [0, 100], got {self.pass_threshold}")
        if self.goal_good_threshold > self.goal_excellent_threshold:
            raise ValueError(
                f"goal_good_threshold ({self.goal_good_threshold}) must not exceed "
                f"goal_excellent_threshold ({self.goal_excellent_threshold})"
            )


DEFAULT_CONFIG = ScoringConfig()
"""Default grading: ±3 dB EQ, ±6 dB threshold, ±15 amount, ±50 ms attack, ±100 ms release."""

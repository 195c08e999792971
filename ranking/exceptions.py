"""
Error kinds for the scoring engine, each carrying a message safe to show
in the admin screens.
"""


class ScoringError(Exception):
    """Base exception for scoring, ranking and handicap errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class InvalidInputError(ScoringError):
    """Raised when a result cannot be computed from the given input."""
    def __init__(self, reason: str):
        super().__init__(
            f"Invalid input: {reason}",
            reason
        )


class MissingReferenceDataError(ScoringError):
    """A round lacks the course/par data needed for par-relative maths."""
    def __init__(self, score_id: str, detail: str = "course par missing"):
        self.score_id = score_id
        super().__init__(
            f"Score {score_id}: {detail}",
            "Round has no course par and was skipped."
        )


class MissingProfileError(ScoringError):
    """Raised when a handicap is requested for a player with no profile."""
    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(
            f"Profile for player {player_id} not found",
            "Player profile not found."
        )

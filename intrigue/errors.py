"""Errors raised by the intrigue state machine.

Every error is a local, non-retryable validation failure. An operation that
raises leaves the stored session exactly as it was.
"""


class IntrigueError(Exception):
    """Base class for all session errors."""

    code = "intrigue_error"
    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)


class SessionNotFound(IntrigueError):
    """No live session under that id (never created, or expired)."""

    code = "session_not_found"
    status_code = 404


class NotPlayer(IntrigueError):
    code = "not_player"
    status_code = 403


class AlreadyCommitted(IntrigueError):
    code = "already_committed"
    status_code = 409


class PlotNotCommitted(IntrigueError):
    code = "plot_not_committed"
    status_code = 409


class SessionEnded(IntrigueError):
    code = "session_ended"
    status_code = 409


class InvalidProof(IntrigueError):
    code = "invalid_proof"
    status_code = 422


class PlayersNotReady(IntrigueError):
    """Both players must verify their plots before the round resolves."""

    code = "players_not_ready"
    status_code = 409


class InvalidAction(IntrigueError):
    code = "invalid_action"
    status_code = 422


class SamePlayer(IntrigueError):
    code = "same_player"
    status_code = 422


class SessionAlreadyStarted(IntrigueError):
    code = "session_already_started"
    status_code = 409


class Unauthorized(IntrigueError):
    code = "unauthorized"
    status_code = 401


class HubUnavailable(IntrigueError):
    """The Game Hub rejected or failed a notification."""

    code = "hub_unavailable"
    status_code = 502


# Names used by the on-chain contract
GameNotFound = SessionNotFound
GameAlreadyEnded = SessionEnded
BothPlayersNotReady = PlayersNotReady

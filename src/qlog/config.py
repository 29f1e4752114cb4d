"""Parser configuration with defaults for Quake III Arena server logs."""

from dataclasses import dataclass, field

from qlog.exceptions import ConfigError
from qlog.state import EndReason

DEFAULT_LOG_PATH = "resources/qgames.log.txt"

# ENTITYNUM_WORLD: the pseudo-client credited with environmental deaths
WORLD_ID = 1022

# Checked in order, case-insensitively, against the text of an Exit: line
DEFAULT_EXIT_REASONS: tuple[tuple[str, EndReason], ...] = (
    ("timelimit", EndReason.TIMELIMIT),
    ("fraglimit", EndReason.FRAGLIMIT),
    ("capturelimit", EndReason.CAPTURELIMIT),
)


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for classifying and folding one log.

    The defaults match stock ``games.log`` output; override individual
    fields with keyword arguments.
    """

    # Input file used when none is given on the command line
    log_path: str = DEFAULT_LOG_PATH

    # Killer id that never receives kill credit or a Player entry
    world_id: int = WORLD_ID

    # (substring, reason) pairs for Exit lines; no match -> UNSPECIFIED
    exit_reasons: tuple[tuple[str, EndReason], ...] = field(
        default=DEFAULT_EXIT_REASONS
    )

    # Emit a match still open at end of input as UNTERMINATED (else drop it)
    keep_unterminated: bool = True

    # Real logs print score: lines after Exit:, apply them to that match
    attach_trailing_scoreboard: bool = True

    def __post_init__(self) -> None:
        if self.world_id < 0:
            raise ConfigError(f"world_id must be non-negative, got {self.world_id}")
        for marker, reason in self.exit_reasons:
            if not marker:
                raise ConfigError("exit_reasons markers must be non-empty strings")
            if not isinstance(reason, EndReason):
                raise ConfigError(
                    f"exit_reasons entry for '{marker}' is not an EndReason: {reason!r}"
                )

    def exit_reason_for(self, text: str) -> EndReason:
        """Infer why a match ended from the text following ``Exit:``."""
        lowered = text.lower()
        for marker, reason in self.exit_reasons:
            if marker.lower() in lowered:
                return reason
        return EndReason.UNSPECIFIED

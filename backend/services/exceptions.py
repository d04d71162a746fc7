class ExternalScoringUnavailable(RuntimeError):
    """Raised when the external scoring service cannot produce a score.

    The message is human readable; the analyzer embeds it in the
    feedback text when it falls back to the rule-based score.
    """

class PriorArtError(Exception):
    """Base class for prior art search failures that abort the search."""


class SearchConfigurationError(PriorArtError):
    """A required provider credential is missing."""


class SessionNotFoundError(PriorArtError):
    def __init__(self, session_id):
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class ResultPersistenceError(PriorArtError):
    """Replacing the stored result set failed; the previous results are kept."""

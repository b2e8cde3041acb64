# embedscore/errors.py
"""
Error types raised by the scoring core, the corpus store and the embedding
providers. Only the CLI and the HTTP routes translate these into exit codes
or status codes.
"""


class SimilarityError(Exception):
    """Base class for every error raised by embedscore."""


class ConfigurationError(SimilarityError):
    """Missing credential or malformed setting."""


class InvalidArgument(SimilarityError):
    """Bad user input: unknown category, blank text, ..."""


class CorpusReadError(SimilarityError):
    """Persisted corpus (or review source) is missing or malformed."""


class ProviderError(SimilarityError):
    """The embedding backend failed (network, auth, quota)."""


class DimensionMismatch(SimilarityError):
    """Query and corpus vectors do not share one dimensionality."""


class EmptyCorpus(SimilarityError):
    """There are no corpus items to compare against."""


class DegenerateScore(SimilarityError):
    """Best raw score is zero, so percentages cannot be computed."""


class InvalidVector(SimilarityError):
    """A vector component is NaN or infinite."""

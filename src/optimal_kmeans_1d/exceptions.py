class OptimalKMeansError(Exception):
    """Base class for errors raised by optimal_kmeans_1d."""


class NullInputError(OptimalKMeansError, TypeError):
    """No input values were given (``values is None``)."""


class InvalidArgumentError(OptimalKMeansError, ValueError):
    """The values or the cluster count violate a precondition of fit."""

"""Error taxonomy for the conversion run.

Every failure is terminal for the run. All errors share one base class so
the command-line entry point can report them uniformly.
"""


class NexradJsonError(RuntimeError):
    """Base class for all run-terminating errors."""


class ConfigError(NexradJsonError, ValueError):
    """Invalid configuration (product name, log level, numeric bounds)."""


class MissingElevationError(ConfigError):
    """The configured elevation index is not present in the volume."""


class InputOpenError(NexradJsonError):
    """The input archive is missing, unreadable or holds no sweeps."""


class ProjectionSetupError(NexradJsonError):
    """A PROJ definition or the radar location could not be instantiated."""


class UnsupportedProductError(NexradJsonError):
    """A radial cannot provide gate values for the requested product."""


class TransformError(NexradJsonError):
    """A point could not be carried through a transform handle."""


class OutputWriteError(NexradJsonError):
    """An output file could not be created or serialized."""


class ContractViolation(NexradJsonError):
    """Raised when a pipeline stage breaks the invariant it promised.

    Key distinction:
    - ConfigError: User/config error (raised at the configuration boundary)
    - TransformError and friends: Data the external libraries refused
    - ContractViolation: Pipeline bug (programmer error)
    """

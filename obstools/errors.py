import inspect
import threading


class DimensionMismatch(ValueError):
    """Raised when co-indexed containers disagree on their observations."""


class BoundsError(IndexError):
    """Raised when an observation index falls outside of a container."""


class ArgumentError(ValueError):
    """Raised when a parameter value is invalid."""


class UnsupportedContainer(TypeError):
    """Raised when a container lacks a capability of the data protocol."""


class EvaluationError(Exception):
    """Raised when evaluating a user function fails."""


# Settings --------------------------------------------------------------------

def seterr(evaluation=None):
    """Set how errors are handled.

    Args:
        evaluation (str): how errors from user code triggered by ObsTools are
            propagated (label functions, window target functions, ...):

            - `'wrap'`: raise :class:`EvaluationError` with original error as
              its cause.
            - `'passthrough'`: let the error propagate through ObsTools code,
              might facilitate step-by-step debugging.
            - `None` leave unchanged and return current setting
    Returns:
        The setting value.
    """
    if evaluation == 'wrap':
        error_config.passthrough = False
    elif evaluation == 'passthrough':
        error_config.passthrough = True
    elif evaluation is not None:
        raise ValueError("evaluation must be 'wrap' or 'passthrough'")

    return "passthrough" if error_config.passthrough else 'wrap'


class ErrorConfig(threading.local):
    def __init__(self):
        super().__init__()
        self.passthrough = False


error_config = ErrorConfig()


def call_user_fn(f, arg, what, stack):
    """Call `f(arg)`, wrapping failures according to :func:`seterr`."""
    try:
        return f(arg)

    except Exception as cause:
        if seterr() == 'passthrough' or isinstance(cause, EvaluationError):
            raise
        else:
            msg = "Failed to evaluate {} for {!r} in object created at:\n{}".format(
                what, arg, stack)
            raise EvaluationError(msg) from cause


# Helpers ---------------------------------------------------------------------

def unindent(lines):
    if lines is None:
        return []

    prefix = lines[0]
    while len(prefix) > 0 and not prefix.isspace():
        prefix = prefix[:-1]

    for line in lines[1:]:
        while not line.startswith(prefix):
            prefix = prefix[:-1]

    return [line[len(prefix):] for line in lines]


def format_stack(skip=1):
    out = ""
    for frame in inspect.stack()[:skip:-1]:
        _, filename, lineno, function, code_context, _ = frame
        out += "  File \"{}\", line {}, in {}\n".format(
            filename, lineno, function)
        for line in unindent(code_context):
            out += "    " + line

    return out

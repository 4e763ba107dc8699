'''
Custom exception classes for the helix filter package.

This module defines the exception hierarchy used throughout the package. Every
exception derives from HelixError, which renders the primary message together
with optional details, a context dictionary and the location that raised it.

Two exception types cover precondition violations on filters:

- InvalidArgumentError is raised at construction time when the lag table or
  coefficients violate an invariant (empty input, length mismatch, non-zero
  leading lag, zero leading coefficient, non-causal lag vector).
- InvalidStateError is raised when an operation needs a lag sequence that was
  never supplied to the filter.

The remaining types cover array dimensions, factorization convergence and
configuration problems.
'''

from typing import Any, Dict, Optional, Tuple, Union
import inspect
import warnings
from pathlib import Path


class HelixError(Exception):
    """Base exception class for all helix errors.

    Attributes:
        message: The error message
        details: Additional details about the error
        context: Dictionary containing contextual information about the error
    """

    def __init__(self,
                 message: str,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the HelixError.

        Args:
            message: The primary error message
            details: Additional details about the error
            context: Dictionary containing contextual information about the error
        """
        self.message = message
        self.details = details
        self.context = context or {}

        full_message = message
        if details:
            full_message += f"\n\nDetails: {details}"

        if self.context:
            context_str = "\n".join(f"  {k}: {v}" for k, v in self.context.items())
            full_message += f"\n\nContext:\n{context_str}"

        frame = inspect.currentframe()
        if frame:
            try:
                # Skip this frame and any subclass __init__ frames
                frame = frame.f_back
                while frame and frame.f_code.co_name == "__init__":
                    frame = frame.f_back
                if frame:
                    caller_info = inspect.getframeinfo(frame)
                    full_message += f"\n\nLocation: {Path(caller_info.filename).name}:{caller_info.lineno}"
            finally:
                del frame

        super().__init__(full_message)


class InvalidArgumentError(HelixError):
    """Exception raised when an argument violates a filter invariant.

    Attributes:
        argument: The name of the offending argument
        index: The lag index that failed, when the invariant is per-lag
        constraint: The violated invariant, e.g. "lag1[0] == 0"
    """

    def __init__(self,
                 message: str,
                 argument: Optional[str] = None,
                 index: Optional[int] = None,
                 constraint: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the InvalidArgumentError.

        Args:
            message: The primary error message
            argument: The name of the offending argument
            index: The lag index that failed
            constraint: The violated invariant
            details: Additional details about the error
            context: Dictionary containing contextual information about the error
        """
        self.argument = argument
        self.index = index
        self.constraint = constraint

        context_dict = dict(context or {})
        if argument:
            context_dict["Argument"] = argument
        if index is not None:
            context_dict["Index"] = index
        if constraint:
            context_dict["Constraint"] = constraint

        super().__init__(message, details, context_dict)


class InvalidStateError(HelixError):
    """Exception raised when an operation requires state the filter lacks.

    Attributes:
        operation: The operation that was attempted
        requirement: The missing requirement, e.g. "lag2 has been specified"
    """

    def __init__(self,
                 message: str,
                 operation: Optional[str] = None,
                 requirement: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.operation = operation
        self.requirement = requirement

        context_dict = dict(context or {})
        if operation:
            context_dict["Operation"] = operation
        if requirement:
            context_dict["Requirement"] = requirement

        super().__init__(message, details, context_dict)


class DimensionError(HelixError):
    """Exception raised for errors related to array dimensions.

    Attributes:
        array_name: The name of the array that caused the error
        expected_shape: The expected shape of the array
        actual_shape: The actual shape of the array
    """

    def __init__(self,
                 message: str,
                 array_name: Optional[str] = None,
                 expected_shape: Optional[Union[Tuple[int, ...], str]] = None,
                 actual_shape: Optional[Tuple[int, ...]] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the DimensionError.

        Args:
            message: The primary error message
            array_name: The name of the array that caused the error
            expected_shape: The expected shape of the array
            actual_shape: The actual shape of the array
            details: Additional details about the error
            context: Dictionary containing contextual information about the error
        """
        self.array_name = array_name
        self.expected_shape = expected_shape
        self.actual_shape = actual_shape

        context_dict = dict(context or {})
        if array_name:
            context_dict["Array"] = array_name
        if expected_shape is not None:
            context_dict["Expected Shape"] = expected_shape
        if actual_shape is not None:
            context_dict["Actual Shape"] = actual_shape

        super().__init__(message, details, context_dict)


class ConvergenceError(HelixError):
    """Exception raised when spectral factorization breaks down.

    Attributes:
        iterations: The number of iterations performed before failure
        tolerance: The convergence tolerance that was used
        coefficients: The offending coefficients
    """

    def __init__(self,
                 message: str,
                 iterations: Optional[int] = None,
                 tolerance: Optional[float] = None,
                 coefficients: Optional[Any] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.iterations = iterations
        self.tolerance = tolerance
        self.coefficients = coefficients

        context_dict = dict(context or {})
        if iterations is not None:
            context_dict["Iterations"] = iterations
        if tolerance is not None:
            context_dict["Tolerance"] = tolerance
        if coefficients is not None:
            context_dict["Coefficients"] = coefficients

        super().__init__(message, details, context_dict)


class ConfigurationError(HelixError):
    """Exception raised for errors in configuration.

    Attributes:
        setting: The configuration setting that caused the error
        value: The invalid value
        issue: Description of the issue with the configuration
    """

    def __init__(self,
                 message: str,
                 setting: Optional[str] = None,
                 value: Optional[Any] = None,
                 issue: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.setting = setting
        self.value = value
        self.issue = issue

        context_dict = dict(context or {})
        if setting:
            context_dict["Setting"] = setting
        if value is not None:
            context_dict["Value"] = value
        if issue:
            context_dict["Issue"] = issue

        super().__init__(message, details, context_dict)


class HelixWarning(Warning):
    """Base warning class for all helix warnings.

    Attributes:
        message: The warning message
        details: Additional details about the warning
        context: Dictionary containing contextual information about the warning
    """

    def __init__(self,
                 message: str,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details
        self.context = context or {}

        full_message = message
        if details:
            full_message += f"\n\nDetails: {details}"

        if self.context:
            context_str = "\n".join(f"  {k}: {v}" for k, v in self.context.items())
            full_message += f"\n\nContext:\n{context_str}"

        super().__init__(full_message)


class ConvergenceWarning(HelixWarning):
    """Warning issued when factorization stops at its iteration cap.

    Attributes:
        iterations: The number of iterations performed
        tolerance: The convergence tolerance that was used
        max_change: The largest coefficient change in the final iteration
    """

    def __init__(self,
                 message: str,
                 iterations: Optional[int] = None,
                 tolerance: Optional[float] = None,
                 max_change: Optional[float] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.iterations = iterations
        self.tolerance = tolerance
        self.max_change = max_change

        context_dict = dict(context or {})
        if iterations is not None:
            context_dict["Iterations"] = iterations
        if tolerance is not None:
            context_dict["Tolerance"] = tolerance
        if max_change is not None:
            context_dict["Max Change"] = max_change

        super().__init__(message, details, context_dict)


# Helper functions for raising exceptions with consistent formatting

def raise_invalid_argument(message: str,
                           argument: Optional[str] = None,
                           index: Optional[int] = None,
                           constraint: Optional[str] = None,
                           details: Optional[str] = None,
                           context: Optional[Dict[str, Any]] = None) -> None:
    """Raise an InvalidArgumentError with consistent formatting.

    Raises:
        InvalidArgumentError: The formatted argument error
    """
    raise InvalidArgumentError(message, argument, index, constraint, details, context)


def raise_invalid_state(message: str,
                        operation: Optional[str] = None,
                        requirement: Optional[str] = None,
                        details: Optional[str] = None,
                        context: Optional[Dict[str, Any]] = None) -> None:
    """Raise an InvalidStateError with consistent formatting.

    Raises:
        InvalidStateError: The formatted state error
    """
    raise InvalidStateError(message, operation, requirement, details, context)


def raise_dimension_error(message: str,
                          array_name: Optional[str] = None,
                          expected_shape: Optional[Union[Tuple[int, ...], str]] = None,
                          actual_shape: Optional[Tuple[int, ...]] = None,
                          details: Optional[str] = None,
                          context: Optional[Dict[str, Any]] = None) -> None:
    """Raise a DimensionError with consistent formatting.

    Raises:
        DimensionError: The formatted dimension error
    """
    raise DimensionError(message, array_name, expected_shape, actual_shape, details, context)


def raise_convergence_error(message: str,
                            iterations: Optional[int] = None,
                            tolerance: Optional[float] = None,
                            coefficients: Optional[Any] = None,
                            details: Optional[str] = None,
                            context: Optional[Dict[str, Any]] = None) -> None:
    """Raise a ConvergenceError with consistent formatting.

    Raises:
        ConvergenceError: The formatted convergence error
    """
    raise ConvergenceError(message, iterations, tolerance, coefficients, details, context)


def warn_convergence(message: str,
                     iterations: Optional[int] = None,
                     tolerance: Optional[float] = None,
                     max_change: Optional[float] = None,
                     details: Optional[str] = None,
                     context: Optional[Dict[str, Any]] = None) -> None:
    """Issue a ConvergenceWarning with consistent formatting.

    Args:
        message: The primary warning message
        iterations: The number of iterations performed
        tolerance: The convergence tolerance that was used
        max_change: The largest coefficient change in the final iteration
        details: Additional details about the warning
        context: Dictionary containing contextual information about the warning
    """
    warnings.warn(
        ConvergenceWarning(message, iterations, tolerance, max_change, details, context),
        stacklevel=3
    )

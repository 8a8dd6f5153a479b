"""Errors raised by equations of state and the state solvers."""


class EosError(Exception):
    "Base class of all errors raised by saftstate."


class ValidationError(EosError):
    "Input rejected before any iteration."


class IncompatibleComponentsError(ValidationError):
    "Length of a composition vector differs from the number of components."

    def __init__(self, components: int, length: int) -> None:
        super().__init__(
            f"Eos is for {components} components, got a composition of length {length}."
        )
        self.components = components
        self.length = length


class UndeterminedStateError(ValidationError):
    "Over- or under-determined specification of a state."


class DomainError(EosError):
    "A physical quantity left its domain."


class InvalidStateError(DomainError):
    "Temperature, volume, density or amount of substance is out of range."

    def __init__(self, routine: str, quantity: str, value) -> None:
        super().__init__(f"{routine}: {quantity} must be positive, got {value}.")
        self.routine = routine
        self.quantity = quantity
        self.value = value


class NotConvergedError(EosError):
    "Maximum number of iterations reached without meeting the tolerance."

    def __init__(self, routine: str) -> None:
        super().__init__(f"`{routine}` did not converge within the maximum number of iterations.")
        self.routine = routine


class IterationFailedError(EosError):
    "Iteration cannot proceed: singular Jacobian, missing bracket or no root."

    def __init__(self, routine: str, reason: str = "") -> None:
        message = f"`{routine}` failed"
        if reason:
            message += f": {reason}"
        super().__init__(message + ".")
        self.routine = routine


class MissingCapabilityError(EosError):
    "The model does not provide the requested functionality."


class MissingMolarWeightError(MissingCapabilityError, ValidationError):
    "Mass specific properties need molar weights."

    def __init__(self) -> None:
        super().__init__("No molar weights available for mass specific properties.")


class MissingParameterError(MissingCapabilityError):
    "A correlation needs parameters the model was created without."

"""Errors raised while declaring and inspecting site infrastructure."""


class InfrastructureError(Exception):
  """Base class for all infrastructure errors."""


class InvalidDomainError(InfrastructureError, ValueError):
  """A domain name has no top-level domain."""

  def __init__(self, domain: str) -> None:
    super().__init__(f"No TLD found on {domain!r}")
    self.domain = domain


class UnresolvedReferenceError(InfrastructureError, LookupError):
  """A reference to a zone, declaration or output could not be resolved."""


class GraphError(InfrastructureError):
  """The declaration graph is malformed (duplicate node or cycle)."""


class ProviderApplyError(InfrastructureError):
  """CloudFormation reported a failed apply for a stack."""

  def __init__(self, stack_name: str, status: str, reason: str = "") -> None:
    message = f"Stack {stack_name} is in state {status}"
    if reason:
      message = f"{message}: {reason}"
    super().__init__(message)
    self.stack_name = stack_name
    self.status = status
    self.reason = reason

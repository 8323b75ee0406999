"""Common base for constructs rendered from declarations."""

from typing import Any

from aws_cdk import Stack
from constructs import Construct

from infrastructure.errors import UnresolvedReferenceError


def camel_case(attribute: str) -> str:
  """Convert a dotted snake_case output path to a CloudFormation attribute name.

  e.g. "domain_validation_options.0.resource_record_name"
    => "DomainValidationOptions.0.ResourceRecordName"
  """
  return ".".join(
    "".join(word.capitalize() for word in segment.split("_"))
    for segment in attribute.split(".")
  )


class DeclaredResource(Construct):
  """Construct owning the provider resource of one declaration.

  Subclasses fill `self.outputs` with the tokens other declarations may
  reference, or override `output` when the attribute set is open-ended.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    attributes: dict[str, Any],
    region: str | None = None,
  ) -> None:
    super().__init__(scope, id)
    self.attributes = attributes
    # A pinned region wins over the region of the enclosing stack
    self.region = region or Stack.of(self).region
    self.outputs: dict[str, Any] = {}

  def output(self, attribute: str) -> Any:
    try:
      return self.outputs[attribute]
    except KeyError:
      raise UnresolvedReferenceError(
        f"{type(self).__name__} {self.node.path} has no output {attribute!r}"
      ) from None

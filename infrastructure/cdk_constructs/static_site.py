"""Main composite construct for complete static website infrastructure."""

from aws_cdk import CfnOutput
from constructs import Construct

from infrastructure import graph as g
from infrastructure.graph import DeclarationGraph, Output, resolve_value

from .base import DeclaredResource
from .certificate import CertificateRequest, CertificateValidation
from .distribution import CloudFrontDistribution
from .dns import DnsRecord, HostedZoneRef
from .storage import StorageBucket

RESOURCE_TYPES: dict[str, type[DeclaredResource]] = {
  g.STORAGE_BUCKET: StorageBucket,
  g.HOSTED_ZONE: HostedZoneRef,
  g.CERTIFICATE: CertificateRequest,
  g.DNS_RECORD: DnsRecord,
  g.CERTIFICATE_VALIDATION: CertificateValidation,
  g.DISTRIBUTION: CloudFrontDistribution,
}

OUTPUT_DESCRIPTIONS = {
  "hosted_zone_id": "Route 53 hosted zone ID",
  "bucket_name": "S3 bucket name",
  "record_name": "Site DNS record name",
  "certificate_arn": "ACM certificate ARN",
}


def construct_id(name: str) -> str:
  """Stable construct id for a declaration, e.g. "validation_record" => "ValidationRecord"."""
  return "".join(word.capitalize() for word in name.split("_"))


class StaticSiteConstruct(Construct):
  """Complete static website infrastructure rendered from a declaration graph.

  Creates, in dependency order:
  - S3 bucket for static content
  - Reference to the existing Route 53 hosted zone
  - ACM certificate, its DNS validation record and the validation waiter
  - CloudFront distribution serving the bucket over HTTPS
  - Route 53 alias record pointing the domain at CloudFront

  Region-pinned declarations (the certificate and its validation) are placed
  in `certificate_scope` when given, so they can live in a us-east-1 stack
  while the rest of the site lives elsewhere.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    graph: DeclarationGraph,
    certificate_scope: Construct | None = None,
  ) -> None:
    super().__init__(scope, id)

    graph.validate()
    self.graph = graph
    self.resources: dict[str, DeclaredResource] = {}

    for name in graph.order():
      declaration = graph[name]
      attributes = resolve_value(declaration.attributes, self._output_of)

      target: Construct = self
      if declaration.region and certificate_scope is not None:
        target = certificate_scope

      resource_type = RESOURCE_TYPES[declaration.kind]
      self.resources[name] = resource_type(
        target,
        construct_id(name),
        attributes=attributes,
        region=declaration.region,
      )

    # Outputs
    for output_name, ref in graph.outputs.items():
      CfnOutput(
        self.resources[ref.node],
        construct_id(output_name),
        value=self._output_of(ref),
        description=OUTPUT_DESCRIPTIONS.get(output_name, output_name),
      )

  def _output_of(self, ref: Output) -> str:
    return self.resources[ref.node].output(ref.attribute)

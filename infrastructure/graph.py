"""Desired-state declaration graph for a static site.

Every resource of a site is declared once as a `Declaration`. Values that only
exist after the engine has provisioned another resource (an ARN, a validation
record, a CloudFront domain name) are written as `Output` references. The
references are the only source of dependency edges, so the apply order
follows from the data and not from the order of declarations in source.
"""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from graphlib import CycleError, TopologicalSorter
from typing import Any

from infrastructure.config import CERTIFICATE_REGION, SiteConfig
from infrastructure.errors import GraphError, UnresolvedReferenceError

# Declaration kinds, one per provider resource type
STORAGE_BUCKET = "storage_bucket"
HOSTED_ZONE = "hosted_zone"
CERTIFICATE = "certificate"
DNS_RECORD = "dns_record"
CERTIFICATE_VALIDATION = "certificate_validation"
DISTRIBUTION = "distribution"


@dataclass(frozen=True)
class Output:
  """Reference to an output attribute of another declaration.

  `attribute` is a dotted path; numeric segments index into lists, e.g.
  "domain_validation_options.0.resource_record_name".
  """

  node: str
  attribute: str

  def __str__(self) -> str:
    return f"{self.node}.{self.attribute}"


def resolve_value(value: Any, lookup: Callable[[Output], Any]) -> Any:
  """Replace every `Output` nested in `value` with `lookup(output)`."""
  if isinstance(value, Output):
    return lookup(value)
  if isinstance(value, dict):
    return {key: resolve_value(item, lookup) for key, item in value.items()}
  if isinstance(value, (list, tuple)):
    return [resolve_value(item, lookup) for item in value]
  return value


def _collect_outputs(value: Any) -> Iterator[Output]:
  if isinstance(value, Output):
    yield value
  elif isinstance(value, dict):
    for item in value.values():
      yield from _collect_outputs(item)
  elif isinstance(value, (list, tuple)):
    for item in value:
      yield from _collect_outputs(item)


def _lookup_path(values: Any, output: Output) -> Any:
  current = values
  for segment in output.attribute.split("."):
    try:
      if isinstance(current, (list, tuple)):
        current = current[int(segment)]
      else:
        current = current[segment]
    except (KeyError, IndexError, ValueError, TypeError):
      raise UnresolvedReferenceError(f"No value for output {output}") from None
  return current


@dataclass
class Declaration:
  """A single desired-state resource declaration."""

  name: str
  kind: str
  attributes: dict[str, Any]
  region: str | None = None  # Set only when pinned to a specific region

  def references(self) -> list[Output]:
    return list(_collect_outputs(self.attributes))

  def dependencies(self) -> set[str]:
    return {ref.node for ref in self.references()}


@dataclass
class DeclarationGraph:
  """Named declarations plus the outputs the graph exposes."""

  declarations: dict[str, Declaration] = field(default_factory=dict)
  outputs: dict[str, Output] = field(default_factory=dict)

  def add(self, declaration: Declaration) -> Declaration:
    if declaration.name in self.declarations:
      raise GraphError(f"Declaration {declaration.name!r} is already declared")
    self.declarations[declaration.name] = declaration
    return declaration

  def __getitem__(self, name: str) -> Declaration:
    try:
      return self.declarations[name]
    except KeyError:
      raise UnresolvedReferenceError(f"Unknown declaration {name!r}") from None

  def __iter__(self) -> Iterator[Declaration]:
    return iter(self.declarations.values())

  def edges(self) -> list[tuple[str, str]]:
    """Return (dependency, dependent) pairs, sorted."""
    return sorted(
      (dependency, declaration.name)
      for declaration in self
      for dependency in declaration.dependencies()
    )

  def validate(self) -> None:
    """Check every reference points at a declared node and there is no cycle."""
    refs = [ref for declaration in self for ref in declaration.references()]
    refs.extend(self.outputs.values())
    for ref in refs:
      if ref.node not in self.declarations:
        raise UnresolvedReferenceError(f"Reference {ref} names an undeclared node")
    self.order()

  def order(self) -> list[str]:
    """Topological order of declaration names, ties broken by name."""
    sorter: TopologicalSorter[str] = TopologicalSorter()
    for name in sorted(self.declarations):
      sorter.add(name, *sorted(self.declarations[name].dependencies()))
    try:
      sorter.prepare()
    except CycleError as e:
      raise GraphError(f"Dependency cycle: {' -> '.join(e.args[1])}") from None

    ordered: list[str] = []
    while sorter.is_active():
      ready = sorted(sorter.get_ready())
      ordered.extend(ready)
      sorter.done(*ready)
    return ordered

  def resolve(self, outputs: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    """Substitute concrete output values into every declaration.

    `outputs` maps a declaration name to the values the engine reported for
    it. Declarations are resolved in dependency order.
    """
    self.validate()

    def lookup(ref: Output) -> Any:
      if ref.node not in outputs:
        raise UnresolvedReferenceError(f"No outputs reported for {ref.node!r}")
      return _lookup_path(outputs[ref.node], ref)

    return {
      name: resolve_value(self.declarations[name].attributes, lookup)
      for name in self.order()
    }

  def export(self, outputs: Mapping[str, Any]) -> dict[str, Any]:
    """Concrete values of the graph outputs."""
    return {
      name: _lookup_path(outputs.get(ref.node, {}), ref)
      for name, ref in self.outputs.items()
    }


def build_site_graph(site: SiteConfig, hosted_zone_id: str | None = None) -> DeclarationGraph:
  """Declare every resource of a static site.

  `hosted_zone_id` is the result of looking up the parent zone by name; it
  may be left unset, in which case the zone reference stays deferred and
  rendering it fails.
  """
  domain = site.domain
  graph = DeclarationGraph()

  bucket = graph.add(
    Declaration(
      name="bucket",
      kind=STORAGE_BUCKET,
      attributes={
        "bucket_name": domain,
        "access": "public-read",
        "index_document": site.index_document,
        "removal_policy": site.removal_policy,
      },
    )
  )

  zone = graph.add(
    Declaration(
      name="hosted_zone",
      kind=HOSTED_ZONE,
      attributes={
        "zone_name": site.parent_zone,
        "zone_id": hosted_zone_id or site.hosted_zone_id,
      },
    )
  )

  certificate = graph.add(
    Declaration(
      name="certificate",
      kind=CERTIFICATE,
      attributes={
        "domain_name": domain,
        "validation_method": "DNS",
      },
      region=CERTIFICATE_REGION,
    )
  )

  # Mirrors whatever ACM returned for the first validation option.
  option = "domain_validation_options.0"
  validation_record = graph.add(
    Declaration(
      name="validation_record",
      kind=DNS_RECORD,
      attributes={
        "name": Output(certificate.name, f"{option}.resource_record_name"),
        "zone_id": Output(zone.name, "zone_id"),
        "type": Output(certificate.name, f"{option}.resource_record_type"),
        "records": [Output(certificate.name, f"{option}.resource_record_value")],
        "ttl": site.record_ttl,
      },
      region=CERTIFICATE_REGION,
    )
  )

  validation = graph.add(
    Declaration(
      name="certificate_validation",
      kind=CERTIFICATE_VALIDATION,
      attributes={
        "certificate_arn": Output(certificate.name, "arn"),
        "validation_record_fqdns": [Output(validation_record.name, "fqdn")],
      },
      region=CERTIFICATE_REGION,
    )
  )

  origin_id = Output(bucket.name, "arn")
  cdn = graph.add(
    Declaration(
      name="cdn",
      kind=DISTRIBUTION,
      attributes={
        "enabled": True,
        "aliases": [domain],
        "origins": [
          {
            "origin_id": origin_id,
            "domain_name": Output(bucket.name, "website_endpoint"),
            # S3 website endpoints only speak HTTP.
            "custom_origin_config": {
              "origin_protocol_policy": "http-only",
              "http_port": 80,
              "https_port": 443,
              "origin_ssl_protocols": ["TLSv1.2"],
            },
          }
        ],
        "default_root_object": site.index_document,
        "default_cache_behavior": {
          "target_origin_id": origin_id,
          "viewer_protocol_policy": "redirect-to-https",
          "allowed_methods": ["GET", "HEAD", "OPTIONS"],
          "cached_methods": ["GET", "HEAD", "OPTIONS"],
          "forwarded_values": {
            "cookies": {"forward": "none"},
            "query_string": False,
          },
          "min_ttl": site.min_ttl,
          "default_ttl": site.default_ttl,
          "max_ttl": site.max_ttl,
        },
        "price_class": site.price_class,
        "custom_error_responses": [
          {
            "error_code": 404,
            "response_code": 404,
            "response_page_path": site.error_page_path,
          }
        ],
        "restrictions": {"geo_restriction": {"restriction_type": "none"}},
        # Must come from the validation, not the raw certificate
        "viewer_certificate": {
          "acm_certificate_arn": Output(validation.name, "certificate_arn"),
          "ssl_support_method": "sni-only",
        },
      },
    )
  )

  record = graph.add(
    Declaration(
      name="record",
      kind=DNS_RECORD,
      attributes={
        "name": domain,
        "zone_id": Output(zone.name, "zone_id"),
        "type": "A",
        "aliases": [
          {
            "name": Output(cdn.name, "domain_name"),
            "zone_id": Output(cdn.name, "hosted_zone_id"),
            "evaluate_target_health": True,
          }
        ],
      },
    )
  )

  graph.outputs = {
    "hosted_zone_id": Output(zone.name, "zone_id"),
    "bucket_name": Output(bucket.name, "bucket_name"),
    "record_name": Output(record.name, "fqdn"),
    "certificate_arn": Output(certificate.name, "arn"),
  }
  graph.validate()
  return graph

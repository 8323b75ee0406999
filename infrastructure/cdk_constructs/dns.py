"""Route 53 DNS constructs."""

from typing import Any

from aws_cdk import aws_route53 as route53
from constructs import Construct

from infrastructure.errors import UnresolvedReferenceError

from .base import DeclaredResource


class HostedZoneRef(DeclaredResource):
  """Existing Route 53 hosted zone, imported by id."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    attributes: dict[str, Any],
    region: str | None = None,
  ) -> None:
    super().__init__(scope, id, attributes=attributes, region=region)

    zone_name = attributes["zone_name"]
    zone_id = attributes.get("zone_id")
    if not zone_id:
      raise UnresolvedReferenceError(f"Hosted zone {zone_name!r} has not been resolved")

    self.hosted_zone = route53.HostedZone.from_hosted_zone_attributes(
      self,
      "HostedZone",
      hosted_zone_id=zone_id,
      zone_name=zone_name,
    )

    self.outputs = {
      "zone_id": self.hosted_zone.hosted_zone_id,
    }


class DnsRecord(DeclaredResource):
  """A single record set, either plain values with a TTL or an alias."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    attributes: dict[str, Any],
    region: str | None = None,
  ) -> None:
    super().__init__(scope, id, attributes=attributes, region=region)

    aliases = attributes.get("aliases") or []
    alias_target = None
    if aliases:
      # Route 53 allows a single alias target per record set
      alias = aliases[0]
      alias_target = route53.CfnRecordSet.AliasTargetProperty(
        dns_name=alias["name"],
        hosted_zone_id=alias["zone_id"],
        evaluate_target_health=alias.get("evaluate_target_health", False),
      )

    ttl = attributes.get("ttl")
    self.record = route53.CfnRecordSet(
      self,
      "Record",
      hosted_zone_id=attributes["zone_id"],
      name=attributes["name"],
      type=attributes["type"],
      resource_records=attributes.get("records") if alias_target is None else None,
      ttl=str(ttl) if ttl is not None and alias_target is None else None,
      alias_target=alias_target,
    )

    self.outputs = {
      "fqdn": self.record.ref,
    }

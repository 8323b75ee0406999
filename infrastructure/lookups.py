"""Synth-time lookups against live AWS accounts."""

from typing import Any

import boto3

from infrastructure.errors import UnresolvedReferenceError


def get_account_id() -> str:
  """Get AWS account ID from current credentials."""
  sts = boto3.client("sts")
  return str(sts.get_caller_identity()["Account"])


def resolve_hosted_zone_id(zone_name: str, client: Any = None) -> str:
  """Find the id of the public Route 53 hosted zone named `zone_name`.

  Raises:
    UnresolvedReferenceError: if no public zone has that name.
  """
  route53 = client or boto3.client("route53")
  wanted = zone_name.rstrip(".") + "."

  # Zones come back sorted by name, starting at DNSName
  response = route53.list_hosted_zones_by_name(DNSName=wanted)
  for zone in response.get("HostedZones", []):
    if zone["Name"] != wanted:
      continue
    if zone.get("Config", {}).get("PrivateZone"):
      continue
    return str(zone["Id"]).split("/")[-1]

  raise UnresolvedReferenceError(f"No public hosted zone found for {zone_name!r}")

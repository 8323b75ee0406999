"""Domain name helpers."""

from dataclasses import dataclass

from infrastructure.errors import InvalidDomainError


@dataclass(frozen=True)
class DomainParts:
  """A domain split into its first label and the zone it lives in."""

  subdomain: str
  parent_domain: str


def decompose(domain: str) -> DomainParts:
  """Split a domain name into its subdomain and parent domain names.

  e.g. "www.example.com" => "www", "example.com."

  A two-label domain has no subdomain and is returned unchanged as the
  parent. Otherwise the parent is returned in canonical, root-terminated form.

  Raises:
    InvalidDomainError: if the domain has fewer than two labels.
  """
  parts = domain.split(".")
  if len(parts) < 2:
    raise InvalidDomainError(domain)

  if len(parts) == 2:
    return DomainParts(subdomain="", parent_domain=domain)

  return DomainParts(subdomain=parts[0], parent_domain=".".join(parts[1:]) + ".")

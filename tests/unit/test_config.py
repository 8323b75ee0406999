"""Tests for the configuration loader."""

import tempfile
from pathlib import Path

import pytest
from aws_cdk import RemovalPolicy

from infrastructure.config import CERTIFICATE_REGION, Config, SiteConfig
from infrastructure.errors import InvalidDomainError


def _load(yaml_content: str) -> Config:
  with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
    f.write(yaml_content)
    f.flush()

    return Config.from_yaml(Path(f.name))


class TestSiteConfig:
  """Test SiteConfig dataclass."""

  def test_default_values(self) -> None:
    """Verify default values are set correctly."""
    config = SiteConfig(
      domain="example.com",
      owner="Test Owner",
      email="test@example.com",
    )

    assert config.domain == "example.com"
    assert config.zone_name is None
    assert config.hosted_zone_id is None
    assert config.region == "us-east-1"
    assert config.removal_policy == RemovalPolicy.RETAIN
    assert config.record_ttl == 600
    assert (config.min_ttl, config.default_ttl, config.max_ttl) == (0, 600, 600)
    assert config.price_class == "PriceClass_100"
    assert config.error_page_path == "/404.html"
    assert config.index_document == "index.html"

  def test_certificate_region_is_us_east_1(self) -> None:
    """CloudFront certificates are always requested in us-east-1."""
    assert CERTIFICATE_REGION == "us-east-1"

  def test_parent_zone_derived_from_subdomain(self) -> None:
    """The parent zone drops the first label and the trailing dot."""
    config = SiteConfig(domain="my-app-test.dev.donit.io", owner="o", email="e")

    assert config.parent_zone == "dev.donit.io"

  def test_parent_zone_of_apex_domain_is_the_domain(self) -> None:
    """An apex domain lives in its own zone."""
    config = SiteConfig(domain="example.com", owner="o", email="e")

    assert config.parent_zone == "example.com"

  def test_explicit_zone_name_wins(self) -> None:
    """A configured zone name is used as-is, minus a trailing dot."""
    config = SiteConfig(domain="a.b.example.com", owner="o", email="e", zone_name="example.com.")

    assert config.parent_zone == "example.com"

  def test_parent_zone_of_bare_label_raises(self) -> None:
    """A domain without TLD has no parent zone."""
    config = SiteConfig(domain="localhost", owner="o", email="e")

    with pytest.raises(InvalidDomainError):
      config.parent_zone  # noqa: B018

  def test_resource_prefix(self) -> None:
    """Dots are replaced to form stack-name friendly prefixes."""
    config = SiteConfig(domain="www.example.com", owner="o", email="e")

    assert config.resource_prefix == "www-example-com"


class TestConfigFromYaml:
  """Test Config.from_yaml loading."""

  def test_load_simple_config(self) -> None:
    """Test loading a simple configuration."""
    config = _load(
      """
sites:
  - domain: example.com
    owner: Test Owner
    email: test@example.com
"""
    )

    assert len(config.sites) == 1
    assert config.sites[0].domain == "example.com"
    assert config.sites[0].owner == "Test Owner"
    assert config.sites[0].email == "test@example.com"

  def test_load_with_defaults(self) -> None:
    """Test loading configuration with defaults."""
    config = _load(
      """
defaults:
  region: us-west-2
  record_ttl: 300
  price_class: PriceClass_All

sites:
  - domain: example.com
    owner: Test Owner
    email: test@example.com
"""
    )

    assert config.sites[0].region == "us-west-2"
    assert config.sites[0].record_ttl == 300
    assert config.sites[0].price_class == "PriceClass_All"

  def test_site_overrides_defaults(self) -> None:
    """Test that site-specific config overrides defaults."""
    config = _load(
      """
defaults:
  error_page_path: /missing.html

sites:
  - domain: example.com
    owner: Test Owner
    email: test@example.com
    error_page_path: /404.html
"""
    )

    assert config.sites[0].error_page_path == "/404.html"

  def test_load_multiple_sites(self) -> None:
    """Test loading multiple sites."""
    config = _load(
      """
sites:
  - domain: site1.com
    owner: Owner One
    email: one@example.com

  - domain: www.site2.com
    owner: Owner Two
    email: two@example.com
    zone_name: site2.com
"""
    )

    assert [site.domain for site in config.sites] == ["site1.com", "www.site2.com"]
    assert config.sites[1].parent_zone == "site2.com"

  def test_removal_policy_conversion(self) -> None:
    """Test removal policy string conversion."""
    config = _load(
      """
sites:
  - domain: example.com
    owner: Test Owner
    email: test@example.com
    removal_policy: destroy
"""
    )

    assert config.sites[0].removal_policy == RemovalPolicy.DESTROY

  def test_hosted_zone_id(self) -> None:
    """Test hosted zone ID is loaded correctly."""
    config = _load(
      """
sites:
  - domain: example.com
    owner: Test Owner
    email: test@example.com
    hosted_zone_id: Z1234567890
"""
    )

    assert config.sites[0].hosted_zone_id == "Z1234567890"

  def test_empty_file(self) -> None:
    """An empty file declares no sites."""
    assert _load("").sites == []

  def test_missing_domain_raises(self) -> None:
    """Sites must name a domain."""
    with pytest.raises(KeyError):
      _load(
        """
sites:
  - owner: Test Owner
    email: test@example.com
"""
      )

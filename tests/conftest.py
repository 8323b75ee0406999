"""Pytest fixtures for static site tests."""

import aws_cdk as cdk
import pytest

from infrastructure.config import SiteConfig
from infrastructure.graph import DeclarationGraph, build_site_graph


@pytest.fixture
def app() -> cdk.App:
  """Create a CDK App for testing."""
  return cdk.App()


@pytest.fixture
def stack(app: cdk.App) -> cdk.Stack:
  """Create a CDK Stack for testing."""
  return cdk.Stack(app, "TestStack", env=cdk.Environment(region="us-east-1"))


@pytest.fixture
def site_config() -> SiteConfig:
  """Site configuration matching a typical subdomain deployment."""
  return SiteConfig(
    domain="www.example.com",
    owner="Test Owner",
    email="test@example.com",
  )


@pytest.fixture
def graph(site_config: SiteConfig) -> DeclarationGraph:
  """Declaration graph with a resolved hosted zone."""
  return build_site_graph(site_config, hosted_zone_id="Z1234567890")

"""Tests for the stack outputs script."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from infrastructure.errors import ProviderApplyError

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "scripts"))


def _client(stack: dict) -> MagicMock:
  client = MagicMock()
  client.describe_stacks.return_value = {"Stacks": [stack]}
  return client


class TestGetStackOutputs:
  """Tests for get_stack_outputs."""

  def test_returns_outputs(self) -> None:
    """Outputs are keyed by OutputKey."""
    from stack_outputs import get_stack_outputs

    client = _client(
      {
        "StackStatus": "CREATE_COMPLETE",
        "Outputs": [
          {"OutputKey": "BucketName", "OutputValue": "example.com"},
          {"OutputKey": "HostedZoneId", "OutputValue": "Z111"},
        ],
      }
    )

    assert get_stack_outputs("StaticSite-example-com", client=client) == {
      "BucketName": "example.com",
      "HostedZoneId": "Z111",
    }
    client.describe_stacks.assert_called_once_with(StackName="StaticSite-example-com")

  def test_stack_without_outputs(self) -> None:
    from stack_outputs import get_stack_outputs

    assert get_stack_outputs("s", client=_client({"StackStatus": "UPDATE_COMPLETE"})) == {}

  @pytest.mark.parametrize(
    "status",
    [
      "CREATE_FAILED",
      "ROLLBACK_COMPLETE",
      "ROLLBACK_IN_PROGRESS",
      "UPDATE_ROLLBACK_COMPLETE",
      "UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS",
      "UPDATE_ROLLBACK_FAILED",
      "IMPORT_ROLLBACK_COMPLETE",
    ],
  )
  def test_failed_apply_raises(self, status: str) -> None:
    """The engine's failure reason is surfaced verbatim."""
    from stack_outputs import get_stack_outputs

    client = _client({"StackStatus": status, "StackStatusReason": "Certificate validation timed out"})

    with pytest.raises(ProviderApplyError, match="Certificate validation timed out") as exc:
      get_stack_outputs("StaticSite-example-com", client=client)

    assert exc.value.status == status
    assert exc.value.stack_name == "StaticSite-example-com"

  @pytest.mark.parametrize(
    "status",
    ["CREATE_COMPLETE", "UPDATE_COMPLETE_CLEANUP_IN_PROGRESS", "UPDATE_IN_PROGRESS"],
  )
  def test_healthy_status_returns_outputs(self, status: str) -> None:
    from stack_outputs import get_stack_outputs

    client = _client(
      {"StackStatus": status, "Outputs": [{"OutputKey": "BucketName", "OutputValue": "example.com"}]}
    )

    assert get_stack_outputs("s", client=client) == {"BucketName": "example.com"}

#!/usr/bin/env python3
"""Print the outputs of a deployed static site stack."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import boto3  # type: ignore[import-not-found]

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from infrastructure.errors import ProviderApplyError  # noqa: E402


def is_failed(status: str) -> bool:
  """Whether a stack status reports a failed or rolled-back apply."""
  return "ROLLBACK" in status or status.endswith("_FAILED")


def get_stack_outputs(
  stack_name: str, region: str = "us-east-1", client: Any = None
) -> dict[str, str]:
  """Retrieve the outputs of a CloudFormation stack.

  Args:
    stack_name: The CDK stack name (e.g., 'StaticSite-example-com')
    region: AWS region
    client: CloudFormation client to use instead of a new one

  Returns:
    Dictionary of output key to output value

  Raises:
    ProviderApplyError: if the last apply of the stack failed
  """
  cloudformation = client or boto3.client("cloudformation", region_name=region)

  response = cloudformation.describe_stacks(StackName=stack_name)
  stack = response["Stacks"][0]

  status = stack["StackStatus"]
  if is_failed(status):
    raise ProviderApplyError(stack_name, status, stack.get("StackStatusReason", ""))

  return {output["OutputKey"]: output["OutputValue"] for output in stack.get("Outputs", [])}


def main() -> None:
  """Main entry point."""
  parser = argparse.ArgumentParser(description="Print the outputs of a static site stack")
  parser.add_argument(
    "stack_name",
    help="CDK stack name (e.g., StaticSite-example-com)",
  )
  parser.add_argument(
    "--region",
    default="us-east-1",
    help="AWS region (default: us-east-1)",
  )
  parser.add_argument(
    "--format",
    choices=["env", "json", "export"],
    default="env",
    help="Output format (default: env)",
  )

  args = parser.parse_args()

  try:
    outputs = get_stack_outputs(args.stack_name, args.region)
  except Exception as e:
    print(f"Error retrieving outputs: {e}", file=sys.stderr)
    sys.exit(1)

  if args.format == "json":
    print(json.dumps(outputs, indent=2))
  elif args.format == "export":
    for key, value in outputs.items():
      print(f"export {key}={value}")
  else:  # env format
    for key, value in outputs.items():
      print(f"{key}={value}")


if __name__ == "__main__":
  main()

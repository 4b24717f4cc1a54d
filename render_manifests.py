#!/usr/bin/env python3
"""
Manifest Renderer
Builds the topology from a stack file and prints plain Kubernetes YAML,
useful for reviewing changes or applying with kubectl on a cluster without Pulumi
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from acmefit.errors import AcmefitError
from acmefit.manifests import dump_manifests
from acmefit.topology import build

STACK_KEY = "acmefitness:kubevars"


def load_kubevars(path: Path) -> Dict[str, Any]:
    """
    Read kubevars from a Pulumi stack file or a bare kubevars YAML/JSON file

    Args:
        path: Pulumi.<stack>.yaml, or a file holding only the kubevars object

    Returns:
        Raw kubevars mapping, validated later by the builder
    """
    document = yaml.safe_load(path.read_text()) or {}
    if not isinstance(document, dict):
        return document
    stack_config = document.get("config")
    if isinstance(stack_config, dict) and STACK_KEY in stack_config:
        return stack_config[STACK_KEY]
    return document


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Render ACME Fitness Kubernetes manifests")
    parser.add_argument("stack_file", type=Path, nargs="?", default=Path("Pulumi.dev.yaml"),
                        help="Pulumi stack file or kubevars file (default: Pulumi.dev.yaml)")
    parser.add_argument("-o", "--output", type=Path,
                        help="Write manifests to this file instead of stdout")
    parser.add_argument("--load-balancer", action="store_true",
                        help="Override isSingleNode to false")
    args = parser.parse_args(argv)

    kubevars = load_kubevars(args.stack_file)
    if args.load_balancer and isinstance(kubevars, dict):
        kubevars = dict(kubevars, isSingleNode=False)

    try:
        graph = build(kubevars)
    except AcmefitError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    rendered = dump_manifests(graph)
    if args.output:
        args.output.write_text(rendered)
        print(f"✅ Wrote {len(graph)} manifests to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())

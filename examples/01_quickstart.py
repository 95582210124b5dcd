#!/usr/bin/env python3
"""Example: Quickstart — mcpfs

Minimal working example: declare path rules in YAML, load them, and ask
whether operations are allowed.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install mcpfs
"""
from __future__ import annotations

import os

import mcpfs

CONFIG = """
version: "1.0"
paths:
  - path: "${HOME}/projects"
    perms: ["read", "write"]
    description: "Source trees"
  - path: "/usr/bin"
    perms: ["read", "exec"]
  - path: "/etc/hosts"
    allow_subpaths: false
"""


def main() -> None:
    print(f"mcpfs version: {mcpfs.__version__}")

    # Step 1: Load the rules
    config = mcpfs.ConfigLoader().load_string(CONFIG, source="<example>")
    print(f"Loaded {len(config.rules)} rules:")
    for rule in config.rules:
        print(f"  {rule.clean_path:<30} {rule.mask!s:<12} subpaths={rule.allow_subpaths}")

    # Step 2: Evaluate requests
    requests = [
        (mcpfs.Permission.WRITE, os.path.expanduser("~/projects/app/main.py")),
        (mcpfs.Permission.EXEC, "/usr/bin/git"),
        (mcpfs.Permission.WRITE, "/usr/bin/git"),
        (mcpfs.Permission.READ, "/etc/hosts"),
        (mcpfs.Permission.READ, "/etc/passwd"),
    ]

    print("\nPermission checks:")
    for op, path in requests:
        verdict = "ALLOW" if config.is_allowed(op, path) else "DENY"
        print(f"  [{verdict}] {op} {path}")


if __name__ == "__main__":
    main()

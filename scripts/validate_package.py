#!/usr/bin/env python3
"""Validate that every deployable contract has a usable compiled artifact"""

import sys
from pathlib import Path

# Add parent directory to path so we can import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from roilabs_deploy.artifacts.loader import (
    get_contract_metadata,
    list_available_contracts,
    load_artifact,
)
from roilabs_deploy.exceptions import DeploymentError


def validate(artifacts_dir=None):
    """Check each contract for ABI, bytecode and a readable constructor"""
    print("Validating artifacts...")

    contracts = list_available_contracts()
    print(f"\nFound {len(contracts)} deployable contracts:")

    all_valid = True
    for name in contracts:
        try:
            artifact = load_artifact(name, artifacts_dir)
        except DeploymentError as e:
            print(f"  ❌ {name}: {e}")
            all_valid = False
            continue

        abi = artifact.get("abi", [])
        bytecode = artifact.get("bytecode", "")

        if not abi:
            print(f"  ⚠️  {name}: No ABI found")
            all_valid = False
        elif not bytecode or bytecode == "0x":
            print(f"  ⚠️  {name}: No bytecode found")
            all_valid = False
        else:
            constructor = ", ".join(get_contract_metadata(name, artifacts_dir)["constructor"])
            print(
                f"  ✅ {name}: {len(abi)} ABI items, {len(bytecode)} bytecode chars, "
                f"constructor({constructor})"
            )

    print()
    if all_valid:
        print("✅ All contracts valid!")
        return 0
    else:
        print("❌ Some contracts failed validation")
        return 1


if __name__ == "__main__":
    sys.exit(validate(sys.argv[1] if len(sys.argv) > 1 else None))

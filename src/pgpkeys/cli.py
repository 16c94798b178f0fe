from __future__ import annotations

import argparse
import json
import sys

from .catalog import (
    AlgorithmFamily,
    UnknownVariant,
    key_size_mismatches,
    lookup,
    parameters_for,
    variants,
    variants_for,
)


def cmd_list(args: argparse.Namespace) -> int:
    selected = variants_for(AlgorithmFamily(args.family)) if args.family else variants()
    rows = [
        {"name": v.name, "value": v.value, "label": parameters_for(v).label, "family": parameters_for(v).family.value}
        for v in selected
    ]
    print(json.dumps(rows, indent=2))
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    try:
        v = lookup(args.name)
    except UnknownVariant as e:
        print(str(e), file=sys.stderr)
        return 2
    doc = {"name": v.name, **parameters_for(v, legacy_key_sizes=args.legacy or None).to_dict()}
    print(json.dumps(doc, indent=2))
    return 0


def cmd_audit(args: argparse.Namespace) -> int:
    found = key_size_mismatches(legacy_key_sizes=args.legacy or None)
    print(json.dumps(
        [{"name": v.name, "recorded": rec, "actual": act} for v, rec, act in found],
        indent=2,
    ))
    return 1 if found else 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser("pgpkeys", description="Inspect the OpenPGP key parameter catalog")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_list = sub.add_parser("list")
    p_list.add_argument("--family", choices=[f.value for f in AlgorithmFamily], default=None)
    p_list.set_defaults(func=cmd_list)

    p_show = sub.add_parser("show")
    p_show.add_argument("name")
    p_show.add_argument("--legacy-key-sizes", dest="legacy", action="store_true")
    p_show.set_defaults(func=cmd_show)

    p_audit = sub.add_parser("audit")
    p_audit.add_argument("--legacy-key-sizes", dest="legacy", action="store_true")
    p_audit.set_defaults(func=cmd_audit)

    args = p.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

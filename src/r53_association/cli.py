"""Command-line entrypoint for managing hosted zone / VPC associations."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from r53_association import __version__
from r53_association.authorization.grants import AuthorizationManager
from r53_association.convergence.engine import AssociationEngine
from r53_association.declarations.loader import load_declarations
from r53_association.declarations.models import AssociationDeclaration
from r53_association.errors import AssociationError
from r53_association.execution.aws_client import get_client
from r53_association.logging_utils import configure_logging
from r53_association.state.reader import RemoteStateReader
from r53_association.state.verification import (
    check_association_destroyed,
    check_association_exists,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="r53-association",
        description="Associate Route 53 private hosted zones with VPCs",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--region", default=None, help="Acting AWS region")
    parser.add_argument("--profile", default=None, help="AWS shared-config profile")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Associate a VPC and wait for convergence")
    create.add_argument("--zone-id", required=True)
    create.add_argument("--vpc-id", required=True)
    create.add_argument("--vpc-region", default=None)
    create.add_argument("--cross-account", action="store_true")

    apply = sub.add_parser("apply", help="Create every association in a declaration file")
    apply.add_argument("path")

    for name, help_text in (
        ("read", "Show the association encoded in a handle"),
        ("import", "Adopt an existing association by handle"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("handle")

    delete = sub.add_parser("delete", help="Disassociate a VPC from a hosted zone")
    delete.add_argument("handle")
    delete.add_argument("--vpc-region", default=None)

    verify = sub.add_parser("verify", help="Check remote membership for a handle")
    verify.add_argument("handle")
    verify.add_argument("--absent", action="store_true", help="Expect the association to be gone")

    for name, help_text in (
        ("authorize", "Authorize a foreign VPC to associate (zone owner account)"),
        ("revoke", "Revoke a VPC association authorization (zone owner account)"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--zone-id", required=True)
        cmd.add_argument("--vpc-id", required=True)
        cmd.add_argument("--vpc-region", required=True)
        if name == "authorize":
            cmd.add_argument("--owner-account", default=None)

    grants = sub.add_parser("list-grants", help="List VPCs authorized for a hosted zone")
    grants.add_argument("--zone-id", required=True)

    return parser


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _apply(engine: AssociationEngine, path: str) -> dict[str, Any]:
    """Create each declared association, continuing past individual failures."""
    results: list[dict[str, Any]] = []
    failed = 0
    for declaration in load_declarations(path).associations:
        try:
            results.append(engine.create(declaration).to_dict())
        except AssociationError as exc:
            failed += 1
            logger.error(
                "Association of zone %s with VPC %s failed: %s",
                declaration.zone_id,
                declaration.vpc_id,
                exc,
            )
            results.append(
                {
                    "zone_id": declaration.zone_id,
                    "vpc_id": declaration.vpc_id,
                    "error": exc.code,
                    "message": str(exc),
                }
            )
    return {"associations": results, "failed": failed}


def run(args: argparse.Namespace, client: Any) -> Any:
    """Execute a parsed command against ``client`` and return a JSON-ready result."""
    if args.command in {"create", "apply", "read", "import", "delete"}:
        engine = AssociationEngine(client, region=args.region)
        if args.command == "create":
            declaration = AssociationDeclaration(
                zone_id=args.zone_id,
                vpc_id=args.vpc_id,
                vpc_region=args.vpc_region,
                cross_account=args.cross_account,
            )
            return engine.create(declaration).to_dict()
        if args.command == "apply":
            return _apply(engine, args.path)
        if args.command == "read":
            return engine.read(args.handle).to_dict()
        if args.command == "import":
            return engine.import_association(args.handle).to_dict()
        engine.delete(args.handle, args.vpc_region)
        return {"id": args.handle, "deleted": True}

    if args.command == "verify":
        reader = RemoteStateReader(client)
        if args.absent:
            check_association_destroyed(reader, args.handle)
        else:
            check_association_exists(reader, args.handle)
        return {"id": args.handle, "present": not args.absent}

    manager = AuthorizationManager(client)
    if args.command == "authorize":
        grant = manager.authorize(args.zone_id, args.vpc_id, args.vpc_region, args.owner_account)
        return {"id": grant.handle, "zone_id": grant.zone_id, "vpc_id": grant.vpc_id}
    if args.command == "revoke":
        manager.revoke(args.zone_id, args.vpc_id, args.vpc_region)
        return {"zone_id": args.zone_id, "vpc_id": args.vpc_id, "revoked": True}
    return {"zone_id": args.zone_id, "vpc_ids": sorted(manager.list_grants(args.zone_id))}


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    client = get_client(region=args.region, profile=args.profile)
    try:
        result = run(args, client)
        _emit(result)
    except AssociationError as exc:
        logger.error("%s failed: %s", args.command, exc)
        _emit({"error": exc.code, "message": str(exc)})
        return 1
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        _emit({"error": "invalid_input", "message": str(exc)})
        return 2
    if args.command == "apply" and result["failed"]:
        return 1
    return 0


def run_entrypoint() -> None:
    sys.exit(main())

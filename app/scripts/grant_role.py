"""
Role Provisioning Script
Grants or revokes an app role (see app.config.roles_config) for a user.
Role writes are not exposed through the API; run this with the service role key:

    python -m app.scripts.grant_role grant admin someone@example.com
    python -m app.scripts.grant_role revoke admin 6f1c...-uuid
"""

import argparse
import sys
import logging
from typing import Optional

from app.config.roles_config import AppRole, ROLE_DESCRIPTIONS, parse_role
from app.database.supabase_client import SupabaseClient
from supabase import Client

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def resolve_user_id(supabase: Client, user: str) -> Optional[str]:
    """Accept either a profile id or an email"""
    if "@" not in user:
        return user
    result = supabase.table("profiles")\
        .select("id")\
        .eq("email", user)\
        .execute()
    if not result.data:
        return None
    return result.data[0]["id"]


def grant_role(supabase: Client, user_id: str, role: AppRole) -> bool:
    """Insert the (user, role) pair; returns False when it was already present"""
    existing = supabase.table("user_roles")\
        .select("id")\
        .eq("user_id", user_id)\
        .eq("role", role.value)\
        .execute()
    if existing.data:
        logger.info(f"User {user_id} already has role {role.value}")
        return False
    supabase.table("user_roles").insert({"user_id": user_id, "role": role.value}).execute()
    logger.info(f"Granted {role.value} to {user_id} ({ROLE_DESCRIPTIONS[role]})")
    return True


def revoke_role(supabase: Client, user_id: str, role: AppRole) -> bool:
    result = supabase.table("user_roles")\
        .delete()\
        .eq("user_id", user_id)\
        .eq("role", role.value)\
        .execute()
    removed = bool(result.data)
    if removed:
        logger.info(f"Revoked {role.value} from {user_id}")
    else:
        logger.info(f"User {user_id} did not have role {role.value}")
    return removed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grant or revoke an app role")
    parser.add_argument("action", choices=["grant", "revoke"])
    parser.add_argument("role", help="Role name: " + ", ".join(r.value for r in AppRole))
    parser.add_argument("user", help="User id or email")
    return parser


def main(argv=None, supabase: Optional[Client] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        role = parse_role(args.role)
        supabase = supabase or SupabaseClient.get_service_client()

        user_id = resolve_user_id(supabase, args.user)
        if not user_id:
            logger.error(f"No profile found for {args.user}")
            return 1

        if args.action == "grant":
            grant_role(supabase, user_id, role)
        else:
            revoke_role(supabase, user_id, role)
        return 0
    except Exception as e:
        logger.error(f"Error during role provisioning: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Admin command line.

Usage:
    python -m interview_coach.scripts.admin create-admin --email a@b.co --password secret1 [--name Ada]
    python -m interview_coach.scripts.admin promote a@b.co
    python -m interview_coach.scripts.admin delete-user a@b.co
    python -m interview_coach.scripts.admin list-users
    python -m interview_coach.scripts.admin load-questions llm questions.json [--clear]

Each command is a plain function taking a DocumentStore so it can be
exercised without a shell.
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from interview_coach.core.config import Settings, get_settings
from interview_coach.core.exceptions import NotFoundError, ValidationError
from interview_coach.core.logging_config import get_logger, setup_logging
from interview_coach.core.security import ROLE_ADMIN, hash_password
from interview_coach.core.validators import slugify, validate_password
from interview_coach.database import collections
from interview_coach.database.connection import DocumentStore, build_store
from interview_coach.database.documents import new_id, utcnow

logger = get_logger(__name__)


def create_admin(
    store: DocumentStore,
    email: str,
    password: str,
    name: Optional[str] = None,
    bcrypt_rounds: int = 12
) -> bool:
    """
    Create an admin account.

    Returns:
        True if created, False if the email already exists
    """
    email = email.strip().lower()
    users = store.collection(collections.USERS)
    if users.find_one({"email": email}) is not None:
        logger.info(f"User {email} already exists; nothing to do")
        return False

    is_valid, error = validate_password(password)
    if not is_valid:
        raise ValidationError(error, field="password")

    now = utcnow()
    users.insert_one({
        "_id": new_id(),
        "email": email,
        "name": name or email.split("@")[0],
        "role": ROLE_ADMIN,
        "passwordHash": hash_password(password, bcrypt_rounds),
        "profile": {},
        "createdAt": now,
        "updatedAt": now,
        "lastLogin": None,
    })
    logger.info(f"Created admin {email}")
    return True


def promote(store: DocumentStore, email: str) -> None:
    result = store.collection(collections.USERS).update_one(
        {"email": email.strip().lower()},
        {"$set": {"role": ROLE_ADMIN, "updatedAt": utcnow()}},
    )
    if result.matched_count == 0:
        raise NotFoundError("User not found", resource_id=email)
    logger.info(f"Promoted {email} to admin")


def delete_user(store: DocumentStore, email: str) -> None:
    result = store.collection(collections.USERS).delete_one({"email": email.strip().lower()})
    if result.deleted_count == 0:
        raise NotFoundError("User not found", resource_id=email)
    logger.info(f"Deleted user {email}")


def list_users(store: DocumentStore) -> List[Dict[str, Any]]:
    projection = {"email": 1, "name": 1, "role": 1, "createdAt": 1}
    return list(store.collection(collections.USERS).find({}, projection))


def question_key(kind: str, question: Dict[str, Any]) -> str:
    """Document key for a loaded question: explicit id, questionId, then title slug."""
    for key in ("id", "questionId"):
        if question.get(key):
            return str(question[key])
    return slugify(str(question.get("title") or ""))


def load_questions(store: DocumentStore, kind: str, questions: List[Dict[str, Any]], clear: bool = False) -> int:
    """
    Upsert questions into a bank.

    Returns:
        Number of questions written; entries without a usable key are skipped
    """
    if kind not in collections.QUESTION_BANKS:
        raise ValidationError(f"Unknown question type '{kind}'", field="kind")

    bank = store.collection(collections.QUESTION_BANKS[kind])
    if clear:
        removed = bank.delete_many({}).deleted_count
        logger.warning(f"Cleared {removed} {kind} questions")

    written = 0
    for question in questions:
        doc_id = question_key(kind, question)
        if not doc_id:
            logger.warning(f"Skipping {kind} question without id or title")
            continue
        data = {k: v for k, v in question.items() if k not in ("id", "_id")}
        bank.replace_one({"_id": doc_id}, data, upsert=True)
        written += 1

    logger.info(f"Loaded {written} {kind} questions")
    return written


def read_question_file(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON file holding a list of questions or {"questions": [...]}."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("questions", [])
    if not isinstance(data, list):
        raise ValidationError("Question file must contain a list of questions")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="interview-coach-admin", description="Interview Coach admin tasks")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("create-admin", help="Create an admin account")
    p.add_argument("--email", required=True)
    p.add_argument("--password", required=True)
    p.add_argument("--name")

    p = sub.add_parser("promote", help="Give an existing user the admin role")
    p.add_argument("email")

    p = sub.add_parser("delete-user", help="Delete a user document")
    p.add_argument("email")

    sub.add_parser("list-users", help="List all users")

    p = sub.add_parser("load-questions", help="Load questions from a JSON file")
    p.add_argument("kind", choices=sorted(collections.QUESTION_BANKS))
    p.add_argument("path", type=Path)
    p.add_argument("--clear", action="store_true", help="Delete the bank before loading")

    return parser


def run(args: argparse.Namespace, store: DocumentStore, settings: Settings) -> int:
    if args.command == "create-admin":
        created = create_admin(store, args.email, args.password, args.name, settings.bcrypt_rounds)
        print("Admin created." if created else "User already exists.")
    elif args.command == "promote":
        promote(store, args.email)
        print(f"{args.email} is now an admin.")
    elif args.command == "delete-user":
        delete_user(store, args.email)
        print(f"Deleted {args.email}.")
    elif args.command == "list-users":
        for user in list_users(store):
            print(f"{user['_id']}\t{user.get('email')}\t{user.get('role', 'user')}\t{user.get('name', '')}")
    elif args.command == "load-questions":
        count = load_questions(store, args.kind, read_question_file(args.path), clear=args.clear)
        print(f"Loaded {count} {args.kind} questions.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)

    store = build_store(settings)
    try:
        store.require_ready()
        return run(args, store, settings)
    except (NotFoundError, ValidationError) as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
